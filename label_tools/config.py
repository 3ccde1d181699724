"""
Project Layout and Configuration

Locates the metadata files inside a Salesforce project 'src' folder and
reads optional overrides from the environment (.env supported).
"""

import os
from pathlib import Path
from typing import List, Union
from dotenv import load_dotenv

from label_tools.errors import ConfigError

# Load environment variables
load_dotenv()

# Salesforce project layout
CUSTOM_LABELS_FOLDER = 'labels'
CUSTOM_LABELS_FILE = 'CustomLabels.labels'
TRANSLATIONS_FOLDER = 'translations'
TRANSLATION_FILE_FMT = '%s.translation'

# Spreadsheet defaults
DEFAULT_EXPORT_FILE = 'custom-labels-export.xlsx'
DEFAULT_SHEET_NAME = 'custom labels'
DEFAULT_COLUMN_WIDTH = 39

# Header of the first two columns of every translation table
KEY_HEADER = 'Translation key'
DESCRIPTION_HEADER = 'Description'


def get_export_path() -> Path:
    """Get the export spreadsheet path from environment."""
    return Path(os.getenv('LABELS_EXPORT_FILE', '') or DEFAULT_EXPORT_FILE)


def get_sheet_name() -> str:
    """Get the export sheet title from environment."""
    return os.getenv('LABELS_SHEET_NAME', '') or DEFAULT_SHEET_NAME


def get_column_width() -> float:
    """
    Get the export column width (in characters) from environment.

    Raises:
        ConfigError: If LABELS_COLUMN_WIDTH is set but is not a positive number
    """
    raw = os.getenv('LABELS_COLUMN_WIDTH', '')
    if not raw:
        return DEFAULT_COLUMN_WIDTH
    try:
        width = float(raw)
    except ValueError as e:
        raise ConfigError(f"LABELS_COLUMN_WIDTH must be a number, got {raw!r}") from e
    if width <= 0:
        raise ConfigError(f"LABELS_COLUMN_WIDTH must be positive, got {raw!r}")
    return width


def custom_labels_path(project_path: Union[str, Path]) -> Path:
    """Path of CustomLabels.labels inside a project 'src' folder."""
    return Path(project_path) / CUSTOM_LABELS_FOLDER / CUSTOM_LABELS_FILE


def translation_path(project_path: Union[str, Path], language: str) -> Path:
    """Path of the translation file for one language inside a project 'src' folder."""
    return Path(project_path) / TRANSLATIONS_FOLDER / (TRANSLATION_FILE_FMT % language)


def parse_languages(languages: str) -> List[str]:
    """
    Split a comma-separated language list, e.g. 'en_US, de'.

    Codes are trimmed and empty entries dropped. Order and duplicates are kept,
    since the order given is the column order of the export.
    """
    return [lang.strip() for lang in languages.split(',') if lang.strip()]
