"""
Custom Labels Export

Exports custom labels and their translations from a Salesforce project to
an Excel spreadsheet for translators.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from label_tools.config import (
    CUSTOM_LABELS_FILE,
    custom_labels_path,
    get_export_path,
    parse_languages,
    translation_path,
)
from label_tools.errors import MissingFileError
from label_tools.excel_client import ExcelClient, get_client
from label_tools.metadata import load_custom_labels, load_translations, translation_map
from label_tools.table import LanguageMap, Table, build_export_table, print_table

logger = logging.getLogger(__name__)


def load_language_map(project_path: Path, languages: List[str]) -> LanguageMap:
    """
    Read the translation file of every requested language that has one.

    A missing translation file only logs a warning; its column stays blank
    except for labels written in that language.
    """
    translations: LanguageMap = {}
    for lang in languages:
        if lang in translations:
            continue
        path = translation_path(project_path, lang)
        if path.exists():
            logger.info(f"translations for '{lang}' found. Path [{path.absolute()}]")
            translations[lang] = translation_map(load_translations(path))
        else:
            logger.warning(f"translations for '{lang}' not found. Path [{path.absolute()}]")
    return translations


def create_table(
    project_path: Union[str, Path],
    languages: str,
    category: Optional[str] = None,
    prefix: Optional[str] = None
) -> Table:
    """
    Build the export table for a project without writing anything.

    Args:
        project_path: Path to the project 'src' folder
        languages: Comma-separated language codes, e.g. 'en_US, de'
        category: Optional exact category filter
        prefix: Optional key prefix filter

    Raises:
        MissingFileError: If CustomLabels.labels doesn't exist
        ParseError: If a metadata file is malformed
    """
    project_path = Path(project_path)
    labels_file = custom_labels_path(project_path)
    if not labels_file.exists():
        raise MissingFileError(
            f"{CUSTOM_LABELS_FILE} not exist! Path [{labels_file.absolute()}]"
        )
    logger.info(f"{labels_file.absolute()} found")

    language_list = parse_languages(languages)
    translations = load_language_map(project_path, language_list)
    custom_labels = load_custom_labels(labels_file)

    return build_export_table(custom_labels, language_list, translations, category, prefix)


def export_labels(
    project_path: Union[str, Path],
    languages: str,
    category: Optional[str] = None,
    prefix: Optional[str] = None,
    output_path: Optional[Union[str, Path]] = None,
    client: Optional[ExcelClient] = None
) -> Path:
    """
    Export custom labels to an Excel file.

    Args:
        project_path: Path to the project 'src' folder
        languages: Comma-separated language codes, e.g. 'en_US, de'
        category: Optional exact category filter
        prefix: Optional key prefix filter
        output_path: Spreadsheet to write (defaults to LABELS_EXPORT_FILE)
        client: Excel client to write with (defaults to the shared one)

    Returns:
        Path of the written spreadsheet

    Raises:
        MissingFileError: If CustomLabels.labels doesn't exist
        ParseError: If a metadata file is malformed
        ExcelFileLockError: If the output file is open in Excel
    """
    logger.info(f"project absolute path [{Path(project_path).absolute()}]")
    logger.info(f"export languages [{languages}]")
    if category is not None:
        logger.info(f"filter by category [{category}]")
    if prefix is not None:
        logger.info(f"filter by prefix [{prefix}]")

    table = create_table(project_path, languages, category, prefix)
    print_table(table)
    logger.info(f"total rows [{len(table) - 1}]")

    output_path = Path(output_path) if output_path is not None else get_export_path()
    client = client or get_client()
    client.write_table(output_path, table)
    logger.info(f"export saved to [{output_path.absolute()}]")
    return output_path
