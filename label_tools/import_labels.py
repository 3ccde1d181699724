"""
Custom Labels Import

Imports an edited translation spreadsheet back into CustomLabels.labels,
overwriting only the values that changed.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from label_tools.config import CUSTOM_LABELS_FILE, custom_labels_path
from label_tools.errors import MissingFileError
from label_tools.excel_client import ExcelClient, get_client
from label_tools.metadata import load_custom_labels
from label_tools.table import LabelChange, apply_language_map, create_language_map, print_table

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 59


def import_labels(
    project_path: Union[str, Path],
    import_file_path: Union[str, Path],
    dry_run: bool = False,
    client: Optional[ExcelClient] = None
) -> List[LabelChange]:
    """
    Import custom label translations from an Excel file.

    Every input is checked before anything is read. The labels file is
    rewritten even when no value changed, unless dry_run is set.

    Args:
        project_path: Path to the project 'src' folder
        import_file_path: Path to the edited spreadsheet
        dry_run: Report changes without writing CustomLabels.labels
        client: Excel client to read with (defaults to the shared one)

    Returns:
        The label values that changed

    Raises:
        MissingFileError: If the spreadsheet, project folder or labels file doesn't exist
        ShapeError: If the spreadsheet header is not a translation table header
        ParseError: If the spreadsheet or labels file is malformed
    """
    project_path = Path(project_path)
    import_file_path = Path(import_file_path)
    logger.info(f"project absolute path [{project_path.absolute()}]")
    logger.info(f"import file path [{import_file_path}]")

    if not import_file_path.exists():
        raise MissingFileError(f"import file not exist! Path [{import_file_path.absolute()}]")
    if not project_path.exists():
        raise MissingFileError(f"project folder not exist! Path [{project_path.absolute()}]")
    labels_file = custom_labels_path(project_path)
    if not labels_file.exists():
        raise MissingFileError(
            f"{CUSTOM_LABELS_FILE} not exist! Path [{labels_file.absolute()}]"
        )
    logger.info(f"{labels_file.absolute()} found")

    client = client or get_client()
    table, row_numbers = client.read_table_rows(import_file_path)
    print_table(table)
    language_map = create_language_map(table, row_numbers)

    logger.info(SEPARATOR)
    logger.info(f"            {CUSTOM_LABELS_FILE} changes")
    logger.info(SEPARATOR)
    custom_labels = load_custom_labels(labels_file)
    changes = apply_language_map(custom_labels, language_map)
    logger.info(SEPARATOR)
    logger.info(f"total changed values [{len(changes)}]")

    if dry_run:
        logger.info(f"[DRY-RUN] {CUSTOM_LABELS_FILE} not saved")
    else:
        custom_labels.save()

    return changes
