"""
Translation Tables

Builds the export table from custom labels, reshapes an imported table into
per-language translations, merges them back into the labels, and renders
tables for the log.

A table is a list of rows; row 0 is the header, columns 0 and 1 are the
translation key and description, every further column is one language.
"""

import logging
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from label_tools.config import DESCRIPTION_HEADER, KEY_HEADER
from label_tools.errors import ShapeError
from label_tools.metadata import CustomLabel

logger = logging.getLogger(__name__)

Table = List[List[str]]
LanguageMap = Dict[str, Dict[str, str]]

FIXED_COLUMNS = 2
PRINT_COLUMN_WIDTH = 30


class LabelChange(NamedTuple):
    """A label value replaced during import."""
    key: str
    language: str
    old_value: str
    new_value: str


def build_export_table(
    custom_labels: Iterable[CustomLabel],
    languages: Sequence[str],
    translations: LanguageMap,
    category: Optional[str] = None,
    prefix: Optional[str] = None
) -> Table:
    """
    Build the export table: one row per label, one column per language.

    Args:
        custom_labels: Labels in file order
        languages: Language columns, in the order requested
        translations: language -> key -> text from the translation files
        category: Keep only labels whose categories equal this exactly
        prefix: Keep only labels whose key starts with this

    Returns:
        Table with header row. A label's own language column holds its
        current value; other columns hold the translation, or '' if none.
    """
    table = [[KEY_HEADER, DESCRIPTION_HEADER] + list(languages)]

    for label in custom_labels:
        key = label.full_name
        if category is not None and label.categories != category:
            continue
        if prefix is not None and not key.startswith(prefix):
            continue

        row = [key, label.short_description]
        for lang in languages:
            if lang == label.language:
                row.append(label.value)
            else:
                row.append(translations.get(lang, {}).get(key, ''))
        table.append(row)

    return table


def language_columns(header: Sequence[str]) -> List[Tuple[int, str]]:
    """
    Find the language columns of a table header.

    Returns:
        Ordered (column index, language) pairs

    Raises:
        ShapeError: If the header has fewer than three columns
    """
    if len(header) < FIXED_COLUMNS + 1:
        raise ShapeError(
            f"invalid table structure! Expected '{KEY_HEADER}', '{DESCRIPTION_HEADER}' "
            f"and at least one language column, got {list(header)}"
        )

    columns = []
    for index in range(FIXED_COLUMNS, len(header)):
        lang = header[index]
        if lang is None or not lang.strip():
            continue
        columns.append((index, lang))
        logger.info(f"language found [{lang}]")
    return columns


def create_language_map(
    table: Sequence[Sequence[str]],
    row_numbers: Optional[Sequence[int]] = None
) -> LanguageMap:
    """
    Reorder an imported table by language.

    Rows with fewer cells than key, description and every language column
    are skipped with a warning.

    Args:
        table: Imported table, header first
        row_numbers: Sheet row of each table row, used in warnings
            (defaults to the table index)

    Returns:
        language -> key -> text, languages in header order

    Raises:
        ShapeError: If the table is empty or its header is invalid
    """
    if not table:
        raise ShapeError("invalid table structure! The table has no header row")

    columns = language_columns(table[0])
    language_map: LanguageMap = {lang: {} for _, lang in columns}

    required = FIXED_COLUMNS + len(columns)
    for row_index in range(1, len(table)):
        row = table[row_index]
        if len(row) < required:
            row_number = row_numbers[row_index] if row_numbers is not None else row_index
            logger.warning(f"invalid row [{row_number}]")
            continue
        key = row[0]
        for col, lang in columns:
            if col < len(row):
                language_map[lang][key] = row[col]

    return language_map


def apply_language_map(
    custom_labels: Iterable[CustomLabel],
    language_map: LanguageMap
) -> List[LabelChange]:
    """
    Overwrite label values with the imported translation for their own language.

    Labels without a language, or whose key/language is not in the map,
    are left untouched.

    Returns:
        The changes made, in label order
    """
    changes = []
    for label in custom_labels:
        lang = label.language
        key = label.full_name
        if lang is None or not key or lang not in language_map:
            continue
        translations = language_map[lang]
        if key not in translations:
            continue

        old_value = label.value
        new_value = translations[key]
        logger.debug(f"key [{key}], old value [{old_value}], new value [{new_value}]")
        if old_value != new_value:
            label.value = new_value
            changes.append(LabelChange(key, lang, old_value, new_value))
            logger.info(f"key [{key}], old value [{old_value}], new value [{new_value}]")

    return changes


def _truncate(value: str, width: int) -> str:
    if len(value) > width - 3:
        return value[:width - 3] + "..."
    return value


def format_table(table: Sequence[Sequence[str]], column_width: int = PRINT_COLUMN_WIDTH) -> str:
    """
    Render a table as a bordered fixed-width text grid.

    Cells longer than column_width - 3 are cut and end with '...'.
    Returns '' for an empty table.
    """
    if not table:
        return ""

    columns = len(table[0])
    hline = "+" + "+".join("-" * (column_width + 2) for _ in range(columns)) + "+\n"

    lines = []
    for counter, row in enumerate(table):
        if counter in (0, 1):
            lines.append(hline)
        cells = [_truncate(cell or "", column_width).ljust(column_width) for cell in row]
        lines.append("| " + " | ".join(cells) + " |\n")
    lines.append(hline)
    return "".join(lines)


def print_table(table: Sequence[Sequence[str]]):
    """Log a table as a text grid."""
    if not table:
        logger.warning("translation table is empty")
        return
    logger.info("\n Print table \n" + format_table(table))
