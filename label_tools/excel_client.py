"""
Excel Client

Handles read/write operations for the translation spreadsheets exchanged with
translators. Every cell is treated as plain text.
"""

import logging
import sys
import zipfile
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from openpyxl import Workbook, load_workbook
from openpyxl.cell.read_only import EmptyCell
from openpyxl.styles import Alignment
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException

from label_tools.config import get_column_width, get_sheet_name
from label_tools.errors import LabelToolsError, MissingFileError, ParseError

logger = logging.getLogger(__name__)

TEXT_FORMAT = '@'


class ExcelFileLockError(LabelToolsError):
    """Raised when an Excel file is locked by another process."""
    pass


class ExcelFileNotFoundError(MissingFileError):
    """Raised when an Excel file doesn't exist."""
    pass


class ExcelClient:
    """
    Excel file client for translation tables.

    A table is a list of rows, each row a list of strings, row 0 being the header.
    """

    def __init__(self, sheet_name: Optional[str] = None, column_width: Optional[float] = None):
        """Initialize the Excel client."""
        self.sheet_name = sheet_name or get_sheet_name()
        self.column_width = column_width or get_column_width()

    def _is_file_locked(self, file_path: Path, mode: str = 'r+b') -> bool:
        """
        Check if file is locked by Excel or another process.

        Excel creates a lock file named ~$filename.xlsx when open.
        On Linux, lock files may be synced from other machines and are not
        relevant, so only OS-level locks are checked. Pass mode='rb' when
        the file only needs to be read, so read-only files are not reported.
        """
        if sys.platform == 'win32':
            lock_file = file_path.parent / f"~${file_path.name}"
            if lock_file.exists():
                return True

        if file_path.exists():
            try:
                with open(file_path, mode):
                    pass
                return False
            except PermissionError:
                return True

        return False

    def _check_unlocked(self, file_path: Path, mode: str = 'r+b'):
        if self._is_file_locked(file_path, mode):
            raise ExcelFileLockError(
                f"The file '{file_path.name}' is currently open in Excel. "
                f"Please close it and try again."
            )

    def read_table(self, file_path: Path) -> List[List[str]]:
        """
        Read the translation table from the first sheet of a workbook.

        See read_table_rows; this drops the sheet row numbers.
        """
        table, _ = self.read_table_rows(file_path)
        return table

    def read_table_rows(self, file_path: Path) -> Tuple[List[List[str]], List[int]]:
        """
        Read the translation table and the sheet row number of every table row.

        The header row fixes the column count: header cells are collected
        until the first empty one. Every row is cut to that many cells and
        ends at its last cell present in the sheet, so rows a translator left
        short stay short. Blank cells become '' and completely empty rows are
        skipped. A sheet without a header gives an empty table.

        Args:
            file_path: Path to the Excel file

        Returns:
            (table, row_numbers): rows as lists of strings, and the 1-based
            sheet row of each of them

        Raises:
            ExcelFileNotFoundError: If file doesn't exist
            ExcelFileLockError: If file is locked by another process
            ParseError: If the file is not a readable workbook
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise ExcelFileNotFoundError(f"Excel file not found: {file_path}")

        self._check_unlocked(file_path, mode='rb')

        logger.info("start read import file...")
        try:
            wb = load_workbook(file_path, read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, OSError, KeyError, ValueError) as e:
            raise ParseError(f"Error reading Excel file {file_path}: {e}") from e

        try:
            ws = wb.worksheets[0]
            rows = ws.iter_rows()

            header = next(rows, None)
            if header is None:
                return [], []

            columns = []
            for cell in header:
                if cell.value is None or not str(cell.value).strip():
                    break
                columns.append(str(cell.value))
            columns_count = len(columns)
            logger.info(f"columns count [{columns_count}]")
            if not columns:
                return [], []

            table = [columns]
            row_numbers = [1]
            for row_number, row in enumerate(rows, start=2):
                cells = list(row[:columns_count])
                # Read-only rows are padded to the sheet width with EmptyCell
                while cells and isinstance(cells[-1], EmptyCell):
                    cells.pop()
                # Convert None to empty string and all values to strings
                row_values = [str(cell.value) if cell.value is not None else "" for cell in cells]
                # Skip completely empty rows
                if any(value.strip() for value in row_values):
                    table.append(row_values)
                    row_numbers.append(row_number)
        finally:
            wb.close()

        logger.info("import file was read...")
        return table, row_numbers

    def write_table(self, file_path: Path, table: Sequence[Sequence[str]]) -> dict:
        """
        Write a translation table to a new single-sheet workbook.

        Every cell is stored as text with word wrap on, and every used column
        gets the same width. An existing file is overwritten.

        Args:
            file_path: Path to the Excel file
            table: Rows to write, header first

        Returns:
            Dictionary with update details (rows written, etc.)

        Raises:
            ExcelFileLockError: If the target file is open in Excel
        """
        file_path = Path(file_path)
        self._check_unlocked(file_path)

        file_path.parent.mkdir(parents=True, exist_ok=True)

        wb = Workbook()
        try:
            ws = wb.active
            ws.title = self.sheet_name
            alignment = Alignment(wrap_text=True)

            columns_count = max((len(row) for row in table), default=0)
            for col in range(1, columns_count + 1):
                ws.column_dimensions[get_column_letter(col)].width = self.column_width

            for row_num, data_row in enumerate(table, start=1):
                for col_num, value in enumerate(data_row, start=1):
                    cell = ws.cell(row=row_num, column=col_num)
                    cell.value = value if value is not None else ""
                    # Never let '=...' become a formula or '12' a number
                    cell.data_type = 's'
                    cell.number_format = TEXT_FORMAT
                    cell.alignment = alignment

            wb.save(file_path)
        finally:
            wb.close()

        return {
            'spreadsheet': str(file_path),
            'sheet': self.sheet_name,
            'updatedRows': len(table),
        }


# Singleton instance for reuse across the application
_client_instance = None


def get_client() -> ExcelClient:
    """
    Get or create a singleton instance of the Excel client.

    Returns:
        ExcelClient instance
    """
    global _client_instance
    if _client_instance is None:
        _client_instance = ExcelClient()
    return _client_instance
