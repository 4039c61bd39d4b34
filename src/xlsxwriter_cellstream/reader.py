"""Reading helpers: list the sheets of a workbook and read a sheet as rows of cell text.

Failures to open a workbook or find a sheet are not raised, they are reported with a warning and an empty result."""
import logging
from contextlib import contextmanager
from datetime import date, datetime, time
from typing import Iterator, List, Optional
from warnings import warn
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

logger = logging.getLogger(__name__)

MAX_CELL_TEXT = 1024

_OPEN_ERRORS = (OSError, BadZipFile, InvalidFileException, KeyError, ValueError)


def _report(message: str):
    logger.warning(message)
    warn(message, stacklevel=3)


@contextmanager
def _open_workbook(filename):
    workbook = load_workbook(filename, read_only=True, data_only=True)
    try:
        yield workbook
    finally:
        workbook.close()


def cell_text(value) -> str:
    """Render a cell value as text, bounded to :data:`MAX_CELL_TEXT` characters."""
    if value is None:
        text = ""
    elif isinstance(value, bool):
        text = value and "TRUE" or "FALSE"
    elif isinstance(value, float) and value.is_integer():
        text = str(int(value))
    elif isinstance(value, (datetime, date, time)):
        text = value.isoformat()
    else:
        text = str(value)

    return text[:MAX_CELL_TEXT]


def list_sheet_names(filename) -> List[str]:
    """Return the names of all sheets in `filename`, in workbook order."""
    try:
        with _open_workbook(filename) as workbook:
            return [*workbook.sheetnames]
    except _OPEN_ERRORS as e:
        _report(f"Error opening {filename!r}: {e}")
        return []


def iter_sheet(filename, sheet_name: Optional[str] = None) -> Iterator[List[str]]:
    """Lazily yield the rows of `sheet_name` (the first sheet if None) as lists of cell text.
    Rows with no text at all are skipped."""
    try:
        workbook = load_workbook(filename, read_only=True, data_only=True)
    except _OPEN_ERRORS as e:
        _report(f"Error opening {filename!r}: {e}")
        return

    try:
        if sheet_name is None:
            logger.debug("Reading first sheet of %r", filename)
            worksheet = workbook.worksheets[0]
        elif sheet_name in workbook.sheetnames:
            logger.debug("Reading sheet %r of %r", sheet_name, filename)
            worksheet = workbook[sheet_name]
        else:
            _report(f"Sheet {sheet_name!r} not found in {filename!r}, available: {workbook.sheetnames}")
            return

        for values in worksheet.iter_rows(values_only=True):
            row = [cell_text(value) for value in values]
            if any(row):
                yield row
    finally:
        workbook.close()


def read_sheet(filename, sheet_name: Optional[str] = None) -> List[List[str]]:
    """Read the whole of `sheet_name` (the first sheet if None) as a grid of cell text."""
    return [*iter_sheet(filename, sheet_name)]
