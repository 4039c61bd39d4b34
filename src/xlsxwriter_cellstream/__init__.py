"""A stream-style writer for XlsxWriter: keep a cursor, push values left to right with `<<` or top to bottom with
`|`, go to the next row with `endl`, and let the writer turn it all into absolute cell writes. Sheets and formats
are registered by name and the workbook is closed exactly once. The `reader` module lists and reads sheets back
using openpyxl."""

from . import errors, formats, reader, stream

from .errors import (
    CellStreamError, ClosedWriterError, CursorError, DocumentCreationError, DoubleCloseError, RegistryError,
    ResourceError, WriteError
)
from .formats import FormatDict, FormatsNamespace
from .reader import MAX_CELL_TEXT, iter_sheet, list_sheet_names, read_sheet
from .stream import CellStreamWriter, Image, NewLine, endl, open_writer

__all__ = [
    'errors', 'formats', 'reader', 'stream',
    'CellStreamWriter', 'Image', 'NewLine', 'endl', 'open_writer',
    'FormatDict', 'FormatsNamespace',
    'MAX_CELL_TEXT', 'iter_sheet', 'list_sheet_names', 'read_sheet',
    'CellStreamError', 'ClosedWriterError', 'CursorError', 'DocumentCreationError', 'DoubleCloseError',
    'RegistryError', 'ResourceError', 'WriteError',
]
