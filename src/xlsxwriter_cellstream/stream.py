import logging
import os
import struct
import weakref
from datetime import date, datetime, time, timedelta
from numbers import Real
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from attr import attrib, attrs, evolve
from xlsxwriter import Workbook
from xlsxwriter.exceptions import DuplicateWorksheetName, FileCreateError, XlsxWriterException
from xlsxwriter.format import Format
from xlsxwriter.worksheet import Worksheet

from .errors import (
    ClosedWriterError, CursorError, DocumentCreationError, DoubleCloseError, RegistryError, ResourceError, WriteError
)
from .formats import FormatHandler

logger = logging.getLogger(__name__)

Cursor = Tuple[int, int]

DEFAULT_SHEET_NAME = "Sheet1"
DEFAULT_FORMAT_NAME = "default"

_DATETIME_TYPES = (datetime, date, time, timedelta)


@attrs(auto_attribs=True, frozen=True)
class Image(object):
    """A reference to an image file to be inserted at the cursor.
    `options` are passed as is to :meth:`Worksheet.insert_image`."""
    path: str = attrib(converter=os.fspath)
    options: Dict[str, Any] = attrib(factory=dict, repr=False, hash=False)

    def with_options(self, options: Mapping[str, Any]) -> 'Image':
        return evolve(self, options={**self.options, **options})


@attrs(frozen=True)
class NewLine(object):
    """Row-advance marker: go back to column 0 of the next row, like a line terminator in a text stream."""


endl = NewLine()


def _finalize_workbook(workbook: Workbook, filename):
    logger.debug("Closing workbook %r", filename)
    try:
        workbook.close()
    except FileCreateError as e:
        raise DocumentCreationError(f"Could not create document {filename!r}: {e}") from e


class CellStreamWriter(object):
    """
    A stream-like writer over an XlsxWriter workbook that keeps a cursor and turns a sequence of values into
    absolute cell writes.

    Values written with :meth:`write` (or ``<<``) go left to right, values written with :meth:`write_line`
    (or ``|``) go top to bottom and :data:`endl` (or :meth:`new_line`) goes back to the first column of the
    next row::

        with CellStreamWriter("demo.xlsx", "Demo") as xw:
            xw.set_cursor(0, 1)
            xw << "hello" << "world" << endl
            xw | [1.2, 3.5, -6.0]

    Accepted values are strings, booleans, real numbers, dates and times, ``None`` (a blank cell, only kept by
    XlsxWriter when a format is current), :class:`Image`, :data:`endl` and any non-string iterable of those.

    The workbook is closed exactly once: by :meth:`close`, on leaving the ``with`` block, or when the writer is
    garbage collected. Calling :meth:`close` a second time raises :class:`DoubleCloseError`.

    Parameters:
        filename: Path of the document to create, or a file-like object such as ``BytesIO``
        sheet_name: Name of the first sheet, which becomes the current sheet
        workbook_options: Options passed to :class:`xlsxwriter.Workbook`
        default_format: Format properties registered as the ``"default"`` format, None meaning no format
    """

    def __init__(
            self,
            filename,
            sheet_name: str = DEFAULT_SHEET_NAME,
            workbook_options: Optional[Mapping[str, Any]] = None,
            default_format: Optional[Mapping[str, Any]] = None,
    ):
        self.filename = filename
        self._col = 0
        self._row = 0

        if isinstance(filename, (str, os.PathLike)):
            filename = os.fspath(filename)
            directory = os.path.dirname(os.path.abspath(filename))
            if not os.path.isdir(directory):
                raise DocumentCreationError(f"Directory {directory!r} does not exist", sheet_name=sheet_name)
            if not os.access(directory, os.W_OK):
                raise DocumentCreationError(f"Directory {directory!r} is not writable", sheet_name=sheet_name)
            if os.path.isdir(filename):
                raise DocumentCreationError(f"{filename!r} is a directory", sheet_name=sheet_name)

            # XlsxWriter only creates the file on close, open it once now so failures surface here.
            existed = os.path.exists(filename)
            try:
                with open(filename, 'ab'):
                    pass
            except OSError as e:
                raise DocumentCreationError(f"Could not create document {filename!r}: {e}") from e
            if not existed:
                os.remove(filename)

        try:
            self.workbook = Workbook(filename, dict(workbook_options or {}))
        except (XlsxWriterException, OSError, TypeError) as e:
            raise DocumentCreationError(f"Could not create document {filename!r}: {e}") from e

        try:
            worksheet = self.workbook.add_worksheet(sheet_name)
        except XlsxWriterException as e:
            # Nothing has been written yet, keep the destructor from emitting an empty document.
            self.workbook.fileclosed = True
            raise DocumentCreationError(f"Could not create sheet {sheet_name!r}: {e}", sheet_name=sheet_name) from e

        self.fmt = FormatHandler(self.workbook)
        self._sheets: Dict[str, Worksheet] = {sheet_name: worksheet}
        self._formats: Dict[str, Optional[Format]] = {DEFAULT_FORMAT_NAME: self.fmt.verify_format(default_format)}
        self._sheet_name = sheet_name
        self._format_name = DEFAULT_FORMAT_NAME

        self._finalizer = weakref.finalize(self, _finalize_workbook, self.workbook, filename)
        logger.debug("Opened workbook %r with sheet %r", filename, sheet_name)

    # Lifetime

    @property
    def closed(self) -> bool:
        return not self._finalizer.alive

    def close(self):
        """Finalize the document. Raises :class:`DoubleCloseError` if the writer is already closed."""
        if self.closed:
            raise DoubleCloseError("Document is already closed", sheet_name=self._sheet_name)
        self._finalizer()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if not self.closed:
            self.close()

    def _ensure_open(self):
        if self.closed:
            raise ClosedWriterError("Document is closed", cursor=self.cursor, sheet_name=self._sheet_name)

    # Registries

    @property
    def worksheet(self) -> Worksheet:
        return self._sheets[self._sheet_name]

    @property
    def current_sheet_name(self) -> str:
        return self._sheet_name

    @property
    def current_format_name(self) -> str:
        return self._format_name

    @property
    def current_format(self) -> Optional[Format]:
        return self._formats[self._format_name]

    @property
    def sheet_names(self) -> List[str]:
        return [*self._sheets]

    @property
    def format_names(self) -> List[str]:
        return [*self._formats]

    def add_sheet(self, name: str) -> 'CellStreamWriter':
        """Add a sheet called `name` and make it current. The cursor is left where it is."""
        self._ensure_open()
        try:
            worksheet = self.workbook.add_worksheet(name)
        except DuplicateWorksheetName as e:
            raise RegistryError(f"Sheet {name!r} already exists", sheet_name=name) from e
        except XlsxWriterException as e:
            raise RegistryError(f"Invalid sheet name {name!r}: {e}", sheet_name=name) from e

        self._sheets[name] = worksheet
        self._sheet_name = name
        logger.debug("Added sheet %r", name)
        return self

    def use_sheet(self, name: str) -> 'CellStreamWriter':
        """Make an already added sheet current."""
        self._ensure_open()
        if name not in self._sheets:
            raise RegistryError(f"Unknown sheet {name!r}, known sheets are {self.sheet_names}", sheet_name=name)
        self._sheet_name = name
        return self

    def add_format(self, name: str, format_: Optional[Mapping[str, Any]] = None) -> 'CellStreamWriter':
        """Register a format made of `format_` properties under `name` and make it current.
        Registering the same name twice replaces the previous entry."""
        self._ensure_open()
        if name in self._formats:
            logger.debug("Format %r is being replaced", name)
        self._formats[name] = self.fmt.verify_format(format_ or {}) or self.workbook.add_format()
        self._format_name = name
        return self

    def use_format(self, name: str) -> 'CellStreamWriter':
        """Make an already registered format current, ``"default"`` being always available."""
        self._ensure_open()
        if name not in self._formats:
            raise RegistryError(f"Unknown format {name!r}, known formats are {self.format_names}")
        self._format_name = name
        return self

    # Cursor

    @property
    def cursor(self) -> Cursor:
        """Current position as (column, row), zero-based."""
        return self._col, self._row

    def set_cursor(self, col: int, row: int) -> 'CellStreamWriter':
        if col < 0 or row < 0:
            raise CursorError(f"Cursor cannot be moved to ({col}, {row})", cursor=self.cursor)
        self._col, self._row = int(col), int(row)
        return self

    def new_line(self) -> 'CellStreamWriter':
        self._ensure_open()
        self._col = 0
        self._row += 1
        return self

    # Writing

    def write(self, value) -> 'CellStreamWriter':
        """Write `value` at the cursor and move one column to the right for every cell written."""
        self._ensure_open()
        self._put(value, vertical=False)
        return self

    def write_line(self, value) -> 'CellStreamWriter':
        """Write `value` at the cursor and move one row down for every cell written."""
        self._ensure_open()
        self._put(value, vertical=True)
        return self

    __lshift__ = write
    __or__ = write_line

    def _advance(self, vertical: bool):
        if vertical:
            self._row += 1
        else:
            self._col += 1

    def _put(self, value, vertical: bool):
        if isinstance(value, NewLine):
            self.new_line()
        elif isinstance(value, Image):
            self._insert_image(value, vertical)
        elif value is None or isinstance(value, (str, bool, Real) + _DATETIME_TYPES):
            self._write_cell(value)
            self._advance(vertical)
        elif isinstance(value, Iterable) and not isinstance(value, (bytes, bytearray)):
            for element in value:
                self._put(element, vertical)
        else:
            raise WriteError(
                f"Cannot write values of type {type(value).__name__}",
                cursor=self.cursor,
                sheet_name=self._sheet_name,
                value=value
            )

    def _write_cell(self, value):
        col, row = self.cursor
        format_ = self.current_format
        ws = self.worksheet

        try:
            if value is None:
                return_code = ws.write_blank(row, col, None, format_)
            elif isinstance(value, str):
                return_code = ws.write_string(row, col, value, format_)
            elif isinstance(value, bool):
                return_code = ws.write_boolean(row, col, value, format_)
            elif isinstance(value, _DATETIME_TYPES):
                return_code = ws.write_datetime(row, col, value, format_)
            else:
                return_code = ws.write_number(row, col, value, format_)
        except (TypeError, ValueError) as e:
            raise WriteError(
                f"Write failed: {e}",
                cursor=self.cursor,
                sheet_name=self._sheet_name,
                value=value
            ) from e

        if return_code == -1:
            raise WriteError(
                'Write failed because the cell is outside worksheet limits',
                cursor=self.cursor,
                sheet_name=self._sheet_name,
                value=value
            )

        if return_code == -2:
            raise WriteError(
                'Write failed because the string is longer than 32k characters',
                cursor=self.cursor,
                sheet_name=self._sheet_name
            )

    def _insert_image(self, image: Image, vertical: bool):
        col, row = self.cursor

        if vertical and not os.path.exists(image.path):
            logger.debug("Image %r does not exist, leaving cell (%d, %d) empty", image.path, col, row)
            self._advance(vertical)
            return

        try:
            return_code = self.worksheet.insert_image(row, col, image.path, dict(image.options))
        except (OSError, XlsxWriterException, struct.error, ValueError) as e:
            raise ResourceError(
                f"Could not embed image {image.path!r}: {e}",
                cursor=self.cursor,
                sheet_name=self._sheet_name
            ) from e

        if return_code == -1:
            raise ResourceError(
                f"Could not embed image {image.path!r}",
                cursor=self.cursor,
                sheet_name=self._sheet_name
            )

        self._advance(vertical)


open_writer = CellStreamWriter
