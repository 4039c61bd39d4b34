from pprint import pformat


class CellStreamError(Exception):
    """Base Cell Stream error"""

    def __init__(self, message, cursor=None, sheet_name=None, value=None):
        super().__init__(message)
        self.message = message
        self.cursor = cursor
        self.sheet_name = sheet_name
        self.value = value

    def __str__(self):
        segments = []
        if self.sheet_name is not None:
            segments.append(f"Sheet: {self.sheet_name}")
        if self.cursor is not None:
            segments.append(f"Cursor (col, row): {pformat(self.cursor)}")
        if self.value is not None:
            segments.append(f"Offending value: {self.value!r}")
        additional_info = "\n".join(segments)

        full_message = [self.message]
        if additional_info:
            full_message.append(f"Additional info:\n{additional_info}")

        return "\n".join(full_message)


class DocumentCreationError(CellStreamError):
    """The target document could not be created for writing."""


class DoubleCloseError(CellStreamError):
    """`close` was requested on a writer that is already closed."""


class ClosedWriterError(CellStreamError):
    """An operation was attempted on a closed writer."""


class ResourceError(CellStreamError):
    """A referenced external resource (an image file) could not be embedded."""


class RegistryError(CellStreamError):
    """A sheet or format name is duplicated or unknown."""


class CursorError(CellStreamError):
    """The cursor was moved to illegal coordinates."""


class WriteError(CellStreamError):
    """XlsxWriter refused to write a value into a cell."""
