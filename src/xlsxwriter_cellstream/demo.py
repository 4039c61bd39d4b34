"""The demonstration sequence: read a workbook back and write a small one through :class:`CellStreamWriter`."""
import logging
import os
from typing import Optional

from .formats import FormatsNamespace as F
from .stream import CellStreamWriter, Image, endl

logger = logging.getLogger(__name__)

DEMO_SHEET_NAME = "Demo"
DEMO_VECTOR = [1.2, 3.5, -6.0, 7.2, 12.22]


def write_demo(filename, image_path: Optional[str] = None, sheet_name: str = DEMO_SHEET_NAME):
    """Write the demo workbook to `filename`, inserting `image_path` after the last vector when given.
    Returns the final cursor."""
    with CellStreamWriter(filename, sheet_name) as xw:
        xw.set_cursor(0, 1)
        xw.add_format("header", F.header)
        xw << "hello" << "to everybody" << endl
        xw.use_format("default")
        xw << endl
        xw << 3.1415
        xw | DEMO_VECTOR
        xw.set_cursor(0, 5)
        xw << DEMO_VECTOR
        if image_path is not None:
            xw << Image(image_path)
        cursor = xw.cursor

    logger.info("Demo written to %r", filename)
    return cursor


def pwd() -> str:
    return os.getcwd()
