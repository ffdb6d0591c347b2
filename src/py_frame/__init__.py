"""
py-frame: a mutable, column-oriented, in-memory table library

Columns of one table always keep the same length: filtering, sorting or
deleting through any single column rewrites all of them.

Main classes:
    - PyTable: named columns of equal length, 2D indexing, merge and group
    - PyColumn: one column, with elementwise algebra and statistics
    - PyColumnStore: the ordered name -> column mapping behind a table
    - PyRowView: the single live row cursor of a table

Zero external dependencies - pure Python stdlib only.
"""

from .column import PyColumn
from .columns import PyColumnStore
from .row import PyRowView
from .table import PyTable
from .convert import InputAdapter, register_adapter
from .stats import NAN, is_nan
from .errors import (
	PyFrameError,
	PyFrameKeyError,
	PyFrameTypeError,
	PyFrameValueError,
	PyFrameDimensionError,
	PyFrameAmbiguityError,
	PyFrameIndexError,
	PyFrameRangeError,
	MutationError,
	ConversionError,
)

__version__ = "0.1.0"
__all__ = [
	"PyTable",
	"PyColumn",
	"PyColumnStore",
	"PyRowView",
	"InputAdapter",
	"register_adapter",
	"NAN",
	"is_nan",
	"PyFrameError",
	"PyFrameKeyError",
	"PyFrameTypeError",
	"PyFrameValueError",
	"PyFrameDimensionError",
	"PyFrameAmbiguityError",
	"PyFrameIndexError",
	"PyFrameRangeError",
	"MutationError",
	"ConversionError",
]
