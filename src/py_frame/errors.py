class PyFrameError(Exception):
    """Base exception for py-frame library."""
    pass


class PyFrameKeyError(PyFrameError, KeyError):
    """Raised when a column name is missing."""
    pass


class PyFrameTypeError(PyFrameError, TypeError):
    """Raised for invalid argument types in API calls."""
    pass


class PyFrameValueError(PyFrameError, ValueError):
    """Raised for invalid argument values."""
    pass


class PyFrameDimensionError(PyFrameValueError):
    """Raised when a value's shape does not match the shape it is assigned to."""
    pass


class PyFrameAmbiguityError(PyFrameDimensionError):
    """Raised when a multi-row, multi-column block is assigned a non-scalar."""
    pass


class PyFrameIndexError(PyFrameError, IndexError):
    """Raised when a row position is outside the valid range."""
    pass


class PyFrameRangeError(PyFrameIndexError):
    """Raised when a range cannot be resolved to closed integer bounds."""
    pass


class MutationError(PyFrameError, IndexError):
    """Raised for operations that would break the column store's invariants."""
    pass


class ConversionError(PyFrameError, TypeError):
    """Raised when input data cannot be converted to columns."""
    pass
