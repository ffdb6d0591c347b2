import pytest
from py_frame import PyColumn
from py_frame import PyTable
from py_frame.errors import (
    ConversionError,
    MutationError,
    PyFrameAmbiguityError,
    PyFrameDimensionError,
    PyFrameError,
    PyFrameIndexError,
    PyFrameKeyError,
    PyFrameRangeError,
    PyFrameTypeError,
    PyFrameValueError,
)


@pytest.mark.parametrize("error,builtin", [
    (PyFrameKeyError, KeyError),
    (PyFrameTypeError, TypeError),
    (PyFrameValueError, ValueError),
    (PyFrameDimensionError, ValueError),
    (PyFrameAmbiguityError, PyFrameDimensionError),
    (PyFrameIndexError, IndexError),
    (PyFrameRangeError, PyFrameIndexError),
    (MutationError, IndexError),
    (ConversionError, TypeError),
])
def test_error_hierarchy(error, builtin):
    assert issubclass(error, PyFrameError)
    assert issubclass(error, builtin)


def test_missing_column_raises_pyframe_keyerror():
    t = PyTable({'a': [1, 2], 'b': [3, 4]})
    with pytest.raises(PyFrameKeyError):
        _ = t['missing']


def test_bad_selector_raises_pyframe_typeerror():
    t = PyTable({'a': [1, 2]})
    with pytest.raises(PyFrameTypeError):
        _ = t[1.5]


def test_row_out_of_range_raises_pyframe_indexerror():
    t = PyTable({'a': [1, 2]})
    with pytest.raises(PyFrameIndexError, match="-2..1"):
        _ = t[2]


def test_index_on_empty_table_mentions_no_rows():
    with pytest.raises(PyFrameIndexError, match="no rows"):
        PyColumn().get(0)


def test_mixed_sign_slice_raises_pyframe_rangeerror():
    t = PyTable({'a': [1, 2, 3]})
    with pytest.raises(PyFrameRangeError):
        _ = t['a'][-2:3]


def test_unconvertible_input_raises_conversion_error():
    with pytest.raises(ConversionError):
        PyTable(42)


def test_sequences_without_names_raise_pyframe_typeerror():
    with pytest.raises(PyFrameTypeError):
        PyTable([[1, 2], [3, 4]])


def test_ragged_rows_raise_pyframe_dimensionerror():
    with pytest.raises(PyFrameDimensionError):
        PyTable([[1, 2], [3]], col_names=['a', 'b'])
