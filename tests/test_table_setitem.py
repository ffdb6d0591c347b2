"""
Test PyTable.__setitem__ across rows, columns, points and blocks.
"""

import pytest
from py_frame import PyTable
from py_frame.errors import (
	PyFrameAmbiguityError,
	PyFrameDimensionError,
	PyFrameIndexError,
	PyFrameKeyError,
	PyFrameTypeError,
)


class TestScalarAssignment:
	"""Single cell assignment with various indexing patterns."""

	def test_scalar_by_int_name(self):
		t = PyTable({'a': [1, 2, 3], 'b': [4, 5, 6]})
		t[0, 'a'] = 99
		assert t[0, 'a'] == 99

	def test_scalar_by_name_int(self):
		t = PyTable({'a': [1, 2, 3], 'b': [4, 5, 6]})
		t['b', 1] = 88
		assert t[1, 'b'] == 88

	def test_scalar_by_neg_index(self):
		t = PyTable({'a': [1, 2, 3], 'b': [4, 5, 6]})
		t[-1, 'b'] = 77
		assert t[2, 'b'] == 77

	def test_point_out_of_range(self):
		t = PyTable({'a': [1, 2, 3]})
		with pytest.raises(PyFrameIndexError):
			t[3, 'a'] = 0

	def test_point_unknown_column(self):
		t = PyTable({'a': [1, 2, 3]})
		with pytest.raises(PyFrameKeyError):
			t[0, 'missing'] = 0


class TestBroadcastScalarToSlice:
	"""Broadcast a scalar to multiple cells."""

	def test_broadcast_to_column_slice(self):
		t = PyTable({'a': [1, 2, 3], 'b': [4, 5, 6]})
		t[0:2, 'a'] = 100
		assert t['a'] == [100, 100, 3]

	def test_broadcast_to_all_rows_single_col(self):
		t = PyTable({'a': [1, 2, 3], 'b': [4, 5, 6]})
		t[:, 'b'] = 42
		assert t['b'] == [42, 42, 42]

	def test_broadcast_to_rectangular_region(self):
		t = PyTable({
			'a': [1, 2, 3, 4],
			'b': [5, 6, 7, 8],
			'c': [9, 10, 11, 12]})
		t[1:3, 'a', 'b'] = 999
		assert t['a'] == [1, 999, 999, 4]
		assert t['b'] == [5, 999, 999, 8]
		assert t['c'] == [9, 10, 11, 12]

	def test_broadcast_to_step_slice(self):
		t = PyTable({'x': [1, 2, 3, 4, 5]})
		t[::2, 'x'] = 0
		assert t['x'] == [0, 2, 0, 4, 0]

	def test_broadcast_to_listed_rows(self):
		t = PyTable({'x': [1, 2, 3, 4, 5]})
		t[[0, -1], 'x'] = 0
		assert t['x'] == [0, 2, 3, 4, 0]


class TestSequenceAssignment:

	def test_sequence_to_column_slice(self):
		t = PyTable({'a': [1, 2, 3]})
		t[0:2, 'a'] = [10, 20]
		assert t['a'] == [10, 20, 3]

	def test_sequence_length_mismatch(self):
		t = PyTable({'a': [1, 2, 3]})
		with pytest.raises(PyFrameDimensionError):
			t[0:2, 'a'] = [10, 20, 30]
		assert t['a'] == [1, 2, 3]


class TestRowAssignment:

	def test_row_values(self):
		t = PyTable({'a': [1, 2, 3], 'b': [4, 5, 6]})
		t[1] = [7, 8]
		assert t.to_dict() == {'a': [1, 7, 3], 'b': [4, 8, 6]}

	def test_row_constant(self):
		t = PyTable({'a': [1, 2, 3], 'b': [4, 5, 6]})
		t[1] = None
		assert t[1].values == [None, None]

	def test_row_wrong_size(self):
		t = PyTable({'a': [1, 2, 3], 'b': [4, 5, 6]})
		with pytest.raises(PyFrameDimensionError):
			t[1] = [1, 2, 3]

	def test_row_out_of_range(self):
		t = PyTable({'a': [1, 2, 3]})
		with pytest.raises(PyFrameIndexError):
			t[5] = 1

	def test_several_rows(self):
		t = PyTable({'a': [1, 2, 3], 'b': [4, 5, 6]})
		t[0:2] = 0
		assert t.to_dict() == {'a': [0, 0, 3], 'b': [0, 0, 6]}
		t[0, 2] = [7, 8]
		assert t.to_dict() == {'a': [7, 0, 7], 'b': [8, 0, 8]}

	def test_several_rows_checked_first(self):
		t = PyTable({'a': [1, 2, 3]})
		with pytest.raises(PyFrameIndexError):
			t[0, 9] = 0
		assert t['a'] == [1, 2, 3]


class TestColumnAssignment:

	def test_replace_column(self):
		t = PyTable({'a': [1, 2, 3], 'b': [4, 5, 6]})
		t['a'] = [7, 8, 9]
		assert t['a'] == [7, 8, 9]

	def test_new_column_broadcast(self):
		t = PyTable({'a': [1, 2, 3]})
		t['c'] = 0
		assert t['c'] == [0, 0, 0]
		assert t.column_names() == ['a', 'c']

	def test_several_columns(self):
		t = PyTable({'a': [1, 2, 3], 'b': [4, 5, 6]})
		t['a', 'b'] = 0
		assert t.to_dict() == {'a': [0, 0, 0], 'b': [0, 0, 0]}
		t['b', 'c'] = [1, 2, 3]
		assert t['c'] == [1, 2, 3]

	def test_generator_value(self):
		t = PyTable({'a': [1, 2, 3]})
		t['b', 'c'] = (v * 2 for v in range(3))
		assert t['b'] == [0, 2, 4]
		assert t['c'] == [0, 2, 4]

	def test_column_length_mismatch(self):
		t = PyTable({'a': [1, 2, 3]})
		with pytest.raises(PyFrameDimensionError):
			t['c'] = [1, 2]
		assert t.column_names() == ['a']


class TestBlockAssignment:
	"""Several rows and several columns only take a scalar."""

	def test_sequence_is_ambiguous(self):
		t = PyTable({'a': [1, 2], 'b': [3, 4]})
		with pytest.raises(PyFrameAmbiguityError):
			t[0:2, 'a', 'b'] = [1, 2]
		assert t.to_dict() == {'a': [1, 2], 'b': [3, 4]}

	def test_ambiguity_is_a_dimension_error(self):
		t = PyTable({'a': [1, 2], 'b': [3, 4]})
		with pytest.raises(PyFrameDimensionError):
			t[0, 1, 'a', 'b'] = [[1, 2], [3, 4]]
		with pytest.raises(ValueError):
			t[0, 1, 'a', 'b'] = [[1, 2], [3, 4]]

	def test_block_unknown_column(self):
		t = PyTable({'a': [1, 2], 'b': [3, 4]})
		with pytest.raises(PyFrameKeyError):
			t[0, 'a', 'z'] = 0


class TestSetMethod:

	def test_set_equivalent_to_setitem(self):
		t = PyTable({'a': [1, 2]})
		t.set(0, 'a', 5)
		assert t['a'] == [5, 2]

	def test_set_needs_selector_and_value(self):
		t = PyTable({'a': [1, 2]})
		with pytest.raises(PyFrameTypeError):
			t.set(0)
