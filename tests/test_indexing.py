import pytest
from py_frame.errors import PyFrameIndexError, PyFrameRangeError, PyFrameTypeError
from py_frame.indexing import (
	check_index,
	in_range,
	index_set,
	normalize_range,
	resolve_indices,
)


class TestNormalizeRange:
	"""Open slice ends resolve against the row count."""

	@pytest.mark.parametrize("selector, expected", [
		(slice(0, None), range(0, 10)),
		(slice(None, None), range(0, 10)),
		(slice(2, 5), range(2, 5)),
		(slice(None, 4), range(0, 4)),
		(slice(None, -4), range(-10, -4)),
		(slice(-3, None), range(-3, 0)),
		(slice(None, None, 2), range(0, 10, 2)),
		(slice(None, None, -1), range(9, -1, -1)),
		(slice(-1, None, -1), range(-1, -11, -1)),
		(slice(3, None, -1), range(3, -1, -1)),
	])
	def test_open_ends(self, selector, expected):
		assert normalize_range(selector, 10) == expected

	def test_range_is_returned_as_is(self):
		r = range(1, 7, 3)
		assert normalize_range(r, 10) is r

	def test_negative_open_start_grows_with_stop(self):
		assert normalize_range(slice(None, -12), 10) == range(-12, -12)
		assert normalize_range(slice(None, -2), 3) == range(-3, -2)

	def test_start_beyond_bound_stays_out_of_range(self):
		r = normalize_range(slice(12, None), 10)
		assert list(r) == [12]
		assert not in_range(r, size=10)

	def test_mixed_sign_bounds_raise(self):
		with pytest.raises(PyFrameRangeError):
			normalize_range(slice(2, -1), 10)
		with pytest.raises(PyFrameRangeError):
			normalize_range(slice(-2, 5), 10)

	def test_zero_step_raises(self):
		with pytest.raises(PyFrameRangeError):
			normalize_range(slice(0, 5, 0), 10)

	def test_non_integer_bounds_raise(self):
		with pytest.raises(PyFrameRangeError):
			normalize_range(slice('a', 3), 10)
		with pytest.raises(PyFrameRangeError):
			normalize_range(slice(0.5, None), 10)

	def test_range_error_is_an_index_error(self):
		with pytest.raises(IndexError):
			normalize_range(slice(0, 1, 0), 10)


class TestResolveIndices:

	def test_keeps_order_duplicates_and_signs(self):
		assert resolve_indices(0, slice(0, 3), -1, 0, bound=10) == [0, 0, 1, 2, -1, 0]

	def test_flattens_lists(self):
		assert resolve_indices([1, 2], range(3, 5), bound=10) == [1, 2, 3, 4]

	def test_no_selectors(self):
		assert resolve_indices(bound=10) == []

	def test_rejects_other_types(self):
		with pytest.raises(PyFrameTypeError):
			resolve_indices(1.5, bound=10)
		with pytest.raises(PyFrameTypeError):
			resolve_indices(True, bound=10)


class TestInRange:

	def test_empty_selector_list_is_in_range(self):
		assert in_range(size=0)
		assert in_range(size=10)

	def test_bounds(self):
		assert in_range(0, 9, -10, size=10)
		assert not in_range(10, size=10)
		assert not in_range(-11, size=10)

	def test_slices(self):
		assert in_range(slice(5, None), size=10)
		assert in_range(slice(-10, None), size=10)
		assert not in_range(slice(0, 11), size=10)


class TestIndexSet:

	def test_sorted_unique_absolute(self):
		assert index_set(3, 1, -1, 1, slice(0, 2), bound=5) == [0, 1, 3, 4]

	def test_out_of_range_raises(self):
		with pytest.raises(PyFrameIndexError):
			index_set(5, bound=5)
		with pytest.raises(PyFrameIndexError):
			index_set(-6, bound=5)

	def test_check_index(self):
		assert check_index(-3, 3) == 0
		assert check_index(2, 3) == 2
		with pytest.raises(PyFrameIndexError, match="no rows"):
			check_index(0, 0)
