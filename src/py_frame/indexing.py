"""Row selector resolution.

Row selectors are integers (negative counts from the end), ``slice`` objects
with optional open ends, ``range`` objects, or lists/tuples of those. Every
function here is pure; ``bound``/``size`` is the current row count.
"""

from __future__ import annotations

from typing import Iterable
from typing import List

from .errors import PyFrameIndexError
from .errors import PyFrameRangeError
from .errors import PyFrameTypeError


def is_position(x) -> bool:
	"""True for plain integers (bool is not a position)."""
	return isinstance(x, int) and not isinstance(x, bool)


def is_row_selector(x) -> bool:
	if is_position(x) or isinstance(x, (slice, range)):
		return True
	if isinstance(x, (list, tuple)):
		return all(is_row_selector(e) for e in x)
	return False


def _check_bound(value, what):
	if value is not None and not is_position(value):
		raise PyFrameRangeError(f"Range {what} must be an integer or None, not {type(value).__name__}")


def normalize_range(selector, bound: int) -> range:
	"""Resolve a slice with open ends into a closed ``range``.

	Positive positions count from the start and negative ones from the end;
	the signs of the bounds are kept so that ``slice(-3, None)`` becomes
	``range(-3, 0)`` (the last three rows) whatever the row count. An open
	start resolves to 0 if the stop is non-negative, else to
	``-max(bound, abs(stop))``. An open stop resolves symmetrically.

	Raises PyFrameRangeError when the bounds are not integers, the step is
	zero, or both explicit bounds are given with different signs.
	"""
	if isinstance(selector, range):
		return selector
	if not isinstance(selector, slice):
		raise PyFrameTypeError(f"Expected a slice or range, not {type(selector).__name__}")

	start, stop, step = selector.start, selector.stop, selector.step
	_check_bound(start, 'start')
	_check_bound(stop, 'stop')
	_check_bound(step, 'step')
	if step is None:
		step = 1
	if step == 0:
		raise PyFrameRangeError("Range step cannot be zero")

	if start is not None and stop is not None:
		if (start < 0) != (stop < 0):
			raise PyFrameRangeError(
				f"Cannot resolve slice({start}, {stop}): bounds must both count from "
				f"the start or both from the end"
			)
		return range(start, stop, step)

	if step > 0:
		if start is None and stop is None:
			return range(0, bound, step)
		if start is None:
			start = 0 if stop >= 0 else -max(bound, -stop)
		else:
			stop = 0 if start < 0 else max(bound, start + 1)
	else:
		if start is None and stop is None:
			return range(bound - 1, -1, step)
		if start is None:
			start = bound - 1 if stop >= 0 else -1
		else:
			stop = -1 if start >= 0 else -(max(bound, -start) + 1)
	return range(start, stop, step)


def resolve_indices(*selectors, bound: int) -> List[int]:
	"""Flatten selectors into positions, keeping order, duplicates and signs."""
	out = []
	for sel in selectors:
		if is_position(sel):
			out.append(sel)
		elif isinstance(sel, (slice, range)):
			out.extend(normalize_range(sel, bound))
		elif isinstance(sel, (list, tuple)):
			out.extend(resolve_indices(*sel, bound=bound))
		else:
			raise PyFrameTypeError(
				f"Row selectors must be integers, slices or ranges, not {type(sel).__name__}"
			)
	return out


def in_range(*selectors, size: int) -> bool:
	"""True iff every resolved position lies in ``[-size, size - 1]``."""
	if not selectors:
		return True
	return all(-size <= i < size for i in resolve_indices(*selectors, bound=size))


def absolute(index: int, size: int) -> int:
	return index + size if index < 0 else index


def check_index(index: int, size: int) -> int:
	"""Return the absolute position of ``index`` or raise PyFrameIndexError."""
	if not -size <= index < size:
		raise PyFrameIndexError(_range_message(index, size))
	return absolute(index, size)


def check_indices(indices: Iterable[int], size: int) -> List[int]:
	return [check_index(i, size) for i in indices]


def index_set(*selectors, bound: int) -> List[int]:
	"""Sorted, de-duplicated absolute positions.

	Out-of-range positions raise PyFrameIndexError.
	"""
	return sorted(set(check_indices(resolve_indices(*selectors, bound=bound), bound)))


def _range_message(index, size):
	if size == 0:
		return f"Index {index} out of range: no rows"
	return f"Index {index} out of range {-size}..{size - 1}"
