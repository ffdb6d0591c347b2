import operator

from .errors import PyFrameDimensionError
from .errors import PyFrameIndexError
from .errors import PyFrameTypeError
from .errors import PyFrameValueError
from .indexing import check_index
from .indexing import check_indices
from .indexing import index_set
from .indexing import is_position
from .indexing import resolve_indices
from .stats import NAN
from .stats import StatisticsMixin
from .stats import is_float_like
from .stats import is_missing
from .stats import is_nan
from .stats import same_value

from typing import Any
from typing import Callable
from typing import List

# ============================================================
# Small helpers
# ============================================================

_NOTHING = object()


def _is_sequence(value) -> bool:
	return hasattr(value, '__iter__') and not isinstance(value, (str, bytes, bytearray, dict))


def _first_present(values):
	for v in values:
		if v is not None:
			return v
	return None


def _apply(op, x, y):
	"""Binary op where None wins over NaN and NaN wins over the operator."""
	if x is None or y is None:
		return None
	if is_nan(x) or is_nan(y):
		return NAN
	return op(x, y)


def _nan_key(v):
	"""Hash key treating every NaN as the same value."""
	return ('__nan__',) if is_nan(v) else v


class PyColumn(StatisticsMixin):
	""" One named sequence of a table.

	A column owns a list of values. When it belongs to a column store, every
	operation that removes or reorders rows is applied to all of the store's
	columns so they stay aligned.
	"""
	__hash__ = None

	def __init__(self, values=(), store=None):
		values = list(values)
		# A float-like column stores missing numbers as NaN
		if is_float_like(_first_present(values)):
			values = [NAN if v is None else v for v in values]
		self._values = values
		self._store = store

	def _siblings(self):
		if self._store is None:
			return [self]
		return list(self._store.values())

	def __len__(self):
		return len(self._values)

	def __iter__(self):
		return iter(self._values)

	def __repr__(self):
		return f"PyColumn({self._values!r})"

	def to_list(self) -> List[Any]:
		return list(self._values)

	def copy(self):
		"""Detached copy; belongs to no store."""
		return _derived(list(self._values))

	def data_type(self):
		"""Type of the first non-None value, or None."""
		first = _first_present(self._values)
		return None if first is None else type(first)

	def is_float_like(self) -> bool:
		return is_float_like(_first_present(self._values))

	def _stat_values(self):
		return self._values

	"""
	Positional access
	"""
	def get(self, *selectors):
		""" Get value(s) by position. Behavior varies by input:
			# int: the value (PyFrameIndexError outside -len..len-1)
			# slice or range: list of values, range-checked
			# {'start': s, 'length': l}: up to l values from s; s must be in range
			# anything else: values_at(*selectors), duplicates kept
		"""
		n = len(self._values)
		if len(selectors) == 1:
			key = selectors[0]
			if is_position(key):
				return self._values[check_index(key, n)]
			if isinstance(key, dict):
				try:
					start, length = key['start'], key['length']
				except KeyError as e:
					raise PyFrameTypeError("Span lookups need 'start' and 'length' keys") from e
				start = check_index(start, n)
				if length < 0:
					raise PyFrameValueError(f"Span length must be non-negative, got {length}")
				return self._values[start:start + length]
		return self.values_at(*selectors)

	def __getitem__(self, key):
		if isinstance(key, tuple):
			return self.get(*key)
		return self.get(key)

	def values_at(self, *selectors) -> List[Any]:
		n = len(self._values)
		indices = check_indices(resolve_indices(*selectors, bound=n), n)
		values = self._values
		return [values[i] for i in indices]

	def set(self, key, value):
		"""Assign at one position, or at a set of positions.

		A scalar is broadcast to every selected position. An iterable must
		have one element per distinct selected position (in ascending order).
		"""
		n = len(self._values)
		if is_position(key):
			self._values[check_index(key, n)] = value
			return

		indices = index_set(key, bound=n)
		if _is_sequence(value):
			value = list(value)
			if len(value) != len(indices):
				raise PyFrameDimensionError(
					f"Cannot assign {len(value)} values to {len(indices)} positions"
				)
		else:
			value = [value] * len(indices)

		values = self._values
		for i, v in zip(indices, value):
			values[i] = v

	def __setitem__(self, key, value):
		self.set(key, value)

	def replace_all(self, values):
		"""Swap in a same-length sequence of values."""
		values = list(values)
		if len(values) != len(self._values):
			raise PyFrameDimensionError(
				f"Replacement has {len(values)} values, column has {len(self._values)}"
			)
		self._values = values
		return self

	""" Math operations """
	def _combine(self, other, op, op_symbol: str, reflected=False):
		"""Elementwise op against a same-length sequence or a broadcast scalar."""
		if _is_sequence(other):
			other = list(other)
			if len(other) != len(self._values):
				raise PyFrameDimensionError(
					f"Operands of '{op_symbol}' have lengths {len(self._values)} and {len(other)}"
				)
			pairs = zip(self._values, other)
		else:
			pairs = ((x, other) for x in self._values)

		try:
			if reflected:
				return [_apply(op, y, x) for x, y in pairs]
			return [_apply(op, x, y) for x, y in pairs]
		except TypeError as e:
			raise PyFrameTypeError(f"Unsupported operand type(s) for '{op_symbol}': {e}") from e

	def _operate(self, other, op, op_symbol, inplace):
		result = self._combine(other, op, op_symbol)
		if inplace:
			self._values = result
			return self
		return _derived(result)

	def add(self, other, inplace=False):
		return self._operate(other, operator.add, '+', inplace)

	def subtract(self, other, inplace=False):
		return self._operate(other, operator.sub, '-', inplace)

	def multiply(self, other, inplace=False):
		return self._operate(other, operator.mul, '*', inplace)

	def divide(self, other, inplace=False):
		return self._operate(other, operator.truediv, '/', inplace)

	def power(self, other, inplace=False):
		return self._operate(other, operator.pow, '**', inplace)

	def modulo(self, other, inplace=False):
		return self._operate(other, operator.mod, '%', inplace)

	def __add__(self, other):
		return self.add(other)

	def __sub__(self, other):
		return self.subtract(other)

	def __mul__(self, other):
		return self.multiply(other)

	def __truediv__(self, other):
		return self.divide(other)

	def __pow__(self, other):
		return self.power(other)

	def __mod__(self, other):
		return self.modulo(other)

	def __radd__(self, other):
		return _derived(self._combine(other, operator.add, '+', reflected=True))

	def __rsub__(self, other):
		return _derived(self._combine(other, operator.sub, '-', reflected=True))

	def __rmul__(self, other):
		return _derived(self._combine(other, operator.mul, '*', reflected=True))

	def __rtruediv__(self, other):
		return _derived(self._combine(other, operator.truediv, '/', reflected=True))

	def __rpow__(self, other):
		return _derived(self._combine(other, operator.pow, '**', reflected=True))

	def __rmod__(self, other):
		return _derived(self._combine(other, operator.mod, '%', reflected=True))

	def __iadd__(self, other):
		return self.add(other, inplace=True)

	def __isub__(self, other):
		return self.subtract(other, inplace=True)

	def __imul__(self, other):
		return self.multiply(other, inplace=True)

	def __itruediv__(self, other):
		return self.divide(other, inplace=True)

	def __ipow__(self, other):
		return self.power(other, inplace=True)

	def __imod__(self, other):
		return self.modulo(other, inplace=True)

	def __neg__(self):
		return self._map(operator.neg, False)

	def __abs__(self):
		return self.abs()

	def _map(self, func, inplace):
		"""Apply func to every present value; None and NaN are kept."""
		result = [v if is_missing(v) else func(v) for v in self._values]
		if inplace:
			self._values = result
			return self
		return _derived(result)

	def abs(self, inplace=False):
		return self._map(abs, inplace)

	def round(self, ndigits=0, inplace=False):
		return self._map(lambda v: round(v, ndigits), inplace)

	def cast(self, target_type, inplace=False):
		"""Convert every present value with target_type (e.g. int, str)."""
		return self._map(target_type, inplace)

	"""
	Shifts and folds
	"""
	def lag(self, step=1, empty=None, inplace=False):
		"""Shift values down by step (up if negative), filling with empty."""
		n = len(self._values)
		if abs(step) > n:
			raise PyFrameIndexError(f"Cannot lag {n} values by {step}")
		if step >= 0:
			result = [empty] * step + self._values[:n - step]
		else:
			result = self._values[-step:] + [empty] * -step
		if inplace:
			self._values = result
			return self
		return _derived(result)

	def diff(self, step=1, inplace=False):
		"""self - lag(step), with NaN where there is nothing to subtract."""
		return self.subtract(self.lag(step, NAN), inplace=inplace)

	def cumulative(self, func: Callable = operator.add, init=0, inplace=False):
		"""Running fold from the first value to the last."""
		acc = init
		result = []
		for v in self._values:
			acc = _apply(func, acc, v)
			result.append(acc)
		if inplace:
			self._values = result
			return self
		return _derived(result)

	"""
	Value replacement
	"""
	def replace_nil(self, replacement=NAN, inplace=False):
		result = [replacement if v is None else v for v in self._values]
		if inplace:
			self._values = result
			return self
		return _derived(result)

	def replace_nan(self, replacement=None, inplace=False):
		result = [replacement if is_nan(v) else v for v in self._values]
		if inplace:
			self._values = result
			return self
		return _derived(result)

	def replace_values(self, mapping, inplace=False):
		"""Replace every value found as a key of mapping with its mapped value."""
		result = []
		for v in self._values:
			try:
				result.append(mapping[v] if v in mapping else v)
			except TypeError:
				# unhashable values are never keys
				result.append(v)
		if inplace:
			self._values = result
			return self
		return _derived(result)

	"""
	Row structure. These rewrite every column of the owning store.
	"""
	def _subset_to(self, indices):
		for col in self._siblings():
			values = col._values
			col._values = [values[i] for i in indices]
		return self

	def _remove_at(self, indices):
		drop = set(indices)
		if not drop:
			return self
		for col in self._siblings():
			col._values = [v for i, v in enumerate(col._values) if i not in drop]
		return self

	def _take(self, indices, inplace):
		if inplace:
			return self._subset_to(indices)
		values = self._values
		return _derived([values[i] for i in indices])

	def select_indexes(self, predicate) -> List[int]:
		return [i for i, v in enumerate(self._values) if predicate(v)]

	def find_indexes(self, value=_NOTHING, predicate=None) -> List[int]:
		"""Positions equal to value (NaN matches NaN), or where predicate holds."""
		if predicate is None:
			if value is _NOTHING:
				raise PyFrameTypeError("find_indexes needs a value or a predicate")
			return [i for i, v in enumerate(self._values) if same_value(v, value)]
		return self.select_indexes(predicate)

	def compact(self, inplace=False):
		"""Drop positions holding None or NaN."""
		return self._take([i for i, v in enumerate(self._values) if not is_missing(v)], inplace)

	def select(self, predicate, inplace=False):
		return self._take(self.select_indexes(predicate), inplace)

	def reject(self, predicate, inplace=False):
		return self._take([i for i, v in enumerate(self._values) if not predicate(v)], inplace)

	def delete(self, value):
		"""Remove every row where this column equals value; returns value or None."""
		found = self.find_indexes(value)
		if not found:
			return None
		self._remove_at(found)
		return value

	def delete_if(self, predicate):
		self._remove_at(self.select_indexes(predicate))
		return self

	def pop(self, count=None):
		"""Remove the last row (or last count rows); returns the removed value(s)."""
		n = len(self._values)
		if count is None:
			if n == 0:
				return None
			popped = self._values[-1]
			self._remove_at([n - 1])
			return popped
		if count < 0:
			raise PyFrameValueError(f"Cannot pop a negative number of values: {count}")
		count = min(count, n)
		popped = self._values[n - count:]
		self._remove_at(range(n - count, n))
		return popped

	def uniq(self, inplace=False):
		"""Keep the first occurrence of each value (NaN counts once)."""
		keep = []
		seen = set()
		unhashable = []
		for i, v in enumerate(self._values):
			try:
				k = _nan_key(v)
				if k in seen:
					continue
				seen.add(k)
			except TypeError:
				# Slow path: unhashables
				if any(v == u for u in unhashable):
					continue
				unhashable.append(v)
			keep.append(i)
		return self._take(keep, inplace)

	def select_rows_at(self, *selectors):
		"""Keep only the given rows, in the given order (duplicates repeat rows).

		Every position is range-checked before any column is touched.
		"""
		n = len(self._values)
		return self._subset_to(check_indices(resolve_indices(*selectors, bound=n), n))

	def delete_rows_at(self, *selectors):
		"""Remove the given rows (range-checked)."""
		return self._remove_at(index_set(*selectors, bound=len(self._values)))

	delete_at = delete_rows_at

	def reverse(self, inplace=False):
		return self._take(range(len(self._values) - 1, -1, -1), inplace)

	def _sort_order(self, key, nil_first, asc):
		values = self._values
		missing = []
		present = []
		for i, v in enumerate(values):
			(missing if is_missing(v) else present).append(i)
		if key is None:
			present.sort(key=values.__getitem__, reverse=not asc)
		else:
			present.sort(key=lambda i: key(values[i]), reverse=not asc)
		return missing + present if nil_first else present + missing

	def sort(self, key=None, nil_first=True, asc=True, inplace=False):
		"""
		Stable sort of the present values; None and NaN are grouped first
		(nil_first=True) or last. In place, every sibling column follows.
		"""
		return self._take(self._sort_order(key, nil_first, asc), inplace)

	def sort_by(self, key, nil_first=True, asc=True, inplace=False):
		return self.sort(key=key, nil_first=nil_first, asc=asc, inplace=inplace)

	def __eq__(self, other):
		if isinstance(other, PyColumn):
			other = other._values
		elif isinstance(other, (list, tuple, range)):
			other = list(other)
		else:
			return NotImplemented
		if len(other) != len(self._values):
			return False
		return all(same_value(a, b) for a, b in zip(self._values, other))

	def __ne__(self, other):
		result = self.__eq__(other)
		if result is NotImplemented:
			return result
		return not result


def _derived(values):
	"""Wrap an already-computed list without the None -> NaN conversion."""
	col = PyColumn.__new__(PyColumn)
	col._values = values
	col._store = None
	return col
