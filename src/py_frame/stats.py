"""Missing-value helpers and statistics shared by columns and rows.

Two markers mean "no value": ``None`` (absent) and ``NAN`` (a numeric
sentinel). Statistics ignore both.
"""

from __future__ import annotations

import math
import numbers
import operator
from functools import reduce
from typing import Any
from typing import Iterable
from typing import List

NAN = float('nan')


def is_nan(x: Any) -> bool:
	"""True only for float, complex and Decimal NaN; everything else is not NaN."""
	if isinstance(x, float):
		return x != x
	if isinstance(x, complex):
		return math.isnan(x.real) or math.isnan(x.imag)
	if isinstance(x, numbers.Number) and hasattr(x, 'is_nan'):
		return x.is_nan()
	return False


def is_missing(x: Any) -> bool:
	return x is None or is_nan(x)


def is_float_like(x: Any) -> bool:
	"""Numeric but not integral (bool counts as integral)."""
	return isinstance(x, numbers.Number) and not isinstance(x, numbers.Integral)


def same_value(a: Any, b: Any) -> bool:
	"""Equality where NaN equals NaN."""
	if is_nan(a) and is_nan(b):
		return True
	return a == b


def compact(values: Iterable[Any]) -> List[Any]:
	return [v for v in values if not is_missing(v)]


def sum_of(values):
	return sum(compact(values))


def prod_of(values):
	return reduce(operator.mul, compact(values), 1)


def min_of(values):
	vals = compact(values)
	return min(vals) if vals else None


def max_of(values):
	vals = compact(values)
	return max(vals) if vals else None


def minmax_of(values):
	vals = compact(values)
	if not vals:
		return (None, None)
	return (min(vals), max(vals))


def mean_of(values):
	vals = compact(values)
	return sum(vals) / len(vals) if vals else None


def var_of(values):
	"""Sample variance; None for fewer than two values."""
	vals = compact(values)
	if len(vals) < 2:
		return None
	m = sum(vals) / len(vals)
	return sum((x - m) * (x - m) for x in vals) / (len(vals) - 1)


def std_of(values):
	v = var_of(values)
	return None if v is None else v ** 0.5


class StatisticsMixin:
	"""Adds sum/prod/min/max/minmax/mean/var/std over ``self._stat_values()``."""

	def _stat_values(self):
		raise NotImplementedError

	def sum(self):
		return sum_of(self._stat_values())

	def prod(self):
		return prod_of(self._stat_values())

	def min(self):
		return min_of(self._stat_values())

	def max(self):
		return max_of(self._stat_values())

	def minmax(self):
		return minmax_of(self._stat_values())

	def mean(self):
		return mean_of(self._stat_values())

	def var(self):
		return var_of(self._stat_values())

	def std(self):
		return std_of(self._stat_values())
