"""Ordered name -> column mapping that keeps every column the same length."""

import functools
import logging

from .column import PyColumn
from .column import _is_sequence
from .errors import MutationError
from .errors import PyFrameDimensionError
from .errors import PyFrameKeyError
from .errors import PyFrameTypeError
from .errors import PyFrameValueError
from .indexing import index_set

logger = logging.getLogger(__name__)


def _missing_col_error(name, context="PyColumnStore"):
	return PyFrameKeyError(f"Column '{name}' not found in {context}")


def _check_name(name):
	if not isinstance(name, str):
		raise PyFrameTypeError(f"Column names must be str, not {type(name).__name__}")


def _notifies_table(method):
	"""Resync the owning table's row accessors after a structural change."""
	@functools.wraps(method)
	def wrapper(self, *args, **kwargs):
		result = method(self, *args, **kwargs)
		self._resync()
		return result
	return wrapper


class PyColumnStore:
	""" Columns of one table, by name, in insertion order.

	Every column has length ``nrow``. Values are checked before anything is
	written, so a failed assignment leaves the store untouched.
	"""

	def __init__(self, table=None):
		self._data = {}
		self._table = table

	def _resync(self):
		if self._table is not None:
			self._table.row.resync_accessors()

	"""
	Shape
	"""
	@property
	def nrow(self) -> int:
		for col in self._data.values():
			return len(col)
		return 0

	@property
	def ncol(self) -> int:
		return len(self._data)

	@property
	def dim(self):
		return (self.nrow, self.ncol)

	def __len__(self):
		return len(self._data)

	def __iter__(self):
		return iter(self._data)

	def __contains__(self, name):
		return name in self._data

	def names(self):
		return list(self._data)

	keys = names

	def values(self):
		return list(self._data.values())

	columns = values

	def items(self):
		return list(self._data.items())

	"""
	Access
	"""
	def get(self, name) -> PyColumn:
		try:
			return self._data[name]
		except (KeyError, TypeError):
			raise _missing_col_error(name) from None

	def __getitem__(self, name):
		return self.get(name)

	def values_at(self, *names):
		"""One name -> that column; several -> list of columns."""
		cols = [self.get(name) for name in names]
		return cols[0] if len(cols) == 1 else cols

	"""
	Assignment
	"""
	def _coerce(self, value, length):
		if isinstance(value, PyColumn):
			return value
		if _is_sequence(value):
			return list(value)
		return [value] * length

	def _target_length(self, names, values):
		"""Length new columns must have; nrow unless every column is replaced."""
		if all(name in names for name in self._data):
			for v in values:
				if _is_sequence(v):
					return len(v)
			return max(self.nrow, 1)
		return self.nrow

	def _prepare(self, mapping):
		"""Validate names and lengths of mapping; return name -> values."""
		for name in mapping:
			_check_name(name)
		target = self._target_length(mapping.keys(), mapping.values())
		prepared = {}
		for name, value in mapping.items():
			values = self._coerce(value, target)
			if len(values) != target:
				raise PyFrameDimensionError(
					f"Column '{name}' has {len(values)} values, expected {target}"
				)
			prepared[name] = values
		return prepared

	def _put(self, name, values):
		old = self._data.get(name)
		if old is values:
			return
		if old is not None:
			old._store = None
		self._data[name] = PyColumn(values, store=self)

	@_notifies_table
	def set(self, name, values):
		"""Add or replace a column. A scalar is broadcast to every row."""
		prepared = self._prepare({name: values})
		self._put(name, prepared[name])
		logger.debug("set column %r (%d rows)", name, self.nrow)

	__setitem__ = set

	@_notifies_table
	def set_many(self, mapping=None, **columns):
		"""Add or replace several columns at once; all are checked first."""
		data = dict(mapping or {})
		data.update(columns)
		if not data:
			return
		prepared = self._prepare(data)
		for name, values in prepared.items():
			self._put(name, values)
		logger.debug("set columns %r (%d rows)", list(prepared), self.nrow)

	update = set_many

	"""
	Structure
	"""
	@_notifies_table
	def rename(self, mapping):
		"""Rename columns in place; positions are kept."""
		for old, new in mapping.items():
			if old not in self._data:
				raise _missing_col_error(old)
			_check_name(new)
		renamed = [mapping.get(name, name) for name in self._data]
		if len(set(renamed)) != len(renamed):
			raise PyFrameValueError(f"Renaming {mapping!r} would duplicate a column name")
		self._data = dict(zip(renamed, self._data.values()))
		logger.debug("renamed columns %r", mapping)
		return self

	@_notifies_table
	def delete(self, *names):
		"""Remove columns; returns the removed column (or None) per name."""
		removed = []
		for name in names:
			col = self._data.pop(name, None)
			if col is not None:
				col._store = None
			removed.append(col)
		logger.debug("deleted columns %r", list(names))
		return removed[0] if len(removed) == 1 else removed

	def __delitem__(self, name):
		if name not in self._data:
			raise _missing_col_error(name)
		self.delete(name)

	@_notifies_table
	def delete_if(self, predicate):
		"""Remove every column for which predicate(name, column) holds."""
		for name in [n for n, col in self._data.items() if predicate(n, col)]:
			self._data.pop(name)._store = None
		return self

	@_notifies_table
	def clear(self):
		for col in self._data.values():
			col._store = None
		self._data = {}
		return self

	@_notifies_table
	def shift(self):
		"""Remove and return the first (name, column) pair, or None."""
		if not self._data:
			return None
		name = next(iter(self._data))
		col = self._data.pop(name)
		col._store = None
		return (name, col)

	def select_rows_at(self, *selectors):
		"""Keep only the given rows in every column."""
		cols = self.values()
		if cols:
			cols[0].select_rows_at(*selectors)
		else:
			index_set(*selectors, bound=0)
		return self

	def copy(self):
		"""Deep copy of the values, bound to no table."""
		out = PyColumnStore()
		for name, col in self._data.items():
			out._put(name, list(col))
		return out

	@_notifies_table
	def slice(self, *names, inplace=False):
		"""Only the named columns, in the given order."""
		for name in names:
			if name not in self._data:
				raise _missing_col_error(name)
		if not inplace:
			out = PyColumnStore()
			for name in names:
				out._put(name, list(self._data[name]))
			return out
		for name in [n for n in self._data if n not in names]:
			self._data.pop(name)._store = None
		self._data = {name: self._data[name] for name in names}
		return self

	@_notifies_table
	def merge(self, other, inplace=False):
		"""Add or replace the columns of other (a mapping or store)."""
		if isinstance(other, PyColumnStore):
			other = other.to_dict()
		target = self if inplace else self.copy()
		prepared = target._prepare(dict(other))
		for name, values in prepared.items():
			target._put(name, values)
		return target

	@_notifies_table
	def sort(self, key=None, inplace=False):
		"""Order columns by name (or key(name)); rows are not touched."""
		ordered = sorted(self._data, key=key)
		if not inplace:
			out = PyColumnStore()
			for name in ordered:
				out._put(name, list(self._data[name]))
			return out
		self._data = {name: self._data[name] for name in ordered}
		return self

	"""
	Forbidden mutations
	"""
	def replace(self, *args, **kwargs):
		raise MutationError("Columns cannot be replaced wholesale; use set() or merge()")

	def transform_keys(self, *args, **kwargs):
		raise MutationError("Column names cannot be transformed; use rename()")

	def transform_values(self, *args, **kwargs):
		raise MutationError("Columns cannot be transformed independently of their siblings")

	"""
	Conversion
	"""
	def to_dict(self):
		return {name: list(col) for name, col in self._data.items()}

	def to_list(self):
		return [(name, list(col)) for name, col in self._data.items()]

	def __eq__(self, other):
		if isinstance(other, PyColumnStore):
			other = other._data
		elif not isinstance(other, dict):
			return NotImplemented
		if set(other) != set(self._data):
			return False
		for name, col in self._data.items():
			theirs = other[name]
			if not _is_sequence(theirs) or col != list(theirs):
				return False
		return True

	__hash__ = None

	def __repr__(self):
		return f"PyColumnStore({self.to_dict()!r})"
