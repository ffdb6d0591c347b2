import logging

from .column import _is_sequence
from .errors import PyFrameDimensionError
from .errors import PyFrameIndexError
from .errors import PyFrameTypeError
from .indexing import check_index
from .indexing import is_position
from .naming import accessor_names
from .stats import StatisticsMixin
from .stats import same_value

logger = logging.getLogger(__name__)


class PyRowView(StatisticsMixin):
	"""Live cursor over one row of a table.

	A table owns exactly one row view. Moving it (``position``) is cheap and
	every read or write goes straight to the table's columns, so the view
	never holds a copy of the data. Column values are also reachable as
	attributes, using sanitized names (``"First Name"`` -> ``row.first_name``).
	"""
	__slots__ = ('_table', '_position', '_accessors')

	def __init__(self, table):
		self._table = table
		self._position = 0
		self._accessors = {}

	@property
	def position(self):
		return self._position

	@position.setter
	def position(self, index):
		if not is_position(index):
			raise PyFrameTypeError(f"Row position must be an int, not {type(index).__name__}")
		check_index(index, self._table.nrow)
		self._position = index

	def _move(self, index):
		"""Reposition without a range check; for callers iterating valid rows."""
		self._position = index
		return self

	@property
	def nrow(self):
		return self._table.nrow

	@property
	def ncol(self):
		return self._table.ncol

	def column_names(self):
		return self._table.column_names()

	def get(self, name):
		return self._table.columns.get(name).get(self._position)

	def set(self, name, value):
		self._table.columns.get(name).set(self._position, value)

	def _column_at(self, index):
		cols = self._table.columns.values()
		try:
			return cols[index]
		except IndexError:
			raise PyFrameIndexError(f"Column position {index} out of range for {len(cols)} columns") from None

	def __getitem__(self, key):
		"""Value by column name, or by column position."""
		if is_position(key):
			return self._column_at(key).get(self._position)
		return self.get(key)

	def __setitem__(self, key, value):
		if is_position(key):
			self._column_at(key).set(self._position, value)
		else:
			self.set(key, value)

	@property
	def values(self):
		pos = self._position
		return [col.get(pos) for col in self._table.columns.values()]

	@values.setter
	def values(self, data):
		"""Set every value to a scalar, or to one value per column."""
		cols = self._table.columns.values()
		if not _is_sequence(data):
			data = [data]
		data = list(data)
		if len(data) == 1:
			data = data * len(cols)
		elif len(data) != len(cols):
			raise PyFrameDimensionError(
				f"Expected 1 or {len(cols)} values for the row, got {len(data)}"
			)
		pos = self._position
		for col, v in zip(cols, data):
			col.set(pos, v)

	def to_list(self):
		return self.values

	def to_dict(self):
		pos = self._position
		return {name: col.get(pos) for name, col in self._table.columns.items()}

	def values_at(self, *positions):
		values = self.values
		return [values[i] for i in positions]

	def slice(self, *names):
		return {name: self.get(name) for name in names}

	def apply(self, func):
		"""Replace each value v of the row with func(v); returns the new values."""
		pos = self._position
		out = []
		for col in self._table.columns.values():
			v = func(col.get(pos))
			col.set(pos, v)
			out.append(v)
		return out

	def _stat_values(self):
		return self.values

	def __iter__(self):
		return iter(self.values)

	def __len__(self):
		return self._table.ncol

	"""
	Attribute accessors
	"""
	def resync_accessors(self):
		"""Bring the attribute registry in line with the table's column names."""
		updated = accessor_names(self._table.column_names(), reserved=_RESERVED)
		added = updated.keys() - self._accessors.keys()
		removed = self._accessors.keys() - updated.keys()
		if added or removed:
			logger.debug("row accessors: added %s, removed %s", sorted(added), sorted(removed))
		self._accessors = updated

	def accessors(self):
		return list(self._accessors)

	def __getattr__(self, attr):
		if attr.startswith('_'):
			raise AttributeError(attr)
		name = self._accessors.get(attr)
		if name is None:
			raise AttributeError(f"Row has no attribute '{attr}'")
		return self.get(name)

	def __setattr__(self, attr, value):
		if not attr.startswith('_'):
			name = self._accessors.get(attr)
			if name is not None:
				self.set(name, value)
				return
		object.__setattr__(self, attr, value)

	def __dir__(self):
		return sorted(set(object.__dir__(self)) | set(self._accessors))

	def __eq__(self, other):
		if isinstance(other, PyRowView):
			other = other.to_dict()
		if isinstance(other, dict):
			mine = self.to_dict()
			return mine.keys() == other.keys() and all(same_value(mine[k], other[k]) for k in mine)
		if isinstance(other, (list, tuple)):
			values = self.values
			return len(values) == len(other) and all(same_value(a, b) for a, b in zip(values, other))
		return NotImplemented

	__hash__ = None

	def is_same(self, other):
		"""Same table, same position."""
		return (
			isinstance(other, PyRowView)
			and other._table is self._table
			and other._position == self._position
		)

	def __repr__(self):
		return f"PyRowView({self._position}: {self.to_dict()!r})"


_RESERVED = frozenset(n for n in dir(PyRowView) if not n.startswith('_'))
