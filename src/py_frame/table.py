import logging
import warnings

from .column import _is_sequence
from .column import _nan_key
from .columns import PyColumnStore
from .columns import _missing_col_error
from .convert import to_columns
from .display import format_column
from .display import repr_table
from .errors import PyFrameAmbiguityError
from .errors import PyFrameDimensionError
from .errors import PyFrameTypeError
from .errors import PyFrameValueError
from .indexing import index_set
from .indexing import is_position
from .indexing import is_row_selector
from .row import PyRowView
from .stats import NAN

logger = logging.getLogger(__name__)

MERGE_HOWS = ('inner', 'left', 'outer')


class PyTable:
	""" Named columns of the same length.

	Positional arguments to ``t[...]`` may be mixed freely: ``str`` values
	name columns, integers, slices and ranges select rows.

		t[0]            -> the row view at row 0
		t['a']          -> column 'a'
		t[0, 'a']       -> one value
		t[0:3, 'a']     -> list of values of column 'a'
		t['a', 'b']     -> new table with columns a and b
		t[0, 2, 5:]     -> new table with those rows
		t[0:3, 'a', 'b']-> new table with those rows and columns
	"""

	def __init__(self, data=None, col_names=None, **columns):
		self._row = PyRowView(self)
		self._columns = PyColumnStore(self)
		if data is not None:
			self._columns.set_many(to_columns(data, col_names))
		if columns:
			self._columns.set_many(columns)

	"""
	Shape and parts
	"""
	@property
	def columns(self) -> PyColumnStore:
		return self._columns

	@property
	def row(self) -> PyRowView:
		return self._row

	@property
	def nrow(self) -> int:
		return self._columns.nrow

	@property
	def ncol(self) -> int:
		return self._columns.ncol

	@property
	def shape(self):
		return (self.nrow, self.ncol)

	dim = shape

	def __len__(self):
		return self.nrow

	def column_names(self):
		return self._columns.names()

	def column(self, name):
		return self._columns.get(name)

	def columns_at(self, *names):
		return [self._columns.get(name) for name in names]

	"""
	Rows
	"""
	def rows(self):
		"""Yield the row view once per row; it is the same object every time."""
		row = self._row
		for pos in range(self.nrow):
			yield row._move(pos)

	def __iter__(self):
		return self.rows()

	def row_at(self, index) -> PyRowView:
		self._row.position = index
		return self._row

	def first(self):
		return None if self.nrow == 0 else self.row_at(0)

	def last(self):
		return None if self.nrow == 0 else self.row_at(-1)

	"""
	2D access
	"""
	@staticmethod
	def _partition_args(args):
		names = []
		rows = []
		for arg in args:
			if isinstance(arg, str):
				names.append(arg)
			elif is_row_selector(arg):
				rows.append(arg)
			else:
				raise PyFrameTypeError(
					f"Table indices must be column names, integers, slices or ranges, not {type(arg).__name__}"
				)
		return names, rows

	def _check_columns(self, names):
		for name in names:
			if name not in self._columns:
				raise _missing_col_error(name, "PyTable")

	@staticmethod
	def _access_kind(rows, names):
		if len(rows) == 1 and is_position(rows[0]) and not names:
			return 'row'
		if len(names) == 1 and not rows:
			return 'col'
		if len(names) == 1:
			return 'point'
		if len(names) > 1 and not rows:
			return 'columns'
		if rows and not names:
			return 'rows'
		return 'hyper_set'

	def get(self, *args):
		names, rows = self._partition_args(args)
		self._check_columns(names)

		kind = self._access_kind(rows, names)
		if kind == 'row':
			return self.row_at(rows[0])
		if kind == 'col':
			return self._columns[names[0]]
		if kind == 'point':
			return self._columns[names[0]].get(*rows)
		if kind == 'columns':
			return PyTable({name: list(self._columns[name]) for name in names})
		if kind == 'rows':
			return self.values_at(*rows)
		# hyper_set (no arguments at all gives an empty table)
		return PyTable({name: self._columns[name].values_at(*rows) for name in names})

	def __getitem__(self, key):
		if isinstance(key, tuple):
			return self.get(*key)
		return self.get(key)

	def set(self, *args):
		"""Assign the last argument to the part of the table the others select."""
		if len(args) < 2:
			raise PyFrameTypeError("set() needs at least one selector and a value")
		names, rows = self._partition_args(args[:-1])
		value = args[-1]
		if _is_sequence(value):
			value = list(value)

		# =====================================================================
		# CASE 1: One row, scalar or one value per column
		# =====================================================================
		kind = self._access_kind(rows, names)
		if kind == 'row':
			self.row_at(rows[0]).values = value

		# =====================================================================
		# CASE 2: One column at some rows
		# =====================================================================
		elif kind == 'point':
			col = self._columns[names[0]]
			col.set(rows[0] if len(rows) == 1 else rows, value)

		# =====================================================================
		# CASE 3: Whole columns, new names allowed
		# =====================================================================
		elif kind in ('col', 'columns'):
			for name in names:
				self._columns.set(name, value)

		# =====================================================================
		# CASE 4: Several rows, every column
		# =====================================================================
		elif kind == 'rows':
			row = self._row
			for pos in index_set(*rows, bound=self.nrow):
				row._move(pos).values = value

		# =====================================================================
		# CASE 5: Block of rows and columns, scalars only
		# =====================================================================
		else:
			self._check_columns(names)
			if isinstance(value, list):
				raise PyFrameAmbiguityError(
					"Assigning a sequence to several rows and columns is ambiguous; "
					"assign per column or per row instead"
				)
			indices = index_set(*rows, bound=self.nrow)
			for col in self.columns_at(*names):
				col.set(indices, value)

	def __setitem__(self, key, value):
		if isinstance(key, tuple):
			self.set(*key, value)
		else:
			self.set(key, value)

	def values_at(self, *rows):
		"""New table of the given rows (duplicates and order kept)."""
		return PyTable({name: col.values_at(*rows) for name, col in self._columns.items()})

	"""
	Row filtering and ordering
	"""
	def _subset_rows(self, indices):
		cols = self._columns.values()
		if cols:
			cols[0]._subset_to(indices)
		return self

	def select_indexes(self, predicate):
		return [pos for pos, row in enumerate(self.rows()) if predicate(row)]

	def reject_indexes(self, predicate):
		return [pos for pos, row in enumerate(self.rows()) if not predicate(row)]

	def select(self, predicate, inplace=False):
		"""Rows where predicate(row) is truthy."""
		indices = self.select_indexes(predicate)
		if inplace:
			return self._subset_rows(indices)
		return self.values_at(indices)

	def reject(self, predicate, inplace=False):
		indices = self.reject_indexes(predicate)
		if inplace:
			return self._subset_rows(indices)
		return self.values_at(indices)

	def delete_at(self, *args):
		"""Remove columns (by name) and rows (by position) in one call."""
		names, rows = self._partition_args(args)
		self._check_columns(names)
		indices = index_set(*rows, bound=self.nrow)
		if names:
			self._columns.delete(*names)
		cols = self._columns.values()
		if cols and indices:
			cols[0]._remove_at(indices)
		return self

	def sort(self, *names, asc=True, nil_first=True, inplace=False):
		"""Sort rows by each named column in turn; the last name has the final say."""
		self._check_columns(names)
		target = self if inplace else self.copy()
		for name in names:
			target._columns[name].sort(asc=asc, nil_first=nil_first, inplace=True)
		return target

	def sort_by(self, key, reverse=False, inplace=False):
		"""Stable sort of rows by key(row)."""
		keys = [key(row) for row in self.rows()]
		order = sorted(range(len(keys)), key=keys.__getitem__, reverse=reverse)
		target = self if inplace else self.copy()
		return target._subset_rows(order)

	def reverse(self, inplace=False):
		target = self if inplace else self.copy()
		return target._subset_rows(range(self.nrow - 1, -1, -1))

	""" Math operations """
	def _zip_map(self, other, method):
		if isinstance(other, PyTable):
			if other.shape != self.shape:
				raise PyFrameDimensionError(
					f"Incompatible dimensions {self.shape} and {other.shape}"
				)
			return {
				name: getattr(col, method)(theirs)
				for (name, col), theirs in zip(self._columns.items(), other._columns.values())
			}
		if _is_sequence(other):
			raise PyFrameTypeError(
				f"Table arithmetic needs a table or a scalar, not {type(other).__name__}"
			)
		return {name: getattr(col, method)(other) for name, col in self._columns.items()}

	def _operate(self, other, method, inplace):
		result = {name: list(col) for name, col in self._zip_map(other, method).items()}
		if inplace:
			self._columns.set_many(result)
			return self
		return PyTable(result)

	def add(self, other, inplace=False):
		return self._operate(other, 'add', inplace)

	def subtract(self, other, inplace=False):
		return self._operate(other, 'subtract', inplace)

	def multiply(self, other, inplace=False):
		return self._operate(other, 'multiply', inplace)

	def divide(self, other, inplace=False):
		return self._operate(other, 'divide', inplace)

	def power(self, other, inplace=False):
		return self._operate(other, 'power', inplace)

	def modulo(self, other, inplace=False):
		return self._operate(other, 'modulo', inplace)

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

	"""
	Appending
	"""
	def append(self, other):
		"""Add the rows of other at the bottom.

		Anything a table can be built from is accepted; rows given as
		sequences are read with this table's column names. Columns missing
		on either side are filled with None, or NaN in float columns.
		"""
		if other is self:
			other = self.copy()
		elif not isinstance(other, PyTable):
			other = PyTable(other, col_names=self.column_names())
		added = other.nrow
		nrow_was = self.nrow

		for name, col in self._columns.items():
			if name in other.columns:
				col._values.extend(other.columns[name])
			else:
				col._values.extend([None] * added)
			if col.is_float_like():
				col.replace_nil(NAN, inplace=True)

		for name, col in other.columns.items():
			if name not in self._columns:
				fill = NAN if col.is_float_like() else None
				self._columns.set(name, [fill] * nrow_was + list(col))

		logger.debug("appended %d rows (%d -> %d)", added, nrow_was, self.nrow)
		return self

	def __lshift__(self, other):
		return self.append(other)

	"""
	Grouping and merging
	"""
	def group_indexes(self, *names, key=None):
		"""Map group key -> row positions.

		One column name gives scalar keys, several give tuple keys. Without
		names, key(row) gives the group of each row. All NaN keys form one
		group, keyed by the first NaN seen.
		"""
		return dict(self._groups(names, key).values())

	def _groups(self, names, key=None):
		"""Map normalized key -> (first key seen, row positions); NaNs are one key."""
		if names:
			self._check_columns(names)
			cols = [col._values for col in self.columns_at(*names)]
			if len(cols) == 1:
				keys = cols[0]
			else:
				keys = list(zip(*cols))
		elif key is not None:
			keys = [key(row) for row in self.rows()]
		else:
			raise PyFrameTypeError("group_indexes() needs column names or a key function")

		groups = {}
		for pos, k in enumerate(keys):
			norm = tuple(_nan_key(e) for e in k) if isinstance(k, tuple) else _nan_key(k)
			if norm not in groups:
				groups[norm] = (k, [])
			groups[norm][1].append(pos)
		return groups

	def group_by(self, *names, key=None):
		"""Map group key -> table of that group's rows."""
		return {
			k: self.values_at(positions)
			for k, positions in self.group_indexes(*names, key=key).items()
		}

	def merge(self, other, by, how='outer'):
		"""Join other onto this table on the columns in by.

		The result has the key columns, then this table's other columns, then
		other's. Rows are grouped by key, groups in order of first appearance
		on the left; with how='outer', unmatched keys of other follow at the
		bottom. Key values that are NaN match each other. When both tables
		have a non-key column of the same name, other's values win.
		"""
		by = [by] if isinstance(by, str) else list(by)
		if how not in MERGE_HOWS:
			raise PyFrameValueError(f"how must be one of {MERGE_HOWS}, got {how!r}")
		if not by:
			raise PyFrameValueError("merge() needs at least one key column")
		self._check_columns(by)
		other._check_columns(by)

		left_rest = [n for n in self.column_names() if n not in by]
		right_rest = [n for n in other.column_names() if n not in by]
		clashes = [n for n in left_rest if n in right_rest]
		if clashes:
			warnings.warn(f"Columns {clashes} exist on both sides of merge; right values are kept")

		# ------------------------------------------------------------------
		# 1. Group both sides by key
		# ------------------------------------------------------------------
		left_groups = self._groups(by)
		right_groups = other._groups(by)

		# ------------------------------------------------------------------
		# 2. Restrict the key sets per join kind
		# ------------------------------------------------------------------
		if how == 'inner':
			left_groups = {n: g for n, g in left_groups.items() if n in right_groups}
		matched = [
			(k, pos, right_groups[n][1] if n in right_groups else [])
			for n, (k, pos) in left_groups.items()
		]
		if how == 'outer':
			matched.extend((k, [], pos) for n, (k, pos) in right_groups.items() if n not in left_groups)

		# ------------------------------------------------------------------
		# 3. Build RESULT in column-major form
		# ------------------------------------------------------------------
		left_cols = [col._values for col in self.columns_at(*left_rest)]
		right_cols = [col._values for col in other.columns_at(*right_rest)]
		key_data = [[] for _ in by]
		left_data = [[] for _ in left_rest]
		right_data = [[] for _ in right_rest]

		def emit(key, left_idx, right_idx):
			for out, k in zip(key_data, key):
				out.append(k)
			for out, col in zip(left_data, left_cols):
				out.append(None if left_idx is None else col[left_idx])
			for out, col in zip(right_data, right_cols):
				out.append(None if right_idx is None else col[right_idx])

		for k, left_pos, right_pos in matched:
			key = (k,) if len(by) == 1 else k
			if not left_pos:
				for r in right_pos:
					emit(key, None, r)
			elif not right_pos:
				for l in left_pos:
					emit(key, l, None)
			else:
				for l in left_pos:
					for r in right_pos:
						emit(key, l, r)

		# ------------------------------------------------------------------
		# 4. Wrap into a table; later names overwrite earlier ones in place
		# ------------------------------------------------------------------
		result = {}
		for names, data in ((by, key_data), (left_rest, left_data), (right_rest, right_data)):
			for name, values in zip(names, data):
				result[name] = values

		logger.debug("%s merge on %r: %d x %d -> %d rows", how, by, self.nrow, other.nrow, len(key_data[0]))
		return PyTable(result)

	"""
	Conversion
	"""
	def to_rows(self):
		"""Row-major list of lists."""
		return [list(r) for r in zip(*self._columns.values())]

	transpose = to_rows

	def to_row_mappings(self):
		names = self.column_names()
		return [dict(zip(names, r)) for r in zip(*self._columns.values())]

	def to_dict(self):
		return self._columns.to_dict()

	def copy(self):
		return PyTable(self._columns.to_dict())

	def format_column(self, name, **kwargs):
		"""Display lines for one column, see display.format_column."""
		return format_column(name, self._columns.get(name), **kwargs)

	def __eq__(self, other):
		"""Same column names (in any order) with equal values."""
		if isinstance(other, PyTable):
			other = other._columns
		if isinstance(other, (PyColumnStore, dict)):
			return self._columns == other
		return NotImplemented

	__hash__ = None

	def __repr__(self):
		return repr_table(self)
