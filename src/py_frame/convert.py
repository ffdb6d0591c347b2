"""Input adapters turning user data into ``{name: values}`` for a table.

Adapters are tried in registry order; the first whose ``accepts(data)`` is
true converts. If none accepts, ``dict(data)`` is tried.
"""

import logging
from collections.abc import Mapping
from typing import Callable
from typing import NamedTuple

from .columns import PyColumnStore
from .errors import ConversionError
from .errors import PyFrameDimensionError
from .errors import PyFrameTypeError
from .row import PyRowView

logger = logging.getLogger(__name__)


class InputAdapter(NamedTuple):
	name: str
	accepts: Callable
	convert: Callable  # (data, col_names) -> dict


def _is_table(data):
	return isinstance(getattr(data, 'columns', None), PyColumnStore)


def _from_table(data, col_names=None):
	return data.columns.to_dict()


def _from_store(data, col_names=None):
	return data.to_dict()


def _from_row(data, col_names=None):
	return {name: [v] for name, v in data.to_dict().items()}


def _from_mapping(data, col_names=None):
	return dict(data)


def _is_mappings(data):
	return isinstance(data, (list, tuple)) and len(data) > 0 and isinstance(data[0], Mapping)


def _from_mappings(data, col_names=None):
	"""Rows as mappings; the columns are the union of keys in first-seen order."""
	names = {}
	for row in data:
		for k in row:
			names.setdefault(k, None)
	return {name: [row.get(name) for row in data] for name in names}


def _is_sequences(data):
	if not isinstance(data, (list, tuple)):
		return False
	return len(data) == 0 or isinstance(data[0], (list, tuple))


def _from_sequences(data, col_names=None):
	"""Rows as sequences; col_names names the columns."""
	if col_names is None:
		if not data:
			return {}
		raise PyFrameTypeError("col_names is required when rows are given as sequences")
	col_names = list(col_names)
	width = len(col_names)
	for i, row in enumerate(data):
		if len(row) != width:
			raise PyFrameDimensionError(
				f"Row {i} has {len(row)} values but {width} column names were given"
			)
	return {name: [row[j] for row in data] for j, name in enumerate(col_names)}


_ADAPTERS = [
	InputAdapter('table', _is_table, _from_table),
	InputAdapter('store', lambda d: isinstance(d, PyColumnStore), _from_store),
	InputAdapter('row', lambda d: isinstance(d, PyRowView), _from_row),
	InputAdapter('mapping', lambda d: isinstance(d, Mapping), _from_mapping),
	InputAdapter('mappings', _is_mappings, _from_mappings),
	InputAdapter('sequences', _is_sequences, _from_sequences),
]


def register_adapter(adapter: InputAdapter, first=False):
	"""Add an adapter; ``first=True`` puts it ahead of the built-ins."""
	if first:
		_ADAPTERS.insert(0, adapter)
	else:
		_ADAPTERS.append(adapter)


def adapters():
	return list(_ADAPTERS)


def to_columns(data, col_names=None) -> dict:
	"""Convert data to a dict of column name -> values."""
	for adapter in _ADAPTERS:
		if adapter.accepts(data):
			logger.debug("converting %s with adapter %r", type(data).__name__, adapter.name)
			return adapter.convert(data, col_names)
	try:
		return dict(data)
	except (TypeError, ValueError) as e:
		raise ConversionError(f"Cannot convert {type(data).__name__} to columns") from e
