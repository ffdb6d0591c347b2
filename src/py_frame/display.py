"""Display and repr logic for PyTable."""

from __future__ import annotations
import math
from datetime import date
from typing import List

from .stats import is_nan


# How many rows to show at the top and bottom before inserting "..."
MAX_HEAD_ROWS = 6
MAX_HEAD_COLS = 5

# Column width limits, in characters
MIN_WIDTH = 3
MAX_WIDTH = 25


def _needs_quoting(name: str) -> bool:
	"""A name needs quoting if it contains anything outside [A-Za-z0-9_]
	OR has leading/trailing whitespace."""
	if not name:
		return False
	if name != name.strip():
		return True
	return not all(c.isalnum() or c == "_" for c in name)


def _format_value(v) -> str:
	if v is None:
		return 'None'
	if is_nan(v):
		return 'nan'
	if isinstance(v, float):
		if math.isfinite(v) and v == int(v):
			return f"{v:.1f}"
		return f"{v:g}"
	if isinstance(v, date):
		return v.isoformat()
	if isinstance(v, str):
		return repr(v)
	return str(v)


def _is_numeric_column(values) -> bool:
	present = [v for v in values if v is not None and not is_nan(v)]
	return bool(present) and all(
		isinstance(v, (int, float)) and not isinstance(v, bool) for v in present
	)


def format_column(name, column, items: int = MAX_HEAD_ROWS,
		min_width: int = MIN_WIDTH, max_width: int = MAX_WIDTH) -> List[str]:
	"""Lines for one column: header, divider, then values.

	Columns longer than ``2 * items`` show the first and last ``items``
	values around a "..." line. Every line is padded to one width between
	min_width and max_width; longer text is cut and ends in "...".
	"""
	values = list(column)
	if len(values) > items * 2:
		body = [_format_value(v) for v in values[:items]]
		body.append('...')
		body.extend(_format_value(v) for v in values[-items:])
	else:
		body = [_format_value(v) for v in values]

	header = repr(name) if _needs_quoting(name) else str(name)
	lines = [header] + body
	width = max(len(s) for s in lines)
	width = min(max(width, min_width), max_width)

	def fit(s):
		return s if len(s) <= width else s[:max(width - 3, 0)] + '...'

	pad = str.rjust if _is_numeric_column(values) else str.ljust
	out = [pad(fit(s), width) for s in lines]
	out.insert(1, '-' * width)
	return out


def _footer(tbl, dtype_list, truncated=False, shown=MAX_HEAD_COLS) -> str:
	"""Generate footer line based on shape and dtypes."""
	rows, cols = tbl.shape
	if truncated:
		d = ", ".join(dtype_list[:shown]) + ", ..., " + ", ".join(dtype_list[-shown:])
	else:
		d = ", ".join(dtype_list)
	return f"# {rows}×{cols} table <{d}>"


def repr_table(tbl, items: int = MAX_HEAD_ROWS) -> str:
	"""Pretty repr for a PyTable."""
	names = tbl.column_names()
	num_cols = len(names)
	if num_cols == 0:
		return f"# {tbl.nrow}×0 table"

	truncated = num_cols > MAX_HEAD_COLS * 2
	if truncated:
		col_indices = list(range(MAX_HEAD_COLS)) + list(range(num_cols - MAX_HEAD_COLS, num_cols))
	else:
		col_indices = list(range(num_cols))

	dtypes_all = []
	for name in names:
		kind = tbl.columns[name].data_type()
		dtypes_all.append(kind.__name__ if kind else "object")

	formatted_cols = [format_column(names[i], tbl.columns[names[i]], items=items) for i in col_indices]

	# Insert "..." column if truncated
	if truncated:
		ellipsis_col = ["..." for _ in range(len(formatted_cols[0]))]
		formatted_cols.insert(MAX_HEAD_COLS, ellipsis_col)

	lines = []
	for r in range(len(formatted_cols[0])):
		lines.append("  ".join(col[r] for col in formatted_cols))

	lines.append("")
	lines.append(_footer(tbl, dtypes_all, truncated, MAX_HEAD_COLS))
	return "\n".join(lines)
