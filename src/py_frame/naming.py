"""Column name to row attribute name translation."""

from __future__ import annotations
import keyword
import re
from typing import Dict
from typing import Iterable


def _sanitize_user_name(name) -> str | None:
	"""Turn a column name into a usable attribute name.

	Lowercases, collapses runs of characters outside [a-z0-9_] into one
	underscore, strips surrounding underscores and prefixes a leading digit
	or a Python keyword with 'c'. Returns None if nothing is left.
	"""
	if not isinstance(name, str):
		name = str(name)

	sanitized = re.sub(r'[^a-z0-9_]+', '_', name.lower()).strip('_')
	if sanitized == "":
		return None

	if sanitized[0].isdigit() or keyword.iskeyword(sanitized):
		sanitized = "c" + sanitized
	return sanitized


def _uniquify(base: str, seen) -> str:
	"""First of base, base__2, base__3, ... not in seen."""
	if base not in seen:
		return base

	i = 2
	while f"{base}__{i}" in seen:
		i += 1
	return f"{base}__{i}"


def accessor_names(column_names: Iterable[str], reserved=()) -> Dict[str, str]:
	"""Map attribute name -> column name for every column that gets one.

	Names that sanitize to nothing get no attribute. Attribute names clashing
	with ``reserved`` (the row view's own API) or an earlier column are
	suffixed with __2, __3, ...
	"""
	seen = set(reserved)
	out = {}
	for name in column_names:
		base = _sanitize_user_name(name)
		if base is None:
			continue
		attr = _uniquify(base, seen)
		seen.add(attr)
		out[attr] = name
	return out
