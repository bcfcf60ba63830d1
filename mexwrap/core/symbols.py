# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import re

_C_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z_0-9]*$")


def is_c_identifier(text: str) -> bool:
	"""True if `text` is a plain ASCII C identifier."""
	return bool(_C_IDENT_RE.match(text))


def upper_first(name: str) -> str:
	"""
	Capitalize the first character using ASCII rules only.

	Non-ASCII leading characters are left alone so the result never depends on
	the process locale.
	"""
	if not name:
		return name
	head = name[0]
	if "a" <= head <= "z":
		head = chr(ord(head) - 32)
	return head + name[1:]


def wrapper_symbol(matlab_class: str, method: str, fn_id: int) -> str:
	"""Return the native entry symbol for one overload (`<Class>_<method>_<id>`)."""
	return f"{matlab_class}_{method}_{fn_id}"


__all__ = ["is_c_identifier", "upper_first", "wrapper_symbol"]
