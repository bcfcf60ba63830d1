# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from mexwrap.core.diagnostics import RegistryFrozenError


@dataclass
class FunctionTable:
	"""
	Session-wide id -> native symbol table.

	Ids are handed out in emission order starting at `start` and are never reset
	between methods or classes. The proxy embeds the id, the MEX entry point
	switches on it; both read it from here.
	"""

	start: int = 0
	_symbols: List[str] = field(default_factory=list)
	_id_by_symbol: Dict[str, int] = field(default_factory=dict)
	_frozen: bool = False

	def __post_init__(self) -> None:
		if self.start < 0:
			raise ValueError("function table start id must be non-negative")

	@property
	def next_id(self) -> int:
		return self.start + len(self._symbols)

	def register(self, symbol: str) -> int:
		"""Append `symbol` and return its newly assigned id."""
		if self._frozen:
			raise RegistryFrozenError("function table is frozen")
		if symbol in self._id_by_symbol:
			raise ValueError(f"native symbol {symbol!r} already registered as id {self._id_by_symbol[symbol]}")
		fn_id = self.next_id
		self._symbols.append(symbol)
		self._id_by_symbol[symbol] = fn_id
		return fn_id

	def symbol_for(self, fn_id: int) -> str:
		pos = fn_id - self.start
		if pos < 0 or pos >= len(self._symbols):
			raise KeyError(fn_id)
		return self._symbols[pos]

	def id_for(self, symbol: str) -> int:
		return self._id_by_symbol[symbol]

	def entries(self) -> Tuple[Tuple[int, str], ...]:
		return tuple((self.start + pos, sym) for pos, sym in enumerate(self._symbols))

	def __len__(self) -> int:
		return len(self._symbols)

	@property
	def frozen(self) -> bool:
		return self._frozen

	def freeze(self) -> "FunctionTable":
		self._frozen = True
		return self


__all__ = ["FunctionTable"]
