# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List


@dataclass
class TextSink:
	"""Appendable line buffer for one generated artifact."""

	lines: List[str] = field(default_factory=list)

	def line(self, text: str = "") -> None:
		self.lines.append(text)

	def extend(self, lines: Iterable[str], prefix: str = "") -> None:
		for text in lines:
			self.lines.append(prefix + text)

	def __len__(self) -> int:
		return len(self.lines)

	def render(self) -> str:
		if not self.lines:
			return ""
		return "\n".join(self.lines) + "\n"


__all__ = ["TextSink"]
