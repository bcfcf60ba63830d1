# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for generation failures.

A diagnostic names the class, method and overload index that could not be
emitted. Generation never recovers from one: the exception carrying it aborts
the whole session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Diagnostic:
	"""Represents a generator diagnostic (error/warning)."""

	message: str
	code: str | None = None
	phase: str | None = None
	severity: str = "error"
	class_name: Optional[str] = None
	method_name: Optional[str] = None
	# Position of the overload within its method's registration order.
	overload_index: Optional[int] = None
	notes: list[str] = field(default_factory=list)

	def location(self) -> str:
		if self.class_name is None:
			return "<session>"
		loc = self.class_name
		if self.method_name is not None:
			loc = f"{loc}.{self.method_name}"
		if self.overload_index is not None:
			loc = f"{loc}[overload {self.overload_index}]"
		return loc

	def render(self) -> str:
		"""Return a one-line human-readable form (`loc: severity: message`)."""
		text = f"{self.location()}: {self.severity}: {self.message}"
		for note in self.notes:
			text += f"\n  note: {note}"
		return text


class WrapGenerationError(Exception):
	"""Raised when a generation session cannot emit well-formed output."""

	def __init__(self, diagnostic: Diagnostic) -> None:
		super().__init__(diagnostic.render())
		self.diagnostic = diagnostic

	@classmethod
	def at(
		cls,
		message: str,
		*,
		class_name: str | None = None,
		method_name: str | None = None,
		overload_index: int | None = None,
		code: str | None = None,
	) -> "WrapGenerationError":
		return cls(
			Diagnostic(
				message=message,
				code=code,
				phase="codegen",
				class_name=class_name,
				method_name=method_name,
				overload_index=overload_index,
			)
		)


class RegistryFrozenError(ValueError):
	"""Raised when registering into a registry or table that has been finalized."""


class ConfigError(ValueError):
	"""Raised for invalid generator configuration."""


__all__ = ["Diagnostic", "WrapGenerationError", "RegistryFrozenError", "ConfigError"]
