# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Generator configuration.

Passed explicitly into every emitter; nothing here is read from process-wide
state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from mexwrap.core.diagnostics import ConfigError
from mexwrap.core.symbols import is_c_identifier

DEFAULT_INCLUDES: Tuple[str, ...] = ("wrap/matlab.h", "stdexcept", "string")


@dataclass(frozen=True)
class WrapConfig:
	"""Settings shared by the proxy and native emitters for one session."""

	module_name: str
	wrapper_name: str = ""
	using_namespaces: Tuple[str, ...] = ()
	includes: Tuple[str, ...] = DEFAULT_INCLUDES
	# Indent unit for MATLAB proxy text.
	indent: str = "  "

	def __post_init__(self) -> None:
		if not self.module_name:
			raise ConfigError("module_name must not be empty")
		if not is_c_identifier(self.module_name):
			raise ConfigError(f"module_name {self.module_name!r} is not an ASCII identifier")
		if not self.wrapper_name:
			# frozen dataclass: go through object.__setattr__ for the derived default
			object.__setattr__(self, "wrapper_name", f"{self.module_name}_wrapper")
		elif not is_c_identifier(self.wrapper_name):
			raise ConfigError(f"wrapper_name {self.wrapper_name!r} is not an ASCII identifier")
		for ns in self.using_namespaces:
			if not all(is_c_identifier(part) for part in ns.split("::")):
				raise ConfigError(f"using namespace {ns!r} is not a qualified C++ name")
		object.__setattr__(self, "using_namespaces", tuple(self.using_namespaces))
		object.__setattr__(self, "includes", tuple(self.includes))
		if self.indent.strip():
			raise ConfigError("indent must be whitespace")

	def ind(self, level: int) -> str:
		return self.indent * level


__all__ = ["WrapConfig", "DEFAULT_INCLUDES"]
