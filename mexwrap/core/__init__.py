# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from .diagnostics import ConfigError, Diagnostic, RegistryFrozenError, WrapGenerationError
from .symbols import is_c_identifier, upper_first, wrapper_symbol

__all__ = [
	"ConfigError",
	"Diagnostic",
	"RegistryFrozenError",
	"WrapGenerationError",
	"is_c_identifier",
	"upper_first",
	"wrapper_symbol",
]
