# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
mexwrap: MATLAB/MEX binding generator for overloaded static methods.

Layers:
  signature: arguments, return shapes, overloads
  registry: ordered overload sets per class/method
  function_table: session-wide id -> native symbol table
  codegen: host proxy (MATLAB) and native wrapper (C++) emitters
  session: one generation pass over a frozen registry
"""

__all__ = ["codegen", "config", "core", "function_table", "registry", "session", "signature"]
