# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
MATLAB proxy emission: runtime overload selection for static methods.

MATLAB callers carry no static types, so each proxy tests its overloads in
registration order:

  function varargout = Name(varargin)
    if length(varargin) == 0
      wrapper(0, varargin{:});
    elseif length(varargin) == 1 && isa(varargin{1},'numeric')
      varargout{1} = wrapper(1, varargin{:});
    else
      error('Arguments do not match any overload of function Class.Name');
    end
  end

The first branch that matches wins; a later overload with the same arity and
tags is unreachable and only reported through a log warning. Each branch is
emitted together with its native wrapper so both use the same table id.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

from mexwrap.config import WrapConfig
from mexwrap.core.diagnostics import WrapGenerationError
from mexwrap.core.symbols import upper_first
from mexwrap.function_table import FunctionTable
from mexwrap.registry import ClassInfo, find_shadowed_overloads
from mexwrap.signature import Overload, ReturnKind

from .native import checked_return_value, emit_native_wrapper
from .writer import TextSink

logger = logging.getLogger(__name__)


def branch_condition(overload: Overload) -> str:
	"""`length(varargin) == n` followed by one `isa` test per argument, left to right."""
	parts = [f"length(varargin) == {overload.arity}"]
	for pos, tag in enumerate(overload.args.matlab_classes(), start=1):
		parts.append(f"isa(varargin{{{pos}}},'{tag}')")
	return " && ".join(parts)


def output_binding(overload: Overload) -> str:
	"""Left-hand side of the wrapper call for the overload's return shape."""
	kind = overload.return_value.kind
	if kind is ReturnKind.PAIR:
		return "[ varargout{1} varargout{2} ] = "
	if kind is ReturnKind.SINGLE:
		return "varargout{1} = "
	return ""


def emit_static_method_proxy(
	proxy: TextSink,
	native: TextSink,
	cls: ClassInfo,
	method: str,
	overloads: Sequence[Overload],
	table: FunctionTable,
	config: WrapConfig,
	*,
	level: int = 2,
) -> List[int]:
	"""
	Emit the proxy function for `cls.method` and one native wrapper per overload.

	Returns the table ids assigned to the overloads, in order.
	"""
	if not overloads:
		raise WrapGenerationError.at(
			"method has no overloads", class_name=cls.matlab_name, method_name=method, code="E-NO-OVERLOADS"
		)
	for shadowed, winner in find_shadowed_overloads(overloads):
		logger.warning(
			"%s.%s: overload %d has the same arity and argument types as overload %d and is unreachable",
			cls.matlab_name,
			method,
			shadowed,
			winner,
		)

	name = upper_first(method)
	ind = config.ind
	lines: List[str] = [f"{ind(level)}function varargout = {name}(varargin)"]
	ids: List[int] = []
	for index, overload in enumerate(overloads):
		checked_return_value(cls, method, overload, index)
		fn_id = table.next_id
		keyword = "if" if index == 0 else "elseif"
		lines.append(f"{ind(level + 1)}{keyword} {branch_condition(overload)}")
		lines.append(
			f"{ind(level + 2)}{output_binding(overload)}{config.wrapper_name}({fn_id}, varargin{{:}});"
		)
		symbol = emit_native_wrapper(native, cls, method, overload, index, fn_id, config)
		assigned = table.register(symbol)
		if assigned != fn_id:
			raise WrapGenerationError.at(
				f"function table assigned id {assigned} but proxy branch references {fn_id}",
				class_name=cls.matlab_name,
				method_name=method,
				overload_index=index,
				code="E-ID-DESYNC",
			)
		logger.debug("%s.%s overload %d -> id %d (%s)", cls.matlab_name, method, index, fn_id, symbol)
		ids.append(fn_id)
	lines.append(f"{ind(level + 1)}else")
	lines.append(
		f"{ind(level + 2)}error('Arguments do not match any overload of function {cls.matlab_name}.{name}');"
	)
	lines.append(f"{ind(level + 1)}end")
	lines.append(f"{ind(level)}end")
	proxy.extend(lines)
	return ids


def emit_class_proxy(
	proxy: TextSink,
	native: TextSink,
	cls: ClassInfo,
	methods: Sequence[Tuple[str, Sequence[Overload]]],
	table: FunctionTable,
	config: WrapConfig,
) -> List[int]:
	"""Emit a `classdef` holding every static method proxy of `cls`."""
	seen: Dict[str, str] = {}
	for method, _ in methods:
		name = upper_first(method)
		if name in seen:
			raise WrapGenerationError.at(
				f"methods {seen[name]!r} and {method!r} both map to MATLAB function {name!r}",
				class_name=cls.matlab_name,
				method_name=method,
				code="E-NAME-COLLISION",
			)
		seen[name] = method

	ind = config.ind
	proxy.line(f"%class {cls.matlab_name}, generated by mexwrap for {cls.cpp_name}")
	proxy.line(f"classdef {cls.matlab_name} < handle")
	ids: List[int] = []
	if methods:
		proxy.line(f"{ind(1)}methods(Static = true)")
		for pos, (method, overloads) in enumerate(methods):
			if pos:
				proxy.line()
			ids.extend(emit_static_method_proxy(proxy, native, cls, method, overloads, table, config, level=2))
		proxy.line(f"{ind(1)}end")
	proxy.line("end")
	return ids


__all__ = ["branch_condition", "output_binding", "emit_static_method_proxy", "emit_class_proxy"]
