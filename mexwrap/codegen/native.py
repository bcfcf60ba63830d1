# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
C++ MEX wrapper emission for one static method overload.

Every wrapper has the same boundary signature
  void <Class>_<method>_<id>(int nargout, mxArray *out[], int nargin, const mxArray *in[])
so the `mexFunction` dispatch can call any of them through the id table.
Body order: handle aliases, arity check, argument unwrap, native call, result
wrap. Static methods have no receiver, so arguments start at `in[0]`.
"""

from __future__ import annotations

import logging

from mexwrap.config import WrapConfig
from mexwrap.core.diagnostics import WrapGenerationError
from mexwrap.core.symbols import wrapper_symbol
from mexwrap.registry import ClassInfo
from mexwrap.signature import MalformedReturnError, Overload, ReturnValue

from .writer import TextSink

logger = logging.getLogger(__name__)

BOUNDARY_PARAMS = "int nargout, mxArray *out[], int nargin, const mxArray *in[]"
# C++ bodies always use a two-space indent; WrapConfig.indent only applies to
# MATLAB proxy text.
_IND = "  "


def checked_return_value(cls: ClassInfo, method: str, overload: Overload, overload_index: int) -> ReturnValue:
	"""
	Return the overload's return shape, or raise WrapGenerationError if it
	cannot be marshalled.
	"""
	ret = overload.return_value
	try:
		if not isinstance(ret, ReturnValue):
			raise MalformedReturnError(f"expected a ReturnValue, got {type(ret).__name__}")
		ret.validate()
	except MalformedReturnError as err:
		raise WrapGenerationError.at(
			str(err),
			class_name=cls.matlab_name,
			method_name=method,
			overload_index=overload_index,
			code="E-RETURN-SHAPE",
		) from err
	return ret


def emit_native_wrapper(
	sink: TextSink,
	cls: ClassInfo,
	method: str,
	overload: Overload,
	overload_index: int,
	fn_id: int,
	config: WrapConfig,
) -> str:
	"""
	Append the wrapper function for `overload` to `sink`; return its symbol.

	Raises WrapGenerationError when the return shape cannot be marshalled. The
	sink is only written once the whole body has been built.
	"""
	symbol = wrapper_symbol(cls.matlab_name, method, fn_id)
	args = overload.args
	ret = checked_return_value(cls, method, overload, overload_index)
	class_slots = ret.class_slots()
	wrap_lines = ret.wrap_lines("result")
	result_type = ret.return_type()

	body: list[str] = []
	body.extend(f"using namespace {ns};" for ns in config.using_namespaces)
	for slot in class_slots:
		body.append(f"typedef boost::shared_ptr<{slot.qualified_type('::')}> {slot.shared_alias};")
	body.append(f"typedef boost::shared_ptr<{cls.cpp_name}> Shared;")
	body.append(f'checkArguments("{cls.matlab_name}.{method}",nargout,nargin,{len(args)});')
	body.extend(args.unwrap_lines(0))
	call = f"{cls.cpp_name}::{method}({args.names()});"
	if ret.is_void:
		body.append(call)
	else:
		body.append(f"{result_type} result = {call}")
	body.extend(wrap_lines)

	sink.line(f"void {symbol}({BOUNDARY_PARAMS})")
	sink.line("{")
	sink.extend(body, prefix=_IND)
	sink.line("}")
	sink.line()
	logger.debug("emitted native wrapper %s for %s.%s overload %d", symbol, cls.matlab_name, method, overload_index)
	return symbol


__all__ = ["emit_native_wrapper", "checked_return_value", "BOUNDARY_PARAMS"]
