# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
MEX entry point for the generated wrapper file.

MATLAB calls the single compiled MEX function with the table id as its first
input; `mexFunction` strips it and forwards the remaining inputs to the
wrapper registered under that id.
"""

from __future__ import annotations

from mexwrap.config import WrapConfig
from mexwrap.function_table import FunctionTable

from .writer import TextSink


def emit_wrapper_prologue(sink: TextSink, config: WrapConfig) -> None:
	sink.line(f"// {config.wrapper_name}.cpp: MEX wrappers for module {config.module_name}")
	for header in config.includes:
		sink.line(f"#include <{header}>")
	sink.line()


def emit_dispatch(sink: TextSink, table: FunctionTable, config: WrapConfig) -> None:
	"""Append `mexFunction` with one `case` per table entry, in id order."""
	sink.extend(
		[
			"void mexFunction(int nargout, mxArray *out[], int nargin, const mxArray *in[])",
			"{",
			"  mstream mout;",
			"  std::streambuf *outbuf = std::cout.rdbuf(&mout);",
			"",
			"  int id = unwrap<int>(in[0]);",
			"",
			"  try {",
			"    switch(id) {",
		]
	)
	for fn_id, symbol in table.entries():
		sink.line(f"    case {fn_id}:")
		sink.line(f"      {symbol}(nargout, out, nargin-1, in+1);")
		sink.line("      break;")
	sink.extend(
		[
			"    default:",
			'      throw std::invalid_argument("Unknown function id " + std::to_string(id));',
			"    }",
			"  } catch(const std::exception& e) {",
			f'    mexErrMsgTxt(("Exception from {config.module_name}:\\n" + std::string(e.what()) + "\\n").c_str());',
			"  }",
			"",
			"  std::cout.rdbuf(outbuf);",
			"}",
		]
	)


__all__ = ["emit_dispatch", "emit_wrapper_prologue"]
