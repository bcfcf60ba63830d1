# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Text emitters for the two generated artifacts.

- proxy: MATLAB classdef text doing runtime overload selection
- native: one C++ MEX entry function per overload
- dispatch: the `mexFunction` switching on function-table ids
"""

from .dispatch import emit_dispatch, emit_wrapper_prologue
from .native import emit_native_wrapper
from .proxy import emit_class_proxy, emit_static_method_proxy
from .writer import TextSink

__all__ = [
	"TextSink",
	"emit_class_proxy",
	"emit_dispatch",
	"emit_native_wrapper",
	"emit_static_method_proxy",
	"emit_wrapper_prologue",
]
