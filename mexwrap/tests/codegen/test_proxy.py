# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""MATLAB proxy emission: branch chain, ids and output bindings."""

import logging
import re

import pytest

from mexwrap.codegen import TextSink, emit_class_proxy, emit_static_method_proxy
from mexwrap.codegen.proxy import branch_condition, output_binding
from mexwrap.core.diagnostics import WrapGenerationError
from mexwrap.function_table import FunctionTable
from mexwrap.registry import ClassInfo
from mexwrap.signature import (
	Argument,
	ArgumentList,
	Overload,
	ReturnCategory,
	ReturnSlot,
	ReturnValue,
)

BAR = ClassInfo(name="Bar", cpp_name="Bar", matlab_name="Bar")


def _emit(overloads, config, method="Foo", table=None):
	proxy, native = TextSink(), TextSink()
	table = table if table is not None else FunctionTable()
	ids = emit_static_method_proxy(proxy, native, BAR, method, overloads, table, config)
	return proxy, native, table, ids


def test_bar_foo_scenario(bar_foo_registry, config):
	proxy, native, table, ids = _emit(bar_foo_registry.overloads("Bar", "Foo"), config)
	assert ids == [0, 1]
	assert proxy.render() == (
		"    function varargout = Foo(varargin)\n"
		"      if length(varargin) == 0\n"
		"        bar_wrapper(0, varargin{:});\n"
		"      elseif length(varargin) == 1 && isa(varargin{1},'numeric')\n"
		"        varargout{1} = bar_wrapper(1, varargin{:});\n"
		"      else\n"
		"        error('Arguments do not match any overload of function Bar.Foo');\n"
		"      end\n"
		"    end\n"
	)
	assert table.entries() == ((0, "Bar_Foo_0"), (1, "Bar_Foo_1"))
	text = native.render()
	assert "void Bar_Foo_0(" in text
	assert "void Bar_Foo_1(" in text
	assert "typedef boost::shared_ptr<Baz> SharedBaz;" in text
	assert text.index("void Bar_Foo_0(") < text.index("void Bar_Foo_1(")


def test_k_branches_in_order_plus_else(config):
	overloads = [
		Overload(ArgumentList([Argument("double", "x")]), ReturnValue.void()),
		Overload(ArgumentList([Argument("double", "x"), Argument("int", "n")]), ReturnValue.void()),
		Overload(ArgumentList([Argument("string", "s")]), ReturnValue.void()),
	]
	proxy, _, _, _ = _emit(overloads, config)
	keywords = [line.split()[0] for line in proxy.lines if line.split()[0] in ("if", "elseif", "else")]
	assert keywords == ["if", "elseif", "elseif", "else"]


def test_branch_condition_conjunction_left_to_right():
	ov = Overload(
		ArgumentList([Argument("double", "x"), Argument("Point2", "p", namespaces=("gtsam",)), Argument("bool", "b")]),
		ReturnValue.void(),
	)
	assert branch_condition(ov) == (
		"length(varargin) == 3 && isa(varargin{1},'double') && "
		"isa(varargin{2},'gtsam.Point2') && isa(varargin{3},'logical')"
	)
	assert branch_condition(Overload(ArgumentList(), ReturnValue.void())) == "length(varargin) == 0"


@pytest.mark.parametrize(
	"ret, binding",
	[
		(ReturnValue.void(), ""),
		(ReturnValue.single(ReturnSlot("double")), "varargout{1} = "),
		(
			ReturnValue.pair(ReturnSlot("Point2", ReturnCategory.CLASS), ReturnSlot("double")),
			"[ varargout{1} varargout{2} ] = ",
		),
	],
)
def test_output_binding_per_return_shape(ret, binding):
	assert output_binding(Overload(ArgumentList(), ret)) == binding


def test_pair_bound_as_one_call(config):
	ov = Overload(ArgumentList(), ReturnValue.pair(ReturnSlot("double"), ReturnSlot("double")))
	proxy, _, _, _ = _emit([ov], config)
	calls = [line.strip() for line in proxy.lines if "bar_wrapper(" in line]
	assert calls == ["[ varargout{1} varargout{2} ] = bar_wrapper(0, varargin{:});"]


def test_ids_continue_from_table(config):
	table = FunctionTable(start=5)
	table.register("Other_x_5")
	ov = Overload(ArgumentList(), ReturnValue.void())
	proxy, native, table, ids = _emit([ov, ov], config, table=table)
	assert ids == [6, 7]
	assert re.findall(r"bar_wrapper\((\d+),", proxy.render()) == ["6", "7"]
	assert table.symbol_for(6) == "Bar_Foo_6"
	assert table.symbol_for(7) == "Bar_Foo_7"


def test_lowercase_method_name_capitalized_in_proxy_only(config):
	ov = Overload(ArgumentList(), ReturnValue.void())
	proxy, native, _, _ = _emit([ov], config, method="expmap")
	text = proxy.render()
	assert "function varargout = Expmap(varargin)" in text
	assert "function Bar.Expmap');" in text
	assert "void Bar_expmap_0(" in native.render()
	assert 'checkArguments("Bar.expmap",' in native.render()


def test_identical_overloads_first_wins(config, caplog):
	first = Overload(ArgumentList([Argument("int", "n")]), ReturnValue.void())
	second = Overload(ArgumentList([Argument("size_t", "k")]), ReturnValue.single(ReturnSlot("double")))
	with caplog.at_level(logging.WARNING, logger="mexwrap.codegen.proxy"):
		proxy, _, table, ids = _emit([first, second], config)
	lines = [line.strip() for line in proxy.lines]
	cond = "length(varargin) == 1 && isa(varargin{1},'numeric')"
	assert lines.index(f"if {cond}") < lines.index(f"elseif {cond}")
	assert lines[lines.index(f"if {cond}") + 1] == "bar_wrapper(0, varargin{:});"
	# Both still get native entries and ids.
	assert ids == [0, 1]
	assert len(table) == 2
	assert any("overload 1" in rec.getMessage() and "unreachable" in rec.getMessage() for rec in caplog.records)


def test_no_overloads_is_generation_error(config):
	with pytest.raises(WrapGenerationError, match="no overloads"):
		_emit([], config)


class _SkippingTable(FunctionTable):
	def register(self, symbol: str) -> int:
		super().register("pad_" + symbol)
		return super().register(symbol)


def test_id_desync_is_generation_error(config):
	ov = Overload(ArgumentList(), ReturnValue.void())
	with pytest.raises(WrapGenerationError) as info:
		_emit([ov], config, table=_SkippingTable())
	assert info.value.diagnostic.code == "E-ID-DESYNC"


def test_class_proxy_wraps_static_methods(bar_foo_registry, config):
	bar_foo_registry.register("Bar", "make", ArgumentList(), ReturnValue.single(ReturnSlot("Bar", ReturnCategory.CLASS)))
	proxy, native = TextSink(), TextSink()
	methods = [(m, bar_foo_registry.overloads("Bar", m)) for m in bar_foo_registry.methods("Bar")]
	ids = emit_class_proxy(proxy, native, BAR, methods, FunctionTable(), config)
	assert ids == [0, 1, 2]
	assert proxy.lines[0].startswith("%class Bar")
	assert proxy.lines[1] == "classdef Bar < handle"
	assert proxy.lines[2] == "  methods(Static = true)"
	assert proxy.lines[-2:] == ["  end", "end"]
	text = proxy.render()
	assert "    function varargout = Make(varargin)\n" in text
	assert "        varargout{1} = bar_wrapper(2, varargin{:});\n" in text


def test_bad_return_shape_fails_before_any_output(config):
	ov = Overload(ArgumentList(), None)  # type: ignore[arg-type]
	proxy, native, table = TextSink(), TextSink(), FunctionTable()
	with pytest.raises(WrapGenerationError, match="Bar.Foo\\[overload 0\\]"):
		emit_static_method_proxy(proxy, native, BAR, "Foo", [ov], table, config)
	assert proxy.lines == []
	assert native.lines == []
	assert len(table) == 0


def test_methods_colliding_after_capitalization_rejected(config):
	ov = Overload(ArgumentList(), ReturnValue.void())
	proxy, native, table = TextSink(), TextSink(), FunctionTable()
	with pytest.raises(WrapGenerationError) as info:
		emit_class_proxy(proxy, native, BAR, [("expmap", [ov]), ("Expmap", [ov])], table, config)
	assert info.value.diagnostic.code == "E-NAME-COLLISION"
	assert info.value.diagnostic.method_name == "Expmap"
	assert proxy.lines == []
	assert len(table) == 0
