# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import pytest

from mexwrap.config import WrapConfig
from mexwrap.registry import StaticMethodRegistry
from mexwrap.signature import (
	Argument,
	ArgumentList,
	ReturnCategory,
	ReturnSlot,
	ReturnValue,
)


@pytest.fixture
def config() -> WrapConfig:
	return WrapConfig(module_name="bar")


@pytest.fixture
def bar_foo_registry() -> StaticMethodRegistry:
	"""
	`Bar.Foo` with two overloads: `Foo()` returning nothing and
	`Foo(int n)` returning a `Baz` object.
	"""
	reg = StaticMethodRegistry()
	reg.register("Bar", "Foo", ArgumentList([]), ReturnValue.void())
	reg.register(
		"Bar",
		"Foo",
		ArgumentList([Argument("int", "n")]),
		ReturnValue.single(ReturnSlot("Baz", ReturnCategory.CLASS)),
	)
	return reg
