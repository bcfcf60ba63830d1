# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Argument lists and return shapes for wrapped static methods.

Both sides of the boundary are described here:
- `Argument.matlab_class` is the tag the MATLAB proxy checks with `isa`.
- `Argument.unwrap_code` and `ReturnValue.wrap_lines` are the C++ fragments the
  native wrapper uses to cross the MEX boundary (see wrap/matlab.h for the
  `unwrap`, `unwrap_shared_ptr` and `wrap_collect_shared_ptr` templates).

Return shapes are limited to what a MEX function can hand back without help:
nothing, one value, or a `std::pair` split into two outputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, List, Sequence, Tuple

# Types marshalled by value even when declared by reference.
VALUE_TYPES = frozenset(
	{"string", "Vector", "Matrix", "double", "float", "int", "size_t", "bool", "char", "unsigned char"}
)

# Native type -> MATLAB class checked by the proxy.
_MATLAB_CLASS_OF = {
	"string": "char",
	"char": "char",
	"unsigned char": "char",
	"Vector": "double",
	"Matrix": "double",
	"int": "numeric",
	"size_t": "numeric",
	"bool": "logical",
}


def _qualify(namespaces: Sequence[str], name: str, delim: str) -> str:
	return "".join(ns + delim for ns in namespaces) + name


@dataclass(frozen=True)
class Argument:
	"""One declared parameter of a wrapped method."""

	type: str
	name: str
	is_const: bool = False
	is_ref: bool = False
	is_ptr: bool = False
	namespaces: Tuple[str, ...] = ()

	def qualified_type(self, delim: str = "") -> str:
		return _qualify(self.namespaces, self.type, delim)

	def matlab_class(self, delim: str = ".") -> str:
		"""Host type tag checked with `isa` in the proxy."""
		mapped = _MATLAB_CLASS_OF.get(self.type)
		if mapped is not None:
			return mapped
		return self.qualified_type(delim)

	def unwrap_code(self, input_expr: str) -> str:
		"""
		Return the C++ statement binding this argument from a boundary input.

		Examples:
		  double tol = unwrap< double >(in[2]);
		  gtsam::Pose2& pose = *unwrap_shared_ptr< gtsam::Pose2 >(in[0], "ptr_gtsamPose2");
		  boost::shared_ptr<Values> vals = unwrap_shared_ptr< Values >(in[1], "ptr_Values");
		"""
		cpp_type = self.qualified_type("::")
		class_arg = f', "ptr_{self.qualified_type()}"'
		if self.is_ptr:
			return f"boost::shared_ptr<{cpp_type}> {self.name} = unwrap_shared_ptr< {cpp_type} >({input_expr}{class_arg});"
		if self.is_ref and self.type not in VALUE_TYPES:
			return f"{cpp_type}& {self.name} = *unwrap_shared_ptr< {cpp_type} >({input_expr}{class_arg});"
		return f"{cpp_type} {self.name} = unwrap< {cpp_type} >({input_expr});"


@dataclass(frozen=True)
class ArgumentList:
	"""Ordered, immutable parameter list of one overload."""

	args: Tuple[Argument, ...] = ()

	def __init__(self, args: Sequence[Argument] = ()) -> None:
		object.__setattr__(self, "args", tuple(args))

	def __len__(self) -> int:
		return len(self.args)

	def __iter__(self) -> Iterator[Argument]:
		return iter(self.args)

	def __getitem__(self, index: int) -> Argument:
		return self.args[index]

	def matlab_classes(self) -> Tuple[str, ...]:
		return tuple(a.matlab_class() for a in self.args)

	def names(self) -> str:
		"""Comma-joined argument names, as forwarded into the native call."""
		return ", ".join(a.name for a in self.args)

	def unwrap_lines(self, start: int = 0) -> List[str]:
		"""One unwrap statement per argument, reading `in[start]`, `in[start+1]`, ..."""
		return [a.unwrap_code(f"in[{start + i}]") for i, a in enumerate(self.args)]


class ReturnCategory(Enum):
	BASIC = auto()
	CLASS = auto()


class ReturnKind(Enum):
	VOID = auto()
	SINGLE = auto()
	PAIR = auto()


class MalformedReturnError(ValueError):
	"""Raised when a return shape cannot be marshalled."""


@dataclass(frozen=True)
class ReturnSlot:
	"""One returned value: its native type and how it crosses the boundary."""

	type: str
	category: ReturnCategory = ReturnCategory.BASIC
	# The native method already returns a boost::shared_ptr to `type`.
	is_ptr: bool = False
	namespaces: Tuple[str, ...] = ()

	def qualified_type(self, delim: str = "") -> str:
		return _qualify(self.namespaces, self.type, delim)

	@property
	def shared_alias(self) -> str:
		return f"Shared{self.type}"

	@property
	def needs_handle(self) -> bool:
		"""True if this slot is returned to MATLAB as an owned object handle."""
		return self.category is ReturnCategory.CLASS or self.is_ptr

	def cpp_type(self) -> str:
		if self.is_ptr:
			return self.shared_alias
		return self.qualified_type("::")


@dataclass(frozen=True)
class ReturnValue:
	"""
	Tagged return shape: VOID, SINGLE(slot) or PAIR(slot1, slot2).

	Use the `void`/`single`/`pair` constructors; `validate` rejects shapes whose
	slot count does not match the kind or whose categories are unknown.
	"""

	kind: ReturnKind
	slots: Tuple[ReturnSlot, ...] = field(default_factory=tuple)

	@classmethod
	def void(cls) -> "ReturnValue":
		return cls(ReturnKind.VOID, ())

	@classmethod
	def single(cls, slot: ReturnSlot) -> "ReturnValue":
		return cls(ReturnKind.SINGLE, (slot,))

	@classmethod
	def pair(cls, first: ReturnSlot, second: ReturnSlot) -> "ReturnValue":
		return cls(ReturnKind.PAIR, (first, second))

	@property
	def output_count(self) -> int:
		return len(self.slots)

	@property
	def is_void(self) -> bool:
		return self.kind is ReturnKind.VOID

	def validate(self) -> None:
		expected = {ReturnKind.VOID: 0, ReturnKind.SINGLE: 1, ReturnKind.PAIR: 2}.get(self.kind)
		if expected is None:
			raise MalformedReturnError(f"unknown return kind {self.kind!r}")
		if len(self.slots) != expected:
			raise MalformedReturnError(
				f"{self.kind.name} return requires {expected} slot(s), got {len(self.slots)}"
			)
		for slot in self.slots:
			if not isinstance(slot.category, ReturnCategory):
				raise MalformedReturnError(f"unsupported return category {slot.category!r} for type {slot.type!r}")
			if slot.type == "void":
				raise MalformedReturnError("void is not a valid return slot type")

	def class_slots(self) -> List[ReturnSlot]:
		"""Slots needing an owned-handle alias, without repeating a type."""
		seen: set[str] = set()
		out: List[ReturnSlot] = []
		for slot in self.slots:
			if slot.needs_handle and slot.shared_alias not in seen:
				seen.add(slot.shared_alias)
				out.append(slot)
		return out

	def return_type(self) -> str:
		"""C++ type of the local bound to the native call result."""
		self.validate()
		if self.kind is ReturnKind.VOID:
			return "void"
		if self.kind is ReturnKind.PAIR:
			return f"pair< {self.slots[0].cpp_type()}, {self.slots[1].cpp_type()} >"
		return self.slots[0].cpp_type()

	def wrap_lines(self, result: str = "result") -> List[str]:
		"""C++ statements writing `out[...]` from the native result."""
		self.validate()
		if self.kind is ReturnKind.VOID:
			return []
		if self.kind is ReturnKind.SINGLE:
			return _wrap_slot(self.slots[0], result, 0, "ret")
		lines = _wrap_slot(self.slots[0], f"{result}.first", 0, "ret0")
		lines.extend(_wrap_slot(self.slots[1], f"{result}.second", 1, "ret1"))
		return lines


def _wrap_slot(slot: ReturnSlot, expr: str, out_index: int, tmp: str) -> List[str]:
	alias = slot.shared_alias
	if slot.is_ptr:
		make = f"{alias}* {tmp} = new {alias}({expr});"
	elif slot.category is ReturnCategory.CLASS:
		make = f"{alias}* {tmp} = new {alias}(new {slot.qualified_type('::')}({expr}));"
	else:
		return [f"out[{out_index}] = wrap< {slot.cpp_type()} >({expr});"]
	return [make, f'out[{out_index}] = wrap_collect_shared_ptr({tmp},"{slot.qualified_type()}");']


@dataclass(frozen=True)
class Overload:
	"""One signature variant of a static method."""

	args: ArgumentList
	return_value: ReturnValue

	@property
	def arity(self) -> int:
		return len(self.args)

	def dispatch_key(self) -> Tuple[int, Tuple[str, ...]]:
		"""What the proxy can tell apart at runtime: arity plus type tags."""
		return (self.arity, self.args.matlab_classes())


__all__ = [
	"Argument",
	"ArgumentList",
	"MalformedReturnError",
	"Overload",
	"ReturnCategory",
	"ReturnKind",
	"ReturnSlot",
	"ReturnValue",
	"VALUE_TYPES",
]
