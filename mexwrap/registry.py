# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Overload registry for wrapped static methods.

The registry only records declarations; it performs no resolution. Overloads
are kept per (class, method) in registration order because that order is the
order of the `if`/`elseif` chain in the generated proxy: the first overload
whose arity and type tags match wins at runtime.

Typical use:
  reg = StaticMethodRegistry()
  reg.register_class("Point2", namespaces=("gtsam",))
  reg.register("Point2", "Expmap", ArgumentList([...]), ReturnValue.single(...))
  snapshot = reg.freeze()
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from mexwrap.core.diagnostics import RegistryFrozenError
from mexwrap.signature import ArgumentList, Overload, ReturnValue


@dataclass(frozen=True)
class ClassInfo:
	"""Naming of one wrapped class on both sides of the boundary."""

	name: str
	cpp_name: str
	matlab_name: str
	namespaces: Tuple[str, ...] = ()


class StaticMethodRegistry:
	"""
	Append-only store of static method overloads.

	Duplicate overloads are accepted as-is. Classes that receive overloads
	without an explicit `register_class` get default naming (no namespaces).
	"""

	def __init__(self) -> None:
		self._classes: Dict[str, ClassInfo] = {}
		# class name -> {method name -> [Overload]}; dict order is first registration.
		self._methods: Dict[str, Dict[str, List[Overload]]] = {}
		self._frozen = False

	def _check_open(self) -> None:
		if self._frozen:
			raise RegistryFrozenError("registry is frozen; create a new one for another session")

	def register_class(
		self,
		name: str,
		*,
		cpp_name: Optional[str] = None,
		matlab_name: Optional[str] = None,
		namespaces: Sequence[str] = (),
	) -> ClassInfo:
		self._check_open()
		ns = tuple(namespaces)
		info = ClassInfo(
			name=name,
			cpp_name=cpp_name or "::".join(ns + (name,)),
			matlab_name=matlab_name or "".join(ns) + name,
			namespaces=ns,
		)
		existing = self._classes.get(name)
		if existing is not None and existing != info:
			raise ValueError(f"class {name!r} already registered with different naming")
		self._classes[name] = info
		self._methods.setdefault(name, {})
		return info

	def register(
		self,
		class_name: str,
		method_name: str,
		args: ArgumentList,
		return_value: ReturnValue,
	) -> Overload:
		"""Append one overload for `class_name.method_name`; never rejects duplicates."""
		self._check_open()
		if class_name not in self._classes:
			self.register_class(class_name)
		if not isinstance(args, ArgumentList):
			args = ArgumentList(args)
		overload = Overload(args=args, return_value=return_value)
		self._methods[class_name].setdefault(method_name, []).append(overload)
		return overload

	def classes(self) -> Tuple[str, ...]:
		return tuple(self._classes)

	def class_info(self, class_name: str) -> ClassInfo:
		return self._classes[class_name]

	def methods(self, class_name: str) -> Tuple[str, ...]:
		return tuple(self._methods.get(class_name, {}))

	def overloads(self, class_name: str, method_name: str) -> Tuple[Overload, ...]:
		return tuple(self._methods.get(class_name, {}).get(method_name, ()))

	def __len__(self) -> int:
		return sum(len(ovs) for methods in self._methods.values() for ovs in methods.values())

	@property
	def frozen(self) -> bool:
		return self._frozen

	def freeze(self) -> "RegistrySnapshot":
		"""Finalize the registry and return an immutable view of it."""
		self._frozen = True
		return RegistrySnapshot(
			classes=tuple(self._classes.values()),
			methods=MappingProxyType(
				{
					cls: tuple((m, tuple(ovs)) for m, ovs in methods.items())
					for cls, methods in self._methods.items()
				}
			),
		)


@dataclass(frozen=True)
class RegistrySnapshot:
	"""Read-only registry contents consumed by one generation session."""

	classes: Tuple[ClassInfo, ...]
	methods: Mapping[str, Tuple[Tuple[str, Tuple[Overload, ...]], ...]]

	def __post_init__(self) -> None:
		if not isinstance(self.methods, MappingProxyType):
			object.__setattr__(self, "methods", MappingProxyType(dict(self.methods)))

	def class_info(self, class_name: str) -> ClassInfo:
		for info in self.classes:
			if info.name == class_name:
				return info
		raise KeyError(class_name)

	def methods_of(self, class_name: str) -> Tuple[Tuple[str, Tuple[Overload, ...]], ...]:
		return self.methods.get(class_name, ())

	def overload_count(self) -> int:
		return sum(len(ovs) for entries in self.methods.values() for _, ovs in entries)


def find_shadowed_overloads(overloads: Iterable[Overload]) -> List[Tuple[int, int]]:
	"""
	Return `(shadowed, winner)` index pairs for unreachable overloads.

	An overload is shadowed when an earlier one has the same arity and type
	tags; the generated proxy always selects the earlier one.
	"""
	first_by_key: Dict[Tuple[int, Tuple[str, ...]], int] = {}
	shadowed: List[Tuple[int, int]] = []
	for idx, ov in enumerate(overloads):
		key = ov.dispatch_key()
		if key in first_by_key:
			shadowed.append((idx, first_by_key[key]))
		else:
			first_by_key[key] = idx
	return shadowed


__all__ = ["ClassInfo", "StaticMethodRegistry", "RegistrySnapshot", "find_shadowed_overloads"]
