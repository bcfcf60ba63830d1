# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
One generation pass: frozen registry in, proxy texts + wrapper text out.

`GenerationSession.run` is a pure function of (registry, config, start id):
running it twice over the same inputs yields identical text. Any failure
raises WrapGenerationError and no result is produced. `write_outputs` is the
only place that touches the filesystem; it publishes all files or none.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Mapping, Sequence, TextIO, Union

from mexwrap.codegen import TextSink, emit_class_proxy, emit_dispatch, emit_wrapper_prologue
from mexwrap.config import WrapConfig
from mexwrap.core.diagnostics import WrapGenerationError
from mexwrap.function_table import FunctionTable
from mexwrap.registry import RegistrySnapshot, StaticMethodRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
	"""Texts produced by a completed session plus its finalized function table."""

	proxies: Mapping[str, str]
	wrapper: str
	table: FunctionTable
	wrapper_name: str

	def file_contents(self) -> Dict[str, str]:
		"""Output file name -> text, proxies first (sorted), wrapper last."""
		files = {f"{name}.m": text for name, text in sorted(self.proxies.items())}
		files[f"{self.wrapper_name}.cpp"] = self.wrapper
		return files


class GenerationSession:
	"""Drives the proxy and native emitters over every class and method."""

	def __init__(
		self,
		registry: Union[StaticMethodRegistry, RegistrySnapshot],
		config: WrapConfig,
		*,
		start_id: int = 0,
	) -> None:
		if isinstance(registry, StaticMethodRegistry):
			registry = registry.freeze()
		self.snapshot = registry
		self.config = config
		self.start_id = start_id

	def run(self) -> GenerationResult:
		table = FunctionTable(start=self.start_id)
		native = TextSink()
		emit_wrapper_prologue(native, self.config)
		proxies: Dict[str, str] = {}
		for cls in self.snapshot.classes:
			if cls.matlab_name in proxies:
				raise WrapGenerationError.at(
					f"class {cls.cpp_name!r} has the same MATLAB name as an earlier class",
					class_name=cls.matlab_name,
					code="E-NAME-COLLISION",
				)
			proxy = TextSink()
			emit_class_proxy(proxy, native, cls, self.snapshot.methods_of(cls.name), table, self.config)
			proxies[cls.matlab_name] = proxy.render()
		table.freeze()
		emit_dispatch(native, table, self.config)
		logger.info(
			"generated %d class proxies, %d native wrappers (ids %d..%d) for module %s",
			len(proxies),
			len(table),
			table.start,
			table.next_id - 1,
			self.config.module_name,
		)
		return GenerationResult(
			proxies=proxies,
			wrapper=native.render(),
			table=table,
			wrapper_name=self.config.wrapper_name,
		)


@contextmanager
def open_sinks(out_dir: Path, names: Sequence[str]) -> Iterator[Dict[str, TextIO]]:
	"""
	Open one writable text stream per output file name.

	Streams write to hidden temporaries inside `out_dir`. On normal exit every
	temporary is renamed over its final name; on any exception all streams are
	closed and the temporaries removed, leaving `out_dir` untouched.
	"""
	out_dir.mkdir(parents=True, exist_ok=True)
	temps = {name: out_dir / f".{name}.tmp" for name in names}
	streams: Dict[str, TextIO] = {}
	ok = False
	try:
		for name, tmp in temps.items():
			streams[name] = open(tmp, "w", encoding="utf-8", newline="\n")
		yield streams
		ok = True
	finally:
		for stream in streams.values():
			stream.close()
		if ok:
			for name, tmp in temps.items():
				os.replace(tmp, out_dir / name)
		else:
			for tmp in temps.values():
				tmp.unlink(missing_ok=True)
			logger.error("generation aborted; discarded outputs in %s", out_dir)


def write_outputs(result: GenerationResult, out_dir: Path) -> list[Path]:
	"""Write every artifact of `result` into `out_dir`; return the written paths."""
	files = result.file_contents()
	with open_sinks(Path(out_dir), list(files)) as streams:
		for name, text in files.items():
			streams[name].write(text)
	return [Path(out_dir) / name for name in files]


def generate(
	registry: Union[StaticMethodRegistry, RegistrySnapshot],
	config: WrapConfig,
	out_dir: Path,
	*,
	start_id: int = 0,
) -> GenerationResult:
	"""Run a session and write its outputs; nothing is written if generation fails."""
	result = GenerationSession(registry, config, start_id=start_id).run()
	write_outputs(result, out_dir)
	return result


__all__ = ["GenerationResult", "GenerationSession", "open_sinks", "write_outputs", "generate"]
