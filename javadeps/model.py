from __future__ import annotations

from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, field_serializer


def _sorted_map(value: Optional[Dict[str, FrozenSet[str]]]) -> Optional[Dict[str, List[str]]]:
	if value is None:
		return None
	return {key: sorted(value[key]) for key in sorted(value)}


class FileInfo(BaseModel):
	path: str
	rel_path: str


class SourceUnit(BaseModel):
	"""Structural summary of one Java source file."""

	model_config = ConfigDict(frozen=True)

	package: str = ""
	type_name: str
	imports: FrozenSet[str] = frozenset()
	class_references: FrozenSet[str] = frozenset()
	path: Optional[str] = None

	@property
	def fully_qualified_name(self) -> str:
		if self.package:
			return f"{self.package}.{self.type_name}"
		return self.type_name

	@field_serializer("imports", "class_references")
	def _serialize_names(self, names: FrozenSet[str]) -> List[str]:
		return sorted(names)


class DependencyGraph(BaseModel):
	"""Forward and reverse dependency maps keyed by fully qualified type name.

	``reverse_dependencies`` is None when the caller did not ask for it.
	Readers should go through ``dependencies_of``/``dependents_of`` which
	treat a missing key as an empty set.
	"""

	model_config = ConfigDict(frozen=True)

	dependencies: Dict[str, FrozenSet[str]] = {}
	reverse_dependencies: Optional[Dict[str, FrozenSet[str]]] = None
	ambiguous_references: Dict[str, FrozenSet[str]] = {}

	def dependencies_of(self, name: str) -> FrozenSet[str]:
		return self.dependencies.get(name, frozenset())

	def dependents_of(self, name: str) -> FrozenSet[str]:
		if self.reverse_dependencies is None:
			return frozenset()
		return self.reverse_dependencies.get(name, frozenset())

	@property
	def edge_count(self) -> int:
		return sum(len(deps) for deps in self.dependencies.values())

	@field_serializer("dependencies", "ambiguous_references")
	def _serialize_map(self, value: Dict[str, FrozenSet[str]]) -> Dict[str, List[str]]:
		return _sorted_map(value) or {}

	@field_serializer("reverse_dependencies")
	def _serialize_reverse(self, value: Optional[Dict[str, FrozenSet[str]]]) -> Optional[Dict[str, List[str]]]:
		return _sorted_map(value)


class ScanResult(BaseModel):
	root: str
	files_found: int
	files_parsed: int
	failed_files: List[str] = []
	units: List[SourceUnit] = []
	graph: DependencyGraph

	@property
	def files_failed(self) -> int:
		return len(self.failed_files)
