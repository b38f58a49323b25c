from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Set, Tuple, Union

import networkx as nx

from .classify import ClassificationRule, package_of
from .model import DependencyGraph, SourceUnit


def _simple_name(name: str) -> str:
	return name.rsplit(".", 1)[-1]


def index_by_simple_name(names: Iterable[str]) -> Dict[str, Set[str]]:
	"""Map each simple type name to every fully qualified name that ends in it."""
	index: Dict[str, Set[str]] = {}
	for name in names:
		index.setdefault(_simple_name(name), set()).add(name)
	return index


def resolve_reference(
	reference: str,
	owner: str,
	simple_index: Dict[str, Set[str]],
) -> Tuple[Set[str], bool]:
	"""Resolve a bare identifier used inside ``owner``.

	Returns ``(targets, ambiguous)``. A unique candidate resolves directly;
	among several, a single candidate in the owner's package wins. Anything
	else is ambiguous and resolves to nothing.
	"""
	candidates = simple_index.get(reference, set()) - {owner}
	if len(candidates) <= 1:
		return set(candidates), False
	owner_package = package_of(owner)
	local = {c for c in candidates if package_of(c) == owner_package}
	if len(local) == 1:
		return local, False
	return set(), True


def invert_dependencies(dependencies: Dict[str, FrozenSet[str]]) -> Dict[str, FrozenSet[str]]:
	reverse: Dict[str, Set[str]] = {}
	for name, deps in dependencies.items():
		for dep in deps:
			reverse.setdefault(dep, set()).add(name)
	return {name: frozenset(users) for name, users in reverse.items()}


def build_dependency_graph(
	units: Iterable[SourceUnit],
	rule: Union[ClassificationRule, str] = "",
	*,
	include_reverse: bool = True,
	resolve_references: bool = True,
) -> DependencyGraph:
	"""Fold parsed units into forward and reverse dependency maps.

	``rule`` is either a ``ClassificationRule`` or a bare project package
	prefix. Without a project package, imports only count when they name a
	parsed type.
	"""
	if not isinstance(rule, ClassificationRule):
		rule = ClassificationRule(project_package=rule)

	by_name: Dict[str, List[SourceUnit]] = {}
	for unit in units:
		by_name.setdefault(unit.fully_qualified_name, []).append(unit)
	simple_index = index_by_simple_name(by_name)

	dependencies: Dict[str, FrozenSet[str]] = {}
	ambiguous: Dict[str, FrozenSet[str]] = {}
	for name, group in by_name.items():
		deps: Set[str] = set()
		unresolved: Set[str] = set()
		for unit in group:
			imported = {imp for imp in unit.imports if not rule.is_external(imp)}
			if not rule.has_project_package:
				imported = {imp for imp in imported if imp in by_name}
			deps |= imported

			if not resolve_references:
				continue
			# an explicit import always decides what a simple name means
			shadowed = {_simple_name(imp) for imp in unit.imports}
			for ref in unit.class_references - shadowed:
				targets, is_ambiguous = resolve_reference(ref, name, simple_index)
				if is_ambiguous:
					unresolved.add(ref)
				deps |= {t for t in targets if not rule.is_external(t)}
		deps.discard(name)
		dependencies[name] = frozenset(deps)
		if unresolved:
			ambiguous[name] = frozenset(unresolved)

	return DependencyGraph(
		dependencies=dependencies,
		reverse_dependencies=invert_dependencies(dependencies) if include_reverse else None,
		ambiguous_references=ambiguous,
	)


def to_networkx(graph: DependencyGraph) -> nx.DiGraph:
	g = nx.DiGraph()
	g.add_nodes_from(graph.dependencies)
	for name, deps in graph.dependencies.items():
		g.add_edges_from((name, dep) for dep in deps)
	return g


def find_cycles(graph: DependencyGraph) -> List[List[str]]:
	"""Groups of types that depend on each other, each sorted, largest first."""
	components = [
		sorted(component)
		for component in nx.strongly_connected_components(to_networkx(graph))
		if len(component) > 1
	]
	return sorted(components, key=lambda c: (-len(c), c))
