from __future__ import annotations

from typing import Iterable, List

from .graph import find_cycles
from .model import DependencyGraph, ScanResult


NONE_MARKER = "none"


def _join(names: Iterable[str]) -> str:
	ordered = sorted(names)
	return ", ".join(ordered) if ordered else NONE_MARKER


def render_graph(graph: DependencyGraph) -> str:
	"""Stable text report: one block per type, sorted by fully qualified name."""
	blocks: List[str] = []
	for name in sorted(graph.dependencies):
		lines = [f"Class: {name}", f"  Dependencies: {_join(graph.dependencies_of(name))}"]
		if graph.reverse_dependencies is not None:
			lines.append(f"  Used by: {_join(graph.dependents_of(name))}")
		blocks.append("\n".join(lines))
	return "\n".join(blocks)


def summarize_scan(result: ScanResult) -> str:
	graph = result.graph
	parts: List[str] = [
		f"Repository at {result.root}: {result.files_found} java files, "
		f"{result.files_parsed} parsed, {result.files_failed} failed",
		f"  Types: {len(graph.dependencies)}, internal edges: {graph.edge_count}",
	]
	cycles = find_cycles(graph)
	if cycles:
		parts.append(f"  Dependency cycles: {len(cycles)}")
		for cycle in cycles[:10]:
			parts.append(f"    - {' <-> '.join(cycle)}")
	if graph.ambiguous_references:
		parts.append(f"  Types with ambiguous references: {len(graph.ambiguous_references)}")
	return "\n".join(parts)
