"""Heuristic Java dependency scanner.

Modules:
- java_parse.py: Regex extraction of package, type name, imports and references.
- classify.py: Project-internal vs external classification of type names.
- graph.py: Forward/reverse dependency graph construction.
- summarize.py: Deterministic textual rendering of the graph.
- fs_scan.py: Java file discovery and reading.
- pipeline.py: Scan -> parse -> build orchestration.
- config.py: YAML/CLI configuration.
- advice.py: Optional LLM refactoring advice.
"""

from .classify import ClassificationRule, is_external
from .graph import build_dependency_graph
from .java_parse import RegexJavaExtractor, SourceExtractor, parse_java_source
from .model import DependencyGraph, ScanResult, SourceUnit
from .summarize import render_graph

__all__ = [
	"ClassificationRule",
	"DependencyGraph",
	"RegexJavaExtractor",
	"ScanResult",
	"SourceExtractor",
	"SourceUnit",
	"build_dependency_graph",
	"is_external",
	"parse_java_source",
	"render_graph",
]
