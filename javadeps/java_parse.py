"""Regex based structural parsing of Java source text.

This is a heuristic reader, not a Java grammar: it finds the package
declaration, the first declared class/interface/enum, the import list and
capitalised identifiers used in the body. Every input produces a result.
"""

from __future__ import annotations

import os
import re
from typing import FrozenSet, Optional, Protocol, Set

from .model import SourceUnit


_IDENT = r"[A-Za-z_$][\w$]*"

_COMMENT_OR_LITERAL_RE = re.compile(
	r'"""[\s\S]*?"""'
	r'|"(?:\\.|[^"\\\n])*"'
	r"|'(?:\\.|[^'\\\n])*'"
	r"|//[^\n]*"
	r"|/\*[\s\S]*?\*/"
)
PACKAGE_RE = re.compile(rf"\bpackage\s+({_IDENT}(?:\s*\.\s*{_IDENT})*)\s*;")
TYPE_RE = re.compile(rf"(?<![\w.$])(?:class|interface|enum)\s+({_IDENT})")
IMPORT_RE = re.compile(rf"\bimport\s+(static\s+)?({_IDENT}(?:\s*\.\s*(?:{_IDENT}|\*))*)\s*;")
REFERENCE_RE = re.compile(r"(?<=[\s(<,])[A-Z][\w$]*(?=[\s(<>,)\[])")

# java.lang types every file can use without an import.
BUILTIN_TYPES: FrozenSet[str] = frozenset(
	{
		"String",
		"Integer",
		"Boolean",
		"Double",
		"Float",
		"Object",
		"Class",
		"Long",
		"Short",
		"Byte",
		"Character",
		"Number",
		"Void",
		"Math",
		"System",
		"StringBuilder",
		"Override",
	}
)


class SourceExtractor(Protocol):
	def extract(self, content: str, filename: str) -> SourceUnit:
		...


def _blank(match: re.Match) -> str:
	text = match.group(0)
	if text.startswith("/"):
		# comments keep their line breaks
		return "\n" * text.count("\n") or " "
	return '""'


def strip_comments_and_literals(content: str) -> str:
	return _COMMENT_OR_LITERAL_RE.sub(_blank, content)


def fallback_type_name(filename: str) -> str:
	return re.sub(r"\.java$", "", os.path.basename(filename))


def find_package(text: str) -> str:
	m = PACKAGE_RE.search(text)
	if not m:
		return ""
	return re.sub(r"\s+", "", m.group(1))


def find_type_name(text: str) -> Optional[str]:
	m = TYPE_RE.search(text)
	return m.group(1) if m else None


def find_imports(text: str) -> Set[str]:
	imports: Set[str] = set()
	for m in IMPORT_RE.finditer(text):
		name = re.sub(r"\s+", "", m.group(2))
		if name.endswith("*"):
			continue
		if m.group(1):
			# static imports name a member; depend on its declaring type
			name = name.rsplit(".", 1)[0]
		imports.add(name)
	return imports


def find_class_references(text: str, type_name: str) -> Set[str]:
	"""Capitalised bare identifiers in ``text``, minus builtins and ``type_name``.

	Deliberately over-inclusive. Callers resolve the names against the set of
	parsed project types and drop whatever does not match.
	"""
	refs = set(REFERENCE_RE.findall(text))
	refs -= BUILTIN_TYPES
	refs.discard(type_name)
	return refs


def parse_java_source(
	content: str,
	filename: str,
	*,
	with_references: bool = True,
	path: Optional[str] = None,
) -> SourceUnit:
	text = strip_comments_and_literals(content)
	type_name = find_type_name(text) or fallback_type_name(filename)
	references: Set[str] = set()
	if with_references:
		references = find_class_references(text, type_name)
	return SourceUnit(
		package=find_package(text),
		type_name=type_name,
		imports=frozenset(find_imports(text)),
		class_references=frozenset(references),
		path=path,
	)


class RegexJavaExtractor:
	"""Default ``SourceExtractor``; ``with_references=False`` reads imports only."""

	def __init__(self, with_references: bool = True):
		self.with_references = with_references

	def extract(self, content: str, filename: str) -> SourceUnit:
		return parse_java_source(content, filename, with_references=self.with_references, path=filename)
