"""Decide whether a fully qualified Java name belongs to the scanned project."""

from __future__ import annotations

from typing import Iterable, Tuple

from pydantic import BaseModel, ConfigDict


# Platform namespace roots plus a few ubiquitous annotation/serialization
# libraries that only add noise to a project graph.
DEFAULT_EXTERNAL_PREFIXES: Tuple[str, ...] = (
	"java.",
	"javax.",
	"jakarta.",
	"jdk.",
	"sun.",
	"com.sun.",
	"lombok.",
	"org.slf4j.",
	"com.fasterxml.jackson.",
)


def package_of(name: str) -> str:
	"""Dotted prefix of a fully qualified name, "" for an unqualified one."""
	if "." in name:
		return name.rsplit(".", 1)[0]
	return ""


def in_package(name: str, package: str) -> bool:
	package = package.rstrip(".")
	return name == package or name.startswith(package + ".")


def is_external(
	name: str,
	project_package: str = "",
	external_prefixes: Iterable[str] = DEFAULT_EXTERNAL_PREFIXES,
) -> bool:
	if any(name.startswith(prefix) for prefix in external_prefixes):
		return True
	if project_package and project_package.strip("."):
		return not in_package(name, project_package)
	return False


class ClassificationRule(BaseModel):
	"""Project package prefix plus the prefixes always treated as external."""

	model_config = ConfigDict(frozen=True)

	project_package: str = ""
	external_prefixes: Tuple[str, ...] = DEFAULT_EXTERNAL_PREFIXES

	@property
	def has_project_package(self) -> bool:
		return bool(self.project_package.strip("."))

	def is_external(self, name: str) -> bool:
		return is_external(name, self.project_package, self.external_prefixes)
