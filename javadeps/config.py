"""Configuration for javadeps.

Precedence: explicit overrides (CLI arguments) > environment > config file >
defaults. The config file is YAML, either passed explicitly or
``.javadeps.yaml`` in the working directory. Environment variables only feed
the advice settings, through ``AdviceConfig.from_env``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .classify import DEFAULT_EXTERNAL_PREFIXES, ClassificationRule
from .fs_scan import DEFAULT_ROOT_SKIP_DIRS, DEFAULT_SKIP_DIRS


DEFAULT_CONFIG_FILE = ".javadeps.yaml"


class ConfigError(ValueError):
	pass


class AdviceConfig(BaseModel):
	model_config = ConfigDict(frozen=True)

	provider: str = "anthropic"
	anthropic_url: str = "https://api.anthropic.com/v1/messages"
	anthropic_model: str = "claude-3-opus-20240229"
	api_key: Optional[str] = None
	ollama_host: str = "http://localhost:11434"
	ollama_model: str = "qwen2.5-coder:7b"
	# USD per 1000 tokens
	input_cost_per_1k: float = 0.015
	output_cost_per_1k: float = 0.075
	timeout: float = 120.0

	@classmethod
	def from_env(cls, base: Optional["AdviceConfig"] = None, **overrides: Any) -> "AdviceConfig":
		"""``base`` (usually from the config file), then the environment, then ``overrides``."""
		data: Dict[str, Any] = base.model_dump() if base is not None else {}
		env = {
			"api_key": os.getenv("ANTHROPIC_API_KEY"),
			"ollama_host": os.getenv("OLLAMA_HOST"),
			"ollama_model": os.getenv("OLLAMA_MODEL"),
		}
		for source in (env, overrides):
			data.update({k: v for k, v in source.items() if v is not None})
		return cls(**data)


class AnalyzerConfig(BaseModel):
	model_config = ConfigDict(frozen=True)

	project_package: str = ""
	external_prefixes: Tuple[str, ...] = DEFAULT_EXTERNAL_PREFIXES
	resolve_references: bool = True
	include_reverse: bool = True
	workers: int = Field(default=1, ge=1)
	skip_dirs: Tuple[str, ...] = tuple(sorted(DEFAULT_SKIP_DIRS))
	root_skip_dirs: Tuple[str, ...] = tuple(sorted(DEFAULT_ROOT_SKIP_DIRS))
	advice: AdviceConfig = AdviceConfig()

	@property
	def rule(self) -> ClassificationRule:
		return ClassificationRule(
			project_package=self.project_package,
			external_prefixes=self.external_prefixes,
		)


def _read_file(path: Path) -> Dict[str, Any]:
	try:
		data = yaml.safe_load(path.read_text(encoding="utf-8"))
	except (OSError, yaml.YAMLError) as e:
		raise ConfigError(f"Cannot read config {path}: {e}") from e
	if data is None:
		return {}
	if not isinstance(data, dict):
		raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")
	return data


def load_config(path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> AnalyzerConfig:
	data: Dict[str, Any] = {}
	if path is not None:
		data = _read_file(Path(path))
	else:
		default = Path.cwd() / DEFAULT_CONFIG_FILE
		if default.is_file():
			data = _read_file(default)

	for key, value in (overrides or {}).items():
		if value is not None:
			data[key] = value

	try:
		return AnalyzerConfig(**data)
	except ValidationError as e:
		raise ConfigError(str(e)) from e
