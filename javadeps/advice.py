"""Refactoring advice from an LLM, fed with the rendered dependency report."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from .config import AdviceConfig


logger = logging.getLogger(__name__)

PROVIDERS = ("anthropic", "ollama")
ANTHROPIC_VERSION = "2023-06-01"
MAX_TOKENS = 4096

REFACTORING_PROMPT = """Analyze this Java project dependency graph and identify the top 3 most important, concrete refactoring improvements. For each:
1. Identify specific classes and their problematic dependency patterns
2. Explain why it's a problem (e.g., tight coupling, circular dependencies)
3. Suggest a specific, actionable solution

Focus only on the most critical issues that would give the biggest improvement in maintainability.

Dependency graph:

{report}"""


class AdviceError(RuntimeError):
	pass


class CostEstimate(BaseModel):
	input_tokens: int
	output_tokens: int
	total_cost: float


class Advice(BaseModel):
	provider: str
	advice: str
	cost: Optional[CostEstimate] = None


def estimate_tokens(text: str) -> int:
	"""Rough token count, four characters per token."""
	return len(text) // 4


def estimate_cost(prompt: str, completion: str, config: AdviceConfig) -> CostEstimate:
	input_tokens = estimate_tokens(prompt)
	output_tokens = estimate_tokens(completion)
	total = (
		config.input_cost_per_1k * input_tokens / 1000
		+ config.output_cost_per_1k * output_tokens / 1000
	)
	return CostEstimate(input_tokens=input_tokens, output_tokens=output_tokens, total_cost=total)


def build_prompt(report: str) -> str:
	return REFACTORING_PROMPT.format(report=report)


class RefactoringAdvisor:
	"""Sends the refactoring prompt to Anthropic or a local Ollama server."""

	def __init__(self, config: Optional[AdviceConfig] = None, client: Optional[httpx.Client] = None):
		self.config = config or AdviceConfig()
		if self.config.provider not in PROVIDERS:
			raise AdviceError(f"Unknown provider {self.config.provider!r}, expected one of {', '.join(PROVIDERS)}")
		self.client = client or httpx.Client(timeout=self.config.timeout)

	def _request(self, prompt: str) -> httpx.Request:
		cfg = self.config
		if cfg.provider == "anthropic":
			if not cfg.api_key:
				raise AdviceError("An Anthropic API key is required (set ANTHROPIC_API_KEY)")
			return self.client.build_request(
				"POST",
				cfg.anthropic_url,
				headers={
					"x-api-key": cfg.api_key,
					"anthropic-version": ANTHROPIC_VERSION,
					"content-type": "application/json",
				},
				json={
					"model": cfg.anthropic_model,
					"max_tokens": MAX_TOKENS,
					"messages": [{"role": "user", "content": prompt}],
				},
			)
		return self.client.build_request(
			"POST",
			cfg.ollama_host.rstrip("/") + "/api/generate",
			headers={"Content-Type": "application/json"},
			json={"model": cfg.ollama_model, "stream": False, "prompt": prompt},
		)

	def _extract_text(self, payload: Dict[str, Any]) -> str:
		try:
			if self.config.provider == "anthropic":
				return payload["content"][0]["text"]
			return payload["response"]
		except (KeyError, IndexError, TypeError) as e:
			raise AdviceError(f"Unexpected {self.config.provider} response: {e!r}") from e

	def advise(self, report: str) -> Advice:
		prompt = build_prompt(report)
		request = self._request(prompt)
		try:
			response = self.client.send(request)
		except httpx.HTTPError as e:
			logger.error("Failed to connect to %s: %s", self.config.provider, e)
			raise AdviceError(f"Failed to connect to {self.config.provider}: {e}") from e
		if response.status_code != 200:
			raise AdviceError(f"{self.config.provider} returned HTTP {response.status_code}")
		try:
			payload = response.json()
		except ValueError as e:
			raise AdviceError(f"{self.config.provider} returned invalid JSON") from e

		text = self._extract_text(payload)
		cost = None
		if self.config.provider == "anthropic":
			cost = estimate_cost(prompt, text, self.config)
		return Advice(provider=self.config.provider, advice=text, cost=cost)

	def close(self) -> None:
		self.client.close()
