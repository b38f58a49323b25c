from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

import uvicorn

from javadeps.advice import PROVIDERS, Advice, AdviceError, RefactoringAdvisor
from javadeps.config import AdviceConfig, ConfigError, load_config
from javadeps.pipeline import analyze_repository
from javadeps.summarize import render_graph, summarize_scan


def fetch_advice(report: str, advice_config: AdviceConfig) -> Optional[Advice]:
	"""Refactoring advice for ``report``; failures are warnings, never fatal."""
	try:
		advisor = RefactoringAdvisor(advice_config)
		try:
			return advisor.advise(report)
		finally:
			advisor.close()
	except AdviceError as e:
		print(f"Warning: no refactoring advice: {e}", file=sys.stderr)
		return None


def cmd_analyze(args: argparse.Namespace) -> int:
	root = os.path.abspath(args.path)
	if not os.path.isdir(root):
		print(f"Error: {args.path} is not an accessible directory", file=sys.stderr)
		return 2

	try:
		config = load_config(
			args.config,
			{
				"project_package": args.project_package,
				"workers": args.workers,
				"include_reverse": False if args.no_reverse else None,
				"resolve_references": False if args.no_references else None,
			},
		)
	except ConfigError as e:
		print(f"Error: {e}", file=sys.stderr)
		return 2

	result = analyze_repository(root, config)
	report = render_graph(result.graph)

	advice: Optional[Advice] = None
	if args.advice:
		advice = fetch_advice(report, AdviceConfig.from_env(config.advice, provider=args.advice))

	if args.json:
		payload = result.model_dump(mode="json")
		if advice is not None:
			payload["advice"] = advice.model_dump(mode="json")
		print(json.dumps(payload, indent=2))
		return 0

	print(summarize_scan(result))
	print()
	print(report)
	if advice is not None:
		print("\nRefactoring advice:\n")
		print(advice.advice)
		if advice.cost is not None:
			print(
				f"\nEstimated tokens: {advice.cost.input_tokens} in, {advice.cost.output_tokens} out"
				f" (~${advice.cost.total_cost:.4f})"
			)
	return 0


def cmd_serve(args: argparse.Namespace) -> int:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
	return 0


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="javadeps")
	parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pa = sub.add_parser("analyze", help="Scan a Java source tree and print its dependency graph")
	pa.add_argument("path", help="Directory to scan")
	pa.add_argument("-p", "--project-package", help="Base package of the project, e.g. com.example")
	pa.add_argument("--config", help="YAML config file (default: ./.javadeps.yaml if present)")
	pa.add_argument("--workers", type=int, help="Parse files with this many threads")
	pa.add_argument("--no-reverse", action="store_true", help="Skip the 'Used by' index")
	pa.add_argument("--no-references", action="store_true", help="Only use import statements")
	pa.add_argument("--json", action="store_true", help="Print the scan result as JSON")
	pa.add_argument("--advice", choices=PROVIDERS, help="Ask an LLM for refactoring advice")
	pa.set_defaults(func=cmd_analyze)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)
	return parser


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.INFO,
		format="%(levelname)s %(name)s: %(message)s",
		stream=sys.stderr,
	)
	return args.func(args)


if __name__ == "__main__":
	sys.exit(main())
