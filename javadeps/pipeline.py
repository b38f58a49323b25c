"""Scan a source tree, parse every Java file and build the dependency graph."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from .config import AnalyzerConfig
from .fs_scan import read_source, scan_repository
from .graph import build_dependency_graph
from .java_parse import RegexJavaExtractor, SourceExtractor
from .model import FileInfo, ScanResult, SourceUnit


logger = logging.getLogger(__name__)

PROGRESS_EVERY = 10


def parse_file(info: FileInfo, extractor: SourceExtractor) -> Optional[SourceUnit]:
	text = read_source(info.path)
	if text is None:
		return None
	try:
		unit = extractor.extract(text, os.path.basename(info.path))
	except Exception as e:
		logger.warning("Failed to parse %s: %s", info.rel_path, e)
		return None
	return unit.model_copy(update={"path": info.rel_path})


def parse_files(
	files: Sequence[FileInfo],
	extractor: SourceExtractor,
	workers: int = 1,
) -> List[Optional[SourceUnit]]:
	"""Parse ``files`` in order; unreadable files come back as None."""
	total = len(files)
	results: List[Optional[SourceUnit]] = []

	def _record(unit: Optional[SourceUnit]) -> None:
		results.append(unit)
		done = len(results)
		if done % PROGRESS_EVERY == 0:
			succeeded = sum(1 for r in results if r is not None)
			logger.info("Processed %d of %d files (%d succeeded)", done, total, succeeded)

	if workers > 1:
		with ThreadPoolExecutor(max_workers=workers) as pool:
			for unit in pool.map(lambda f: parse_file(f, extractor), files):
				_record(unit)
	else:
		for f in files:
			_record(parse_file(f, extractor))
	return results


def analyze_repository(
	root: str,
	config: Optional[AnalyzerConfig] = None,
	extractor: Optional[SourceExtractor] = None,
) -> ScanResult:
	config = config or AnalyzerConfig()
	if extractor is None:
		extractor = RegexJavaExtractor(with_references=config.resolve_references)
	root = os.path.abspath(root)

	files = scan_repository(root, skip_dirs=config.skip_dirs, root_skip_dirs=config.root_skip_dirs)
	logger.info("Found %d Java files to process", len(files))

	units: List[SourceUnit] = []
	failed: List[str] = []
	for info, unit in zip(files, parse_files(files, extractor, workers=config.workers)):
		if unit is None:
			failed.append(info.rel_path)
		else:
			units.append(unit)
	if failed:
		logger.warning("Skipped %d unreadable or unparseable files", len(failed))

	logger.info("Building dependency graph from %d parsed files", len(units))
	graph = build_dependency_graph(
		units,
		config.rule,
		include_reverse=config.include_reverse,
		resolve_references=config.resolve_references,
	)
	return ScanResult(
		root=root,
		files_found=len(files),
		files_parsed=len(units),
		failed_files=failed,
		units=units,
		graph=graph,
	)
