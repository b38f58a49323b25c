from __future__ import annotations

import logging
import os
from typing import Iterable, List, Optional

from .model import FileInfo


logger = logging.getLogger(__name__)

JAVA_EXTENSION = ".java"

# pruned at any depth
DEFAULT_SKIP_DIRS = frozenset({".git", ".hg", ".svn", ".idea", ".gradle", "node_modules"})
# build output, pruned only directly under the scan root; deeper they may be packages
DEFAULT_ROOT_SKIP_DIRS = frozenset({"target", "build", "out"})


def scan_repository(
	root: str,
	skip_dirs: Optional[Iterable[str]] = None,
	root_skip_dirs: Optional[Iterable[str]] = None,
) -> List[FileInfo]:
	"""Every ``.java`` file below ``root``, sorted by relative path."""
	skip = set(DEFAULT_SKIP_DIRS if skip_dirs is None else skip_dirs)
	root_skip = skip | set(DEFAULT_ROOT_SKIP_DIRS if root_skip_dirs is None else root_skip_dirs)
	root = os.path.abspath(root)
	files: List[FileInfo] = []
	for dirpath, dirnames, filenames in os.walk(root):
		pruned = root_skip if dirpath == root else skip
		dirnames[:] = [d for d in dirnames if d not in pruned]
		for filename in filenames:
			if not filename.endswith(JAVA_EXTENSION):
				continue
			path = os.path.join(dirpath, filename)
			files.append(FileInfo(path=path, rel_path=os.path.relpath(path, root)))
	files.sort(key=lambda f: f.rel_path)
	return files


def read_source(path: str) -> Optional[str]:
	"""File contents, or None when the file cannot be opened.

	Bytes that are not UTF-8 (Latin-1 comments in older trees) are replaced
	rather than failing the whole file.
	"""
	try:
		with open(path, "r", encoding="utf-8", errors="replace") as fh:
			return fh.read()
	except OSError as e:
		logger.warning("Failed to read %s: %s", path, e)
		return None
