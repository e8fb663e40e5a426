# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

import os
from pathlib import Path
from typing import Iterator

from .types import _EntryKind, _Metadata, _WalkEntry
from .log import logger

def _walk(root:Path|str) -> Iterator[_WalkEntry]:
	'''
	Lazily yield every entry below `root`, depth-first.

	Each directory is yielded before its descendants. Siblings come out in the order the platform enumerates them. Symlinks are yielded as entries of their own and never entered. `OSError`s raised while reading a directory propagate to the caller.
	'''

	yield from _walk_dir(os.fspath(root), "")

def _walk_dir(root:str, parent_relpath:str) -> Iterator[_WalkEntry]:
	dir = os.path.join(root, parent_relpath) if parent_relpath else root
	logger.debug(f"scanning: {dir}")

	# Read the whole listing so the scandir handle is released before descending.
	entries : list[_WalkEntry] = []
	with os.scandir(dir) as scanner:
		for dir_entry in scanner:
			relpath = os.path.join(parent_relpath, dir_entry.name) if parent_relpath else dir_entry.name
			st = dir_entry.stat(follow_symlinks=False)
			entries.append(_WalkEntry(
				relpath  = relpath,
				kind     = _EntryKind.from_mode(st.st_mode),
				metadata = _Metadata.from_stat(st),
			))

	for entry in entries:
		yield entry
		if entry.kind == _EntryKind.DIR:
			yield from _walk_dir(root, entry.relpath)
