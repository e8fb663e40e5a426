# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

import os
import stat
from enum import Enum
from dataclasses import dataclass
from typing import Protocol

class _AbstractStat(Protocol):
	'''Protocol class representing a stat-like object.'''

	@property
	def st_size(self) -> int:
		...

	@property
	def st_mode(self) -> int:
		...

	@property
	def st_mtime(self) -> float:
		...

class _EntryKind(Enum):
	DIR     = 1
	FILE    = 2
	SYMLINK = 3
	OTHER   = 4

	@classmethod
	def from_mode(cls, mode:int) -> "_EntryKind":
		'''
		Classify a `st_mode` value. Symlinks are checked first, so `mode` should come from an `lstat()`.

		>>> _EntryKind.from_mode(stat.S_IFDIR | 0o755).name
		'DIR'
		>>> _EntryKind.from_mode(stat.S_IFLNK | 0o777).name
		'SYMLINK'
		>>> _EntryKind.from_mode(stat.S_IFIFO | 0o644).name
		'OTHER'
		'''

		if stat.S_ISLNK(mode):
			return cls.SYMLINK
		if stat.S_ISDIR(mode):
			return cls.DIR
		if stat.S_ISREG(mode):
			return cls.FILE
		return cls.OTHER

@dataclass(frozen=True)
class _Metadata:
	'''Size and modification time of an entry, captured once and never refreshed.'''

	size  : int
	mtime : float

	@classmethod
	def from_stat(cls, st:_AbstractStat) -> "_Metadata":
		return cls(size=st.st_size, mtime=st.st_mtime)

@dataclass(frozen=True)
class _WalkEntry:
	'''Filesystem entries yielded by `_walk()`.'''

	relpath  : str
	kind     : _EntryKind
	metadata : _Metadata

	def __post_init__(self):
		assert self.relpath != ""
		assert not self.relpath.startswith(os.sep)
		assert ".." not in self.relpath.split(os.sep)

	def __str__(self):
		if self.kind == _EntryKind.DIR:
			return self.relpath + os.sep
		return self.relpath
