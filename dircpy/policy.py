# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

from enum import Enum
from dataclasses import dataclass

from .types import _Metadata

class _Decision(Enum):
	SKIP    = 0
	REPLACE = 1

@dataclass(frozen=True)
class OverwritePolicy:
	'''
	Decides whether an existing dest entry gets replaced by its src counterpart.

	The three rules are independent and OR-composed: any enabled rule that fires means REPLACE.

	>>> old, new = _Metadata(size=5, mtime=1.0), _Metadata(size=5, mtime=2.0)
	>>> OverwritePolicy().decide(new, old).name
	'SKIP'
	>>> OverwritePolicy(overwrite_if_newer=True).decide(new, old).name
	'REPLACE'
	>>> OverwritePolicy(overwrite_if_newer=True).decide(old, old).name
	'SKIP'
	>>> OverwritePolicy(overwrite_if_size_differs=True).decide(new, old).name
	'SKIP'
	'''

	overwrite_all             : bool = False
	overwrite_if_newer        : bool = False
	overwrite_if_size_differs : bool = False

	@property
	def any(self) -> bool:
		return self.overwrite_all or self.overwrite_if_newer or self.overwrite_if_size_differs

	def decide(self, src:_Metadata, dst:_Metadata) -> _Decision:
		if self.overwrite_all:
			return _Decision.REPLACE
		if self.overwrite_if_newer and src.mtime > dst.mtime:
			return _Decision.REPLACE
		if self.overwrite_if_size_differs and src.size != dst.size:
			return _Decision.REPLACE
		return _Decision.SKIP
