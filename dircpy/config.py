# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

import os
from pathlib import Path
from dataclasses import dataclass, field

from .filter import SubstringFilter
from .policy import OverwritePolicy

@dataclass(frozen=True)
class CopyConfig:
	'''Read-only parameters for a single copy run. Built directly, or frozen from a `CopyBuilder`.'''

	source                    : Path
	dest                      : Path
	overwrite_all             : bool = False
	overwrite_if_newer        : bool = False
	overwrite_if_size_differs : bool = False
	exclude_filters           : tuple[str, ...] = ()
	include_filters           : tuple[str, ...] = ()
	dry_run                   : bool = False

	# derived
	filter                    : SubstringFilter = field(init=False, repr=False, compare=False)
	policy                    : OverwritePolicy = field(init=False, repr=False, compare=False)

	def __post_init__(self):
		# paths and pattern lists are normalized to their frozen forms
		object.__setattr__(self, "source", Path(os.fspath(self.source)))
		object.__setattr__(self, "dest", Path(os.fspath(self.dest)))
		if isinstance(self.exclude_filters, str) or isinstance(self.include_filters, str):
			raise TypeError("Filter lists must be sequences of strings, not a single string")
		filter = SubstringFilter(exclude=self.exclude_filters, include=self.include_filters)
		object.__setattr__(self, "exclude_filters", filter.excludes)
		object.__setattr__(self, "include_filters", filter.includes)
		object.__setattr__(self, "filter", filter)
		for name in ("overwrite_all", "overwrite_if_newer", "overwrite_if_size_differs", "dry_run"):
			object.__setattr__(self, name, bool(getattr(self, name)))
		object.__setattr__(self, "policy", OverwritePolicy(
			overwrite_all             = self.overwrite_all,
			overwrite_if_newer        = self.overwrite_if_newer,
			overwrite_if_size_differs = self.overwrite_if_size_differs,
		))
