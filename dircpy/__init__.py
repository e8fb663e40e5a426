# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

from .core import CopyBuilder, CopyRunner, Results, copy_dir, copy_dir_advanced
from .config import CopyConfig
from .operations import Operation, CreateDirOperation, CreateFileOperation, UpdateFileOperation, CreateSymlinkOperation, UpdateSymlinkOperation, SkipOperation
from .filter import Filter, SubstringFilter
from .policy import OverwritePolicy
from .errors import InvalidSourceError, DestCreationError, StructuralConflictError, FilterMisuseError, StateError, ImmutableObjectError, UnsupportedOperationError

__all__ = [
	"copy_dir",
	"copy_dir_advanced",
	"CopyBuilder",
	"CopyRunner",
	"CopyConfig",
	"Results",
	"Operation",
	"CreateDirOperation",
	"CreateFileOperation",
	"UpdateFileOperation",
	"CreateSymlinkOperation",
	"UpdateSymlinkOperation",
	"SkipOperation",
	"Filter",
	"SubstringFilter",
	"OverwritePolicy",
	"InvalidSourceError",
	"DestCreationError",
	"StructuralConflictError",
	"FilterMisuseError",
	"StateError",
	"ImmutableObjectError",
	"UnsupportedOperationError",
]
