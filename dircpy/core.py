# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

import os
from enum import Enum
from pathlib import Path
from dataclasses import fields
from typing import Iterable, Counter as CounterType
from collections import Counter, namedtuple

from ordered_set import OrderedSet

from .config import CopyConfig
from .filter import SubstringFilter
from .operations import _OperationFactory, _mkdir
from .operations import * # Operations
from .walk import _walk
from .helpers import _overlap, _human_readable_size
from .errors import InvalidSourceError, DestCreationError, StructuralConflictError, FilterMisuseError, StateError, ImmutableObjectError
from .log import logger, _RecordTag, _exc_summary

class Results:
	'''Various statistics and other information returned by `CopyRunner.run()`.'''

	Counts = namedtuple("Counts", ["created", "updated", "skipped"])

	class Status(Enum):
		UNKNOWN              = -1
		COMPLETED            = 0
		INVALID_SOURCE       = 1
		DEST_CREATION_FAILED = 2
		STRUCTURAL_CONFLICT  = 3
		IO_ERROR             = 4
		FILTER_MISUSE        = 5 # only from `status_for()`; bad patterns are rejected before a run starts
		INTERRUPTED_BY_USER  = 6
		INTERRUPTED_BY_ERROR = 7

	def __init__(self, config: CopyConfig):
		self.config       : CopyConfig = config
		self.status       : Results.Status = Results.Status.UNKNOWN
		self.error        : BaseException|None = None # the error that prevented or halted the copy
		self.failed_op    : Operation|None = None
		self.op_counts    : CounterType[type[Operation]] = Counter()
		self.bytes_copied : int = 0

	def tally(self, op:Operation):
		self.op_counts[type(op)] += 1
		self.bytes_copied += op.bytes_copied

	@classmethod
	def status_for(cls, e:BaseException) -> "Results.Status":
		'''
		Map an error to the status that reports it. Subclasses are checked before `OSError`.

		>>> Results.status_for(StructuralConflictError("dst is not a file", "d/a")).name
		'STRUCTURAL_CONFLICT'
		>>> Results.status_for(PermissionError(13, "Permission denied", "d/a")).name
		'IO_ERROR'
		>>> Results.status_for(FilterMisuseError("Empty filter patterns are not allowed")).name
		'FILTER_MISUSE'
		>>> Results.status_for(ZeroDivisionError()).name
		'INTERRUPTED_BY_ERROR'
		'''

		if isinstance(e, InvalidSourceError):
			return cls.Status.INVALID_SOURCE
		if isinstance(e, DestCreationError):
			return cls.Status.DEST_CREATION_FAILED
		if isinstance(e, StructuralConflictError):
			return cls.Status.STRUCTURAL_CONFLICT
		if isinstance(e, FilterMisuseError):
			return cls.Status.FILTER_MISUSE
		if isinstance(e, OSError):
			return cls.Status.IO_ERROR
		if isinstance(e, KeyboardInterrupt):
			return cls.Status.INTERRUPTED_BY_USER
		return cls.Status.INTERRUPTED_BY_ERROR

	@property
	def counts(self) -> "Results.Counts":
		return Results.Counts(
			created = sum(self.op_counts[t] for t in (CreateFileOperation, CreateSymlinkOperation, CreateDirOperation)),
			updated = sum(self.op_counts[t] for t in (UpdateFileOperation, UpdateSymlinkOperation)),
			skipped = self.op_counts[SkipOperation],
		)

	@property
	def write_count(self) -> int:
		'''Number of operations that wrote to the dest tree.'''

		counts = self.counts
		return counts.created + counts.updated

	@property
	def exit_code(self) -> int:
		'''0 on success, non-zero on any failure.'''

		return 0 if self.status == Results.Status.COMPLETED else 1

	def __getitem__(self, key):
		return self.op_counts[key]

	def summary(self):
		status = self.status.name.replace("_", " ").title()
		counts = self.counts
		lines = []
		if self.config.dry_run:
			lines.append(f"Status: {status} (Dry Run)")
		else:
			lines.append(f"Status: {status}")
			lines.append(f"Created: {counts.created}")
			lines.append(f"Updated: {counts.updated}")
			lines.append(f"Skipped: {counts.skipped}")
			lines.append(f"Copied: {_human_readable_size(self.bytes_copied)}")
		if self.error is not None:
			lines.append(f"Error: {_exc_summary(self.error)}")
		key_length = max(line.find(":") for line in lines)
		for line in lines:
			yield f"{line:>{len(line) + key_length - line.find(':')}}"

class CopyBuilder:
	'''
	`CopyBuilder` collects the settings for a copy operation one step at a time and then runs it.

	A default copy reproduces every directory, file, and symlink of `source` under `dest`, creating `dest` if needed. Files that already exist in `dest` are left alone unless one of the overwrite settings says otherwise. Entries can be excluded or included by substring.

	A builder is good for exactly one `run()`. After that (or after `close()`) its settings can no longer be changed.

	Example Console Output (print level INFO)
		+ sub/
		+ sub/b.txt
		U a.txt
		L link -> a.txt
		  -------
		   Status: Completed
		  Created: 3
		  Updated: 1
		  Skipped: 0
		   Copied: 10 bytes
	'''

	class _BuilderState(Enum):
		INVALID    = 0
		READY      = 1
		TERMINATED = 2
		CLOSED     = 3

	def __init__(self, source:Path|str, dest:Path|str, **kwargs):
		'''
		Collects and validates arguments for a copy operation.

		Args
			source (str or PathLike) : The root directory to copy from. Can be a symlink to a directory.
			dest   (str or PathLike) : The root directory to copy into. Created if it does not exist.

			overwrite_all             (bool) : Whether to replace existing files in `dest` unconditionally. (Defaults to `False`.)
			overwrite_if_newer        (bool) : Whether to replace existing files in `dest` whose modification time is older than that of `source`. (Defaults to `False`.)
			overwrite_if_size_differs (bool) : Whether to replace existing files in `dest` whose size differs from that of `source`. (Defaults to `False`.)
			exclude_filters  (list of str) : Entries whose relative path contains any of these strings are not copied.
			include_filters  (list of str) : If non-empty, only entries whose relative path contains one of these strings are copied.
			dry_run                   (bool) : Whether to only log the operations that would be performed. (Defaults to `False`.)
		'''

		self._state = CopyBuilder._BuilderState.INVALID

		self._source : Path
		self._dest   : Path

		self.source = source
		self.dest = dest

		self._overwrite_all             : bool = False
		self._overwrite_if_newer        : bool = False
		self._overwrite_if_size_differs : bool = False
		self._exclude_filters           : OrderedSet[str] = OrderedSet()
		self._include_filters           : OrderedSet[str] = OrderedSet()
		self._dry_run                   : bool = False

		options = CopyBuilder._option_names()
		for key in kwargs:
			if key not in options:
				raise AttributeError(f"CopyBuilder object has no '{key}' option.")
			setattr(self, key, kwargs[key])

		self._state = CopyBuilder._BuilderState.READY

	@staticmethod
	def _option_names() -> list[str]:
		'''Settings that can be passed to `__init__()` and are copied into a `CopyConfig`.'''

		return [f.name for f in fields(CopyConfig) if f.init]

	def _check_mutable(self) -> None:
		if self._state in (CopyBuilder._BuilderState.TERMINATED, CopyBuilder._BuilderState.CLOSED):
			raise ImmutableObjectError(f"CopyBuilder can no longer be modified (state is {self._state.name}).")

	# -------------------------------------------------------------------------
	# Instance methods

	def overwrite(self, val:bool = True) -> "CopyBuilder":
		'''Overwrite files in `dest` unconditionally.'''

		self.overwrite_all = val
		return self

	def with_overwrite_if_newer(self, val:bool = True) -> "CopyBuilder":
		'''Overwrite files in `dest` that are older than their `source` counterpart.'''

		self.overwrite_if_newer = val
		return self

	def with_overwrite_if_size_differs(self, val:bool = True) -> "CopyBuilder":
		self.overwrite_if_size_differs = val
		return self

	def with_exclude_filter(self, *patterns:str) -> "CopyBuilder":
		'''Do not copy entries whose relative path contains any of these strings.'''

		self._check_mutable()
		for pattern in patterns:
			self._exclude_filters.add(SubstringFilter._check_pattern(pattern))
		return self

	def with_include_filter(self, *patterns:str) -> "CopyBuilder":
		'''Only copy entries whose relative path contains one of these strings.'''

		self._check_mutable()
		for pattern in patterns:
			self._include_filters.add(SubstringFilter._check_pattern(pattern))
		return self

	def build(self) -> CopyConfig:
		'''Freeze the current settings into a `CopyConfig`.'''

		if self._state == CopyBuilder._BuilderState.CLOSED:
			raise StateError("CopyBuilder has been closed.")
		options = {name: getattr(self, name) for name in CopyBuilder._option_names()}
		return CopyConfig(**options)

	def run(self) -> Results:
		'''Runs the copy operation. `run()` does not raise errors from the copy itself. If an error occurs, it will be available in the returned `Results` object.'''

		if self._state != CopyBuilder._BuilderState.READY:
			raise StateError("CopyBuilder state is not READY.")
		config = self.build()
		self._state = CopyBuilder._BuilderState.TERMINATED
		return CopyRunner.run(config)

	def close(self) -> None:
		'''Release the builder. Further use raises `StateError`.'''

		self._state = CopyBuilder._BuilderState.CLOSED
		self._exclude_filters.clear()
		self._include_filters.clear()

	def __enter__(self) -> "CopyBuilder":
		return self

	def __exit__(self, exc_type, exc_val, exc_tb) -> None:
		self.close()

	# -------------------------------------------------------------------------
	# Collected & validated arguments

	@property
	def source(self) -> Path:
		return self._source

	@source.setter
	def source(self, val:Path|str) -> None:
		self._check_mutable()
		if not isinstance(val, os.PathLike|str):
			raise TypeError(f"Bad type for property 'source' (expected {os.PathLike|str}): {val}")
		self._source = Path(os.path.expanduser(val))

	@property
	def dest(self) -> Path:
		return self._dest

	@dest.setter
	def dest(self, val:Path|str) -> None:
		self._check_mutable()
		if not isinstance(val, os.PathLike|str):
			raise TypeError(f"Bad type for property 'dest' (expected {os.PathLike|str}): {val}")
		self._dest = Path(os.path.expanduser(val))

	@property
	def overwrite_all(self) -> bool:
		return self._overwrite_all

	@overwrite_all.setter
	def overwrite_all(self, val:bool) -> None:
		self._check_mutable()
		if not isinstance(val, bool):
			raise TypeError(f"Bad type for property 'overwrite_all' (expected bool): {val}")
		self._overwrite_all = val

	@property
	def overwrite_if_newer(self) -> bool:
		return self._overwrite_if_newer

	@overwrite_if_newer.setter
	def overwrite_if_newer(self, val:bool) -> None:
		self._check_mutable()
		if not isinstance(val, bool):
			raise TypeError(f"Bad type for property 'overwrite_if_newer' (expected bool): {val}")
		self._overwrite_if_newer = val

	@property
	def overwrite_if_size_differs(self) -> bool:
		return self._overwrite_if_size_differs

	@overwrite_if_size_differs.setter
	def overwrite_if_size_differs(self, val:bool) -> None:
		self._check_mutable()
		if not isinstance(val, bool):
			raise TypeError(f"Bad type for property 'overwrite_if_size_differs' (expected bool): {val}")
		self._overwrite_if_size_differs = val

	@property
	def exclude_filters(self) -> tuple[str, ...]:
		return tuple(self._exclude_filters)

	@exclude_filters.setter
	def exclude_filters(self, val:Iterable[str]) -> None:
		self._check_mutable()
		if isinstance(val, str):
			raise TypeError(f"Bad type for property 'exclude_filters' (expected a list of str): {val}")
		self._exclude_filters = OrderedSet(SubstringFilter._check_pattern(p) for p in val)

	@property
	def include_filters(self) -> tuple[str, ...]:
		return tuple(self._include_filters)

	@include_filters.setter
	def include_filters(self, val:Iterable[str]) -> None:
		self._check_mutable()
		if isinstance(val, str):
			raise TypeError(f"Bad type for property 'include_filters' (expected a list of str): {val}")
		self._include_filters = OrderedSet(SubstringFilter._check_pattern(p) for p in val)

	@property
	def dry_run(self) -> bool:
		return self._dry_run

	@dry_run.setter
	def dry_run(self, val:bool) -> None:
		self._check_mutable()
		if not isinstance(val, bool):
			raise TypeError(f"Bad type for property 'dry_run' (expected bool): {val}")
		self._dry_run = val

class CopyRunner:

	@classmethod
	def validate(cls, config: CopyConfig) -> None:
		'''Check the source root before anything is written.'''

		source = config.source
		if not source.exists():
			raise InvalidSourceError("'source' does not exist", str(source))
		if not source.is_dir():
			raise InvalidSourceError("'source' is not a directory", str(source))
		if not os.access(source, os.R_OK | os.X_OK):
			raise InvalidSourceError("'source' is not readable", str(source))
		err = _overlap(source.resolve(), config.dest.resolve())
		if err:
			raise InvalidSourceError(err, str(source))

	@classmethod
	def run(cls, config: CopyConfig) -> Results:
		'''Copy `config.source` into `config.dest`, stopping at the first error.'''

		results = Results(config)
		FOOTER  = _RecordTag.FOOTER.dict()
		COPY_OP = _RecordTag.COPY_OP.dict()
		op      = None

		try:
			logger.debug(repr(config))
			logger.debug(f"filter: {config.filter}")

			cls.validate(config)
			if not config.dry_run:
				_mkdir(config.dest)

			factory = _OperationFactory(config)
			filter  = config.filter.filter

			for entry in _walk(config.source):
				if not filter(entry.relpath):
					logger.debug(f"Filtered out: {entry}")
					continue

				for op in factory.get_ops(entry):
					if not op.changes_dst:
						logger.debug(f"Skipping existing: {entry}")
						results.tally(op)
						continue

					logger.info(op.summary, extra=COPY_OP)

					if not config.dry_run:
						op.perform()
						results.tally(op)
				op = None

			results.status = Results.Status.COMPLETED
		except KeyboardInterrupt as e:
			results.status = Results.Status.INTERRUPTED_BY_USER
			results.error = e
			raise e
		except Exception as e:
			results.status = Results.status_for(e)
			results.error = e
			results.failed_op = op
			if results.status == Results.Status.INTERRUPTED_BY_ERROR:
				logger.critical("An unexpected error occurred.", exc_info=True)
			else:
				logger.error(_exc_summary(e))
		finally:
			logger.info("-------", extra=FOOTER)
			for line in results.summary():
				logger.info(line, extra=FOOTER)

		return results

def copy_dir(source:Path|str, dest:Path|str) -> int:
	'''
	Copy the `source` directory into `dest` without overwriting anything.

	Returns 0 on success and a non-zero value on failure.
	'''

	return copy_dir_advanced(source, dest, False, False, False, (), ())

def copy_dir_advanced(source:Path|str, dest:Path|str, overwrite_all:bool, overwrite_if_newer:bool, overwrite_if_size_differs:bool, exclude_filters:Iterable[str], include_filters:Iterable[str]) -> int:
	'''
	Copy the `source` directory into `dest` with every setting given up front.

	Returns 0 on success and a non-zero value on failure.
	'''

	try:
		config = CopyConfig(
			source                    = source,
			dest                      = dest,
			overwrite_all             = overwrite_all,
			overwrite_if_newer        = overwrite_if_newer,
			overwrite_if_size_differs = overwrite_if_size_differs,
			exclude_filters           = exclude_filters,
			include_filters           = include_filters,
		)
	except (TypeError, ValueError) as e:
		logger.error(_exc_summary(e))
		return 1
	return CopyRunner.run(config).exit_code
