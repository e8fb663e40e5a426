# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

import os
import stat
import shutil
import tempfile
from pathlib import Path
from dataclasses import dataclass
from typing import Iterator

from .config import CopyConfig
from .policy import _Decision
from .types import _EntryKind, _Metadata, _WalkEntry
from .errors import DestCreationError, StructuralConflictError, UnsupportedOperationError
from .log import logger, _exc_summary

@dataclass(frozen=True)
class Operation:
	'''Filesystem operation yielded by `_OperationFactory`.'''

	config      : CopyConfig
	entry       : _WalkEntry
	bytes_copied: int = 0

	@property
	def src(self) -> Path:
		return self.config.source / self.entry.relpath

	@property
	def dst(self) -> Path:
		return self.config.dest / self.entry.relpath

	def perform(self):
		'''Perform the filesystem operation associated with this object.'''

		raise NotImplementedError()

	@property
	def changes_dst(self) -> bool:
		'''Whether performing this operation writes to the dest tree.'''

		return True

	@property
	def summary(self):
		'''A string summary that will be logged when the `Operation` is performed.'''

		raise NotImplementedError()

	def __str__(self):
		return self.summary

@dataclass(frozen=True)
class CreateDirOperation(Operation):
	def perform(self):
		_mkdir(self.dst)

	@property
	def summary(self):
		return f"+ {self.entry.relpath}{os.sep}"

@dataclass(frozen=True)
class CreateFileOperation(Operation):
	def perform(self):
		_copy(self.src, self.dst)

	@property
	def summary(self):
		return f"+ {self.entry.relpath}"

@dataclass(frozen=True)
class UpdateFileOperation(Operation):
	def perform(self):
		_copy(self.src, self.dst)

	@property
	def summary(self):
		return f"U {self.entry.relpath}"

@dataclass(frozen=True)
class CreateSymlinkOperation(Operation):
	def perform(self):
		try:
			_create_symlink(self.src, self.dst)
		except UnsupportedOperationError as e:
			logger.warning(_exc_summary(e))

	@property
	def target(self) -> str:
		return _readlink(self.src)

	@property
	def summary(self):
		return f"L {self.entry.relpath} -> {self.target}"

@dataclass(frozen=True)
class UpdateSymlinkOperation(CreateSymlinkOperation):
	@property
	def summary(self):
		return f"U {self.entry.relpath} -> {self.target}"

@dataclass(frozen=True)
class SkipOperation(Operation): # dst exists and the overwrite policy said no
	def perform(self):
		pass

	@property
	def changes_dst(self) -> bool:
		return False

	@property
	def summary(self):
		return f"= {self.entry.relpath}"

class _OperationFactory:
	'''Determines which `Operation`s to yield for a walk entry, in accordance with the `CopyConfig` settings and whatever currently sits at the matching dest path.'''

	def __init__(self, config: CopyConfig):
		self.config = config

	def get_ops(self, entry:_WalkEntry) -> Iterator[Operation]:
		dst = self.config.dest / entry.relpath
		dst_stat = _lstat_or_none(dst)
		dst_kind = None if dst_stat is None else _EntryKind.from_mode(dst_stat.st_mode)

		if entry.kind == _EntryKind.DIR:
			if dst_kind is None:
				yield CreateDirOperation(config=self.config, entry=entry)
			elif dst_kind != _EntryKind.DIR:
				raise StructuralConflictError("Cannot create directory, dst is not a directory", str(dst))

		elif entry.kind == _EntryKind.FILE:
			if dst_kind is None:
				yield CreateFileOperation(config=self.config, entry=entry, bytes_copied=entry.metadata.size)
			elif dst_kind != _EntryKind.FILE:
				raise StructuralConflictError("Cannot copy file, dst is not a file", str(dst))
			elif self.config.policy.decide(entry.metadata, _Metadata.from_stat(dst_stat)) == _Decision.REPLACE:
				yield UpdateFileOperation(config=self.config, entry=entry, bytes_copied=entry.metadata.size)
			else:
				yield SkipOperation(config=self.config, entry=entry)

		elif entry.kind == _EntryKind.SYMLINK:
			if dst_kind is None:
				yield CreateSymlinkOperation(config=self.config, entry=entry)
			elif dst_kind != _EntryKind.SYMLINK:
				raise StructuralConflictError("Cannot create symlink, dst is not a symlink", str(dst))
			elif self.config.policy.decide(entry.metadata, _Metadata.from_stat(dst_stat)) == _Decision.REPLACE:
				yield UpdateSymlinkOperation(config=self.config, entry=entry)
			else:
				yield SkipOperation(config=self.config, entry=entry)

		else:
			# sockets, named pipes, block & character devices
			logger.debug(f"Ignoring non-standard file: {entry.relpath}")

def _lstat_or_none(path:Path) -> os.stat_result|None:
	'''Stat `path` without following symlinks. Returns `None` if nothing is there.'''

	try:
		return os.lstat(path)
	except (FileNotFoundError, NotADirectoryError):
		# NotADirectoryError: some ancestor is a file, reported later when the ancestor is created
		return None

def _mkdir(dir:Path) -> None:
	'''Create `dir` and any missing ancestors. Existing directories are fine.'''

	try:
		dir.mkdir(parents=True, exist_ok=True)
	except OSError as e:
		raise DestCreationError(e.errno, "Cannot create directory", str(dir)) from e

def _copy(src:Path, dst:Path) -> None:
	'''Copy file from `src` to `dst`, keeping timestamp metadata and permission bits. An existing file at `dst` is overwritten.'''

	if os.path.lexists(dst) and not stat.S_ISREG(os.lstat(dst).st_mode):
		raise StructuralConflictError(f"Cannot copy {src}, dst is not a file", str(dst))

	_mkdir(dst.parent)
	fd, tmp_name = tempfile.mkstemp(dir=dst.parent, prefix=f".{dst.name}.", suffix=".tmp")
	os.close(fd)
	dst_tmp = Path(tmp_name)
	try:
		# Copy into the temp file, with metadata
		shutil.copy2(src, dst_tmp, follow_symlinks=False)
		# replace the dst file
		_replace(dst_tmp, dst)
	finally:
		dst_tmp.unlink(missing_ok=True)

def _readlink(src:Path) -> str:
	target = os.readlink(src)
	if os.name == "nt" and (target.startswith("\\\\?\\") or target.startswith("\\??\\")):
		target = target[4:]
	return target

def _create_symlink(src:Path, dst:Path) -> None:
	'''Recreate the symlink `src` at `dst` with the same target string. Modification time is copied from `src` itself, not its target.'''

	if os.path.lexists(dst) and not os.path.islink(dst):
		raise StructuralConflictError("Cannot create symlink, dst is not a symlink", str(dst))

	target = _readlink(src)
	st = os.lstat(src)

	_mkdir(dst.parent)
	# os.symlink cannot overwrite, so the link is staged inside a fresh private dir
	tmp_dir = Path(tempfile.mkdtemp(dir=dst.parent, prefix=f".{dst.name}.", suffix=".tmp"))
	dst_tmp = tmp_dir / dst.name
	try:
		os.symlink(target, dst_tmp, target_is_directory=os.path.isdir(src))
		# replace the dst link
		_replace(dst_tmp, dst)
	finally:
		dst_tmp.unlink(missing_ok=True)
		tmp_dir.rmdir()

	# update time metadata
	try:
		os.utime(dst, ns=(st.st_atime_ns, st.st_mtime_ns), follow_symlinks=False)
	except NotImplementedError as e:
		raise UnsupportedOperationError(f"Cannot update symlink mtime on this platform: {dst}") from e

def _replace(src:Path, dst:Path) -> None:
	'''Move file from `src` to `dst`. Existing files will be overwritten.'''

	try:
		os.replace(src, dst)
	except PermissionError as e:
		# Remove read-only flag and try again
		if not os.path.lexists(dst) or os.path.islink(dst):
			raise e
		dst_mode = os.stat(dst).st_mode
		if dst_mode & stat.S_IWRITE:
			raise e
		os.chmod(dst, dst_mode | stat.S_IWRITE)
		os.replace(src, dst)
