# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

import os
import hashlib
from pathlib import Path

class TempLoggingLevel:
	def __init__(self, logger, level):
		self.logger = logger
		self.level = level
	def __enter__(self):
		self.old_level = self.logger.level
		self.logger.setLevel(self.level)
	def __exit__(self, exc_type, exc_val, exc_tb):
		self.logger.setLevel(self.old_level)

def hash_directory(root:Path, *, include_mtime=False):
	'''Hash the relative paths, file contents, and symlink targets under `root`.'''
	hasher = hashlib.sha256()
	for dir, dirnames, filenames in os.walk(root, followlinks=False):
		dirnames.sort()
		filenames.sort()
		dir_relpath = os.path.relpath(dir, root)
		hasher.update(dir_relpath.encode())
		# symlinks to directories show up in dirnames but are not walked
		for name in sorted(filenames + [d for d in dirnames if os.path.islink(os.path.join(dir, d))]):
			file_path = os.path.join(dir, name)
			hasher.update(os.path.relpath(file_path, root).encode())
			if os.path.islink(file_path):
				hasher.update(os.readlink(file_path).encode())
				continue
			if include_mtime:
				hasher.update(str(os.stat(file_path).st_mtime_ns).encode())
			with open(file_path, "rb") as f:
				while True:
					buf = f.read(4096)
					if not buf:
						break
					hasher.update(buf)
	return hasher.hexdigest()

def list_tree(root:Path) -> set[str]:
	'''All relative paths under `root`, without following symlinks.'''
	paths = set()
	for dir, dirnames, filenames in os.walk(root, followlinks=False):
		for name in dirnames + filenames:
			paths.add(os.path.relpath(os.path.join(dir, name), root))
	return paths

def create_file_structure(root:Path, structure:dict, *, _symlinks:dict|None = None):
	'''Recursively creates a directory structure with files.'''
	root.mkdir(parents=True, exist_ok=True)
	if _symlinks is not None:
		symlinks = _symlinks
	else:
		symlinks = {}
	for name, content in structure.items():
		file_path = root / name
		if isinstance(content, Path):
			# create symlink
			symlinks[file_path] = content
		elif isinstance(content, dict):
			# create dir
			create_file_structure(file_path, content, _symlinks=symlinks)
		elif type(content) in (float, int):
			file_path.touch()
			mtime = float(content)
			os.utime(file_path, (mtime, mtime))
		elif isinstance(content, (tuple, list)):
			# Create file with modtime and content
			file_path.write_text(content[0] or "")
			mtime = float(content[1])
			os.utime(file_path, (mtime, mtime))
		elif content is None:
			# Create an empty file
			file_path.touch()
		else:
			# Create a file with content
			file_path.write_text(content)
	# On Windows, symlink type will be assumed to be "File" if the target does not exist
	# So, create symlinks after everything else
	if _symlinks is None:
		for path, target in symlinks.items():
			os.symlink(target, path)
