# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

class InvalidSourceError(NotADirectoryError):
	'''Indicates the source root is missing, is not a directory, or overlaps with the dest root.'''
	def __init__(self, strerror=None, filename=None):
		super().__init__(20, strerror, filename)

class DestCreationError(OSError):
	'''Indicates a directory needed in the dest tree could not be created.'''
	def __init__(self, errno=None, strerror=None, filename=None):
		super().__init__(errno or 17, strerror, filename)

class StructuralConflictError(FileExistsError):
	'''Indicates a dest entry exists with a kind (file, dir, symlink) incompatible with the src entry.'''
	def __init__(self, strerror=None, filename=None):
		super().__init__(17, strerror, filename)

class FilterMisuseError(ValueError):
	'''Indicates an invalid filter pattern, such as an empty string.'''
	pass

class StateError(RuntimeError):
	'''Indicates the object is in (or would be set to) an invalid state.'''
	pass

class ImmutableObjectError(StateError):
	'''Indicates an attempt to modify an immutable object.'''
	pass

class UnsupportedOperationError(RuntimeError):
	'''Indicates the attempted action is not supported on this platform.'''
	pass
