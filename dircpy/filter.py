# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

from typing import Iterable

from ordered_set import OrderedSet

from .errors import FilterMisuseError

class Filter:
	'''Abstract base class for all path filtering objects consulted by `CopyRunner`.'''

	def __init__(self, default:bool = True):
		'''Initialize a `Filter` object.'''

		self.default = default

	def filter(self, relpath:str, *, default:bool|None = None) -> bool:
		'''(Abstract method) Filter path.'''

		raise NotImplementedError()

class SubstringFilter(Filter):
	'''
	Filter that admits or rejects a relative path by literal substring tests.

	Exclude patterns always win. If any include patterns are present, a path must contain at least one of them. Matching is case-sensitive, with no glob expansion and no anchoring to path segments, so "foo" rejects "a/foo/b", "foobar.txt", and "xfoo".

	>>> f = SubstringFilter(exclude=["b"], include=[".log"])
	>>> [p for p in ["a.log", "b.log", "a.txt"] if f.filter(p)]
	['a.log']
	>>> SubstringFilter().filter("anything")
	True
	>>> SubstringFilter(include=["*.txt"]).filter("a.txt")
	False
	'''

	def __init__(self, exclude:Iterable[str] = (), include:Iterable[str] = ()):
		'''
		Initialize a `SubstringFilter` object.

		Args
			exclude (iterable of str) : Paths containing any of these strings are rejected.
			include (iterable of str) : If non-empty, only paths containing one of these strings are admitted.
		'''
		super().__init__()

		self._exclude : OrderedSet[str] = OrderedSet()
		self._include : OrderedSet[str] = OrderedSet()

		self.exclude(*exclude)
		self.include(*include)

	@staticmethod
	def _check_pattern(pattern:str) -> str:
		if not isinstance(pattern, str):
			raise TypeError(f"Bad type for filter pattern (expected str): {pattern!r}")
		if pattern == "":
			# an empty string is a substring of every path
			raise FilterMisuseError("Empty filter patterns are not allowed")
		return pattern

	def exclude(self, *patterns:str) -> "SubstringFilter":
		'''Add exclude patterns to the `Filter`.'''

		for pattern in patterns:
			self._exclude.add(SubstringFilter._check_pattern(pattern))
		return self

	def include(self, *patterns:str) -> "SubstringFilter":
		'''Add include patterns to the `Filter`.'''

		for pattern in patterns:
			self._include.add(SubstringFilter._check_pattern(pattern))
		return self

	@property
	def excludes(self) -> tuple[str, ...]:
		return tuple(self._exclude)

	@property
	def includes(self) -> tuple[str, ...]:
		return tuple(self._include)

	def filter(self, relpath:str, *, default:bool|None = None) -> bool:
		'''Filter paths by comparing them against the exclude and include patterns.'''

		if any(pattern in relpath for pattern in self._exclude):
			return False
		if self._include:
			return any(pattern in relpath for pattern in self._include)
		return default if default is not None else self.default

	def __str__(self) -> str:
		_str = ""
		if self._exclude:
			_str += "- " + " ".join(self._exclude)
		if self._include:
			if _str:
				_str += " "
			_str += "+ " + " ".join(self._include)
		return _str

	def __repr__(self) -> str:
		return f"SubstringFilter(exclude={list(self._exclude)!r}, include={list(self._include)!r})"
