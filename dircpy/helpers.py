from pathlib import PurePath

def _overlap(src:PurePath, dst:PurePath) -> str|None:
	'''
	Describe how two resolved root paths overlap in a way that would make the walk read its own output. Returns `None` when they are independent.

	>>> from pathlib import PurePosixPath as P
	>>> _overlap(P("/a/s"), P("/a/s"))
	"'source' and 'dest' cannot be the same directory"
	>>> _overlap(P("/a/s"), P("/a/s/d"))
	"'dest' cannot be inside 'source'"
	>>> _overlap(P("/a/s/x"), P("/a/s")) is None
	True
	>>> _overlap(P("/a/s"), P("/a/sd")) is None
	True
	'''

	if src == dst:
		return "'source' and 'dest' cannot be the same directory"
	if dst.is_relative_to(src):
		return "'dest' cannot be inside 'source'"
	return None

def _human_readable_size(n:int) -> str:
	'''
	Translates `n` bytes into a human-readable size.

	>>> _human_readable_size(1023)
	'1023 bytes'
	>>> _human_readable_size(2.1 * 1024 * 1024)
	'2 MB'
	>>> _human_readable_size(0)
	'0 bytes'
	'''

	units = ["bytes", "KB", "MB", "GB", "TB", "PB"]
	i = 0
	while n >= 1024 and i < len(units) - 1:
		n //= 1024
		i += 1
	return f"{round(n)} {units[i]}"
