import sys
import logging
from enum import Enum

# Summary of logging levels used in this package:
# DEBUG    = skipped entries, configuration dumps
# INFO     = operation performed, run summary
# WARNING  = problem encountered but the operation completed
# ERROR    = problem encountered and the copy was aborted
# CRITICAL = Exception raised which halted the program entirely

def _exc_summary(e) -> str:
	'''
	Get a one-line summary of an `Exception`.

	>>> _exc_summary(FileExistsError(17, "File exists", "d/a.txt"))
	'FileExistsError: d/a.txt'
	>>> _exc_summary(ValueError("bad pattern"))
	'bad pattern'
	'''

	error_type = type(e).__name__
	affected_file = getattr(e, "filename", None)
	error_message = getattr(e, "strerror", None)
	if isinstance(e, OSError) and affected_file:
		msg = f"{error_type}: {affected_file}"
	elif error_message:
		msg = f"{error_type}: {error_message}"
	else:
		msg = str(e)
	return msg

class _RecordTag(Enum):
	FOOTER = 1
	COPY_OP = 2

	def dict(self):
		return {self.name: True}

class _DebugInfoFilter(logging.Filter):
	'''Logging filter that only allows DEBUG and INFO records to pass.'''
	def filter(self, record):
		return logging.DEBUG <= record.levelno <= logging.INFO

class _ConsoleFormatter(logging.Formatter):
	BASE_FORMAT = "%(message)s"

	def __init__(self, fmt=BASE_FORMAT, datefmt=None, style="%"):
		super().__init__(fmt, datefmt, style)

	def format(self, record):
		msg = super().format(record)
		extra_indent = "" if getattr(record, _RecordTag.COPY_OP.name, False) else "  "
		if record.levelno == logging.DEBUG:
			body = msg.replace("\n", f"\n  {extra_indent}").rstrip(" ")
			msg = f"  {extra_indent}{body}"
		elif record.levelno == logging.WARNING:
			msg = f"{extra_indent}WARNING: {msg}"
		elif record.levelno >= logging.ERROR:
			msg = f"{extra_indent}ERROR: {msg}"
		else:
			body = msg.replace("\n", f"\n{extra_indent}").rstrip(" ")
			msg = f"{extra_indent}{body}"
		return msg

logger = logging.getLogger("dircpy")

def setup_logger():
	if not logger.handlers:
		logger.setLevel(logging.WARNING)
		handler_stdout = logging.StreamHandler(sys.stdout)
		handler_stderr = logging.StreamHandler(sys.stderr)
		handler_stdout.addFilter(_DebugInfoFilter())
		handler_stdout.setLevel(logging.DEBUG)
		handler_stderr.setLevel(logging.WARNING)
		handler_stdout.setFormatter(_ConsoleFormatter())
		handler_stderr.setFormatter(_ConsoleFormatter())
		logger.addHandler(handler_stdout)
		logger.addHandler(handler_stderr)

setup_logger()
