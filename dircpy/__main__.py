# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

import sys
import logging
import argparse

from .core import CopyBuilder
from .log import logger, _exc_summary

class _ArgParser:
	'''Argument parser for when this package is run with `python -m dircpy`.'''

	parser = argparse.ArgumentParser(
		prog="dircpy",
		description="Recursively copy a directory tree into another directory.",
		epilog="(c) 2025 Joe Walter",
		fromfile_prefix_chars="!",
	)

	parser.add_argument("src", help="The root directory to copy from.")
	parser.add_argument("dst", help="The root directory to copy into. It will be created if it does not exist.")

	parser.add_argument("-o", "--overwrite", dest="overwrite_all", action="store_true", default=None, help="Replace existing files in 'dst' unconditionally.")
	parser.add_argument("-n", "--overwrite-if-newer", action="store_true", default=None, help="Replace existing files in 'dst' when the file in 'src' has a later modification time.")
	parser.add_argument("-s", "--overwrite-if-size-differs", action="store_true", default=None, help="Replace existing files in 'dst' when the file sizes differ.")

	parser.add_argument("-x", "--exclude", dest="exclude_filters", metavar="pattern", nargs="+", action="extend", type=str, default=None, help="Do not copy entries whose relative path contains any of these strings. Matching is a literal, case-sensitive substring test (no globs).")
	parser.add_argument("-i", "--include", dest="include_filters", metavar="pattern", nargs="+", action="extend", type=str, default=None, help="Only copy entries whose relative path contains one of these strings. Exclude patterns take priority.")

	parser.add_argument("-d", "--dry-run", action="store_true", default=None, help="Forgo performing any operation that would make a file system change. Changes that would have occurred will still be printed to console.")

	print_level = parser.add_mutually_exclusive_group()
	print_level.add_argument("-q", action="count", default=None, help="Shorthand for --print-level WARNING (-q) and --print-level CRITICAL (-qq).")
	print_level.add_argument("-p", "--print-level", type=str, default=None, help="Log level for printing to console. (Defaults to INFO.)")

	parser.add_argument("--debug", action="store_true", default=None, help="Shorthand for --print-level DEBUG.")

	@staticmethod
	def parse(args:list[str]) -> argparse.Namespace:
		'''Convert flags specific to the command line into CopyBuilder options.'''

		log_levels = {"DEBUG": logging.DEBUG, "INFO":logging.INFO, "WARNING":logging.WARNING, "WARN":logging.WARNING, "ERROR":logging.ERROR, "ERR":logging.ERROR, "CRITICAL":logging.CRITICAL, "CRIT":logging.CRITICAL}

		parsed_args = _ArgParser.parser.parse_args(args)

		if parsed_args.debug:
			parsed_args.print_level = logging.DEBUG
		elif parsed_args.q:
			if parsed_args.q == 1:
				parsed_args.print_level = logging.WARNING
			elif parsed_args.q == 2:
				parsed_args.print_level = logging.CRITICAL
			else:
				parsed_args.print_level = logging.CRITICAL+1
		elif parsed_args.print_level:
			try:
				parsed_args.print_level = log_levels[parsed_args.print_level.upper()]
			except KeyError:
				_ArgParser.parser.error(f"unknown log level: {parsed_args.print_level}")
		else:
			parsed_args.print_level = logging.INFO
		del parsed_args.q
		del parsed_args.debug

		return parsed_args

def main(args:list[str]) -> None:
	'''Create a `CopyBuilder` object and run it.'''

	try:
		parsed_args = _ArgParser.parse(args)

		logger.setLevel(parsed_args.print_level)
		del parsed_args.print_level

		src = parsed_args.src
		dst = parsed_args.dst
		del parsed_args.src
		del parsed_args.dst

		kwargs = {
			key: getattr(parsed_args, key)
			for key in dir(parsed_args)
			if not key[0] == "_" and getattr(parsed_args, key) is not None
		}

		logger.debug(f"{kwargs=}")

		try:
			builder = CopyBuilder(src, dst, **kwargs)
		except (TypeError, ValueError) as e:
			logger.critical(_exc_summary(e))
			sys.exit(1)

		with builder:
			results = builder.run()

		sys.exit(results.exit_code)

	except KeyboardInterrupt:
		sys.exit(1)
	except Exception as e:
		logger.critical("An unexpected error occurred.", exc_info=True)
		sys.exit(1)

def cli() -> None:
	main(sys.argv[1:])

if __name__ == "__main__":
	cli()
