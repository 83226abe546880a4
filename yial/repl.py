"""
yial command line driver.

  yial script.yl     evaluate a file, exit 1 on the first error
  yial               interactive REPL, errors are reported and skipped
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from yial import __version__, config
from yial.errors import YialError
from yial.interpreter import Interpreter
from yial.printer import to_source

logger = logging.getLogger(__name__)

BANNER = "yial: REPL (Ctrl+D to exit)"


def create_arg_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(
        prog='yial',
        description='yial - a small Lisp-family scripting language',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s script.yl              # Run a script
  %(prog)s                        # Interactive mode
  %(prog)s -v script.yl           # Run with debug logging
        """
    )
    parser.add_argument('script', nargs='?', help='script file to execute')
    parser.add_argument(
        '--max-depth',
        type=int,
        default=None,
        help='maximum evaluation depth (default: $YIAL_MAX_EVAL_DEPTH or %d)' % config.DEFAULT_MAX_EVAL_DEPTH,
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='enable debug logging')
    parser.add_argument('--version', action='version', version=f'yial {__version__}')
    return parser


def run_file(interp: Interpreter, path: str, stderr: TextIO) -> int:
    """Evaluate a whole file. Returns the process exit status."""
    try:
        interp.eval_file(path)
    except OSError as e:
        stderr.write(f"Error: cannot read {path}: {e.strerror or e}\n")
        return 1
    except YialError as e:
        logger.debug("aborting %s", path, exc_info=True)
        stderr.write(f"Error: {e}\n")
        return 1
    return 0


def process_line(interp: Interpreter, line: str, stdout: TextIO, stderr: TextIO) -> bool:
    """Evaluate one line of input, printing its results. Returns False on error."""
    try:
        values = interp.eval_source(line)
    except YialError as e:
        stderr.write(f"Error: {e}\n")
        return False
    for i, value in enumerate(values):
        stdout.write(f"${i} = {to_source(value)}\n")
    return True


def read_line(stdin: TextIO, stdout: TextIO, prompt: str) -> str:
    """Read one line, returning "" at end of input."""
    if stdin is sys.stdin and stdin.isatty():
        try:
            return input(prompt) + "\n"
        except EOFError:
            return ""
    stdout.write(prompt)
    stdout.flush()
    return stdin.readline()


def repl(interp: Interpreter, stdin: TextIO, stdout: TextIO, stderr: TextIO) -> int:
    """Read-eval-print loop until end of input."""
    prompt = config.get_prompt()
    stdout.write(BANNER + "\n")
    while True:
        line = read_line(stdin, stdout, prompt)
        if not line:
            break
        process_line(interp, line, stdout, stderr)
    stdout.write("\nBye!\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = create_arg_parser()
    args = parser.parse_args(argv)
    if args.max_depth is not None and args.max_depth < 1:
        parser.error("--max-depth must be positive")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        interp = Interpreter(max_depth=args.max_depth)
    except ValueError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 2

    if args.script:
        return run_file(interp, args.script, sys.stderr)

    try:
        import readline  # noqa: F401  line editing and history for input()
    except ImportError:
        pass
    return repl(interp, sys.stdin, sys.stdout, sys.stderr)


if __name__ == "__main__":
    sys.exit(main())
