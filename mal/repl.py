"""Interactive read-eval-print loop for mal.

One line is one input: there is no multi-line buffering, so a form has to
be complete on the line where it starts.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from mal import config
from mal.errors import MalError, MalInvariantError
from mal.interpreter import Interpreter
from mal.reader.parser import tokenize

try:
    import readline
except ImportError:  # not available on every platform (e.g. Windows)
    readline = None

logger = logging.getLogger(__name__)


class REPL:
    def __init__(self, interp: Interpreter, prompt: str, history: Optional[Path]):
        self.interp = interp
        self.prompt = prompt
        self.history = history

    def complete(self, text: str, state: int) -> Optional[str]:
        names = set()
        env = self.interp.env
        while env is not None:
            names.update(str(k) for k in env.vars)
            env = env.outer
        m = sorted(n for n in names if n.startswith(text))
        try:
            return m[state]
        except IndexError:
            return None

    def start(self) -> None:
        if readline is None:
            return
        readline.set_completer(self.complete)
        readline.set_completer_delims(" ()[]{};'`~^@,\"")
        readline.parse_and_bind("tab: complete")
        if self.history is None:
            return
        readline.set_history_length(1000)
        try:
            readline.read_history_file(self.history)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not read history file %s: %s", self.history, e)

    def stop(self) -> None:
        if readline is None or self.history is None:
            return
        try:
            readline.write_history_file(self.history)
        except OSError as e:
            logger.warning("Could not write history file %s: %s", self.history, e)

    def rep(self, line: str) -> Optional[str]:
        """Evaluate one line. Returns the text to show, or None when the line holds no forms."""
        if not tokenize(line):
            return None
        try:
            return self.interp.rep(line)
        except MalInvariantError:
            logger.critical("Internal error while evaluating %r", line, exc_info=True)
            raise
        except MalError as e:
            return f"error: {e}"
        except RecursionError:
            return "error: maximum recursion depth exceeded"
        except Exception as e:
            logger.exception("Unexpected failure while evaluating %r", line)
            return f"error: {e}"

    def loop(self) -> None:
        self.start()
        try:
            while True:
                try:
                    line = input(self.prompt)
                except (EOFError, KeyboardInterrupt):
                    print()
                    break
                out = self.rep(line)
                if out is not None:
                    print(out)
        finally:
            self.stop()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="mal", description="mal interpreter")
    parser.add_argument("-e", "--eval", dest="expr", help="evaluate EXPR, print the result and exit")
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.get_log_level(), format="%(levelname)s %(name)s: %(message)s")

    repl = REPL(Interpreter(), config.get_prompt(), config.get_history_file())
    if args.expr is not None:
        out = repl.rep(args.expr)
        if out is not None:
            print(out)
        return 1 if out is not None and out.startswith("error: ") else 0

    repl.loop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
