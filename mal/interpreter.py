from __future__ import annotations

import logging

from mal import LispValue
from mal.builtin.env_builtin import register
from mal.evaluation.evaluator import evaluate
from mal.printer import to_literal
from mal.reader.parser import read_all
from mal.types.environment import Environment
from mal.types.nil import Nil

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Reads and evaluates mal code, carrying the environment across calls so
    that `def!` at the top level of one call is visible in the next.
    """

    def __init__(self, env: Environment | None = None):
        self.env: Environment = env if env is not None else register(Environment())

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code`; return the last result (nil if there is none)."""
        result: LispValue = Nil
        debug = logger.isEnabledFor(logging.DEBUG)
        for expr in read_all(code):
            if debug:
                logger.debug("read: %s", to_literal(expr))
            result, self.env = evaluate(expr, self.env)
            if debug:
                logger.debug("evaluated: %s", to_literal(result))
        return result

    def rep(self, code: str) -> str:
        """Read, evaluate and print: the literal text of the last result."""
        return to_literal(self.eval(code))
