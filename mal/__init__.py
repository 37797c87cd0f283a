# Core type aliases for mal's data model.
# Forms and runtime values share one closed set of Python representations
# (see mal.types.values for the full table). There is no separate AST type:
# the reader produces values and the evaluator consumes them.
#
# Naming guidance:
# - SExpression: Use in reader/parser code to denote syntactic forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` and are interchangeable.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Forms alias (used interchangeably with LispValue)
SExpression = LispValue

# Evaluator function type: evaluate(expr, env) -> (value, env), passed to special forms
EvaluatorFn = Callable[..., tuple]
