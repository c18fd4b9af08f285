# Core type aliases for synquote's data model.
# Code is represented with plain Python values: Symbol and Keyword instances,
# literals (int, float, str, bool, None for nil) and Python lists for forms.
# There is no explicit Cons type.
#
# Naming guidance:
# - Node:        use in reader/template/expander code to denote syntactic forms.
# - LispValue:   use in the reference host evaluator to denote run-time values.
# Both aliases resolve to `Any`; they document intent rather than constrain.

from typing import Any, Callable

Node = Any
# Forms alias (used interchangeably with Node in the reader and host)
SExpression = Node
LispValue = Any

# Resolver for unquoted expressions inside a template: (expr, ctx) -> Node
EvaluatorFn = Callable[..., Node]

__version__ = "0.1.0"
