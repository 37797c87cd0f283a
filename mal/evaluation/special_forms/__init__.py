"""Registry of special forms for the mal evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table to dispatch special forms before ordinary
function application. Every handler takes `(tail, env, evaluate_fn)` and
returns `(value, env)`.
"""

from mal.types.symbol import Symbol
from mal.evaluation.special_forms.define_form import define_form
from mal.evaluation.special_forms.let_form import let_form

SPECIAL_FORMS = {
    Symbol("def!"): define_form,
    Symbol("let*"): let_form,
}
