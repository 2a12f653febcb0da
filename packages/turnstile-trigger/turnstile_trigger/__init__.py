"""turnstile-trigger - declarative ability triggers for turnstile."""

from turnstile_trigger.compile import (
    compile_ability,
    compile_effect,
    compile_trigger,
    compile_triggers,
)
from turnstile_trigger.evaluator import (
    DEFAULT_GUARDS,
    TriggerContext,
    actor_guard,
    count_guard,
    default_guards,
    evaluate,
    evaluate_all,
)
from turnstile_trigger.guards import TriggerGuards
from turnstile_trigger.types import (
    Ability,
    CountdownType,
    Effect,
    Operator,
    Target,
    Trigger,
    TriggerKind,
)

__all__ = [
    "Ability",
    "CountdownType",
    "Effect",
    "Operator",
    "Target",
    "Trigger",
    "TriggerKind",
    "TriggerContext",
    "TriggerGuards",
    "DEFAULT_GUARDS",
    "actor_guard",
    "count_guard",
    "default_guards",
    "evaluate",
    "evaluate_all",
    "compile_ability",
    "compile_effect",
    "compile_trigger",
    "compile_triggers",
]
