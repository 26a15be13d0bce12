from .config import EvaluationOptions
from .evaluator import InvalidPasswordError, evaluate, suggest
from .policy import Policy, Rule
from .report import EvaluationReport, RuleOutcome, StrengthLevel

__all__ = [
    "EvaluationOptions",
    "EvaluationReport",
    "InvalidPasswordError",
    "Policy",
    "Rule",
    "RuleOutcome",
    "StrengthLevel",
    "evaluate",
    "suggest",
]
