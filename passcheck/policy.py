import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional

from .report import RuleScore

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTION = "Password does not meet the policy requirement."
DEFAULT_REPORT = "Policy requirement failed."
DEFAULT_SUCCESS_MSG = "Passed"
DEFAULT_FAIL_MSG = "Failed"

# external (camelCase) rule keys -> dataclass field
RULE_ALIASES = {
    "successMsg": "success_msg",
    "failMsg": "fail_msg",
}


class RuleKind(Enum):
    PREDICATE = "predicate"
    REGEX = "regex"
    LENGTH = "length"
    CUSTOM = "custom"


@dataclass
class Rule:
    """A single policy rule; which fields are set decides how it is evaluated"""

    name: str = "custom"
    type: Optional[str] = None  # regex, length or custom
    fn: Optional[Callable[[str, Any], bool]] = None
    pattern: Optional[str] = None  # rule passes when this does NOT match
    min: Optional[int] = None
    check: Optional[Callable[[str, Any], bool]] = None
    required: bool = False
    points: int = 0
    success_msg: Optional[str] = None
    fail_msg: Optional[str] = None
    suggestion: Optional[str] = None
    report: Optional[str] = None

    @property
    def kind(self) -> Optional[RuleKind]:
        """None for a rule no strategy can evaluate"""
        if callable(self.fn):
            return RuleKind.PREDICATE
        if self.type == "regex" and isinstance(self.pattern, str) and self.pattern:
            return RuleKind.REGEX
        if self.type == "length" and self.min:
            return RuleKind.LENGTH
        if self.type == "custom" and callable(self.check):
            return RuleKind.CUSTOM
        return None

    @classmethod
    def from_dict(cls, data: Mapping) -> "Rule":
        kwargs = {}
        for key, value in data.items():
            name = RULE_ALIASES.get(key, key)
            if name in cls.__dataclass_fields__:
                kwargs[name] = value
        return cls(**kwargs)


@dataclass
class Policy:
    """rules is None when no rule list was given; such a policy is not applied"""

    rules: Optional[List[Rule]] = field(default_factory=list)
    min_score: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.rules, (list, tuple)):
            self.rules = [_coerce_rule(rule) for rule in self.rules]
        else:
            self.rules = None
        self.min_score = _min_score(self.min_score)

    @classmethod
    def from_dict(cls, data: Mapping) -> "Policy":
        return cls(
            rules=data.get("rules"),
            min_score=data.get("minScore", data.get("min_score")),
        )


def _min_score(value: Any) -> Optional[int]:
    try:
        return int(value) if value else None
    except (TypeError, ValueError):
        logger.debug("Ignoring invalid policy minimum score %r", value)
        return None


def _coerce_rule(rule: Any) -> Rule:
    if isinstance(rule, Rule):
        return rule
    if isinstance(rule, Mapping):
        return Rule.from_dict(rule)
    # unknown shape, evaluates as a malformed rule
    return Rule()


def _points(rule: Rule) -> int:
    try:
        return int(rule.points or 0)
    except (TypeError, ValueError):
        return 0


class PolicyEngine:
    """Evaluates a caller supplied policy in place of the default rules"""

    def __init__(self, policy: Policy):
        self.policy = policy
        self._strategies = {
            RuleKind.PREDICATE: self._eval_predicate,
            RuleKind.REGEX: self._eval_regex,
            RuleKind.LENGTH: self._eval_length,
            RuleKind.CUSTOM: self._eval_custom,
        }

    def run(self, password: str, options: Any = None) -> RuleScore:
        result = RuleScore()

        for rule in self.policy.rules or []:
            rule = _coerce_rule(rule)
            passed = self.evaluate_rule(rule, password, options)
            points = _points(rule) if passed else 0

            suggestion = report = None
            if not passed and rule.required:
                suggestion = rule.suggestion or DEFAULT_SUGGESTION
                report = rule.report or DEFAULT_REPORT

            if passed:
                message = rule.success_msg or DEFAULT_SUCCESS_MSG
            else:
                message = rule.fail_msg or DEFAULT_FAIL_MSG

            result.record(rule.name or "custom", passed, points, message, suggestion, report)

        min_score = self.policy.min_score
        if min_score and result.score < min_score:
            result.note(
                f"Password must score at least {min_score} points.",
                "Policy: minimum score not met.",
            )

        return result

    def evaluate_rule(self, rule: Rule, password: str, options: Any = None) -> bool:
        """Malformed rules fail silently"""
        kind = rule.kind
        if kind is None:
            logger.debug("Skipping malformed policy rule %r", rule.name)
            return False
        return self._strategies[kind](rule, password, options)

    def _eval_predicate(self, rule: Rule, password: str, options: Any) -> bool:
        return bool(rule.fn(password, options))

    def _eval_regex(self, rule: Rule, password: str, options: Any) -> bool:
        try:
            return re.search(rule.pattern, password) is None
        except (re.error, TypeError) as e:
            logger.debug("Invalid pattern in policy rule %r: %s", rule.name, e)
            return False

    def _eval_length(self, rule: Rule, password: str, options: Any) -> bool:
        try:
            return len(password) >= int(rule.min)
        except (TypeError, ValueError):
            return False

    def _eval_custom(self, rule: Rule, password: str, options: Any) -> bool:
        return bool(rule.check(password, options))
