from dataclasses import asdict, dataclass, field
from enum import Enum
from functools import total_ordering
from typing import Any, Dict, List, Optional, Tuple

from .estimates import CrackTimeEstimate

# lower bound of each level, highest first
LEVEL_THRESHOLDS = (
    (80, "very strong"),
    (60, "strong"),
    (40, "medium"),
)


@total_ordering
class StrengthLevel(Enum):
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"
    VERY_STRONG = "very strong"

    @property
    def rank(self) -> int:
        return list(StrengthLevel).index(self)

    def __lt__(self, other):
        if not isinstance(other, StrengthLevel):
            return NotImplemented
        return self.rank < other.rank

    @classmethod
    def from_score(cls, score: int) -> "StrengthLevel":
        for threshold, value in LEVEL_THRESHOLDS:
            if score >= threshold:
                return cls(value)
        return cls.WEAK


@dataclass(frozen=True)
class RuleOutcome:
    """passed is None when the check could not be completed"""

    rule: str
    passed: Optional[bool]
    points: int
    message: str


@dataclass
class RuleScore:
    """Running result of one rule pass, only ever appended to"""

    score: int = 0
    details: List[RuleOutcome] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    report: List[str] = field(default_factory=list)

    def record(
        self,
        rule: str,
        passed: Optional[bool],
        points: int,
        message: str,
        suggestion: Optional[str] = None,
        report: Optional[str] = None,
    ) -> RuleOutcome:
        """Adds one outcome along with at most one suggestion and one report line"""
        outcome = RuleOutcome(rule, passed, points, message)
        self.details.append(outcome)
        self.score += points
        if suggestion:
            self.suggestions.append(suggestion)
        if report:
            self.report.append(report)
        return outcome

    def note(self, suggestion: Optional[str] = None, report: Optional[str] = None):
        """Adds messages that do not belong to a single rule"""
        if suggestion:
            self.suggestions.append(suggestion)
        if report:
            self.report.append(report)


@dataclass(frozen=True)
class EvaluationReport:
    score: int
    level: StrengthLevel
    suggestions: Tuple[str, ...]
    report: Tuple[str, ...]
    details: Tuple[RuleOutcome, ...]
    brute_force: CrackTimeEstimate
    dictionary: CrackTimeEstimate
    rainbow_table: CrackTimeEstimate
    pwned: Optional[bool] = False
    pwned_offline: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation"""
        return {
            "score": self.score,
            "level": self.level.value,
            "suggestions": list(self.suggestions),
            "report": list(self.report),
            "details": [asdict(outcome) for outcome in self.details],
            "bruteForceTime": self.brute_force.seconds,
            "bruteForceTimeFormatted": self.brute_force.formatted,
            "dictionaryTime": self.dictionary.seconds,
            "dictionaryTimeFormatted": self.dictionary.formatted,
            "rainbowTableTime": self.rainbow_table.seconds,
            "rainbowTableTimeFormatted": self.rainbow_table.formatted,
            "pwned": self.pwned,
            "pwnedOffline": self.pwned_offline,
        }
