import logging
from dataclasses import dataclass
from typing import Union

from . import breach
from .classifier import diversity, has_repeat, has_sequential
from .config import EvaluationOptions
from .dictionary import is_in_dictionary
from .estimates import estimate_all
from .patterns import detect_patterns
from .policy import Policy, PolicyEngine
from .report import EvaluationReport, RuleScore, StrengthLevel
from .similarity import is_similar_to_personal_info

logger = logging.getLogger(__name__)

LENGTH_POINTS = 20
DIVERSITY_POINTS = 10  # per character class
DIVERSITY_PASS = 3
REPEAT_POINTS = 10
SEQUENTIAL_POINTS = 10
DICTIONARY_PENALTY = -20
PERSONAL_INFO_PENALTY = -20
PATTERN_PENALTY = -15
BREACH_SCORE_CAP = 10
MIN_SCORE = 0
MAX_SCORE = 100


@dataclass(frozen=True)
class DefaultMode:
    pass


@dataclass(frozen=True)
class PolicyMode:
    policy: Policy


EvaluationMode = Union[DefaultMode, PolicyMode]


def select_mode(options: EvaluationOptions) -> EvaluationMode:
    """Policy mode only for a Policy carrying a rule list, default mode otherwise"""
    policy = options.policy
    if isinstance(policy, Policy) and isinstance(policy.rules, list):
        return PolicyMode(policy)
    return DefaultMode()


def clamp_score(score: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, int(score)))


class DefaultRules:
    """The built-in scoring rules, always run in the same order"""

    def __init__(self, options: EvaluationOptions):
        self.options = options

    def run(self, password: str) -> RuleScore:
        result = RuleScore()
        self.check_length(password, result)
        self.check_diversity(password, result)
        self.check_repeat(password, result)
        self.check_sequential(password, result)
        self.check_dictionary(password, result)
        self.check_personal_info(password, result)
        self.check_patterns(password, result)
        return result

    def check_length(self, password: str, result: RuleScore):
        min_length = self.options.min_length
        if len(password) >= min_length:
            result.record(
                "length", True, LENGTH_POINTS, "Long enough.",
                report="Password is long enough.",
            )
        else:
            result.record(
                "length", False, 0, "Too short.",
                suggestion=f"Use at least {min_length} characters.",
                report="Password is too short.",
            )

    def check_diversity(self, password: str, result: RuleScore):
        classes = diversity(password)
        passed = classes >= DIVERSITY_PASS
        result.record(
            "diversity",
            passed,
            classes * DIVERSITY_POINTS,
            f"Diversity: {classes}",
            suggestion=None if passed else (
                "Mix uppercase letters, lowercase letters, digits and symbols."
            ),
            report="Contains a mix of uppercase, lowercase, digits and symbols." if passed else None,
        )

    def check_repeat(self, password: str, result: RuleScore):
        if has_repeat(password):
            result.record(
                "repeat", False, 0, "Has repeated characters.",
                suggestion="Avoid repeating the same character.",
                report="Password has repeated characters.",
            )
        else:
            result.record("repeat", True, REPEAT_POINTS, "No repeated characters.")

    def check_sequential(self, password: str, result: RuleScore):
        if has_sequential(password):
            result.record(
                "sequential", False, 0, "Has sequential characters.",
                suggestion="Avoid sequential characters such as 'abc', '123' or 'qwe'.",
                report="Password has sequential characters.",
            )
        else:
            result.record("sequential", True, SEQUENTIAL_POINTS, "No sequential characters.")

    def check_dictionary(self, password: str, result: RuleScore):
        if is_in_dictionary(password, self.options.custom_dictionary):
            result.record(
                "dictionary", False, DICTIONARY_PENALTY, "Common password.",
                suggestion="Do not use a common or easily guessed password.",
                report="Password is a common password.",
            )
        else:
            result.record(
                "dictionary", True, 0, "Not a common password.",
                report="Password is not a common password.",
            )

    def check_personal_info(self, password: str, result: RuleScore):
        if is_similar_to_personal_info(password, self.options.personal_info):
            result.record(
                "personalInfo", False, PERSONAL_INFO_PENALTY,
                "Similar to personal information.",
                suggestion=(
                    "Do not use personal information (name, e-mail, username) "
                    "or anything close to it."
                ),
                report="Password is similar to personal information.",
            )
        else:
            result.record("personalInfo", True, 0, "Not similar to personal information.")

    def check_patterns(self, password: str, result: RuleScore):
        patterns = detect_patterns(password)
        if patterns:
            found = ", ".join(patterns)
            result.record(
                "patterns", False, PATTERN_PENALTY, f"Pattern(s): {found}",
                suggestion=(
                    "Avoid dates, phone numbers, birth years, ID numbers and "
                    "other easily guessed patterns."
                ),
                report=f"Detected patterns: {found}",
            )
        else:
            result.record("patterns", True, 0, "No easily guessed patterns.")


class RuleEngine:
    """
    Runs one full evaluation: the rule pass (default or policy), the
    optional breach checks, clamping, classification and crack time
    estimates.
    """

    def __init__(self, options: EvaluationOptions):
        self.options = options

    def run_rules(self, password: str) -> RuleScore:
        mode = select_mode(self.options)
        logger.debug("Evaluating in %s", type(mode).__name__)

        if isinstance(mode, PolicyMode):
            return PolicyEngine(mode.policy).run(password, self.options)
        return DefaultRules(self.options).run(password)

    async def run(self, password: str) -> EvaluationReport:
        result = self.run_rules(password)
        score = result.score

        pwned_offline = False
        if self.options.check_pwned_offline:
            pwned_offline = breach.check_offline(password)
            if pwned_offline:
                result.record(
                    "pwnedOffline", False, 0, "Found in offline breach database!",
                    suggestion="This password has appeared in data breaches. Use a different one!",
                    report="Password was found in the offline breach database.",
                )
                score = min(score, BREACH_SCORE_CAP)
            else:
                result.record("pwnedOffline", True, 0, "Not in offline breach database.")

        pwned = False
        if self.options.check_pwned:
            outcome = await breach.check_online(password, self.options.breach_client)
            pwned = outcome.found
            if outcome.found:
                result.record(
                    "pwned", False, 0, outcome.message,
                    suggestion=(
                        "This password has appeared in data breaches (API). "
                        "Use a different one!"
                    ),
                    report="Password was found in the breach database via the API.",
                )
                score = min(score, BREACH_SCORE_CAP)
            else:
                # None means the lookup itself failed
                passed = None if outcome.found is None else True
                result.record("pwned", passed, 0, outcome.message)

        score = clamp_score(score)
        estimates = estimate_all(password)

        return EvaluationReport(
            score=score,
            level=StrengthLevel.from_score(score),
            suggestions=tuple(result.suggestions),
            report=tuple(result.report),
            details=tuple(result.details),
            brute_force=estimates["brute_force"],
            dictionary=estimates["dictionary"],
            rainbow_table=estimates["rainbow_table"],
            pwned=pwned,
            pwned_offline=pwned_offline,
        )
