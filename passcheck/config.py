import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from .dictionary import build_dictionary

logger = logging.getLogger(__name__)

SETTINGS = {
    "min_length": 8,
    "similarity_threshold": 0.7,
    "brute_force_guesses_per_second": 1e9,
    "dictionary_size": 1e7,
    "dictionary_guesses_per_second": 1e5,
    "rainbow_hash_count": 1e9,
    "rainbow_hashes_per_second": 1e7,
    "pwned_api_url": "https://api.pwnedpasswords.com",
    "pwned_timeout": 10,
    "pwned_user_agent": "passcheck-strength-evaluator",
}

# external (camelCase) option name -> dataclass field
OPTION_ALIASES = {
    "minLength": "min_length",
    "customDictionary": "custom_dictionary",
    "personalInfo": "personal_info",
    "checkPwned": "check_pwned",
    "checkPwnedOffline": "check_pwned_offline",
    "breachClient": "breach_client",
}


@dataclass
class EvaluationOptions:
    """Per-call configuration for a password evaluation"""

    min_length: int = SETTINGS["min_length"]
    custom_dictionary: Optional[FrozenSet[str]] = None  # None means the bundled list
    personal_info: List[str] = field(default_factory=list)
    check_pwned: bool = False
    check_pwned_offline: bool = False
    policy: Optional[Any] = None  # passcheck.policy.Policy
    breach_client: Optional[Any] = None  # object with is_pwned(password)

    def __post_init__(self):
        try:
            self.min_length = int(self.min_length or SETTINGS["min_length"])
        except (TypeError, ValueError):
            logger.debug("Ignoring invalid min_length %r", self.min_length)
            self.min_length = SETTINGS["min_length"]

        if self.custom_dictionary is not None:
            if isinstance(self.custom_dictionary, (list, tuple, set, frozenset)):
                self.custom_dictionary = build_dictionary(self.custom_dictionary)
            else:
                logger.debug("Ignoring custom dictionary of type %s",
                             type(self.custom_dictionary).__name__)
                self.custom_dictionary = None

        self.personal_info = _string_list(self.personal_info)

        if self.policy is not None:
            from .policy import Policy

            if isinstance(self.policy, Mapping):
                self.policy = Policy.from_dict(self.policy)
            elif isinstance(self.policy, list):
                self.policy = Policy(rules=self.policy)
            elif not isinstance(self.policy, Policy):
                logger.debug("Ignoring policy of type %s", type(self.policy).__name__)
                self.policy = None

            # no rule list: default rules apply
            if self.policy is not None and self.policy.rules is None:
                self.policy = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> "EvaluationOptions":
        """Builds options from a mapping using either camelCase or snake_case keys"""
        if not data:
            return cls()

        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = OPTION_ALIASES.get(key, key)
            if name in cls.__dataclass_fields__:
                kwargs[name] = value

        return cls(**kwargs)


def _string_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set, frozenset)):
        return [item for item in value if isinstance(item, str)]
    return []
