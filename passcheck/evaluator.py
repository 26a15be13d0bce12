from typing import Mapping, Optional, Union

from .config import EvaluationOptions
from .generator import PasswordGenerator, suggestion_mode
from .report import EvaluationReport
from .rules import RuleEngine

# external (camelCase) suggestion option -> generator keyword
SUGGEST_ALIASES = {
    "wordCount": "word_count",
    "addSymbol": "add_symbol",
    "addNumber": "add_number",
}


class InvalidPasswordError(ValueError):
    """The password is missing, empty or not text"""


async def evaluate(
    password: str,
    options: Optional[Union[EvaluationOptions, Mapping]] = None,
) -> EvaluationReport:
    """
    Scores a password and explains the result.

    Args:
        password: non-empty password text
        options: EvaluationOptions, a mapping of option names, or None
            for the defaults

    Returns:
        EvaluationReport

    Raises:
        InvalidPasswordError: if password is not a non-empty string
    """
    if not isinstance(password, str) or not password:
        raise InvalidPasswordError("Password must be a non-empty string.")

    if not isinstance(options, EvaluationOptions):
        options = EvaluationOptions.from_dict(options)

    return await RuleEngine(options).run(password)


def suggest(options: Optional[Mapping] = None) -> str:
    """
    Generates a suggested password.

    options selects the kind, first match wins: diceware, advanced,
    passphrase, otherwise a random password of `length` (default 12).

    Raises:
        ValueError: if length, wordCount or separator has the wrong type
    """
    options = dict(options or {})
    mode = suggestion_mode(options)

    overrides = {}
    for key, value in options.items():
        overrides[SUGGEST_ALIASES.get(key, key)] = value
    for key in ("length", "word_count"):
        if not overrides.get(key):
            overrides.pop(key, None)
            continue
        try:
            overrides[key] = int(overrides[key])
        except (TypeError, ValueError):
            raise ValueError(f"{key} must be an integer") from None
        if overrides[key] < 1:
            raise ValueError(f"{key} must be positive")

    if not isinstance(overrides.get("separator", ""), str):
        raise ValueError("separator must be a string")

    return PasswordGenerator(mode).generate(**overrides)
