import math
from dataclasses import dataclass
from typing import Dict, Optional

from .classifier import has_digit, has_lower, has_symbol, has_upper
from .config import SETTINGS

MINUTE = 60
HOUR = 3600
DAY = 86400
MONTH = 2592000
YEAR = 31536000
DECADE = 315360000


@dataclass(frozen=True)
class CrackTimeEstimate:
    seconds: float
    formatted: str

    @classmethod
    def of(cls, seconds: float) -> "CrackTimeEstimate":
        return cls(seconds, format_time(seconds))


def charset_size(password: str) -> int:
    size = 0
    if has_lower(password):
        size += 26
    if has_upper(password):
        size += 26
    if has_digit(password):
        size += 10
    if has_symbol(password):
        size += 32
    return size


def estimate_brute_force_time(password: str) -> float:
    """Seconds to exhaust charset_size ** length guesses at 1e9 guesses/s"""
    try:
        guesses = float(charset_size(password)) ** len(password)
    except OverflowError:
        return math.inf
    return guesses / SETTINGS["brute_force_guesses_per_second"]


def estimate_dictionary_time(password: str, dict_size: Optional[float] = None) -> float:
    # Content-independent: walks the whole dictionary regardless of the password
    if dict_size is None:
        dict_size = SETTINGS["dictionary_size"]
    return dict_size / SETTINGS["dictionary_guesses_per_second"]


def estimate_rainbow_table_time(password: str) -> float:
    # Content-independent, like the dictionary estimate
    return SETTINGS["rainbow_hash_count"] / SETTINGS["rainbow_hashes_per_second"]


def estimate_all(password: str) -> Dict[str, CrackTimeEstimate]:
    return {
        "brute_force": CrackTimeEstimate.of(estimate_brute_force_time(password)),
        "dictionary": CrackTimeEstimate.of(estimate_dictionary_time(password)),
        "rainbow_table": CrackTimeEstimate.of(estimate_rainbow_table_time(password)),
    }


def _round(value: float) -> int:
    # half-up, so 2.5 minutes reads as 3 minutes
    return int(math.floor(value + 0.5))


def format_time(seconds: float) -> str:
    if math.isinf(seconds):
        return "forever"
    if seconds < MINUTE:
        return f"{_round(seconds)} seconds"
    if seconds < HOUR:
        return f"{_round(seconds / MINUTE)} minutes"
    if seconds < DAY:
        return f"{_round(seconds / HOUR)} hours"
    if seconds < MONTH:
        return f"{_round(seconds / DAY)} days"
    if seconds < YEAR:
        return f"{_round(seconds / MONTH)} months"
    if seconds < DECADE:
        return f"{_round(seconds / YEAR)} years"
    return f"{_round(seconds / YEAR)}+ years"
