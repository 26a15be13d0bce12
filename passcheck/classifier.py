import re

SEQUENCES = (
    "abcdefghijklmnopqrstuvwxyz",
    "0123456789",
    "qwertyuiop",
    "asdfghjkl",
    "zxcvbnm",
)

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")
_SYMBOL = re.compile(r"[^A-Za-z0-9]")
_REPEAT = re.compile(r"(.)\1{2,}")

_SEQUENTIAL_SLICES = frozenset(
    seq[i : i + 3] for seq in SEQUENCES for i in range(len(seq) - 2)
)


def has_upper(password: str) -> bool:
    return _UPPER.search(password) is not None


def has_lower(password: str) -> bool:
    return _LOWER.search(password) is not None


def has_digit(password: str) -> bool:
    return _DIGIT.search(password) is not None


def has_symbol(password: str) -> bool:
    """Anything outside ASCII letters and digits counts as a symbol"""
    return _SYMBOL.search(password) is not None


def has_repeat(password: str) -> bool:
    """Three or more identical characters in a row"""
    return _REPEAT.search(password) is not None


def has_sequential(password: str) -> bool:
    """
    Checks for a three character run taken from the alphabet, the digits
    or one of the keyboard rows. Case-insensitive, forward order only.
    """
    lowered = password.lower()
    return any(
        lowered[i : i + 3] in _SEQUENTIAL_SLICES for i in range(len(lowered) - 2)
    )


def diversity(password: str) -> int:
    return sum(
        check(password) for check in (has_upper, has_lower, has_digit, has_symbol)
    )
