import json
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, Union

DATA_DIR = Path(__file__).parent / "data"
COMMON_PASSWORDS_FILE = DATA_DIR / "common_passwords.json"


def build_dictionary(words: Iterable[str]) -> FrozenSet[str]:
    """Normalizes a word list to a lowercase lookup set"""
    return frozenset(word.lower() for word in words if isinstance(word, str))


def load_common_passwords(path: Optional[Union[str, Path]] = None) -> FrozenSet[str]:
    """Loads a JSON array of common passwords"""
    file_path = Path(path) if path else COMMON_PASSWORDS_FILE
    with open(file_path, "r", encoding="utf-8") as f:
        words = json.load(f)

    if not isinstance(words, list):
        raise ValueError(f"{file_path} must contain a JSON array")

    return build_dictionary(words)


# Loaded once per process, never mutated
COMMON_PASSWORDS = load_common_passwords()


def is_in_dictionary(
    password: str, dictionary: Optional[Iterable[str]] = None
) -> bool:
    """
    Case-insensitive exact match against a set of known passwords.

    Args:
        password: password to look up
        dictionary: pre-built lowercase set or any iterable of strings,
            defaults to the bundled common password list
    """
    if dictionary is None:
        dictionary = COMMON_PASSWORDS
    elif not isinstance(dictionary, (set, frozenset)):
        dictionary = build_dictionary(dictionary)

    return password.lower() in dictionary
