import re
from typing import List

# name -> compiled pattern, in reporting order
PATTERNS = (
    (
        "date",
        re.compile(
            r"\b(19|20)\d{2}[-/.]?(0[1-9]|1[0-2])[-/.]?(0[1-9]|[12][0-9]|3[01])\b"
        ),
    ),
    ("birth year", re.compile(r"\b(19|20)\d{2}\b")),
    ("phone number", re.compile(r"\b0?5\d{9}\b")),
    ("national ID number", re.compile(r"\b[1-9][0-9]{10}\b")),
    ("region code", re.compile(r"\b(0[1-9]|[1-7][0-9]|8[01])\b")),
    ("digits only", re.compile(r"^[0-9]{6,}$")),
    ("letters only", re.compile(r"^[a-zA-Z]{6,}$")),
)


def detect_patterns(password: str) -> List[str]:
    """
    Scans the whole password for guessable structures.

    Every pattern is checked independently, so one substring may be
    reported under several names (an 8 digit date also holds a year).

    Returns:
        list of matched pattern names, empty if nothing was found
    """
    return [name for name, pattern in PATTERNS if pattern.search(password)]
