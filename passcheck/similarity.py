from typing import Iterable, Optional, Sequence

from .config import SETTINGS


def levenshtein(a: Sequence, b: Sequence) -> int:
    """Edit distance with unit cost for insertion, deletion and substitution"""
    if not a:
        return len(b)
    if not b:
        return len(a)

    # rows follow b, columns follow a
    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]
    for i in range(len(b) + 1):
        matrix[i][0] = i
    for j in range(len(a) + 1):
        matrix[0][j] = j

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            if b[i - 1] == a[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = 1 + min(
                    matrix[i - 1][j - 1],
                    matrix[i][j - 1],
                    matrix[i - 1][j],
                )

    return matrix[len(b)][len(a)]


def similarity(a: str, b: str) -> float:
    """1.0 for identical strings, 0.0 when nothing lines up"""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1 - levenshtein(a, b) / max_len


def is_similar_to_personal_info(
    password: str,
    personal_info: Optional[Iterable[str]],
    threshold: Optional[float] = None,
) -> bool:
    """
    Checks whether the password contains or closely resembles any piece
    of personal information (name, e-mail, username...).

    Args:
        password: password to check
        personal_info: strings to compare against, empty entries are skipped
        threshold: minimum similarity counted as a match (default 0.7)
    """
    if not personal_info:
        return False
    if threshold is None:
        threshold = SETTINGS["similarity_threshold"]

    lowered = password.lower()
    for info in personal_info:
        if not info:
            continue
        info = info.lower()
        if info in lowered:
            return True
        if similarity(lowered, info) >= threshold:
            return True

    return False
