import asyncio
import hashlib
import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterator, Optional, Tuple

import requests

from .config import SETTINGS

logger = logging.getLogger(__name__)

PREFIX_LENGTH = 5

OFFLINE_PWNED_HASHES: FrozenSet[str] = frozenset(
    {
        "5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD8",  # password
        "7C4A8D09CA3762AF61E59520943DC26494F8941B",  # 123456
        "B1B3773A05C0ED0176787A4F1574FF0075F7521E",  # qwerty
    }
)


def sha1_hex(password: str) -> str:
    # lone surrogates are valid str but not valid UTF-8
    data = password.encode("utf-8", "surrogatepass")
    return hashlib.sha1(data).hexdigest().upper()


def check_offline(password: str, hashes: FrozenSet[str] = OFFLINE_PWNED_HASHES) -> bool:
    """Looks the password's SHA-1 up in a fixed set of leaked hashes"""
    return sha1_hex(password) in hashes


@dataclass(frozen=True)
class BreachResult:
    """found is None when the lookup could not be completed"""

    found: Optional[bool]
    message: str


class PwnedPasswordsClient:
    """
    Client for the Pwned Passwords range API.

    Only the first five characters of the SHA-1 hash are sent; the server
    answers with every known suffix sharing that prefix (k-anonymity).
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or SETTINGS["pwned_api_url"]).rstrip("/")
        self.timeout = timeout if timeout is not None else SETTINGS["pwned_timeout"]
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Add-Padding": "true",
                "User-Agent": SETTINGS["pwned_user_agent"],
            }
        )

    def range(self, prefix: str) -> str:
        response = self.session.get(
            f"{self.base_url}/range/{prefix}", timeout=self.timeout
        )
        response.raise_for_status()
        return response.text

    def lookup(self, password: str) -> Optional[int]:
        """
        Count from the record matching the password's hash suffix, or None
        when no returned suffix matches.

        Raises:
            requests.RequestException: on transport or HTTP errors
            ValueError: if the response holds a malformed record
        """
        digest = sha1_hex(password)
        prefix, suffix = digest[:PREFIX_LENGTH], digest[PREFIX_LENGTH:]

        for record_suffix, count in parse_range(self.range(prefix)):
            if record_suffix == suffix:
                return count
        return None

    def pwned_count(self, password: str) -> int:
        """Number of times the password appears in known breaches"""
        return self.lookup(password) or 0

    def is_pwned(self, password: str) -> bool:
        # a matching suffix is a hit whatever its count
        return self.lookup(password) is not None


def parse_range(body: str) -> Iterator[Tuple[str, int]]:
    """Yields (SUFFIX, COUNT) pairs from a range response body"""
    for line in body.splitlines():
        line = line.strip()
        if not line:
            continue
        suffix, sep, count = line.partition(":")
        if not sep:
            raise ValueError(f"Malformed range record: {line[:40]!r}")
        yield suffix.strip().upper(), int(count.strip() or 0)


async def check_online(
    password: str,
    client: Optional[PwnedPasswordsClient] = None,
    timeout: Optional[float] = None,
) -> BreachResult:
    """
    Single bounded attempt against the breach API.

    Never raises: transport, timeout, parse and client errors come back
    as BreachResult(found=None, ...).
    """
    client = client or PwnedPasswordsClient()
    if timeout is None:
        timeout = SETTINGS["pwned_timeout"]

    try:
        found = await asyncio.wait_for(
            asyncio.to_thread(client.is_pwned, password), timeout
        )
    except asyncio.TimeoutError:
        logger.warning("Breach API lookup timed out after %ss", timeout)
        return BreachResult(None, f"Breach API check failed: timed out after {timeout}s")
    except (requests.RequestException, ValueError) as e:
        logger.warning("Breach API lookup failed: %s", e)
        return BreachResult(None, f"Breach API check failed: {e}")
    except Exception as e:
        # injected clients may raise anything; the evaluation still completes
        logger.warning("Breach API lookup failed with %s: %s", type(e).__name__, e)
        return BreachResult(None, f"Breach API check failed: {e}")

    if found:
        return BreachResult(True, "Found in breach database (API)")
    return BreachResult(False, "Not found in breach database (API)")
