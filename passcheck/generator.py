import secrets
from typing import Optional

from passlib.pwd import genphrase, genword

SYMBOLS = "!@#$%^&*"

DICEWARE_WORDS = {
    "tr": (
        "kedi", "masa", "elma", "güneş", "araba", "kitap", "yaz", "kış", "bulut", "deniz",
        "kalem", "yol", "şehir", "dağ", "çiçek", "yıldız", "ev", "beyaz", "mavi", "yeşil",
        "sandalye", "balkon", "bahar", "göl", "orman", "kuş", "balık", "göz", "el", "ayak",
    ),
    "en": (
        "cat", "table", "apple", "sun", "car", "book", "summer", "winter", "cloud", "sea",
        "pen", "road", "city", "mountain", "flower", "star", "house", "white", "blue", "green",
        "chair", "balcony", "spring", "lake", "forest", "bird", "fish", "eye", "hand", "foot",
    ),
}


class PasswordGenerator:
    """Generates suggested passwords and passphrases"""

    UPPERCASE = "ABCDEFGHJKLMNPQRSTUVWXYZ"
    LOWERCASE = "abcdefghijkmnopqrstuvwxyz"
    DIGITS = "23456789"

    MODE_CONFIG = {
        "random": {"length": 12},
        "advanced": {"length": 12},
        "passphrase": {"word_count": 4},
        "diceware": {"word_count": 4, "lang": "tr", "separator": "-"},
    }

    def __init__(self, mode: str = "random"):
        """
        mode: kind of suggestion (random, advanced, passphrase, diceware)
        """
        if mode not in self.MODE_CONFIG:
            raise ValueError(f"Unknown mode: {mode}")

        self.mode = mode
        self.config = self.MODE_CONFIG[mode]

    def generate(self, **overrides) -> str:
        settings = {**self.config, **overrides}
        if self.mode == "diceware":
            return self.diceware_passphrase(**settings)
        if self.mode == "advanced":
            return self.advanced_password(**settings)
        if self.mode == "passphrase":
            return self.passphrase(settings["word_count"])
        return self.random_password(settings["length"])

    def random_password(self, length: int = 12) -> str:
        chars = self.UPPERCASE + self.LOWERCASE + self.DIGITS + SYMBOLS
        return genword(length=length, chars=chars)

    def advanced_password(
        self,
        length: int = 12,
        upper: bool = True,
        lower: bool = True,
        digit: bool = True,
        symbol: bool = True,
        **_,
    ) -> str:
        chars = ""
        if upper:
            chars += self.UPPERCASE
        if lower:
            chars += self.LOWERCASE
        if digit:
            chars += self.DIGITS
        if symbol:
            chars += SYMBOLS
        return genword(length=length, chars=chars or self.LOWERCASE)

    def diceware_passphrase(
        self,
        word_count: int = 4,
        lang: str = "tr",
        separator: str = "-",
        add_symbol: bool = False,
        add_number: bool = False,
        **_,
    ) -> str:
        words = DICEWARE_WORDS["en"] if lang == "en" else DICEWARE_WORDS["tr"]
        phrase = genphrase(length=word_count, words=words, sep=" ").split(" ")

        if add_symbol:
            i = secrets.randbelow(len(phrase))
            phrase[i] += secrets.choice(SYMBOLS)
        if add_number:
            i = secrets.randbelow(len(phrase))
            phrase[i] += str(secrets.randbelow(90) + 10)

        return separator.join(phrase)

    def passphrase(self, word_count: int = 4) -> str:
        return self.diceware_passphrase(word_count=word_count, lang="tr")


def suggestion_mode(options: Optional[dict]) -> str:
    """Picks the generator mode from suggestion options, first match wins"""
    options = options or {}
    for mode in ("diceware", "advanced", "passphrase"):
        if options.get(mode):
            return mode
    return "random"
