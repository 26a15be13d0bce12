import asyncio
from pathlib import Path

from passcheck import StrengthLevel, evaluate
from passcheck.generator import PasswordGenerator

COUNT = 10
MAX_ATTEMPTS = 10000

BASE = Path("passwords")
BASE.mkdir(exist_ok=True)

SETS = {
    # name: (generator mode, generator overrides)
    "random": ("random", {"length": 14}),
    "advanced": ("advanced", {"length": 16}),
    "diceware": ("diceware", {"word_count": 5, "lang": "en", "add_symbol": True, "add_number": True}),
}

"""
Only suggestions our own evaluator rates at least "strong" are kept.
Passphrases built from a short word list often trip the letters-only and
dictionary rules, so each set may need several attempts per password.
"""


def level(pw):
    return asyncio.run(evaluate(pw)).level


for name, (mode, overrides) in SETS.items():
    out = BASE / f"{name}_passwords.txt"
    generator = PasswordGenerator(mode)
    passwords = []
    attempts = 0

    while len(passwords) < COUNT:
        if attempts >= MAX_ATTEMPTS:
            raise RuntimeError(f"Cannot generate strong enough passwords for {name}")

        pw = generator.generate(**overrides)
        attempts += 1

        if level(pw) >= StrengthLevel.STRONG:
            passwords.append(pw)

    out.write_text("\n".join(passwords) + "\n")

print("Password generation completed")
