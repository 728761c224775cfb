import re
import time

_TRANSLITERATION = str.maketrans(
    {
        "ā": "a",
        "ă": "a",
        "à": "a",
        "č": "c",
        "ć": "c",
        "ē": "e",
        "è": "e",
        "é": "e",
        "ģ": "g",
        "ī": "i",
        "ì": "i",
        "ķ": "k",
        "ļ": "l",
        "ņ": "n",
        "š": "s",
        "ś": "s",
        "ū": "u",
        "ù": "u",
        "ž": "z",
        "ź": "z",
    }
)


def slugify(value: str) -> str:
    """Lowercase ASCII slug with Latvian letters transliterated"""
    value = value.strip().lower().translate(_TRANSLITERATION)
    value = re.sub(r"[^a-z0-9]+", "-", value)
    return value.strip("-")


def generate_sku(name: str) -> str:
    """Three-letter name prefix plus the last six digits of the clock"""
    prefix = re.sub(r"[^A-Za-z0-9]", "", slugify(name))[:3].upper() or "PRD"
    return f"{prefix}-{str(int(time.time() * 1000))[-6:]}"
