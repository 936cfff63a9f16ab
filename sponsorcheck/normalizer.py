import re
from typing import List

# Legal-entity suffixes dropped as whole words
SUFFIX_TOKENS = (
    "limited",
    "ltd",
    "llp",
    "plc",
    "inc",
    "co",
    "company",
    "group",
    "holdings",
    "holding",
)

# Mis-decoded UTF-8 sequence first, so its pieces never survive as separate chars
APOSTROPHES = ("â€™", "'", "’")

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_SUFFIXES = re.compile(r"\b(?:" + "|".join(SUFFIX_TOKENS) + r")\b")
_WHITESPACE = re.compile(r"\s+")


def normalize(raw: str) -> str:
    """
    Map an organisation name to the key used for index lookups.

    Used by both the index builder and the matcher, so any change here
    requires rebuilding the index.
    """
    if not raw:
        return ""

    value = raw.lower().replace("&", " and ")
    for apostrophe in APOSTROPHES:
        value = value.replace(apostrophe, "")
    value = _NON_ALNUM.sub(" ", value)
    value = _SUFFIXES.sub(" ", value)
    return _WHITESPACE.sub(" ", value).strip()


def tokenize(key: str, min_length: int = 3) -> List[str]:
    """Split a normalized key into words, dropping short connectors."""
    return [token for token in key.split(" ") if len(token) >= min_length]
