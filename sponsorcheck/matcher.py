from dataclasses import dataclass
from functools import total_ordering
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from rapidfuzz import fuzz, process

from sponsorcheck.config import Config
from sponsorcheck.index_builder import SponsorIndex
from sponsorcheck.normalizer import normalize, tokenize


@total_ordering
class Confidence(Enum):
    """How a query was resolved; compares by strength (EXACT is highest)."""

    TOKEN_OVERLAP = 1
    CONTAINS = 2
    EXACT = 3

    def __lt__(self, other):
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.value < other.value

    @property
    def label(self) -> str:
        return {
            Confidence.EXACT: "exact",
            Confidence.CONTAINS: "contains",
            Confidence.TOKEN_OVERLAP: "token",
        }[self]


@dataclass(frozen=True)
class NoMatch:
    def to_dict(self) -> Dict[str, Any]:
        return {"matched": False}


@dataclass(frozen=True)
class Match:
    confidence: Confidence
    name: str
    overlap_score: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"matched": True, "type": self.confidence.label, "name": self.name}
        if self.overlap_score is not None:
            data["overlap"] = self.overlap_score
        return data


MatchResult = Union[Match, NoMatch]


def match(query_name: str, index: SponsorIndex) -> MatchResult:
    """
    Resolve a raw company name against the sponsor index.

    Tiers run in order and the first to produce a result wins:
    exact key, substring containment either way, then shared words.
    Containment returns the first key in index order; among overlap
    candidates the earliest with the highest count wins.
    """
    key = normalize(query_name)
    if not key:
        return NoMatch()

    if key in index:
        return Match(Confidence.EXACT, index[key])

    for candidate in index:
        if candidate and (key in candidate or candidate in key):
            return Match(Confidence.CONTAINS, index[candidate])

    query_tokens = set(tokenize(key, Config.TOKEN_MIN_LENGTH))
    if len(query_tokens) < Config.MIN_TOKEN_OVERLAP:
        return NoMatch()

    best_key = None
    best_overlap = 0
    for candidate in index:
        overlap = len(query_tokens.intersection(tokenize(candidate, Config.TOKEN_MIN_LENGTH)))
        if overlap >= Config.MIN_TOKEN_OVERLAP and overlap > best_overlap:
            best_key, best_overlap = candidate, overlap

    if best_key is None:
        return NoMatch()
    return Match(Confidence.TOKEN_OVERLAP, index[best_key], best_overlap)


def suggest(
    query_name: str,
    index: SponsorIndex,
    limit: int = Config.SUGGESTION_LIMIT,
    threshold: int = Config.FUZZY_THRESHOLD,
) -> List[str]:
    """Closest registry names by fuzzy ratio, for when match() finds nothing."""
    key = normalize(query_name)
    if not key or not index:
        return []

    results = process.extract(
        key, list(index.keys()), scorer=fuzz.token_sort_ratio, score_cutoff=threshold, limit=limit
    )
    return [index[candidate] for candidate, _score, _ in results]


def describe(result: MatchResult) -> str:
    """Verdict line shown to the user."""
    if isinstance(result, NoMatch):
        return "❌ Not found in sponsor list (may be name mismatch)"
    if result.confidence is Confidence.EXACT:
        return f"✅ Sponsor: {result.name}"
    return f"⚠️ Sponsor (likely match): {result.name}"
