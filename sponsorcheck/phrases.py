import re
from dataclasses import dataclass
from typing import Iterator, Tuple

REFUSAL = "refusal"
WARNING = "warning"

NO_MATCH_TEXT = "No obvious refusal language found"

# (label, kind, pattern); evaluated in order, every hit is reported
PHRASE_PATTERNS = (
    (
        "Explicit no sponsorship",
        REFUSAL,
        re.compile(
            r"(does not offer (visa|work)\s*sponsorship|no (visa|work)\s*sponsorship"
            r"|cannot sponsor|we (do not|don't) sponsor)",
            re.IGNORECASE,
        ),
    ),
    (
        "No CoS",
        REFUSAL,
        re.compile(
            r"(no\s*(certificate of sponsorship|cos)\b|not provide\s*(a\s*)?cos"
            r"|cannot provide\s*(a\s*)?(certificate of sponsorship|cos))",
            re.IGNORECASE,
        ),
    ),
    (
        "Right to work required (warning)",
        WARNING,
        re.compile(
            r"(must have (the )?right to work|right to work in the uk required"
            r"|must already have the right to work)",
            re.IGNORECASE,
        ),
    ),
)


@dataclass(frozen=True)
class PhraseMatchSet:
    """Labels found in a text sample, in pattern order."""

    matches: Tuple[Tuple[str, str], ...] = ()

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(label for label, _ in self.matches)

    @property
    def refusals(self) -> Tuple[str, ...]:
        return tuple(label for label, kind in self.matches if kind == REFUSAL)

    @property
    def warnings(self) -> Tuple[str, ...]:
        return tuple(label for label, kind in self.matches if kind == WARNING)

    @property
    def found(self) -> bool:
        return bool(self.matches)

    @property
    def summary(self) -> str:
        if not self.matches:
            return NO_MATCH_TEXT
        return " | ".join(self.labels)

    def __contains__(self, label: object) -> bool:
        return label in self.labels

    def __iter__(self) -> Iterator[str]:
        return iter(self.labels)

    def __len__(self) -> int:
        return len(self.matches)

    def __str__(self) -> str:
        return self.summary


def scan(text: str) -> PhraseMatchSet:
    """Check a job text sample for sponsorship refusal or right-to-work language."""
    if not text:
        return PhraseMatchSet()
    return PhraseMatchSet(
        tuple((label, kind) for label, kind, pattern in PHRASE_PATTERNS if pattern.search(text))
    )
