import re
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from sponsorcheck.config import Config
from sponsorcheck.normalizer import normalize

logger = Config.logger

SponsorIndex = Mapping[str, str]


class ConfigurationError(ValueError):
    """The registry table cannot be turned into an index."""


@dataclass(frozen=True)
class BuildMetadata:
    source: str
    generated_at_utc: str
    organisation_name_column: str
    rows_parsed: int
    unique_normalized_keys: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BuildMetadata":
        return cls(
            source=str(data["source"]),
            generated_at_utc=str(data["generated_at_utc"]),
            organisation_name_column=str(data["organisation_name_column"]),
            rows_parsed=int(data["rows_parsed"]),
            unique_normalized_keys=int(data["unique_normalized_keys"]),
        )


# Tried in order; a later, looser rule only runs when no header satisfies an earlier one.
COLUMN_RULES = (
    lambda h: re.search(r"organi[sz]ation.*name", h, re.IGNORECASE),
    lambda h: re.search(r"organisation", h, re.IGNORECASE) and re.search(r"name", h, re.IGNORECASE),
    lambda h: re.search(r"organization", h, re.IGNORECASE) and re.search(r"name", h, re.IGNORECASE),
    lambda h: re.fullmatch(r"name", h, re.IGNORECASE),
    lambda h: re.search(r"name", h, re.IGNORECASE),
)


def detect_organisation_name_column(headers: Sequence[str]) -> Optional[str]:
    """Pick the header holding organisation names, or None if nothing looks like one."""
    for rule in COLUMN_RULES:
        for header in headers:
            if rule(str(header)):
                return header
    return None


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build(
    rows: Sequence[Mapping[str, Any]], source: str = Config.SOURCE_LABEL
) -> Tuple[SponsorIndex, BuildMetadata]:
    """
    Compress registry rows into a lookup of normalized key -> display name.

    Args:
        rows: Registry records, each a mapping of column name to value
        source: Provenance label recorded in the metadata

    Returns:
        A read-only index and the metadata describing the build

    Raises:
        ConfigurationError: no rows, or no organisation-name column
    """
    if not rows:
        raise ConfigurationError("Registry parsed but contained zero records")

    headers = list(rows[0].keys())
    column = detect_organisation_name_column(headers)
    if column is None:
        raise ConfigurationError(
            f"Could not detect organisation name column in headers: {headers}"
        )

    index: Dict[str, str] = {}
    unique_keys = 0

    for row in rows:
        value = row.get(column)
        if not isinstance(value, str):
            continue
        raw_name = value.strip()
        if not raw_name:
            continue

        key = normalize(raw_name)
        if not key:
            continue

        if key not in index:
            index[key] = raw_name
            unique_keys += 1

    metadata = BuildMetadata(
        source=source,
        generated_at_utc=_utc_timestamp(),
        organisation_name_column=column,
        rows_parsed=len(rows),
        unique_normalized_keys=unique_keys,
    )
    logger.info(
        f"Index built from column '{column}': {len(rows)} rows, {unique_keys} unique keys"
    )
    return MappingProxyType(index), metadata


ENCODINGS = ["utf-8-sig", "utf-16", "latin-1", "cp1252"]
SEPARATORS = [",", "\t", ";"]


def load_registry_csv(path: str) -> List[Dict[str, Any]]:
    """Read the registry CSV into row dicts, trying encodings/separators until one loads."""
    csv_file = Path(path)
    if not csv_file.exists():
        raise FileNotFoundError(f"Missing CSV at: {csv_file}")

    fallback: Optional[pd.DataFrame] = None
    for encoding in ENCODINGS:
        for sep in SEPARATORS:
            try:
                df = pd.read_csv(
                    csv_file,
                    encoding=encoding,
                    sep=sep,
                    dtype=str,
                    keep_default_na=False,
                    skip_blank_lines=True,
                    on_bad_lines="skip",
                )
            except pd.errors.EmptyDataError:
                return []
            except (UnicodeError, pd.errors.ParserError):
                continue
            if len(df.columns) > 1:
                logger.debug(f"Parsed {csv_file} with encoding={encoding!r} sep={sep!r}")
                return df.to_dict(orient="records")
            if fallback is None:
                fallback = df

    if fallback is None:
        raise ValueError(f"Could not read CSV: {csv_file}")
    return fallback.to_dict(orient="records")
