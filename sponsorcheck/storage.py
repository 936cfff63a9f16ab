import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping

from sponsorcheck.config import Config
from sponsorcheck.index_builder import BuildMetadata, SponsorIndex

logger = Config.logger


def _write_json(data: Dict[str, Any], path: str) -> Path:
    target = Path(path)
    target.parent.mkdir(exist_ok=True, parents=True)
    with open(target, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    return target


def _read_json(path: str) -> Any:
    with open(Path(path), "r", encoding="utf-8") as f:
        return json.load(f)


def persist_index(index: Mapping[str, str], path: str) -> Path:
    """Write the index as a flat JSON object of key -> display name."""
    target = _write_json(dict(index), path)
    logger.info(f"✓ Wrote {len(index)} index entries to {target}")
    return target


def load_index(path: str) -> SponsorIndex:
    """
    Load a persisted index as a read-only mapping.

    Raises:
        FileNotFoundError: the index file does not exist
        ValueError: the document is not valid JSON or not a flat string map
    """
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"Sponsor index at {path} is not a JSON object")
    for key, value in data.items():
        if not isinstance(value, str):
            raise ValueError(f"Sponsor index entry {key!r} is not a string")
    return MappingProxyType(data)


def persist_metadata(metadata: BuildMetadata, path: str) -> Path:
    return _write_json(metadata.to_dict(), path)


def load_metadata(path: str) -> BuildMetadata:
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"Sponsor metadata at {path} is not a JSON object")
    try:
        return BuildMetadata.from_dict(data)
    except (KeyError, TypeError) as e:
        raise ValueError(f"Sponsor metadata at {path} is incomplete: {e}") from e
