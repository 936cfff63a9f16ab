import threading
from pathlib import Path
from types import MappingProxyType
from typing import List, Mapping, Optional

from sponsorcheck.config import Config
from sponsorcheck.index_builder import BuildMetadata, SponsorIndex
from sponsorcheck.matcher import MatchResult, match, suggest
from sponsorcheck.storage import load_index, load_metadata

logger = Config.logger


class SponsorRegistry:
    """
    Handle on a built sponsor index, loaded once on first use.

    The handle never reloads: after the index is rebuilt, callers that
    want the new data construct a new SponsorRegistry.
    """

    def __init__(self, index_file: Optional[str] = None, metadata_file: Optional[str] = None):
        self.index_file = Path(index_file or Config.SPONSOR_INDEX)
        self.metadata_file = Path(metadata_file or Config.SPONSOR_METADATA)
        self._index: Optional[SponsorIndex] = None
        self._metadata: Optional[BuildMetadata] = None
        self._metadata_loaded = False
        self._lock = threading.Lock()

    @classmethod
    def from_index(cls, index: Mapping[str, str], metadata: Optional[BuildMetadata] = None) -> "SponsorRegistry":
        """Wrap an index already in memory."""
        registry = cls()
        registry._index = MappingProxyType(dict(index))
        registry._metadata = metadata
        registry._metadata_loaded = True
        return registry

    # ---------------- Loading ----------------

    @property
    def index(self) -> SponsorIndex:
        if self._index is None:
            with self._lock:
                if self._index is None:
                    logger.info(f"Loading sponsor index from {self.index_file}...")
                    self._index = load_index(str(self.index_file))
                    logger.info(f"✓ Loaded {len(self._index)} sponsors from index")
        return self._index

    @property
    def metadata(self) -> Optional[BuildMetadata]:
        """Build provenance, or None when no metadata file was written."""
        if not self._metadata_loaded:
            with self._lock:
                if not self._metadata_loaded:
                    if self.metadata_file.exists():
                        self._metadata = load_metadata(str(self.metadata_file))
                    else:
                        logger.warning(f"No sponsor metadata at {self.metadata_file}")
                    self._metadata_loaded = True
        return self._metadata

    def __len__(self) -> int:
        return len(self.index)

    # ---------------- Matching ----------------

    def check(self, company_name: str) -> MatchResult:
        return match(company_name, self.index)

    def suggest(self, company_name: str, limit: int = Config.SUGGESTION_LIMIT) -> List[str]:
        return suggest(company_name, self.index, limit=limit)
