"""
Build the sponsor index from the register CSV.

    python -m sponsorcheck.build_index

Reads Config.SPONSOR_CSV and writes Config.SPONSOR_INDEX and
Config.SPONSOR_METADATA. Takes no arguments; paths come from the
environment (see sponsorcheck.config).
"""
import sys

from sponsorcheck.config import Config
from sponsorcheck.index_builder import ConfigurationError, build, load_registry_csv
from sponsorcheck.storage import persist_index, persist_metadata

logger = Config.logger


def main() -> int:
    try:
        rows = load_registry_csv(Config.SPONSOR_CSV)
        index, metadata = build(rows, source=Config.SOURCE_LABEL)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except ConfigurationError as e:
        logger.error(f"Cannot build sponsor index: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Could not parse sponsor CSV: {e}")
        return 1

    persist_index(index, Config.SPONSOR_INDEX)
    persist_metadata(metadata, Config.SPONSOR_METADATA)

    logger.info("Sponsor index built.")
    logger.info(f"Detected org column: {metadata.organisation_name_column}")
    logger.info(f"Rows parsed: {metadata.rows_parsed}")
    logger.info(f"Unique normalized keys: {metadata.unique_normalized_keys}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
