import os,logging
from dotenv import load_dotenv
load_dotenv()
class Config:
    SPONSOR_CSV = os.getenv("SPONSOR_CSV", "data/sponsors/sponsors.csv")
    SPONSOR_INDEX = os.getenv("SPONSOR_INDEX", "data/sponsors/sponsors_index.json")
    SPONSOR_METADATA = os.getenv("SPONSOR_METADATA", "data/sponsors/metadata.json")
    SOURCE_LABEL = os.getenv("SOURCE_LABEL", "GOV.UK Register of Licensed Sponsors (Workers and Temporary Workers)")
    TOKEN_MIN_LENGTH = int(os.getenv("TOKEN_MIN_LENGTH", 3))
    MIN_TOKEN_OVERLAP = int(os.getenv("MIN_TOKEN_OVERLAP", 2))
    FUZZY_THRESHOLD = int(os.getenv("FUZZY_THRESHOLD", 90))
    SUGGESTION_LIMIT = int(os.getenv("SUGGESTION_LIMIT", 3))
    TEXT_SAMPLE_LIMIT = int(os.getenv("TEXT_SAMPLE_LIMIT", 6000))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    logging.basicConfig(level=LOG_LEVEL,format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    logger = logging.getLogger("sponsorcheck")
    DISCLAIMER_TEXT = "Sponsor data comes from the public register and is for informational purposes only. A match does not guarantee the employer will sponsor this role. Always verify details with the employer directly."
