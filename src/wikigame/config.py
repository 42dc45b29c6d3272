import re
from pathlib import Path

# HTTP identity and base endpoints
HEADERS = {"User-Agent": "wiki-game analysis by wiki-game@tomjwatson.com"}
WIKIDATA_API_ENDPOINT = "https://www.wikidata.org/w/api.php"
WIKIPEDIA_API_ENDPOINT = "https://en.wikipedia.org/w/api.php"
PAGEVIEWS_ENDPOINT = (
    "https://wikimedia.org/api/rest_v1/metrics/pageviews/per-article/"
    "{project}/{access}/{agent}/{article}/{granularity}/{start}/{end}"
)
COMMONS_IMAGE_URL = "https://commons.wikimedia.org/w/index.php?title=Special:Redirect/file/{image}&width=300"
WIKIPEDIA_PAGE_URL = "https://en.wikipedia.org/wiki/{title}"

# Request tuning
API_TIMEOUT = None  # Seconds per HTTP request; None leaves requests to block
RATE_LIMIT_PAUSE_SECONDS = 30  # Single pause after a 429, the response is still parsed

# Pageview enrichment configuration
PAGEVIEWS_PROJECT = "en.wikipedia"
PAGEVIEWS_ACCESS = "all-access"
PAGEVIEWS_AGENT = "all-agents"
PAGEVIEWS_GRANULARITY = "monthly"
PAGEVIEWS_START = "2021010100"
PAGEVIEWS_END = "2021020100"

# Record paths
LABEL_LANG = "en"
WIKIPEDIA_SITE = "enwiki"
INSTANCE_OF_PROPERTY = "P31"
OCCUPATION_PROPERTY = "P106"

# Ranked by importance: the first prop found on an item is the one used for it.
DATE_PROPS = (
    ("P575", "time of discovery or invention"),
    ("P7589", "date of assent"),
    ("P577", "publication date"),
    ("P1191", "date of first performance"),
    ("P1619", "date of official opening"),
    ("P571", "inception"),
    ("P1249", "time of earliest written record"),
    ("P576", "dissolved, abolished or demolished date"),
    ("P8556", "extinction date"),
    ("P6949", "announcement date"),
    ("P1319", "earliest date"),
    ("P570", "date of death"),
    ("P569", "date of birth"),
    ("P580", "start time"),
    ("P582", "end time"),
    ("P7124", "date of the first one"),
    ("P7125", "date of the latest one"),
)

# Static qualification thresholds
MIN_SITELINKS = 15
EXCLUDED_TYPE_LABELS = {"taxon"}
HUMAN_TYPE_LABEL = "human"

# (year strictly after, minimum views); the last row has no year bound.
HUMAN_PAGE_VIEW_CASCADE = (
    (1920, 100000),
    (1900, 25000),
    (1800, 15000),
    (None, 10000),
)
GENERAL_PAGE_VIEW_CASCADE = (
    (1960, 40000),
    (1900, 25000),
    (1800, 15000),
    (None, 10000),
)

LABEL_BLOCKLIST = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        # Dates
        r"century",
        r"\d\d\d\d",
        # Meta
        r"wikipedia",
        r"list of",
        # Uninteresting
        r"airport",
        r"flag of",
    )
]

DESCRIPTION_BLOCKLIST = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        # Space objects
        r"galaxy",
        r"constellation",
        r"star",
        r"planet",
        r"nebula",
        r"moon",
        r"supernova",
        r"asteroid",
        r"cluster",
        r"natural satellite",
        # Chemicals
        r"compound",
        r"element",
        # Locations
        r"region",
        r"state",
        r"capital",
        r"borough",
        r"community",
        r"department",
        r"province",
        r"county",
        r"city",
        r"town",
        r"commune",
        r"federal subject",
        # Niches
        r"football",
        r"basketball",
        r"baseball",
        r"esportiva",
        r"sport",
        r"team",
        # Datetimes
        r"decade",
        r"domain",
        # Animals
        r"species",
    )
]

# Input/output locations
DEFAULT_INPUT_PATH = Path("processed.json")
DEFAULT_OUTPUT_PATH = Path("items.json")
ITEM_SCHEMA_PATH = Path(__file__).resolve().parent / "resolved_item.schema.json"

# Run logging and telemetry
TOTAL_RECORDS_HINT = 47711555
PROGRESS_LOG_EVERY = 100000
