# --- Quality Scoring ---
# final = sum(weight * sub_score); weights sum to 1.0

POPULARITY_WEIGHT = 0.4
RELEVANCE_WEIGHT = 0.3
RECENCY_WEIGHT = 0.2
STRUCTURE_WEIGHT = 0.1

POPULARITY_LOG_DIVISOR = 5  # log10(100_000 + 1) / 5 ~= 1.0
POPULARITY_FLOOR = 0.1  # unstarred repos still get some weight

RELEVANCE_MAX = 100.0  # assumed upper bound of the API-native score

# (max age in days, score) checked in order, strict less-than
RECENCY_STEPS: tuple[tuple[int, float], ...] = (
    (7, 1.0),
    (30, 0.9),
    (90, 0.7),
    (180, 0.5),
    (365, 0.3),
)
RECENCY_STALE = 0.2

STRUCTURE_BASE = 0.5
SOURCE_DIR_MARKERS = ("/src/", "/lib/")
SOURCE_DIR_BONUS = 0.2
TYPED_EXTENSIONS = (".ts", ".tsx", ".go", ".rs", ".java", ".kt", ".swift", ".cs", ".scala")
TYPED_EXTENSION_BONUS = 0.1
COMPONENT_DIR_MARKERS = ("/components/", "/ui/")
COMPONENT_DIR_BONUS = 0.1
VENDOR_DIR_MARKERS = ("/node_modules/", "/vendor/", "/third_party/")
VENDOR_DIR_PENALTY = 0.5
BUILD_DIR_MARKERS = ("/dist/", "/build/", "/out/", "/target/")
BUILD_DIR_PENALTY = 0.3
SHALLOW_PATH_SEGMENTS = 3
SHALLOW_PATH_PENALTY = 0.2


# --- Ranking & Diversity ---

DEFAULT_TOP_N = 10
DIVERSITY_THRESHOLD = 40.0  # % of results; at or above means one domain dominates
TOP_DOMAINS_SHOWN = 5


# --- GitHub Code Search ---

GITHUB_API = "https://api.github.com"
GITHUB_SEARCH_MAX_PER_PAGE = 100
CODE_SEARCH_LIMIT = 30
CODE_FETCH_COUNT = 3
CODE_CONTENT_MAX_LINES = 200


# --- Parallel Web Search ---

PARALLEL_API = "https://api.parallel.ai"
PARALLEL_PROCESSORS = ("lite", "base", "pro", "ultra")
PARALLEL_DEFAULT_PROCESSOR = "pro"
PARALLEL_MAX_RESULTS = 15
PARALLEL_MAX_CHARS = 5000
PARALLEL_MIN_CHARS = 100
PARALLEL_MAX_QUERIES = 5
PARALLEL_MAX_QUERY_LENGTH = 200


# --- HTTP ---

REQUEST_TIMEOUT = 30.0


# --- Reports ---

RESEARCH_DIR = "docs/research"
FILENAME_MAX_LENGTH = 50
