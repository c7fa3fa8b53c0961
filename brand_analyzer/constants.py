"""Application-wide constants.

This module centralizes all magic numbers and heuristic vocabularies
to ensure a single source of truth and easier maintenance.

Constants are organized by category. Runtime-tunable values are also
exposed through Settings (see config.py) and default to these.
"""

# =============================================================================
# HTTP Fetch Configuration
# =============================================================================

# Timeout for the primary page fetch (seconds)
PAGE_FETCH_TIMEOUT_SECONDS = 12.0

# Timeout for each linked stylesheet fetch (seconds)
STYLESHEET_FETCH_TIMEOUT_SECONDS = 8.0

# Maximum redirect hops followed for the primary page
MAX_REDIRECTS = 5

# Maximum number of external stylesheets scanned per analysis
MAX_EXTERNAL_STYLESHEETS = 3

# Identity disclosed to the sites we analyze
BOT_USER_AGENT = (
    "Mozilla/5.0 (compatible; BrandAnalyzerBot/1.0; "
    "+https://github.com/brand-analyzer)"
)
STYLESHEET_USER_AGENT = "BrandAnalyzerBot/1.0"

# =============================================================================
# Result Cache
# =============================================================================

# TTL for analysis results (seconds) - 5 minutes
RESULT_CACHE_TTL_SECONDS = 300

# Upper bound on cached analyses kept in memory
RESULT_CACHE_MAX_ENTRIES = 256

# =============================================================================
# Logo Heuristics
# =============================================================================

LOGO_PRIORITY_OG_IMAGE = 1
LOGO_PRIORITY_TWITTER_IMAGE = 2
LOGO_PRIORITY_APPLE_TOUCH_ICON = 3
LOGO_PRIORITY_IMG = 4
LOGO_PRIORITY_INLINE_SVG = 5
LOGO_PRIORITY_FAVICON = 6
LOGO_PRIORITY_FAVICON_FALLBACK = 7

# =============================================================================
# Tagline Heuristics
# =============================================================================

# Hero/tagline selectors, tried in order
TAGLINE_SELECTORS = (
    '[class*="tagline"]',
    '[class*="slogan"]',
    '[class*="hero"] h1',
    '[class*="hero"] h2',
    '[class*="headline"]',
    "header h1",
    "header h2",
    ".hero h1",
    ".hero h2",
    "#hero h1",
    "#hero h2",
)

# Hero text is accepted when strictly between these lengths (chars)
TAGLINE_MIN_CHARS = 4
TAGLINE_MAX_CHARS = 200

# Social descriptions shorter than this are treated as taglines
SOCIAL_TAGLINE_MAX_CHARS = 120

# First <h1> shorter than this is treated as a tagline
H1_TAGLINE_MAX_CHARS = 150

# =============================================================================
# Font Heuristics
# =============================================================================

MAX_FONTS = 6

# Font names are kept when strictly between these lengths (chars)
FONT_NAME_MIN_CHARS = 1
FONT_NAME_MAX_CHARS = 60

GENERIC_FONT_KEYWORDS = frozenset(
    (
        "serif",
        "sans-serif",
        "monospace",
        "cursive",
        "fantasy",
        "inherit",
        "initial",
        "unset",
    )
)

FONT_SAMPLE_TEXT = "Aa Bb Cc 123"

SYSTEM_DEFAULT_FONT_NAME = "System Default"

# =============================================================================
# Color Heuristics
# =============================================================================

MAX_COLORS = 8

# Weight per sighting of a brand-vocabulary custom property
BRAND_VARIABLE_WEIGHT = 3

# Weight per sighting of a plain color declaration
COLOR_PROPERTY_WEIGHT = 1

# Custom property name fragments considered brand-relevant
BRAND_VOCABULARY = (
    "color",
    "bg",
    "background",
    "primary",
    "secondary",
    "accent",
    "brand",
    "text",
    "foreground",
    "surface",
    "muted",
)

# Colors whose average channel value falls outside this window are neutral
NEUTRAL_BRIGHTNESS_LOW = 25
NEUTRAL_BRIGHTNESS_HIGH = 230

# First-pass label thresholds (accumulated weight)
PRIMARY_WEIGHT_THRESHOLD = 5
SECONDARY_WEIGHT_THRESHOLD = 2

# =============================================================================
# Result Assembly
# =============================================================================

MISSING_DESCRIPTION_PLACEHOLDER = "No description found."
