"""
TLD Registry - the universe of TLDs a name can be checked against.

This module contains the curated list of publicly registrable TLDs used by
the check-all sweep, grouped by theme:
- Popular generic TLDs: .com, .net, .org, .io, etc.
- Tech, business, retail, creative and lifestyle TLDs
- A handful of geographic TLDs
It also holds the default selection and the selection size limit.
"""

import re

from .exceptions import ValidationError


# ============================================================================
# POPULAR GENERIC
# ============================================================================
GENERIC_TLDS = [
    ".com", ".net", ".org", ".info", ".biz", ".io", ".co", ".app", ".dev",
]

# ============================================================================
# TECH & STARTUPS
# ============================================================================
TECH_TLDS = [
    ".ai", ".tech", ".software", ".cloud", ".digital", ".systems", ".data",
    ".online", ".site", ".website", ".space", ".pro", ".xyz", ".link",
    ".click", ".dev", ".codes", ".tools", ".build", ".network",
]

# ============================================================================
# BUSINESS & FINANCE
# ============================================================================
BUSINESS_TLDS = [
    ".company", ".business", ".inc", ".llc", ".ltd", ".financial", ".finance",
    ".money", ".capital", ".investments", ".holdings", ".ventures",
    ".marketing", ".solutions", ".services", ".exchange", ".trading",
]

# ============================================================================
# E-COMMERCE & RETAIL
# ============================================================================
RETAIL_TLDS = [
    ".store", ".shop", ".shopping", ".sale", ".deals", ".market", ".boutique",
    ".style", ".fashion", ".clothing", ".shoes", ".jewelry", ".gifts",
    ".blackfriday",
]

# ============================================================================
# CREATIVE & MEDIA
# ============================================================================
CREATIVE_TLDS = [
    ".art", ".design", ".studio", ".media", ".graphics", ".gallery", ".photo",
    ".photography", ".pics", ".pictures", ".audio", ".video", ".film",
    ".show", ".tv", ".actor", ".agency", ".press", ".news", ".blog",
    ".social", ".live",
]

# ============================================================================
# LIFESTYLE & COMMUNITY
# ============================================================================
LIFESTYLE_TLDS = [
    ".life", ".style", ".world", ".community", ".group", ".club", ".family",
    ".fun", ".cool", ".zone", ".today", ".expert", ".guru", ".ninja",
    ".monster",
]

# ============================================================================
# FOOD & DRINK
# ============================================================================
FOOD_TLDS = [
    ".cafe", ".bar", ".pub", ".restaurant", ".pizza", ".kitchen", ".recipes",
    ".coffee", ".menu", ".wine", ".beer",
]

# ============================================================================
# HEALTH & FITNESS
# ============================================================================
HEALTH_TLDS = [
    ".health", ".healthcare", ".care", ".clinic", ".dental", ".hospital",
    ".medical", ".fit", ".fitness", ".yoga", ".diet",
]

# ============================================================================
# REAL ESTATE & HOME
# ============================================================================
REALESTATE_TLDS = [
    ".house", ".home", ".homes", ".estate", ".properties", ".property",
    ".realty", ".apartments", ".rent", ".lease", ".forsale",
]

# ============================================================================
# TRAVEL & TRANSPORT
# ============================================================================
TRAVEL_TLDS = [
    ".travel", ".tours", ".holiday", ".vacations", ".flights", ".taxi",
    ".limo", ".car", ".cars",
]

# ============================================================================
# EDUCATION & PROFESSIONAL
# ============================================================================
EDUCATION_TLDS = [
    ".edu", ".academy", ".college", ".university", ".school", ".study",
    ".courses", ".institute", ".foundation", ".org", ".ong",
]

# ============================================================================
# GEOGRAPHIC
# ============================================================================
GEOGRAPHIC_TLDS = [
    ".nyc", ".london", ".paris", ".tokyo", ".berlin", ".us", ".uk", ".ca",
    ".de", ".fr", ".se",
]

# ============================================================================
# OTHER INTERESTING / MODERN TLDs
# ============================================================================
MODERN_TLDS = [
    ".aero", ".asia", ".bet", ".bio", ".blue", ".cat", ".ceo", ".charity",
    ".chat", ".church", ".city", ".computer", ".consulting", ".contact",
    ".contractors", ".cool", ".credit", ".creditcard", ".cricket", ".dance",
    ".date", ".delivery", ".democrat", ".diamonds", ".directory", ".doctor",
    ".dog", ".domains", ".earth", ".email", ".energy", ".engineer",
    ".enterprises", ".equipment", ".events", ".exchange", ".fail", ".farm",
    ".fashion", ".fish", ".florist", ".football", ".fyi", ".games",
    ".garden", ".glass", ".global", ".gold", ".golf", ".guide", ".guitars",
    ".hockey", ".hosting", ".how", ".immo", ".industries", ".ink",
    ".international", ".jetzt", ".jobs", ".land", ".lawyer", ".legal",
    ".lighting", ".loan", ".loans", ".lol", ".luxe", ".maison",
    ".management", ".map", ".memorial", ".men", ".menu", ".moda", ".mom",
    ".mortgage", ".movie", ".museum", ".music", ".one", ".onl", ".page",
    ".partners", ".parts", ".party", ".pet", ".phone", ".place",
    ".plumbing", ".plus", ".poker", ".porn", ".productions", ".promo",
    ".pub", ".red", ".rehab", ".report", ".republican", ".rest", ".review",
    ".reviews", ".rip", ".rocks", ".run", ".save", ".science", ".security",
    ".sexy", ".shiksha", ".singles", ".soccer", ".solar", ".surf", ".surgery", ".tax", ".tattoo",
    ".team", ".theater", ".tips", ".tires", ".tours", ".town", ".toys",
    ".trade", ".training", ".tube", ".vet", ".viajes", ".villas", ".vision",
    ".vote", ".voyage", ".watch", ".webcam", ".wiki", ".win", ".work",
    ".works", ".wtf", ".zone",
]

# ============================================================================
# COMBINE ALL TLDs (deduplicated, sorted)
# ============================================================================
ALL_TLDS: tuple[str, ...] = tuple(sorted({
    tld
    for tld in (
        GENERIC_TLDS +
        TECH_TLDS +
        BUSINESS_TLDS +
        RETAIL_TLDS +
        CREATIVE_TLDS +
        LIFESTYLE_TLDS +
        FOOD_TLDS +
        HEALTH_TLDS +
        REALESTATE_TLDS +
        TRAVEL_TLDS +
        EDUCATION_TLDS +
        GEOGRAPHIC_TLDS +
        MODERN_TLDS
    )
    if tld.startswith(".")
}))

# Total count for reference
TLD_COUNT = len(ALL_TLDS)

# Used when no stored preference exists or it cannot be read
DEFAULT_SELECTED_TLDS: tuple[str, ...] = (".com", ".ai", ".co")

MAX_SELECTED_TLDS = 6

TLD_TOKEN_PATTERN = re.compile(r"^\.[a-z0-9-]+(?:\.[a-z0-9-]+)*$")


def is_known_tld(tld: str) -> bool:
    """Check whether a TLD token is part of the sweep universe."""
    return tld in ALL_TLDS


def parse_tld_token(raw: str) -> str:
    """
    Turn user input like "IO" or ".io" into a TLD token.

    Args:
        raw: TLD as typed, with or without the leading dot

    Returns:
        Lower-case token starting with "."

    Raises:
        ValidationError: If the token is empty or contains invalid characters
    """
    token = (raw or "").strip().lower()
    if token and not token.startswith("."):
        token = f".{token}"
    if not TLD_TOKEN_PATTERN.match(token):
        raise ValidationError(
            code="invalid_tld",
            message=f"'{raw}' is not a valid TLD",
            details={"raw_input": raw},
        )
    return token
