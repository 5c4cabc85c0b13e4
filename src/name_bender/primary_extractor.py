"""
Primary candidate extraction.

Derives one deterministic candidate name from the raw prompt so the user
sees an instant guess at the top of the list while the generator call is
still in flight.
"""

import re
from typing import Optional

from .name_normalizer import normalize


# "... call it 'Bottom Up'", "... called Future Memories" at the end of the prompt
NAMING_PATTERN = re.compile(
    r"\bcall(?:ed)?\s+(?:it\s+)?['\"]?(.+?)['\"]?$",
    re.IGNORECASE,
)

CONVERSATIONAL_TAIL = re.compile(
    r"\s+or\s+something(?:\s+like\s+that)?$",
    re.IGNORECASE,
)

QUOTE_CHARS = "'\""

MAX_VERBATIM_TOKENS = 2


def extract_primary_candidate(prompt: str) -> Optional[str]:
    """
    Extract the primary candidate from a prompt, before normalization.

    Args:
        prompt: Free-text description typed by the user

    Returns:
        The candidate as written in the prompt, or None when the prompt
        neither names the product explicitly nor is one or two words long
    """
    if not prompt:
        return None

    text = prompt.strip()

    match = NAMING_PATTERN.search(text)
    if match and match.group(1):
        candidate = CONVERSATIONAL_TAIL.sub("", match.group(1).strip())
        candidate = candidate.strip().strip(QUOTE_CHARS).strip()
        return candidate or None

    tokens = text.split()
    if 0 < len(tokens) <= MAX_VERBATIM_TOKENS:
        return text

    return None


def extract_primary_name(prompt: str) -> Optional[str]:
    """Extract and normalize the primary candidate; None if nothing usable."""
    candidate = extract_primary_candidate(prompt)
    if candidate is None:
        return None
    return normalize(candidate) or None
