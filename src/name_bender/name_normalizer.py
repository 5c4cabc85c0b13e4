"""
Name normalization helpers.

Pure string transforms shared by the extractor, the generator adapter and
the candidate store: canonical root labels, candidate id minting and the
parsing of generator responses into name lists.
"""

import json
import re
import secrets
import time

from .enums import GenerationErrorCode
from .exceptions import GenerationError


# Generators like to wrap JSON answers in a Markdown code fence.
CODE_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*|\s*```\s*$", re.IGNORECASE)


def normalize(raw: str) -> str:
    """
    Turn free text into a root label: lower-case, no whitespace, no dots.

    Never raises. Empty or whitespace-only input gives an empty string, which
    callers filter out before use.
    """
    if not raw:
        return ""
    return "".join(
        ch for ch in raw.lower() if not ch.isspace() and ch != "."
    )


def mint_id(name: str) -> str:
    """
    Mint an opaque candidate id.

    Names repeat across generation batches, so the id mixes in a nanosecond
    timestamp and random bits.
    """
    return f"{name}-{time.time_ns()}-{secrets.token_hex(4)}"


def unique_names(names: list[str]) -> list[str]:
    """Normalize names, dropping empties and repeats while keeping order."""
    seen: set[str] = set()
    result = []
    for raw in names:
        name = normalize(raw)
        if name and name not in seen:
            seen.add(name)
            result.append(name)
    return result


def parse_generated_names(response_text: str) -> list[str]:
    """
    Parse a generator answer of the form {"domains": [...]}.

    Args:
        response_text: Raw text returned by the generator

    Returns:
        Normalized, de-duplicated names in the order they were given

    Raises:
        GenerationError: If the text is not the expected JSON object
    """
    sanitized = CODE_FENCE_PATTERN.sub("", (response_text or "").strip()).strip()
    try:
        payload = json.loads(sanitized)
    except json.JSONDecodeError as e:
        raise GenerationError(
            code=GenerationErrorCode.PARSE_ERROR.value,
            message=f"Generator returned invalid JSON: {e}",
            details={"response_text": response_text},
        )

    if not isinstance(payload, dict):
        raise GenerationError(
            code=GenerationErrorCode.PARSE_ERROR.value,
            message="Generator response is not a JSON object",
            details={"response_text": response_text},
        )

    domains = payload.get("domains") or []
    if not isinstance(domains, list):
        raise GenerationError(
            code=GenerationErrorCode.PARSE_ERROR.value,
            message="Generator response field 'domains' is not a list",
            details={"response_text": response_text},
        )

    return unique_names([d for d in domains if isinstance(d, str)])
