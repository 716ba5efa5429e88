"""
Best-effort recovery of the JSON object a model was asked to return.

Models wrap JSON in markdown fences or leak chat-template tokens, so the
content goes through an ordered set of stages:

1. take ``choices[0].message.content`` from the provider envelope
2. strict parse of the whole content
3. otherwise use the body of the first fenced block (or the whole content)
4. strip template tokens and surrounding whitespace
5. strict parse again, or fail with ``MalformedResponse``

The parsed value is returned as-is. Nothing checks it against the expected
fields, so callers must treat every key as optional.
"""

import json
import logging
import re
from typing import Any

from ignitia.core.errors import EmptyContent, MalformedResponse

logger = logging.getLogger(__name__)

TEMPLATE_TOKENS = ("<s>", "</s>", "[INST]", "[/INST]")
EXCERPT_CHARS = 1000

_JSON_FENCE = re.compile(r"```json\n?([\s\S]*?)\n?```")
_BARE_FENCE = re.compile(r"```\n?([\s\S]*?)\n?```")


def extract_message_content(envelope: Any) -> str:
    try:
        content = envelope["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        content = None
    if not isinstance(content, str) or not content.strip():
        logger.error("No content in provider envelope: %s", str(envelope)[:EXCERPT_CHARS])
        raise EmptyContent(
            "AI model returned empty content. The model may be unavailable or rate-limited."
        )
    return content


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_strict(text: str) -> Any:
    """JSON.parse semantics: NaN and Infinity are not JSON."""
    return json.loads(text, parse_constant=_reject_constant)


def extract_fenced_block(content: str) -> str | None:
    """Inner text of the first ```json fence, else of the first bare fence."""
    match = _JSON_FENCE.search(content) or _BARE_FENCE.search(content)
    return match.group(1) if match else None


def strip_template_tokens(candidate: str) -> str:
    for token in TEMPLATE_TOKENS:
        candidate = candidate.replace(token, "")
    return candidate.strip()


def normalize_content(content: str) -> Any:
    if not isinstance(content, str) or not content.strip():
        raise EmptyContent(
            "AI model returned empty content. The model may be unavailable or rate-limited."
        )

    try:
        result = parse_strict(content)
        logger.info("Parsed AI response as strict JSON")
        return result
    except ValueError:
        pass

    fenced = extract_fenced_block(content)
    candidate = strip_template_tokens(fenced if fenced is not None else content)
    try:
        result = parse_strict(candidate)
    except ValueError as e:
        excerpt = content[:EXCERPT_CHARS]
        logger.error("Parse error details: %s", e)
        logger.error("Failed content (first %s chars): %s", EXCERPT_CHARS, excerpt)
        raise MalformedResponse(str(e), excerpt) from e

    logger.info(
        "Parsed AI response after cleanup (fenced=%s)", fenced is not None
    )
    return result


def normalize_response(envelope: Any) -> Any:
    return normalize_content(extract_message_content(envelope))
