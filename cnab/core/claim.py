"""
Claim parsing.

A claim is the record of one installation: the bundle that was installed,
when the record was created and last modified, and the outcome of the last
action. Claims are stored as JSON; ``parse_claim`` decodes that text and
turns the ``created`` / ``modified`` strings into UTC datetimes.

Do not ``json.loads`` claim text and use it directly as a claim; the time
fields would be missing.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from dateutil import parser as date_parser

from ..exceptions import ParseError
from ..observability import bundle_context, describe_bundle, get_logger, log_operation
from .types import ClaimDict

logger = get_logger(__name__)


def _parse_timestamp(value: Any, field: str) -> Optional[datetime]:
    """
    Best-effort timestamp parse.

    Returns an aware UTC datetime, or None when the value is missing or not
    a recognisable timestamp. Naive timestamps are taken as UTC.
    """
    if not isinstance(value, str) or not value.strip():
        logger.warning(f"Claim field '{field}' is missing or not a string; time left unset")
        return None

    try:
        parsed = date_parser.parse(value)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        # Offsets near datetime.min/max can push the UTC instant out of range
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        logger.warning(f"Claim field '{field}' is not a valid timestamp ({value!r}): {e}")
        return None


def parse_claim(json_text: str) -> ClaimDict:
    """
    Parse a claim from JSON.

    Args:
        json_text: The JSON formatted text of the claim

    Returns:
        Claim dictionary with ``createdTime`` and ``modifiedTime`` added

    Raises:
        ParseError: If the text is not JSON (including undecodable bytes and
            nesting too deep to decode), or not a JSON object
    """
    try:
        claim = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid claim JSON: {e.msg}", source="claim", position=e.pos) from e
    except UnicodeDecodeError as e:
        raise ParseError(
            f"Claim bytes are not valid UTF-8/16/32: {e.reason}", source="claim", position=e.start
        ) from e
    except RecursionError as e:
        raise ParseError("Claim JSON is nested too deeply", source="claim") from e
    except TypeError as e:
        raise ParseError(f"Claim text must be str or bytes: {e}", source="claim") from e

    if not isinstance(claim, dict):
        raise ParseError(
            f"Claim must be a JSON object, got {type(claim).__name__}", source="claim"
        )

    with bundle_context(
        **describe_bundle(claim.get("bundle")),
        installation=claim.get("name"),
        revision=claim.get("revision"),
    ):
        claim["createdTime"] = _parse_timestamp(claim.get("created"), "created")
        claim["modifiedTime"] = _parse_timestamp(claim.get("modified"), "modified")
        log_operation(logger, "claim.parse", level=logging.DEBUG)
    return claim


class ClaimParser:
    """Namespace-style access to claim parsing, e.g. ``ClaimParser.parse(text)``."""

    @staticmethod
    def parse(json_text: str) -> ClaimDict:
        """Parse a claim from JSON. See ``parse_claim``."""
        return parse_claim(json_text)
