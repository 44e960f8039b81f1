"""
HTML entry point for JSON-LD extraction.

This module turns raw HTML into a navigable BeautifulSoup document and
locates the JSON-LD payloads embedded in it.

Locating works in a single pass:
1. Select every <script type="application/ld+json"> node in document order.
2. Parse each node's text as one JSON document, only when the consumer
   asks for the next value.

Script nodes whose text is not valid JSON are skipped so that one broken
tag never hides the rest of the page.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Optional

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

JSONLD_SELECTOR = "script[type='application/ld+json']"
DEFAULT_FEATURES = "html.parser"

# Marks a script whose text failed to parse; JSON null is a real value.
_MALFORMED = object()


@dataclass
class LocateStats:
    """Counters filled in by locate_jsonld_elements while it is consumed."""

    found: int = 0
    parsed: int = 0
    skipped: int = 0


def html_to_document(html: str | bytes, features: str = DEFAULT_FEATURES) -> BeautifulSoup:
    """Parse HTML text into a BeautifulSoup document."""
    if html is None:
        raise ValueError("HTML input must not be None")
    return BeautifulSoup(html, features)


def read_document(html_path: Path, features: str = DEFAULT_FEATURES) -> BeautifulSoup:
    """
    Read an HTML file and parse it into a document.
    Undecodable bytes are replaced rather than raising.
    """
    html_content = Path(html_path).read_text(encoding="utf-8", errors="replace")
    return html_to_document(html_content, features)


def _script_text(script: Tag) -> str:
    """Inner text of a script node; empty string when it has none."""
    return script.string or script.get_text() or ""


def _parse_script(raw: str) -> Any:
    """Return the parsed JSON value, or _MALFORMED when raw is not one JSON document."""
    try:
        return json.loads(raw)
    except (ValueError, TypeError, RecursionError) as e:
        logger.debug("Skipping malformed JSON-LD script: '%s'.", e)
        return _MALFORMED


def locate_jsonld_elements(document: Tag, stats: Optional[LocateStats] = None) -> Iterator[Any]:
    """
    Yield the parsed JSON value of every JSON-LD script in document order.

    Scripts with malformed or empty content are dropped without raising.
    Pass a LocateStats to learn how many were found, parsed and skipped.
    """
    if document is None:
        raise ValueError("document must not be None")
    return _locate(document, stats if stats is not None else LocateStats())


def _locate(document: Tag, stats: LocateStats) -> Iterator[Any]:
    for script in document.css.iselect(JSONLD_SELECTOR):
        stats.found += 1
        value = _parse_script(_script_text(script))
        if value is _MALFORMED:
            stats.skipped += 1
            continue
        stats.parsed += 1
        yield value

    logger.debug(
        "JSON-LD scripts: %d found, %d parsed, %d skipped.",
        stats.found, stats.parsed, stats.skipped,
    )
