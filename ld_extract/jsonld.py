"""
Flattening and type filtering of parsed JSON-LD values.

A JSON-LD payload can arrive as a single described entity, a bare array
of entities, or a Schema.org "@graph" container wrapping many entities.
The helpers here unwrap all three shapes into one flat stream of
objects, and then keep the ones whose "@type" matches a requested
Schema.org type name.

Graph entries without their own "@context" inherit the container's
context. The inherited context is carried alongside each object during
traversal; the parsed JSON values are never modified.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Iterator, Tuple

from bs4 import Tag

from ld_extract.html_parser import html_to_document, locate_jsonld_elements

logger = logging.getLogger(__name__)

SCHEMA_ORG_CONTEXTS = frozenset({
    "http://schema.org",
    "http://schema.org/",
    "https://schema.org",
    "https://schema.org/",
})

# Stands in for "no inherited context" so that an explicit None is not confused with absence.
_NO_CONTEXT = object()
_EXHAUSTED = object()


# --- Predicates ---
def is_schema_org_context(context: Any) -> bool:
    """True if context is one of the Schema.org context strings, ignoring case."""
    return isinstance(context, str) and context.casefold() in SCHEMA_ORG_CONTEXTS


def _effective_context(value: dict, inherited: Any = _NO_CONTEXT) -> Any:
    """The object's own @context, else the one inherited from an enclosing graph."""
    if "@context" in value:
        return value["@context"]
    return inherited


def is_schema_org_object(value: Any, context: Any = _NO_CONTEXT) -> bool:
    """
    True if value is a JSON object declared as Schema.org data, either by its
    own "@context" or, when it has none, by the given inherited context.
    """
    if not isinstance(value, dict):
        return False
    return is_schema_org_context(_effective_context(value, context))


def get_jsonld_types(value: Any) -> Tuple[str, ...]:
    """
    Type names declared by "@type": one name for a string, the string members
    for a list, nothing otherwise.
    """
    if not isinstance(value, dict):
        return ()
    obj_type = value.get("@type")
    if isinstance(obj_type, str):
        return (obj_type,)
    if isinstance(obj_type, list):
        return tuple(t for t in obj_type if isinstance(t, str))
    return ()


def _matches_type(value: Any, context: Any, types: Iterable[str]) -> bool:
    if not is_schema_org_object(value, context):
        return False
    wanted = {t.casefold() for t in types if isinstance(t, str)}
    return any(t.casefold() in wanted for t in get_jsonld_types(value))


def is_schema_org_object_of_type(value: Any, *types: str) -> bool:
    """True if value is Schema.org data whose @type matches any of types (case-insensitive)."""
    return _matches_type(value, _NO_CONTEXT, types)


# --- Flattening ---
def _graph_entries(value: Any, context: Any = _NO_CONTEXT) -> list | None:
    """The "@graph" array of a Schema.org graph container, else None."""
    if not is_schema_org_object(value, context):
        return None
    graph = value.get("@graph")
    return graph if isinstance(graph, list) else None


def _walk(value: Any, context: Any = _NO_CONTEXT) -> Iterator[Tuple[dict, Any]]:
    """
    Depth-first (object, effective context) pairs for every JSON-LD object under value.

    Nesting is tracked on an explicit stack of (iterator, context) pairs, so
    arbitrarily deep payloads never hit the interpreter's recursion limit.
    """
    stack = [(iter((value,)), context)]
    while stack:
        items, ctx = stack[-1]
        item = next(items, _EXHAUSTED)
        if item is _EXHAUSTED:
            stack.pop()
            continue
        graph = _graph_entries(item, ctx)
        if graph is not None:
            stack.append((iter(graph), _effective_context(item, ctx)))
        elif isinstance(item, list):
            stack.append((iter(item), ctx))
        elif get_jsonld_types(item):
            yield item, _effective_context(item, ctx)


def flatten_jsonld_objects(value: Any) -> Iterator[dict]:
    """
    Yield every JSON-LD object contained in value, unwrapping Schema.org
    "@graph" containers and plain arrays, in source order.
    """
    for obj, _ in _walk(value):
        yield obj


def filter_by_type(values: Iterable[Any], *types: str) -> Iterator[dict]:
    """
    Yield the JSON-LD objects in values that are Schema.org data of any of
    the requested types. Each item is flattened first, so both flattened
    objects and raw payloads (graph containers, arrays) are accepted.
    """
    if values is None:
        raise ValueError("values must not be None")
    return _filter(values, types)


def _filter(values: Iterable[Any], types: Tuple[str, ...]) -> Iterator[dict]:
    for value in values:
        for obj, context in _walk(value):
            if _matches_type(obj, context, types):
                yield obj


# --- Convenience accessors ---
def get_jsonld_objects(source: Any, *types: str) -> Iterator[dict]:
    """
    JSON-LD objects from an HTML document, HTML text, or an already parsed JSON value.

    With types, only Schema.org objects of one of those types are returned.
    """
    if source is None:
        raise ValueError("source must not be None")
    if isinstance(source, (str, bytes)):
        source = html_to_document(source)
    values = locate_jsonld_elements(source) if isinstance(source, Tag) else [source]
    if types:
        return filter_by_type(values, *types)
    return (obj for value in values for obj, _ in _walk(value))


def materialize(values: Iterable[Any]) -> list:
    """Drain a lazy sequence into a list, keeping its order."""
    return list(values)


async def aget_jsonld_objects(source: Any, *types: str) -> list[dict]:
    """Async variant of get_jsonld_objects returning a list."""
    if source is None:
        raise ValueError("source must not be None")

    def run() -> list[dict]:
        return materialize(get_jsonld_objects(source, *types))

    result = await asyncio.to_thread(run)
    logger.debug("Extracted %d JSON-LD objects.", len(result))
    return result
