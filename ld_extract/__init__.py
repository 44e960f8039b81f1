"""
Read Schema.org JSON-LD structured data out of HTML pages.

Typical use:

    doc = html_to_document(html)
    products = materialize(get_jsonld_objects(doc, "Product"))
"""

import logging

from ld_extract.html_parser import (
    DEFAULT_FEATURES,
    JSONLD_SELECTOR,
    LocateStats,
    html_to_document,
    locate_jsonld_elements,
    read_document,
)
from ld_extract.jsonld import (
    SCHEMA_ORG_CONTEXTS,
    aget_jsonld_objects,
    filter_by_type,
    flatten_jsonld_objects,
    get_jsonld_objects,
    get_jsonld_types,
    is_schema_org_context,
    is_schema_org_object,
    is_schema_org_object_of_type,
    materialize,
)

__version__ = "1.0.2"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_FEATURES",
    "JSONLD_SELECTOR",
    "LocateStats",
    "SCHEMA_ORG_CONTEXTS",
    "aget_jsonld_objects",
    "filter_by_type",
    "flatten_jsonld_objects",
    "get_jsonld_objects",
    "get_jsonld_types",
    "html_to_document",
    "is_schema_org_context",
    "is_schema_org_object",
    "is_schema_org_object_of_type",
    "locate_jsonld_elements",
    "materialize",
    "read_document",
]
