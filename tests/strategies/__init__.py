"""Hypothesis strategies for langkit property-based testing.

Usage:
    from tests.strategies import consistent_document_sets, templates
"""

from .documents import (
    LOCALE_TAGS,
    PARAM_NAMES,
    consistent_document_sets,
    fill_schema,
    key_schemas,
    plain_texts,
    schema_depth,
    schema_keys,
    templates,
    translation_names,
)

__all__ = [
    "LOCALE_TAGS",
    "PARAM_NAMES",
    "consistent_document_sets",
    "fill_schema",
    "key_schemas",
    "plain_texts",
    "schema_depth",
    "schema_keys",
    "templates",
    "translation_names",
]
