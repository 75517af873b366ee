"""Shared helpers for the AstroBioGen gateway.

- normalize:  upstream payload -> canonical record mapping (pure)
- validation: request input checks raising HTTP 400
"""

from .validation import (
    GENE_SORT_FIELDS, require_text, require_list, require_mapping,
    validate_limit, validate_sort, planet_names,
)

__all__ = [
    "GENE_SORT_FIELDS", "require_text", "require_list", "require_mapping",
    "validate_limit", "validate_sort", "planet_names",
]
