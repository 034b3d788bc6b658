"""
Catalog and line item data module.

Canonical treatment category and cost line item models, input parsing with
forgiving numeric coercion, and normalization of persisted plan payloads.
"""
