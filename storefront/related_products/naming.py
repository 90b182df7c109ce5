"""
Name normalization for relation type accessors.

A RelationType's name ("Related Product", "Cross Sell") is turned into the
accessor key callers use to reach it ("related_products", "cross_sells").
Pluralization follows the Rails inflector rules as implemented by the
``inflection`` package.
"""

import inflection


def accessor_key(name) -> str:
    """Lower-case a requested name and replace spaces with underscores."""
    return str(name).lower().replace(" ", "_")


def relation_type_key(name) -> str:
    """
    Canonical accessor key for a RelationType name.

    >>> relation_type_key("Related Product")
    'related_products'
    >>> relation_type_key("Upsells")
    'upsells'
    """
    return inflection.pluralize(accessor_key(name))


def matches(requested, relation_type_name) -> bool:
    """True when ``requested`` is the accessor key of ``relation_type_name``."""
    return accessor_key(requested) == relation_type_key(relation_type_name)
