"""AQL encoder — renders an ``ItemsQuery`` as search-endpoint text.

Every field name and value goes through ``json.dumps`` so quotes,
backslashes and control characters in caller input stay inside their
string literal.
"""

from __future__ import annotations

import json

from omniresolve.models.query import Criterion, ItemsQuery


def _literal(text: str) -> str:
    return json.dumps(text, ensure_ascii=True)


def encode_criterion(criterion: Criterion) -> str:
    """``{"field":{"$op":"value"}}``"""
    return "{%s:{%s:%s}}" % (
        _literal(criterion.field),
        _literal(criterion.operator),
        _literal(criterion.value),
    )


def encode_items_query(query: ItemsQuery) -> str:
    """Encode a full ``items.find(...).include(...)`` expression.

    Example output::

        items.find({"$and":[{"repo":{"$eq":"omnibus-unstable-local"}},
        {"@omnibus.project":{"$eq":"chef"}}]}).include("repo","path")
    """
    criteria = ",".join(encode_criterion(c) for c in query.criteria)
    find = 'items.find({"$and":[%s]})' % criteria
    if not query.include:
        return find
    include = ",".join(_literal(name) for name in query.include)
    return f"{find}.include({include})"
