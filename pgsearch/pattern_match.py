"""
Pattern matching searches: ILIKE, LIKE and SIMILAR TO

**The term is not escaped**, sanitize user input with `pgsearch.utils.sanitize`
first (see LIKE injections).
"""

from typing import Any

from sqlalchemy import false, or_

from pgsearch.enums import PatternMatchMode
from pgsearch.fragments import bind_term
from pgsearch.logging_setup import logger
from pgsearch.operators import SearchOperators
from pgsearch.qualifiers import normalize_qualifiers
from pgsearch.validators import get_arg


def pattern_match(query, qualifiers: Any, term: str, mode: PatternMatchMode = PatternMatchMode.ilike):
    """
    Adds `q1 <OP> term OR q2 <OP> term ...` to the query.

    An empty list of qualifiers matches nothing (`WHERE false`).
    """
    mode = get_arg({"mode": mode}, "mode", PatternMatchMode.ilike, PatternMatchMode)
    sql_operator = SearchOperators.get_pattern_operator(mode)
    qualifiers = normalize_qualifiers(qualifiers)
    term = bind_term(term)

    if mode == PatternMatchMode.ilike:
        conditions = [qualifier.ilike(term) for qualifier in qualifiers]
    elif mode == PatternMatchMode.like:
        conditions = [qualifier.like(term) for qualifier in qualifiers]
    else:
        conditions = [qualifier.op(sql_operator, is_comparison=True)(term) for qualifier in qualifiers]

    logger.debug(f"Pattern match search ({sql_operator}) over {len(qualifiers)} qualifiers")
    return query.where(or_(false(), *conditions))


def ilike(query, qualifiers: Any, term: str):
    """Case insensitive pattern match, e.g. `ilike(select(Post), Post.title, "wan%")`"""
    return pattern_match(query, qualifiers, term, PatternMatchMode.ilike)


def like(query, qualifiers: Any, term: str):
    """
    Case sensitive pattern match.

    Can use a B-tree index when the term has no leading wildcard, prefer it over
    `ilike` where possible.
    """
    return pattern_match(query, qualifiers, term, PatternMatchMode.like)


def similar_to(query, qualifiers: Any, term: str):
    """SQL standard regular expression match, e.g. `"%(b|d)%"`"""
    return pattern_match(query, qualifiers, term, PatternMatchMode.similar_to)
