"""
Qualifier handling: column references scoped to the query's tables or aliases
"""

from typing import Any, Iterable, Optional, Tuple

from sqlalchemy.sql.elements import ColumnElement

from pgsearch.validators import ShapeMismatch


def as_column(qualifier: Any) -> ColumnElement:
    """Unwraps ORM attributes (e.g. `Post.title`, `aliased(Post).title`) into column elements"""
    if hasattr(qualifier, "__clause_element__"):
        qualifier = qualifier.__clause_element__()
    if not isinstance(qualifier, ColumnElement):
        raise ShapeMismatch(f"Qualifier should be a column expression, got {qualifier!r}")
    return qualifier


def normalize_qualifiers(qualifiers: Any) -> Tuple[ColumnElement, ...]:
    """Wraps a single qualifier into a tuple, keeps the order of a list of them"""
    if isinstance(qualifiers, (list, tuple)):
        return tuple(as_column(qualifier) for qualifier in qualifiers)
    return (as_column(qualifiers),)


def require_qualifiers(qualifiers: Tuple[ColumnElement, ...], search: str) -> None:
    if not qualifiers:
        raise ShapeMismatch(f"{search} search requires at least one qualifier")


def contains_qualifier(qualifiers: Optional[Iterable[ColumnElement]], qualifier: ColumnElement) -> bool:
    # `in` would build a SQL comparison, compare the expressions structurally instead
    if qualifiers is None:
        return False
    return any(qualifier.compare(candidate) for candidate in qualifiers)
