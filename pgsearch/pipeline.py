"""
Conditional query composition

Both helpers return a new query (or the very same one when nothing applies)
and never touch the query passed in, so independent search steps can be
chained without interfering with each other.
"""

from typing import Any, Callable, Mapping, TypeVar

from pgsearch.validators import InvalidOption

Q = TypeVar("Q")


def apply_if(query: Q, condition: bool, transform: Callable[[Q], Q]) -> Q:
    if condition:
        return transform(query)
    return query


def apply_case(query: Q, tag: Any, transforms: Mapping[Any, Callable[[Q], Q]]) -> Q:
    if tag not in transforms:
        raise InvalidOption(f"No transformation registered for {tag!r}, expected one of: {list(transforms)}")
    return transforms[tag](query)
