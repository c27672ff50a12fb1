"""
Rank weights, rank normalization and NULL coalescing for full-text search
"""

from typing import Any, List, Mapping, Sequence, Tuple

from sqlalchemy.sql.elements import ColumnElement

from pgsearch.enums import FilterType, RankFunction, RankWeight
from pgsearch.operators import SearchOperators
from pgsearch.qualifiers import contains_qualifier, normalize_qualifiers
from pgsearch.validators import InvalidOption, ShapeMismatch, get_bitmask, get_bool

# ts_rank normalization flags go up to 32, so any combination fits in 0..63
MAX_RANK_NORMALIZATION = 63

_DEFAULT_WEIGHTS = (RankWeight.A, RankWeight.B, RankWeight.C, RankWeight.D)


def default_rank_weights(qualifier_count: int) -> Tuple[RankWeight, ...]:
    """A, B, C, D for the first four qualifiers, D for every one after that"""
    exceeding = max(qualifier_count - len(_DEFAULT_WEIGHTS), 0)
    weights = _DEFAULT_WEIGHTS + (RankWeight.D,) * exceeding
    return weights[:qualifier_count]


def resolve_rank_weights(options: Mapping[str, Any], qualifier_count: int) -> Tuple[RankWeight, ...]:
    weights = options.get("rank_weights")
    if weights is None:
        return default_rank_weights(qualifier_count)

    if isinstance(weights, (str, bytes)) or not isinstance(weights, Sequence):
        raise InvalidOption(f"`rank_weights` should be a list of weights, got {weights!r}")
    if len(weights) != qualifier_count:
        raise ShapeMismatch(
            f"The length of `rank_weights` ({len(weights)}) should be the same as the length of the qualifiers ({qualifier_count})"
        )

    resolved: List[RankWeight] = []
    for weight in weights:
        try:
            resolved.append(RankWeight(weight))
        except (ValueError, TypeError):
            raise InvalidOption(
                f"Each rank weight from `rank_weights` should be one of: {[w.value for w in RankWeight]}, got {weight!r}"
            )
    return tuple(resolved)


def resolve_rank_normalization(options: Mapping[str, Any], rank_function: RankFunction) -> int:
    default = SearchOperators.DEFAULT_RANK_NORMALIZATION[rank_function]
    return get_bitmask(options, "rank_normalization", default, MAX_RANK_NORMALIZATION)


def resolve_coalesce(
    options: Mapping[str, Any], filter_type: FilterType, qualifiers: Sequence[ColumnElement]
) -> Tuple[bool, ...]:
    """
    Decides per qualifier whether it gets wrapped into `COALESCE(?, '')`.

    Only concatenated multi-column vectors need it: `a || NULL` is NULL, which
    would hide the row. The expression has to match the index expression exactly,
    so `nullable_columns` narrows coalescing down to the columns that can be NULL.
    """
    concatenated = filter_type == FilterType.CONCAT and len(qualifiers) > 1
    coalesce = get_bool(options, "coalesce", concatenated) and concatenated

    nullable_columns = options.get("nullable_columns")
    if nullable_columns is not None:
        nullable_columns = normalize_qualifiers(nullable_columns)

    return tuple(
        coalesce and (nullable_columns is None or contains_qualifier(nullable_columns, qualifier))
        for qualifier in qualifiers
    )


def weighted_qualifiers(
    qualifiers: Sequence[ColumnElement], weights: Sequence[RankWeight], coalesce: Sequence[bool]
) -> List[Tuple[ColumnElement, RankWeight, bool]]:
    return list(zip(qualifiers, weights, coalesce))
