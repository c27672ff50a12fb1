from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from sqlmodel import Field, SQLModel

from pgsearch.enums import (
    DistanceMetric,
    FilterType,
    RankFunction,
    RankWeight,
    SearchMode,
    SearchOrder,
    SimilarityType,
    TermFunction,
)
from pgsearch.validators import (
    check_known_options,
    get_arg,
    get_bool,
    get_language,
    get_optional_name,
    get_positive_int,
    get_threshold,
)
from pgsearch.weights import resolve_coalesce, resolve_rank_normalization, resolve_rank_weights


class SearchConfig(BaseModel):
    """Validated, immutable options of a single search call"""

    model_config = ConfigDict(frozen=True)


class SimilarityConfig(SearchConfig):
    type: SimilarityType = SimilarityType.word
    order: SearchOrder = SearchOrder.desc
    pre_filter: bool = False
    limit: Optional[int] = None

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "SimilarityConfig":
        check_known_options(options, cls.model_fields)
        return cls(
            type=get_arg(options, "type", SimilarityType.word, SimilarityType),
            order=get_arg(options, "order", SearchOrder.desc, SearchOrder),
            pre_filter=get_bool(options, "pre_filter", False),
            limit=get_positive_int(options, "limit"),
        )


class FullTextConfig(SearchConfig):
    language: str = "'english'"
    prefix_search: bool = True
    stored: bool = False
    empty_return: bool = True
    term_function: TermFunction = TermFunction.websearch_to_tsquery
    rank_function: RankFunction = RankFunction.ts_rank_cd
    rank_weights: Tuple[RankWeight, ...] = ()
    rank_normalization: int = 4
    order: SearchOrder = SearchOrder.desc
    filter_type: FilterType = FilterType.OR
    # one flag per qualifier, derived from `coalesce` and `nullable_columns`
    coalesce: Tuple[bool, ...] = ()

    OPTIONS: ClassVar[Tuple[str, ...]] = (
        "language",
        "prefix_search",
        "stored",
        "empty_return",
        "term_function",
        "rank_function",
        "rank_weights",
        "rank_normalization",
        "order",
        "filter_type",
        "coalesce",
        "nullable_columns",
    )

    @classmethod
    def from_options(cls, options: Mapping[str, Any], qualifiers) -> "FullTextConfig":
        check_known_options(options, cls.OPTIONS)
        rank_function = get_arg(options, "rank_function", RankFunction.ts_rank_cd, RankFunction)
        filter_type = get_arg(options, "filter_type", FilterType.OR, FilterType)

        return cls(
            language=get_language(options),
            prefix_search=get_bool(options, "prefix_search", True),
            stored=get_bool(options, "stored", False),
            empty_return=get_bool(options, "empty_return", True),
            term_function=get_arg(options, "term_function", TermFunction.websearch_to_tsquery, TermFunction),
            rank_function=rank_function,
            rank_weights=resolve_rank_weights(options, len(qualifiers)),
            rank_normalization=resolve_rank_normalization(options, rank_function),
            order=get_arg(options, "order", SearchOrder.desc, SearchOrder),
            filter_type=filter_type,
            coalesce=resolve_coalesce(options, filter_type, qualifiers),
        )


class SemanticConfig(SearchConfig):
    distance: DistanceMetric = DistanceMetric.l2_distance
    order: SearchOrder = SearchOrder.asc
    pre_filter: Optional[float] = None
    distance_key: Optional[str] = None

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "SemanticConfig":
        check_known_options(options, cls.model_fields)
        return cls(
            distance=get_arg(options, "distance", DistanceMetric.l2_distance, DistanceMetric),
            order=get_arg(options, "order", SearchOrder.asc, SearchOrder),
            pre_filter=get_threshold(options, "pre_filter"),
            distance_key=get_optional_name(options, "distance_key"),
        )


class SearchRequest(SQLModel):
    """
    Request-level description of a search, resolved and applied by `SearchEngine`.

    `fields` are `alias.column` paths, e.g. `["p.title", "a.name"]`.
    """

    mode: SearchMode
    fields: List[str]
    term: str
    options: Dict[str, Any] = Field(default_factory=dict)
