"""
Search operators and functions and their PostgreSQL translations
"""

from typing import Any, Dict, Tuple

from pgsearch.enums import DistanceMetric, PatternMatchMode, RankFunction, SearchOrder, SimilarityType
from pgsearch.validators import InvalidOption


class SearchOperators:
    """Maps search options to the PostgreSQL functions and operators implementing them"""

    PATTERN_OPERATORS: Dict[PatternMatchMode, Dict[str, Any]] = {
        PatternMatchMode.ilike: {
            "sql": "ILIKE",
            "description": "Case-insensitive pattern match",
        },
        PatternMatchMode.like: {
            "sql": "LIKE",
            "description": "Case-sensitive pattern match, can use a B-tree index without a leading wildcard",
        },
        PatternMatchMode.similar_to: {
            "sql": "SIMILAR TO",
            "description": "SQL standard regular expression match, almost always a full table scan",
        },
    }

    # (exact score function, index-eligible boolean operator), pg_trgm
    SIMILARITY_OPERATORS: Dict[SimilarityType, Tuple[str, str]] = {
        SimilarityType.full: ("similarity", "%"),
        SimilarityType.word: ("word_similarity", "<%"),
        SimilarityType.strict: ("strict_word_similarity", "<<%"),
    }

    # pgvector
    VECTOR_OPERATORS: Dict[DistanceMetric, str] = {
        DistanceMetric.l2_distance: "<->",
        DistanceMetric.max_inner_product: "<#>",
        DistanceMetric.cosine_distance: "<=>",
        DistanceMetric.l1_distance: "<+>",
        DistanceMetric.hamming_distance: "<~>",
        DistanceMetric.jaccard_distance: "<%>",
    }

    # ts_rank_cd divides by the mean harmonic distance between extents (4),
    # ts_rank by 1 + the logarithm of the document length (1)
    DEFAULT_RANK_NORMALIZATION: Dict[RankFunction, int] = {
        RankFunction.ts_rank_cd: 4,
        RankFunction.ts_rank: 1,
    }

    @classmethod
    def get_pattern_operator(cls, mode: PatternMatchMode) -> str:
        if mode not in cls.PATTERN_OPERATORS:
            raise InvalidOption(f"Unsupported pattern match mode: {mode}")
        return cls.PATTERN_OPERATORS[mode]["sql"]

    @classmethod
    def get_similarity_operator(cls, similarity_type: SimilarityType) -> Tuple[str, str]:
        if similarity_type not in cls.SIMILARITY_OPERATORS:
            raise InvalidOption(f"Unsupported similarity type: {similarity_type}")
        return cls.SIMILARITY_OPERATORS[similarity_type]

    @classmethod
    def get_vector_operator(cls, distance: DistanceMetric) -> str:
        if distance not in cls.VECTOR_OPERATORS:
            raise InvalidOption(f"Unsupported distance: {distance}")
        return cls.VECTOR_OPERATORS[distance]

    @staticmethod
    def order_by_expression(expression, order: SearchOrder):
        """ASC/DESC wrapper, `none` is handled by the callers"""
        if order == SearchOrder.asc:
            return expression.asc()
        if order == SearchOrder.desc:
            return expression.desc()
        raise InvalidOption(f"Cannot order by {order}")
