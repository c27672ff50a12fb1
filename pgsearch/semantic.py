"""
Semantic (vector) search over pgvector columns

The vector term is computed up front, e.g. with `pgsearch.embeddings.to_vector`.
"""

from typing import Any

from pgvector import Bit, HalfVector, SparseVector, Vector
from pgvector.sqlalchemy import BIT, HALFVEC, SPARSEVEC, VECTOR
from sqlalchemy.types import Float

from pgsearch.enums import SearchOrder
from pgsearch.fragments import Fragment, bind_term
from pgsearch.logging_setup import logger
from pgsearch.models import SemanticConfig
from pgsearch.operators import SearchOperators
from pgsearch.pipeline import apply_if
from pgsearch.qualifiers import normalize_qualifiers, require_qualifiers
from pgsearch.validators import ShapeMismatch, UnsupportedCombination

VECTOR_TYPES = {
    Vector: VECTOR,
    HalfVector: HALFVEC,
    SparseVector: SPARSEVEC,
    Bit: BIT,
}


def bind_vector(vector_term: Any):
    for vector_class, column_type in VECTOR_TYPES.items():
        if isinstance(vector_term, vector_class):
            if vector_class is Bit:
                return bind_term(vector_term.to_text(), column_type())
            return bind_term(vector_term, column_type())
    raise ShapeMismatch(
        "`vector_term` should be a pgvector Vector, HalfVector, SparseVector or Bit, "
        f"got {type(vector_term).__name__}. Use `pgsearch.embeddings.to_vector` to generate it."
    )


def distance_expression(qualifier, vector_term, config: SemanticConfig) -> Fragment:
    sql_operator = SearchOperators.get_vector_operator(config.distance)
    return Fragment(f"? {sql_operator} ?", qualifier, bind_vector(vector_term), type_=Float())


def semantic(query, qualifier: Any, vector_term: Any, **options):
    """
    Options:
        distance: `l2_distance` (default), `max_inner_product`, `cosine_distance`,
            `l1_distance`, `hamming_distance` or `jaccard_distance`
        order: `asc` (default, nearest first), `desc` or `none`
        pre_filter: `none` (default) or a positive float distance threshold. Rows
            closer than it are kept, or farther than it with `order="desc"`
        distance_key: `none` (default) or a label to select the distance as
    """
    config = SemanticConfig.from_options(options)
    qualifiers = normalize_qualifiers(qualifier)
    require_qualifiers(qualifiers, "Semantic")
    if len(qualifiers) > 1:
        raise UnsupportedCombination("Semantic search compares a single vector column, got several qualifiers")

    distance = distance_expression(qualifiers[0], vector_term, config)
    logger.debug(f"Semantic search: {config}")

    query = apply_if(
        query,
        config.pre_filter is not None,
        lambda q: q.where(distance > config.pre_filter if config.order == SearchOrder.desc else distance < config.pre_filter),
    )
    query = apply_if(
        query,
        config.order != SearchOrder.none,
        lambda q: q.order_by(SearchOperators.order_by_expression(distance, config.order)),
    )
    return apply_if(
        query,
        config.distance_key is not None,
        lambda q: q.add_columns(distance.label(config.distance_key)),
    )
