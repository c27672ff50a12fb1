"""
Trigram similarity search (pg_trgm)

The boolean operators (`%`, `<%`, `<<%`) can use a GIN/GiST trigram index, the
score functions can't. With `pre_filter=True` the index-eligible operator
discards non-candidates first and the exact score is only computed for ordering
the rows left over.

    CREATE EXTENSION IF NOT EXISTS pg_trgm;
    CREATE INDEX posts_title_trgm_idx ON posts USING GIN (title gin_trgm_ops);
"""

from typing import Any

from sqlalchemy.types import Boolean, Float

from pgsearch.enums import SearchOrder
from pgsearch.fragments import Fragment, bind_term, concat_ws
from pgsearch.logging_setup import logger
from pgsearch.models import SimilarityConfig
from pgsearch.operators import SearchOperators
from pgsearch.pipeline import apply_if
from pgsearch.qualifiers import normalize_qualifiers, require_qualifiers


def similarity(query, qualifiers: Any, term: str, **options):
    """
    Options:
        type: `word` (default, `word_similarity`), `full` (`similarity`) or
            `strict` (`strict_word_similarity`)
        order: `desc` (default), `asc` or `none`
        pre_filter: filter with the trigram operator before ordering, defaults to False
        limit: positive integer row cap, not applied by default
    """
    config = SimilarityConfig.from_options(options)
    qualifiers = normalize_qualifiers(qualifiers)
    require_qualifiers(qualifiers, "Similarity")

    function, sql_operator = SearchOperators.get_similarity_operator(config.type)
    term = bind_term(term)
    # several qualifiers are compared against their space separated concatenation
    target = qualifiers[0] if len(qualifiers) == 1 else concat_ws(*qualifiers)

    logger.debug(f"Similarity search ({function}) over {len(qualifiers)} qualifiers: {config}")

    query = apply_if(
        query,
        config.pre_filter,
        lambda q: q.where(Fragment(f"? {sql_operator} ?", term, target, type_=Boolean())),
    )
    query = apply_if(
        query,
        config.order != SearchOrder.none,
        lambda q: q.order_by(
            SearchOperators.order_by_expression(Fragment(f"{function}(?, ?)", term, target, type_=Float()), config.order)
        ),
    )
    return apply_if(query, config.limit is not None, lambda q: q.limit(config.limit))
