"""
Full text search with rank ordering

The term is parsed by one of the `*_to_tsquery` functions, so it can come
straight from the user. Both the filter and the ranking are guarded against
terms that parse to an empty tsquery (e.g. only stop words): the filter returns
`empty_return` and the ranking uses a constant instead of calling the rank function.

Add a GIN index matching the generated vector expression, e.g. for a nullable title:

    CREATE INDEX index_gin_posts_title
    ON posts USING GIN (to_tsvector('english', COALESCE(title, '')));

`pgsearch.inspector.substituted_sql` shows the exact expression to index.
"""

from typing import Any, List

from sqlalchemy import false, or_
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.types import Boolean, Float

from pgsearch.enums import FilterType, SearchOrder
from pgsearch.fragments import Fragment, bind_term
from pgsearch.logging_setup import logger
from pgsearch.models import FullTextConfig
from pgsearch.operators import SearchOperators
from pgsearch.pipeline import apply_case, apply_if
from pgsearch.qualifiers import normalize_qualifiers, require_qualifiers
from pgsearch.validators import UnsupportedCombination, check_known_options
from pgsearch.weights import weighted_qualifiers

# rank used for every row when the term is empty
NEUTRAL_RANK = "1"

TSQUERY_OPTIONS = ("language", "prefix_search", "stored", "empty_return", "term_function")


class TsQuery:
    """The parsed term and the SQL pieces derived from it"""

    def __init__(self, term, config: FullTextConfig):
        self.term = bind_term(term)
        self.config = config
        self.parsed = f"{config.term_function.value}({config.language}, ?)"

    def query(self) -> Fragment:
        if self.config.prefix_search:
            # the last lexeme becomes a prefix: 'hogwar' -> 'hogwar':*
            return Fragment(f"({self.parsed}::text || ':*')::tsquery", self.term)
        return Fragment(f"({self.parsed})::tsquery", self.term)

    def is_empty(self) -> Fragment:
        return Fragment(f"trim({self.parsed}::text) = ''", self.term, type_=Boolean())

    def guard(self, empty_value: str, expression: Fragment, type_) -> Fragment:
        return Fragment(f"CASE WHEN ? THEN {empty_value} ELSE ? END", self.is_empty(), expression, type_=type_)


def to_tsvector(qualifier: ColumnElement, config: FullTextConfig, coalesce: bool = False) -> Fragment:
    column = "COALESCE(?, '')" if coalesce else "?"
    if config.stored:
        return Fragment(column, qualifier)
    return Fragment(f"to_tsvector({config.language}, {column})", qualifier)


def weighted_vector(qualifiers: List[ColumnElement], config: FullTextConfig) -> Fragment:
    """`setweight(to_tsvector(...), 'A') || setweight(to_tsvector(...), 'B') || ...`"""
    vectors = [
        Fragment.join([Fragment("setweight("), to_tsvector(qualifier, config, coalesce), Fragment(f", '{weight.value}')")], "")
        for qualifier, weight, coalesce in weighted_qualifiers(qualifiers, config.rank_weights, config.coalesce)
    ]
    return Fragment.join(vectors, " || ")


def match(vector: Fragment, tsquery: TsQuery) -> Fragment:
    empty_return = "TRUE" if tsquery.config.empty_return else "FALSE"
    matches = Fragment.join([vector, tsquery.query()], " @@ ", type_=Boolean())
    return tsquery.guard(empty_return, matches, Boolean())


def rank(vector: Fragment, tsquery: TsQuery) -> Fragment:
    config = tsquery.config
    ranked = Fragment.join(
        [Fragment(f"{config.rank_function.value}("), vector, Fragment(", "), tsquery.query(), Fragment(f", {config.rank_normalization})")],
        "",
    )
    return tsquery.guard(NEUTRAL_RANK, ranked, Float())


def to_tsquery(qualifier: Any, term: str, **options) -> Fragment:
    """
    Guarded match predicate of a single column, for custom filters:

        query.where(or_(to_tsquery(Post.title, "magic"), Post.author_id == 1))

    Options: `language`, `prefix_search`, `stored`, `empty_return` and
    `term_function`, with the same defaults as `full_text`.
    """
    check_known_options(options, TSQUERY_OPTIONS)
    qualifiers = list(normalize_qualifiers(qualifier))
    require_qualifiers(qualifiers, "Full text")
    if len(qualifiers) > 1:
        raise UnsupportedCombination("`to_tsquery` matches a single column, use `full_text` for several qualifiers")
    config = FullTextConfig.from_options(options, qualifiers)
    return match(to_tsvector(qualifiers[0], config), TsQuery(term, config))


def full_text(query, qualifiers: Any, term: str, **options):
    """
    Options:
        language: text search configuration, defaults to `english`
        prefix_search: treat the last word of the term as a prefix, defaults to True
        stored: qualifiers are precomputed tsvector columns, defaults to False
        term_function: `websearch_to_tsquery` (default), `plainto_tsquery` or `phraseto_tsquery`
        rank_function: `ts_rank_cd` (default) or `ts_rank`
        rank_weights: one of A/B/C/D per qualifier, defaults to A, B, C, D, D, ...
        rank_normalization: ts_rank bit mask, defaults to 4 for `ts_rank_cd` and 1 for `ts_rank`
        order: `desc` (default), `asc` or `none`
        filter_type: `or` (default, any qualifier matches), `concat` (the concatenated
            weighted vector matches) or `none`
        empty_return: what the filter returns for an empty term, defaults to True
        coalesce: wrap qualifiers into `COALESCE(?, '')`, defaults to True for `concat`
            over several qualifiers and is ignored otherwise
        nullable_columns: only coalesce these qualifiers
    """
    qualifiers = list(normalize_qualifiers(qualifiers))
    require_qualifiers(qualifiers, "Full text")
    config = FullTextConfig.from_options(options, qualifiers)
    tsquery = TsQuery(term, config)

    logger.debug(f"Full text search over {len(qualifiers)} qualifiers: {config}")

    query = apply_case(
        query,
        config.filter_type,
        {
            FilterType.NONE: lambda q: q,
            FilterType.OR: lambda q: q.where(
                or_(false(), *[match(to_tsvector(qualifier, config), tsquery) for qualifier in qualifiers])
            ),
            FilterType.CONCAT: lambda q: q.where(match(weighted_vector(qualifiers, config), tsquery)),
        },
    )
    return apply_if(
        query,
        config.order != SearchOrder.none,
        lambda q: q.order_by(SearchOperators.order_by_expression(rank(weighted_vector(qualifiers, config), tsquery), config.order)),
    )
