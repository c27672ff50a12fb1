import pytest
from pgvector import Bit, HalfVector, SparseVector, Vector
from sqlalchemy import select

from pgsearch import semantic
from pgsearch.semantic import bind_vector
from pgsearch.validators import InvalidOption, ShapeMismatch, UnsupportedCombination
from tests.conftest import sql
from tests.tables import Post

VECTOR = Vector([1.0, 2.0, 3.0])
LITERAL = f"'{VECTOR.to_text()}'"


def test_defaults_order_by_l2_distance_asc():
    query = semantic(select(Post.id), Post.embedding, VECTOR)
    rendered = sql(query)
    assert " WHERE " not in rendered
    assert rendered.endswith(f"ORDER BY posts.embedding <-> {LITERAL} ASC")


@pytest.mark.parametrize(
    "distance, operator",
    [
        ("l2_distance", "<->"),
        ("max_inner_product", "<#>"),
        ("cosine_distance", "<=>"),
        ("l1_distance", "<+>"),
        ("hamming_distance", "<~>"),
        ("jaccard_distance", "<%>"),
    ],
)
def test_distance_operators(distance, operator):
    query = semantic(select(Post.id), Post.embedding, VECTOR, distance=distance)
    assert f"posts.embedding {operator} {LITERAL}" in sql(query)


def test_pre_filter_keeps_closer_rows():
    query = semantic(select(Post.id), Post.embedding, VECTOR, distance="cosine_distance", pre_filter=0.7)
    rendered = sql(query)
    assert f"WHERE (posts.embedding <=> {LITERAL}) < 0.7" in rendered
    assert rendered.endswith(f"ORDER BY posts.embedding <=> {LITERAL} ASC")


def test_pre_filter_with_desc_order_keeps_farther_rows():
    query = semantic(select(Post.id), Post.embedding, VECTOR, pre_filter=2, order="desc")
    rendered = sql(query)
    assert f"(posts.embedding <-> {LITERAL}) > 2.0" in rendered
    assert rendered.endswith("DESC")


def test_distance_key_adds_column():
    query = semantic(select(Post.id), Post.embedding, VECTOR, distance_key="distance", order="none")
    rendered = sql(query)
    assert rendered.startswith("SELECT posts.id, ")
    assert f"posts.embedding <-> {LITERAL}" in rendered.split(" FROM ")[0]
    assert "AS distance FROM posts" in rendered
    assert " ORDER BY " not in rendered


def test_none_values_disable_options():
    base = select(Post.id)
    query = semantic(base, Post.embedding, VECTOR, pre_filter="none", distance_key=None, order="none")
    assert sql(query) == sql(base)


def test_list_term_is_rejected():
    with pytest.raises(ShapeMismatch):
        semantic(select(Post.id), Post.embedding, [1.0, 2.0, 3.0])


def test_several_qualifiers_are_rejected():
    with pytest.raises(UnsupportedCombination):
        semantic(select(Post.id), [Post.embedding, Post.embedding], VECTOR)


def test_empty_qualifiers():
    with pytest.raises(ShapeMismatch):
        semantic(select(Post.id), [], VECTOR)


@pytest.mark.parametrize(
    "options",
    [
        {"distance": "euclidean"},
        {"pre_filter": 0},
        {"pre_filter": -0.5},
        {"pre_filter": "0.7"},
        {"distance_key": ""},
        {"order": "random"},
        {"limit": 10},
    ],
)
def test_invalid_options(options):
    with pytest.raises(InvalidOption):
        semantic(select(Post.id), Post.embedding, VECTOR, **options)


def test_vector_kinds_bind_with_matching_types():
    from pgvector.sqlalchemy import BIT, HALFVEC, SPARSEVEC
    from pgvector.sqlalchemy import VECTOR as VECTOR_TYPE

    assert isinstance(bind_vector(VECTOR).type, VECTOR_TYPE)
    assert isinstance(bind_vector(HalfVector([1, 2, 3])).type, HALFVEC)
    assert isinstance(bind_vector(SparseVector([1, 0, 3])).type, SPARSEVEC)

    bit = bind_vector(Bit([True, False, True]))
    assert isinstance(bit.type, BIT)
    assert bit.value == "101"
