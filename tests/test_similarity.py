import pytest
from sqlalchemy import select

from pgsearch import similarity
from pgsearch.models import SimilarityConfig
from pgsearch.validators import InvalidOption, ShapeMismatch
from tests.conftest import sql
from tests.tables import Post


def order_by(query) -> str:
    return sql(query).split(" ORDER BY ", 1)[1]


def test_defaults_order_by_word_similarity_desc_without_filter():
    query = similarity(select(Post.title), Post.title, "foo")
    rendered = sql(query)
    assert " WHERE " not in rendered
    assert order_by(query) == "word_similarity('foo', posts.title) DESC"


def test_pre_filter_uses_index_operator():
    query = similarity(select(Post.title), Post.title, "foo", pre_filter=True)
    rendered = sql(query)
    assert "'foo' <% posts.title" in rendered.split(" ORDER BY ")[0]
    assert order_by(query) == "word_similarity('foo', posts.title) DESC"


@pytest.mark.parametrize(
    "similarity_type, function, operator",
    [
        ("full", "similarity", "%"),
        ("word", "word_similarity", "<%"),
        ("strict", "strict_word_similarity", "<<%"),
    ],
)
def test_similarity_types(similarity_type, function, operator):
    query = similarity(select(Post.id), Post.title, "foo", type=similarity_type, pre_filter=True)
    rendered = sql(query)
    assert f"'foo' {operator} posts.title" in rendered
    assert f"{function}('foo', posts.title) DESC" in rendered


def test_asc_order():
    query = similarity(select(Post.id), Post.title, "foo", order="asc")
    assert order_by(query) == "word_similarity('foo', posts.title) ASC"


def test_no_order_no_filter_leaves_query_unchanged():
    base = select(Post.id)
    assert sql(similarity(base, Post.title, "foo", order="none")) == sql(base)


def test_several_qualifiers_use_concat_ws():
    query = similarity(select(Post.id), [Post.title, Post.body], "foo")
    assert order_by(query) == "word_similarity('foo', concat_ws(' ', posts.title, posts.body)) DESC"


def test_limit():
    query = similarity(select(Post.id), Post.title, "foo", limit=10)
    assert sql(query).endswith("LIMIT 10")


def test_empty_qualifiers():
    with pytest.raises(ShapeMismatch):
        similarity(select(Post.id), [], "foo")


@pytest.mark.parametrize(
    "options",
    [
        {"type": "fuzzy"},
        {"order": "sideways"},
        {"pre_filter": "yes"},
        {"limit": 0},
        {"limit": True},
        {"threshold": 0.3},
    ],
)
def test_invalid_options(options):
    with pytest.raises(InvalidOption):
        similarity(select(Post.id), Post.title, "foo", **options)


def test_config_is_frozen():
    config = SimilarityConfig.from_options({"type": "STRICT"})
    assert config.type.value == "strict"
    with pytest.raises(Exception):
        config.limit = 5


def test_default_type_is_word_similarity():
    assert SimilarityConfig.from_options({}).type.value == "word"
    query = similarity(select(Post.id), Post.title, "foo", pre_filter=True)
    rendered = sql(query)
    assert "'foo' <% posts.title" in rendered
    assert "ORDER BY word_similarity('foo', posts.title) DESC" in rendered
