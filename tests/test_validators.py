import pytest

from pgsearch.enums import SearchOrder
from pgsearch.validators import (
    InvalidOption,
    SearchError,
    ShapeMismatch,
    check_known_options,
    get_arg,
    get_bitmask,
    get_bool,
    get_language,
    get_optional_name,
    get_positive_int,
    get_threshold,
)


def test_error_hierarchy():
    assert issubclass(ShapeMismatch, InvalidOption)
    assert issubclass(InvalidOption, SearchError)
    assert issubclass(InvalidOption, ValueError)


def test_get_arg_with_enum():
    assert get_arg({}, "order", SearchOrder.desc, SearchOrder) is SearchOrder.desc
    assert get_arg({"order": "ASC"}, "order", SearchOrder.desc, SearchOrder) is SearchOrder.asc
    assert get_arg({"order": SearchOrder.none}, "order", SearchOrder.desc, SearchOrder) is SearchOrder.none


def test_get_arg_error_names_key_and_allowed_values():
    with pytest.raises(InvalidOption) as error:
        get_arg({"order": "up"}, "order", SearchOrder.desc, SearchOrder)
    message = str(error.value)
    assert "`order`" in message
    assert "['asc', 'desc', 'none']" in message
    assert "'up'" in message


def test_get_arg_with_collection():
    assert get_arg({"mode": "b"}, "mode", "a", ["a", "b"]) == "b"
    with pytest.raises(InvalidOption):
        get_arg({"mode": "c"}, "mode", "a", ["a", "b"])


def test_get_bool_rejects_truthy_values():
    assert get_bool({}, "stored", False) is False
    assert get_bool({"stored": True}, "stored", False) is True
    for value in (1, "true", None):
        with pytest.raises(InvalidOption):
            get_bool({"stored": value}, "stored", False)


def test_get_positive_int():
    assert get_positive_int({}, "limit") is None
    assert get_positive_int({"limit": 3}, "limit") == 3
    for value in (0, -1, 2.5, True, "3"):
        with pytest.raises(InvalidOption):
            get_positive_int({"limit": value}, "limit")


def test_get_bitmask():
    assert get_bitmask({}, "rank_normalization", 4, 63) == 4
    assert get_bitmask({"rank_normalization": 0}, "rank_normalization", 4, 63) == 0
    assert get_bitmask({"rank_normalization": 63}, "rank_normalization", 4, 63) == 63
    with pytest.raises(InvalidOption):
        get_bitmask({"rank_normalization": 64}, "rank_normalization", 4, 63)


def test_get_threshold():
    assert get_threshold({}, "pre_filter") is None
    assert get_threshold({"pre_filter": "none"}, "pre_filter") is None
    assert get_threshold({"pre_filter": 1}, "pre_filter") == 1.0
    for value in (0, -0.1, "0.5", False):
        with pytest.raises(InvalidOption):
            get_threshold({"pre_filter": value}, "pre_filter")


def test_get_optional_name():
    assert get_optional_name({"distance_key": "none"}, "distance_key") is None
    assert get_optional_name({"distance_key": "dist"}, "distance_key") == "dist"
    with pytest.raises(InvalidOption):
        get_optional_name({"distance_key": "  "}, "distance_key")


def test_get_language_is_quoted():
    assert get_language({}) == "'english'"
    assert get_language({"language": "pg_catalog.german"}) == "'pg_catalog.german'"
    for value in ("english'", "", "1english", 5):
        with pytest.raises(InvalidOption):
            get_language({"language": value})


def test_check_known_options():
    check_known_options({"order": "asc"}, ["order", "limit"])
    with pytest.raises(InvalidOption) as error:
        check_known_options({"order": "asc", "ordr": "asc"}, ["order", "limit"])
    assert "ordr" in str(error.value)
