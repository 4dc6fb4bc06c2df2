import pytest

from recall.content.codec import UNORDERED, PathOrderCodec
from recall.content.errors import MalformedNameError


def test_decode_prefixed_directory_name():
    codec = PathOrderCodec()

    name = codec.decode("07_go")

    assert name.order == 7
    assert name.slug == "go"
    assert name.title == "Go"
    assert name.has_explicit_order


def test_decode_multi_word_name_builds_slug_and_title():
    name = PathOrderCodec().decode("02_components_props")

    assert name.order == 2
    assert name.slug == "components-props"
    assert name.title == "Components Props"


def test_decode_accepts_dash_separator_and_spaces():
    name = PathOrderCodec().decode("10-Hello World")

    assert name.order == 10
    assert name.slug == "hello-world"
    assert name.title == "Hello World"


def test_unprefixed_name_gets_sentinel_order():
    name = PathOrderCodec().decode("appendix")

    assert name.order == UNORDERED
    assert not name.has_explicit_order
    assert name.slug == "appendix"


def test_file_names_drop_document_extension():
    name = PathOrderCodec().decode("01_questions_with_answers.md", is_file=True)

    assert name.slug == "questions-with-answers"
    assert name.order == 1


def test_malformed_names_are_rejected():
    codec = PathOrderCodec()

    with pytest.raises(MalformedNameError):
        codec.decode("03_c++")
    with pytest.raises(MalformedNameError):
        codec.decode("v1.2")


def test_sort_key_compares_orders_numerically_and_unprefixed_last():
    codec = PathOrderCodec()
    names = [codec.decode(raw) for raw in ["zeta", "10_x", "2_x", "1_b", "1_a"]]

    ordered = [name.raw for name in sorted(names, key=lambda name: name.sort_key)]

    assert ordered == ["1_a", "1_b", "2_x", "10_x", "zeta"]


def test_equal_orders_fall_back_to_slug():
    codec = PathOrderCodec()
    names = [codec.decode("01_react"), codec.decode("01_angular")]

    assert [name.slug for name in sorted(names, key=lambda name: name.sort_key)] == ["angular", "react"]


def test_encode_generates_prefixed_name():
    assert PathOrderCodec.encode(7, "go") == "07_go"
    assert PathOrderCodec.encode(123, "deep-dive", separator="-") == "123-deep-dive"
    assert PathOrderCodec().decode(PathOrderCodec.encode(4, "hooks")).order == 4

    with pytest.raises(ValueError):
        PathOrderCodec.encode(-1, "go")


def test_each_separator_maps_to_one_dash():
    codec = PathOrderCodec()

    assert codec.decode("01_a__b").slug == "a--b"
    assert codec.decode("01_a_b").slug != codec.decode("02_a__b").slug
