import pytest

from amarillo.textutil import text_cmp, to_lower_case, to_upper_case


def test_text_cmp_equal():
    assert text_cmp("mesh", "mesh") is True


def test_text_cmp_different():
    assert text_cmp("mesh", "Mesh") is False


@pytest.mark.parametrize("a, b", [(None, "x"), ("x", None), (None, None)])
def test_text_cmp_missing_is_false(a, b):
    assert text_cmp(a, b) is False


def test_upper_case():
    assert to_upper_case("Hello, World!") == "HELLO, WORLD!"


def test_lower_case():
    assert to_lower_case("Hello, World!") == "hello, world!"


def test_non_ascii_untouched():
    assert to_upper_case("é") == "é"
    assert to_lower_case("É") == "É"


@pytest.mark.parametrize("text", ["", "abc", "MiXeD 123", ".FBX"])
def test_case_conversions_are_idempotent(text):
    assert to_upper_case(to_upper_case(text)) == to_upper_case(text)
    assert to_lower_case(to_lower_case(text)) == to_lower_case(text)
    assert to_lower_case(to_upper_case(text)) == to_lower_case(text)
    assert len(to_upper_case(text)) == len(text)