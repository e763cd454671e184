from hanzi_sheet.domain.hanzi_unicode import (
    contains_qualifying,
    is_qualifying_char,
    qualifying_chars,
    sanitize_input,
    unique_in_order,
)


def test_qualifying_range_bounds():
    assert is_qualifying_char("\u4e00")
    assert is_qualifying_char("\u9fff")
    assert not is_qualifying_char("\u4dff")
    assert not is_qualifying_char("\ua000")


def test_non_ideographs_rejected():
    for ch in ["a", "1", "，", "!", "ㄱ", "あ", ""]:
        assert not is_qualifying_char(ch)
    assert not is_qualifying_char("你好")


def test_qualifying_chars_keeps_order_and_repeats():
    assert qualifying_chars("你a好1你!") == ["你", "好", "你"]
    assert qualifying_chars("") == []
    assert contains_qualifying("abc你")
    assert not contains_qualifying("abc 123")


def test_unique_in_order():
    assert unique_in_order("abcab") == ["a", "b", "c"]


def test_sanitize_input():
    assert sanitize_input("你好, 你们! abc") == "你好们"
    assert sanitize_input("123 abc") == ""
