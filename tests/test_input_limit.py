from hanzi_sheet.domain.generation import GenerationCounter
from hanzi_sheet.domain.input_limit import LIMIT_MESSAGE, MAX_CHARACTERS, counter_text, decide_input


def test_limit_constants():
    assert MAX_CHARACTERS == 50
    assert LIMIT_MESSAGE == "50 Characters Max"


def test_within_limit_accepted():
    d = decide_input("你", "你好")
    assert d.accepted and d.value == "你好" and d.warning is None


def test_growing_past_limit_rejected_with_warning():
    prev = "一" * 50
    d = decide_input(prev, prev + "二")
    assert not d.accepted
    assert d.value == prev
    assert d.warning == LIMIT_MESSAGE


def test_shrinking_over_limit_value_has_no_warning():
    d = decide_input("一" * 60, "一" * 55)
    assert not d.accepted
    assert d.warning is None


def test_counter_text():
    assert counter_text("") == "0 / 50 Characters"
    assert counter_text("你好") == "2 / 50 Characters"


def test_generation_counter():
    g = GenerationCounter()
    first = g.issue()
    second = g.issue()
    assert not g.is_current(first)
    assert g.is_current(second)
    assert g.is_current(g.issue())
    assert not g.is_current(second)
