from fedramp_compare.control_id import ControlID
from fedramp_compare.models import Baseline, Control, Parameters
from fedramp_compare.variation import distinct_parameter_sets, has_distinct_parameters


def control(**slots):
    parameters = {Baseline[name.upper()]: value for name, value in slots.items()}
    return Control(id=ControlID.parse("AC-2"), parameters=parameters)


def test_whitespace_only_differences_are_not_distinct():
    """Whitespace-only differences do not count as a variation."""

    c = control(high=Parameters("  Foo   Bar "), moderate=Parameters("Foo Bar"))

    assert not has_distinct_parameters(c)


def test_different_text_is_distinct():
    """Different assignment text is a variation."""

    c = control(high=Parameters("Foo"), moderate=Parameters("Bar"))

    assert has_distinct_parameters(c)


def test_additional_text_counts_too():
    """Additional guidance text also counts."""

    c = control(high=Parameters("Foo", "extra"), low=Parameters("Foo", ""))

    assert has_distinct_parameters(c)


def test_newlines_collapse_like_spaces():
    """Newlines compare like spaces."""

    c = control(high=Parameters("a\n\nb", "x\ty"), moderate=Parameters("a b", "x y"), low=Parameters("a  b", "x y"))

    assert not has_distinct_parameters(c)
    assert distinct_parameter_sets(c) == frozenset({Parameters("a b", "x y")})


def test_zero_or_one_populated_slot_is_never_distinct():
    """Fewer than two populated slots can never differ."""

    assert not has_distinct_parameters(control())
    assert not has_distinct_parameters(control(low=Parameters("only low")))


def test_absent_slot_matches_empty_slot():
    """An absent slot between two empty ones is not a variation."""

    c = control(high=Parameters(), moderate=None, low=Parameters())

    assert not has_distinct_parameters(c)


def test_order_does_not_matter():
    """Slot order does not change the answer."""

    a = control(high=Parameters("x"), moderate=Parameters("y"), low=Parameters("x"))
    b = control(high=Parameters("y"), moderate=Parameters("x"), low=Parameters("y"))

    assert distinct_parameter_sets(a) == distinct_parameter_sets(b)
    assert has_distinct_parameters(a)
