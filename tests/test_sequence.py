import pytest

from errors import InvalidInputError
from sequence import Element, ElementTag, Sequence


# ---------------------------------------------------------------------------
# Custom input parsing
# ---------------------------------------------------------------------------
def test_parse_rejects_fewer_than_five_values():
    with pytest.raises(InvalidInputError):
        Sequence.parse("5,3,9,1")


def test_parse_accepts_five_values():
    assert Sequence.parse("5,3,9,1,2").values() == [5, 3, 9, 1, 2]


def test_parse_rejects_non_numeric_token_as_a_batch():
    with pytest.raises(InvalidInputError) as exc:
        Sequence.parse("5,a,9,1,2")
    assert "'a'" in str(exc.value)


@pytest.mark.parametrize("text", [
    "", "1,,2,3,4,5", "1,2,3,4,nan", "1,2,3,4,inf", "1;2;3;4;5",
    "1_0,2,3,4,5", "1,2,3,4,2_5.5", "1,2,3,4,\u0661",
])
def test_parse_rejects_malformed_text(text):
    with pytest.raises(InvalidInputError):
        Sequence.parse(text)


def test_parse_strips_whitespace_and_keeps_floats():
    seq = Sequence.parse(" 1.5, 2 ,-3, 4,5 ")
    assert seq.values() == [1.5, 2, -3, 4, 5]
    assert isinstance(seq.values()[1], int)


def test_from_values_rejects_bool_and_strings():
    with pytest.raises(InvalidInputError):
        Sequence.from_values([1, 2, 3, 4, True])
    with pytest.raises(InvalidInputError):
        Sequence.from_values([1, 2, 3, 4, "5"])


# ---------------------------------------------------------------------------
# Generation presets
# ---------------------------------------------------------------------------
def test_generate_random_is_reproducible_with_seed():
    a = Sequence.generate(30, seed=7).values()
    b = Sequence.generate(30, seed=7).values()
    assert a == b
    assert all(10 <= v <= 309 for v in a)


def test_generate_sorted_and_reversed_are_linearly_spaced():
    asc = Sequence.generate(10, preset="sorted", value_range=(0, 90)).values()
    assert asc == [0, 10, 20, 30, 40, 50, 60, 70, 80, 90]
    desc = Sequence.generate(10, preset="reversed", value_range=(0, 90)).values()
    assert desc == list(reversed(asc))


def test_generate_few_unique_uses_at_most_five_values():
    seq = Sequence.generate(60, preset="few_unique", seed=3)
    assert len(seq) == 60
    assert len(set(seq.values())) <= 5


def test_generate_edge_sizes():
    assert len(Sequence.generate(0)) == 0
    assert Sequence.generate(1, preset="sorted", value_range=(4, 9)).values() == [4]


def test_generate_rejects_unknown_preset():
    with pytest.raises(InvalidInputError):
        Sequence.generate(10, preset="zigzag")


# ---------------------------------------------------------------------------
# Tags & snapshots
# ---------------------------------------------------------------------------
def test_new_elements_are_default_tagged():
    seq = Sequence([3, 1, 2])
    assert all(e.tag is ElementTag.DEFAULT for e in seq)


def test_snapshot_is_detached_from_later_mutation():
    seq = Sequence([3, 1, 2])
    snap = seq.snapshot()
    seq.items[0].tag = ElementTag.COMPARING
    seq.items[0], seq.items[1] = seq.items[1], seq.items[0]
    assert snap == ((3, "default"), (1, "default"), (2, "default"))


def test_reset_tags_and_mark_all():
    seq = Sequence([1, 2, 3])
    seq.mark_all(ElementTag.SORTED)
    assert all(e.is_sorted for e in seq)
    seq.reset_tags()
    assert [t for _, t in seq.snapshot()] == ["default"] * 3


def test_all_non_negative_integers():
    assert Sequence([0, 3, 7.0]).all_non_negative_integers()
    assert not Sequence([0, -1, 7]).all_non_negative_integers()
    assert not Sequence([0, 1.5, 7]).all_non_negative_integers()


def test_round_trip_dict_keeps_tags():
    seq = Sequence([4, 2])
    seq.items[1].tag = ElementTag.PIVOT
    again = Sequence.from_dict(seq.to_dict())
    assert again.snapshot() == ((4, "default"), (2, "pivot"))


def test_elements_with_equal_values_are_distinct():
    a, b = Element(5), Element(5)
    assert a != b
    assert [a, b].index(b) == 1
