import pytest

from hookpilot.ordering import intersect, sort_commands


@pytest.mark.parametrize(
    ("names", "priorities", "expected"),
    [
        (["10_a", "1_a", "2_a", "5_a"], {}, ["1_a", "2_a", "5_a", "10_a"]),
        (
            ["10_a", "1_a", "2_a", "5_a"],
            {"5_a": 10, "2_a": 1, "10_a": 0},
            ["2_a", "5_a", "1_a", "10_a"],
        ),
        (
            ["1_command", "10command", "3 command", "command5"],
            {},
            ["1_command", "3 command", "10command", "command5"],
        ),
    ],
)
def test_sort_commands(names, priorities, expected):
    assert sort_commands(names, priorities) == expected


def test_sort_commands_alphabetical_without_numbers():
    assert sort_commands(["lint", "audit", "test"]) == ["audit", "lint", "test"]


def test_sort_commands_numbered_before_plain_names():
    assert sort_commands(["zeta", "2_b", "alpha", "1_a"]) == ["1_a", "2_b", "alpha", "zeta"]


def test_sort_commands_is_stable_for_equal_numbers():
    assert sort_commands(["1b", "1a", "0c"]) == ["0c", "1b", "1a"]


def test_sort_commands_priority_beats_number():
    assert sort_commands(["1_a", "z"], {"z": 3}) == ["z", "1_a"]


def test_sort_commands_does_not_modify_input():
    names = ["b", "a"]
    result = sort_commands(names)
    assert result == ["a", "b"]
    assert names == ["b", "a"]


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        (["tests", "formatter"], ["tests"], True),
        (["tests", "formatter"], ["linters"], False),
        ([], ["tests"], False),
        (["tests"], [], False),
        (["formatter"], ["formatter"], True),
    ],
)
def test_intersect(a, b, expected):
    assert intersect(a, b) is expected


def test_intersect_is_symmetric():
    assert intersect(["a", "b"], ["c", "b"]) == intersect(["c", "b"], ["a", "b"])