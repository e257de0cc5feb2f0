import pytest

from center_utils import (FACES, OPPOSITE_FACE, SOLVED_STATE, apply_sequence,
                          face_mask, mask_of)
from solution_format import (ANCHOR_ROTATIONS, format_solution, invert_move,
                             invert_sequence, merge_anchor, quarter_turns)


def test_invert_move():
    assert invert_move("Rw") == "Rw'"
    assert invert_move("x'") == "x"
    assert invert_move("Fw2") == "Fw2"


def test_invert_sequence_reverses():
    assert invert_sequence(["y", "Rw", "U2", "Fw'"]) == ["Fw", "U2", "Rw'", "y'"]
    assert invert_sequence([]) == []


def test_quarter_turns():
    assert quarter_turns("z") == 1
    assert quarter_turns("x2") == 2
    assert quarter_turns("z'") == -1


@pytest.mark.parametrize("anchor, tokens, expected", [
    ("", ["Rw"], ["Rw"]),
    ("x2", [], ["x2"]),
    ("z", ["Rw", "x"], ["z", "Rw", "x"]),
    ("z", ["z'", "Rw"], ["Rw"]),
    ("x", ["x", "U"], ["x2", "U"]),
    ("x2", ["x", "U"], ["x'", "U"]),
    ("x'", ["x'"], ["x2"]),
    ("x2", ["x'"], ["x"]),
])
def test_merge_anchor(anchor, tokens, expected):
    assert merge_anchor(anchor, tokens) == expected


def test_format_solution():
    forward, setup = format_solution(["y"], ["Rw", "U2"], 'F')
    assert forward == ["y", "Rw", "U2"]
    assert setup == ["x'", "U2", "Rw'", "y'"]


def test_format_solution_merges_prefix_rotation():
    # Empty path: the inverted prefix rotation meets the anchor
    forward, setup = format_solution(["z'"], [], 'R')
    assert forward == ["z'"]
    assert setup == ["z2"]


@pytest.mark.parametrize("face", list(FACES))
def test_anchor_places_display_colors_on_target(face):
    state = apply_sequence(SOLVED_STATE, ANCHOR_ROTATIONS[face].split())
    assert mask_of(state, 0) == face_mask(face)
    assert mask_of(state, 1) == face_mask(OPPOSITE_FACE[face])
