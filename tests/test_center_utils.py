import random

import pytest

from center_utils import (ALL_MOVES, BASES, FACE_INDICES, LAYER_MOVE_COUNT,
                          MASK_MOVES, MOVE_INDEX, MOVE_NAMES, PERM_TABLE,
                          SOLVED_STATE, MaskPermutation, apply_move,
                          apply_perm_to_mask, apply_sequence, compose,
                          create_permutation, face_mask, get_inverse_move,
                          identity, inverse, mask_of, power)


def test_move_table_layout():
    assert len(MOVE_NAMES) == 42
    assert LAYER_MOVE_COUNT == 36
    assert MOVE_NAMES[:3] == ("Rw", "Rw2", "Rw'")
    assert MOVE_NAMES[36:] == ("x", "x'", "y", "y'", "z", "z'")
    assert all(MOVE_INDEX[name] == i for i, name in enumerate(MOVE_NAMES))


@pytest.mark.parametrize("base", BASES)
def test_base_powers(base):
    p = create_permutation(base)
    assert power(p, 4) == identity()
    assert power(p, 2) == ALL_MOVES[base + "2"]
    assert power(p, 3) == ALL_MOVES[base + "'"]
    assert ALL_MOVES[base + "'"] == inverse(p)


def test_rotations_are_wide_pairs():
    assert ALL_MOVES["x"] == compose(ALL_MOVES["Rw"], ALL_MOVES["Lw'"])
    assert ALL_MOVES["y'"] == compose(ALL_MOVES["Uw'"], ALL_MOVES["Dw"])
    assert compose(ALL_MOVES["z"], ALL_MOVES["z'"]) == identity()


def test_rotation_moves_whole_faces():
    # x carries F to U, U to B
    state = apply_move(SOLVED_STATE, "x")
    assert [state[i] for i in FACE_INDICES['U']] == [SOLVED_STATE[4]] * 4
    assert [state[i] for i in FACE_INDICES['B']] == [SOLVED_STATE[0]] * 4


def test_composition_not_commutative_across_axes():
    rw, uw = ALL_MOVES["Rw"], ALL_MOVES["Uw"]
    assert compose(rw, uw) != compose(uw, rw)
    assert compose(rw, ALL_MOVES["Lw"]) == compose(ALL_MOVES["Lw"], rw)


def test_composition_associative():
    a, b, c = ALL_MOVES["Rw"], ALL_MOVES["Fw2"], ALL_MOVES["Uw'"]
    assert compose(compose(a, b), c) == compose(a, compose(b, c))


def test_face_turn_only_touches_own_face():
    state = apply_move(SOLVED_STATE, "R")
    assert state == SOLVED_STATE
    moved = apply_move(tuple(range(24)), "R")
    changed = {i for i in range(24) if moved[i] != i}
    assert changed == set(FACE_INDICES['R'])


def test_inverse_move_names():
    assert get_inverse_move("Rw") == "Rw'"
    assert get_inverse_move("Rw'") == "Rw"
    assert get_inverse_move("U2") == "U2"


def test_apply_sequence_round_trip():
    seq = "Rw U2 Fw' x Dw B'"
    scrambled = apply_sequence(SOLVED_STATE, seq)
    undo = [get_inverse_move(m) for m in reversed(seq.split())]
    assert apply_sequence(scrambled, undo) == SOLVED_STATE


def test_apply_sequence_half_rotation():
    assert apply_sequence(SOLVED_STATE, "x2") == apply_sequence(SOLVED_STATE, "x x")


def test_apply_sequence_unknown_move():
    with pytest.raises(ValueError):
        apply_sequence(SOLVED_STATE, "Rw Q")


def test_mask_of_solved_state():
    assert mask_of(SOLVED_STATE, 0) == face_mask('U') == 0xF
    assert mask_of(SOLVED_STATE, 1) == face_mask('D') == 0xF000


def test_mask_permutation_matches_reference():
    rng = random.Random(7)
    for perm, fast in zip(PERM_TABLE, MASK_MOVES):
        for _ in range(20):
            mask = 0
            for i in rng.sample(range(24), 4):
                mask |= 1 << i
            assert fast(mask) == apply_perm_to_mask(mask, perm)


def test_mask_permutation_follows_state():
    perm = ALL_MOVES["Fw"]
    state = apply_move(SOLVED_STATE, "Fw")
    assert MaskPermutation(perm)(mask_of(SOLVED_STATE, 0)) == mask_of(state, 0)
