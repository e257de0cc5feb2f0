#!/usr/bin/env python3
"""
solution_format.py: Forward and setup (inverse) move strings for playback.
The setup string starts with an anchor rotation so the target face sits
where a viewer expects it.
"""
from center_utils import get_inverse_move, move_base

# Rotation that takes the display pose (W on U) to W on the target face
ANCHOR_ROTATIONS = {
    'U': '',
    'D': 'x2',
    'F': "x'",
    'B': 'x',
    'R': 'z',
    'L': "z'",
}

# Quarter-turn count mod 4 -> suffix, None means the turns cancel
SUFFIX_FOR_QUARTERS = {0: None, 1: '', 2: '2', 3: "'"}


def invert_move(token):
    return get_inverse_move(token)


def invert_sequence(tokens):
    """Inverse of 'A then B' is 'inverse(B) then inverse(A)'."""
    return [invert_move(t) for t in reversed(tokens)]


def quarter_turns(token):
    if token.endswith("2"):
        return 2
    if token.endswith("'"):
        return -1
    return 1


def merge_anchor(anchor, tokens):
    """
    Put the anchor rotation in front of tokens. When the first token turns
    the cube about the same axis the two are folded into one token, or both
    dropped when they cancel.
    """
    tokens = list(tokens)
    if not anchor:
        return tokens

    axis = move_base(anchor)
    if tokens and move_base(tokens[0]) == axis:
        total = (quarter_turns(anchor) + quarter_turns(tokens[0])) % 4
        suffix = SUFFIX_FOR_QUARTERS[total]
        if suffix is None:
            return tokens[1:]
        return [axis + suffix] + tokens[1:]

    return [anchor] + tokens


def format_solution(prefix, path, target):
    """
    Returns (forward_tokens, setup_tokens).
    forward = prefix then path, setup = anchor then inverse(prefix + path).
    """
    forward = list(prefix) + list(path)
    setup = merge_anchor(ANCHOR_ROTATIONS[target], invert_sequence(forward))
    return forward, setup
