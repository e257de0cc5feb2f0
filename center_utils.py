#!/usr/bin/env python3
"""
center_utils.py: Core logic for the 24 centers of a 4x4x4 cube.
Layer moves, wide moves and whole-cube rotations as permutations of 24 slots.
"""

import argparse

import colorama
from colorama import Back, Style

colorama.init(autoreset=True)

# 4x4 Center Layout (24 slots, row-major inside each face)
#             00 01
#             02 03
# 16 17 | 04 05 | 08 09 | 20 21
# 18 19 | 06 07 | 10 11 | 22 23
#             12 13
#             14 15
#  L        F       R       B     (U on top, D below)
FACE_INDICES = {
    'U': (0, 1, 2, 3),
    'F': (4, 5, 6, 7),
    'R': (8, 9, 10, 11),
    'D': (12, 13, 14, 15),
    'L': (16, 17, 18, 19),
    'B': (20, 21, 22, 23),
}
FACES = "UDFBRL"
OPPOSITE_FACE = {'U': 'D', 'D': 'U', 'F': 'B', 'B': 'F', 'R': 'L', 'L': 'R'}

UNSET = -1
COLOR_LETTERS = "WYGBRO"

# Canonical display pose: W on U, Y on D
DISPLAY_COLORS = {'U': 'W', 'F': 'G', 'R': 'R', 'D': 'Y', 'L': 'O', 'B': 'B'}
SOLVED_STATE = tuple(
    COLOR_LETTERS.index(DISPLAY_COLORS[face]) for face in "UFRDLB" for _ in range(4)
)

# Face turns only spin the 4 centers of their own face (a -> b -> c -> d)
FACE_CYCLES = {
    'R': (8, 9, 11, 10),
    'L': (16, 17, 19, 18),
    'U': (0, 1, 3, 2),
    'D': (12, 13, 15, 14),
    'F': (4, 5, 7, 6),
    'B': (20, 21, 23, 22),
}

# Wide turns also carry the inner slice: two 4-cycles across neighbour faces
SLICE_CYCLES = {
    'Rw': ((5, 1, 22, 13), (7, 3, 20, 15)),
    'Lw': ((0, 4, 12, 23), (2, 6, 14, 21)),
    'Uw': ((4, 16, 20, 8), (5, 17, 21, 9)),
    'Dw': ((6, 10, 22, 18), (7, 11, 23, 19)),
    'Fw': ((2, 8, 13, 19), (3, 10, 12, 17)),
    'Bw': ((1, 16, 14, 11), (0, 18, 15, 9)),
}

# Base order matters: axis = base_index // 4
# Axis 0: Rw Lw R L / Axis 1: Uw Dw U D / Axis 2: Fw Bw F B
BASES = ('Rw', 'Lw', 'R', 'L', 'Uw', 'Dw', 'U', 'D', 'Fw', 'Bw', 'F', 'B')
TURN_SUFFIXES = ('', '2', "'")

# x = Rw + Lw', y = Uw + Dw', z = Fw + Bw' (quarter turns only)
ROTATIONS = {
    'x': ('Rw', "Lw'"),
    "x'": ("Rw'", 'Lw'),
    'y': ('Uw', "Dw'"),
    "y'": ("Uw'", 'Dw'),
    'z': ('Fw', "Bw'"),
    "z'": ("Fw'", 'Bw'),
}

LAYER_MOVE_COUNT = len(BASES) * len(TURN_SUFFIXES)


def identity():
    return tuple(range(24))


def apply_perm(state, perm):
    """Permutes the state tuple based on indices: new[i] = old[perm[i]]."""
    return tuple(state[i] for i in perm)


def compose(p, q):
    """Permutation equal to applying p first, then q."""
    return apply_perm(p, q)


def power(p, n):
    result = identity()
    for _ in range(n):
        result = compose(result, p)
    return result


def inverse(p):
    result = [0] * 24
    for i, src in enumerate(p):
        result[src] = i
    return tuple(result)


def create_permutation(base):
    """90 degree clockwise permutation for one of the 12 bases."""
    if base not in BASES:
        raise ValueError(f"Unknown base move '{base}'")

    s = list(range(24))

    def cycle4(a, b, c, d):
        s[a], s[b], s[c], s[d] = s[d], s[a], s[b], s[c]

    cycle4(*FACE_CYCLES[base[0]])
    for cyc in SLICE_CYCLES.get(base, ()):
        cycle4(*cyc)
    return tuple(s)


def get_inverse_move(move_str):
    """Inverts a move string (e.g., Rw -> Rw', Rw' -> Rw, Rw2 -> Rw2)."""
    if move_str.endswith("'"):
        return move_str[:-1]
    if move_str.endswith("2"):
        return move_str
    return move_str + "'"


def move_base(move_str):
    return move_str.rstrip("'2")


# Generate the full move set: 36 layer moves then 6 rotations
MOVE_NAMES = []
ALL_MOVES = {}

for b in BASES:
    p1 = create_permutation(b)
    for n, suffix in enumerate(TURN_SUFFIXES, start=1):
        MOVE_NAMES.append(b + suffix)
        ALL_MOVES[b + suffix] = power(p1, n)

for r, (first, second) in ROTATIONS.items():
    MOVE_NAMES.append(r)
    ALL_MOVES[r] = compose(ALL_MOVES[first], ALL_MOVES[second])

MOVE_NAMES = tuple(MOVE_NAMES)
MOVE_INDEX = {name: i for i, name in enumerate(MOVE_NAMES)}
PERM_TABLE = tuple(ALL_MOVES[name] for name in MOVE_NAMES)


def apply_move(state, move_name):
    return apply_perm(state, ALL_MOVES[move_name])


def sequence_permutation(moves):
    """
    Single permutation for a token sequence. Rotation tokens may carry a
    2 suffix (x2, as produced by anchor rotations); they count as two quarters.
    """
    if isinstance(moves, str):
        moves = moves.split()

    result = identity()
    for m in moves:
        if m in ALL_MOVES:
            result = compose(result, ALL_MOVES[m])
        elif m.endswith('2') and m[:-1] in ROTATIONS:
            quarter = ALL_MOVES[m[:-1]]
            result = compose(compose(result, quarter), quarter)
        else:
            raise ValueError(f"Unknown move '{m}'")
    return result


def apply_sequence(state, moves):
    return apply_perm(state, sequence_permutation(moves))


# --- Bit masks ---

def face_mask(face):
    mask = 0
    for i in FACE_INDICES[face]:
        mask |= 1 << i
    return mask


def mask_of(state, color):
    mask = 0
    for i, c in enumerate(state):
        if c == color:
            mask |= 1 << i
    return mask


def apply_perm_to_mask(mask, perm):
    """Reference version: bit i is set when the source slot perm[i] is set."""
    res = 0
    for i in range(24):
        if (mask >> perm[i]) & 1:
            res |= 1 << i
    return res


class MaskPermutation:
    """
    A permutation applied to 24-bit masks through three 256-entry tables,
    one per source byte, so a move costs three lookups instead of 24 shifts.
    """

    def __init__(self, perm):
        self.perm = tuple(perm)
        dest_bit = [0] * 24
        for i, src in enumerate(self.perm):
            dest_bit[src] = 1 << i

        tables = []
        for byte in range(3):
            table = [0] * 256
            for value in range(1, 256):
                low = value & -value
                table[value] = table[value ^ low] | dest_bit[byte * 8 + low.bit_length() - 1]
            tables.append(tuple(table))
        self.t0, self.t1, self.t2 = tables

    def __call__(self, mask):
        return self.t0[mask & 0xFF] | self.t1[(mask >> 8) & 0xFF] | self.t2[mask >> 16]


MASK_MOVES = tuple(MaskPermutation(p) for p in PERM_TABLE)


def visualize_centers(state):
    """
    Prints a visual representation of the 24 centers using colorama.
    Unset slots are drawn black.
    """

    # Define Block Style (2 spaces for a square look)
    BLOCK = "  "

    # NOTE: Standard terminals lack "Orange", so we use MAGENTA for O.
    COLORS = {
        'W': Back.WHITE,
        'Y': Back.YELLOW,
        'G': Back.GREEN,
        'B': Back.BLUE,
        'R': Back.RED,
        'O': Back.MAGENTA,
    }

    def b(index):
        """Returns a colored block for the color mark at the given slot."""
        val = state[index]
        if 0 <= val < len(COLOR_LETTERS):
            color = COLORS[COLOR_LETTERS[val]]
        else:
            color = Back.BLACK
        return f"{color}{BLOCK}{Style.RESET_ALL}"

    # Spacer for the indentation
    S = "    "

    print("\nCenters:")
    print(f"{S}{b(0)}{b(1)}")
    print(f"{S}{b(2)}{b(3)}")

    # Middle Row (L, F, R, B)
    print(f"{b(16)}{b(17)}{b(4)}{b(5)}{b(8)}{b(9)}{b(20)}{b(21)}")
    print(f"{b(18)}{b(19)}{b(6)}{b(7)}{b(10)}{b(11)}{b(22)}{b(23)}")

    print(f"{S}{b(12)}{b(13)}")
    print(f"{S}{b(14)}{b(15)}")
    print("")


# --- Test Usage ---
# Rw Uw' R2 x ...
if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="4x4 Center Move Applicator")
    parser.add_argument("moves", nargs="*", help="Sequence of moves (e.g. Rw U2 Fw' x)")
    args = parser.parse_args()

    current_state = SOLVED_STATE

    if args.moves:
        raw_input = " ".join(args.moves)
        moves = raw_input.replace(",", " ").split()
    else:
        moves = ["Rw", "U", "Rw'", "Fw", "U2", "Fw'"]

    print("Initial State:")
    visualize_centers(current_state)

    print(f"Applying sequence: {' '.join(moves)}")

    try:
        current_state = apply_sequence(current_state, moves)
    except ValueError as e:
        print(f"Error: {e}")
    else:
        visualize_centers(current_state)
        print("Final State Vector:")
        print(' '.join(map(str, current_state)))
