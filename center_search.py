#!/usr/bin/env python3
"""
center_search.py: Orientation pre-scan and IDA* over the 36 layer moves.
State is the pair of 24-bit masks (target color, opposite color).
"""
import math
import time

from center_utils import (LAYER_MOVE_COUNT, MASK_MOVES, MOVE_INDEX, MOVE_NAMES,
                          OPPOSITE_FACE)
from generate_db import MASK_TRANSFORMS

MAX_DEPTH = 16
LESS_PREFERRED = ("Bw", "Dw")
DEADLINE_CHECK_NODES = 4096

SOLVED = "SOLVED"
NO_SOLUTION = "NO_SOLUTION"
TIMED_OUT = "TIMED_OUT"

# The 24 whole-cube orientations tried before searching.
# Quarter rotations only, so y2 is spelled "y y".
ORIENTATIONS = (
    (),
    ("y",), ("y", "y"), ("y'",),
    ("x",), ("x", "y"), ("x", "y", "y"), ("x", "y'"),
    ("x", "x"), ("x", "x", "y"), ("x", "x", "y", "y"), ("x", "x", "y'"),
    ("x'",), ("x'", "y"), ("x'", "y", "y"), ("x'", "y'"),
    ("z",), ("z", "y"), ("z", "y", "y"), ("z", "y'"),
    ("z'",), ("z'", "y"), ("z'", "y", "y"), ("z'", "y'"),
)


def is_banned(move_name, banned):
    return any(move_name.startswith(prefix) for prefix in banned)


class SearchTimeout(Exception):
    pass


class HeuristicEvaluator:
    """max(distance of target color to target face, distance of other color to opposite face)"""

    def __init__(self, pdb, target):
        if target not in OPPOSITE_FACE:
            raise ValueError(f"Unknown target face '{target}'")
        self.pdb = pdb
        self.target = target
        self.opposite = OPPOSITE_FACE[target]
        self._to_target = MASK_TRANSFORMS[self.target]
        self._to_opposite = MASK_TRANSFORMS[self.opposite]

    def __call__(self, w_mask, y_mask):
        lookup = self.pdb.lookup
        hw = lookup(self._to_target(w_mask))
        hy = lookup(self._to_opposite(y_mask))
        return hw if hw > hy else hy


def select_orientation(pdb, w_mask, y_mask, target, banned=(), heuristic=None):
    """
    Pick the whole-cube prefix with the lowest heuristic.
    Ties go to fewer rotation tokens, then to the earlier entry.
    Returns (prefix_tokens, w_mask, y_mask, h).
    """
    if heuristic is None:
        heuristic = HeuristicEvaluator(pdb, target)

    best = None
    for prefix in ORIENTATIONS:
        if any(is_banned(m, banned) for m in prefix):
            continue

        w, y = w_mask, y_mask
        for m in prefix:
            move = MASK_MOVES[MOVE_INDEX[m]]
            w, y = move(w), move(y)

        h = heuristic(w, y)
        if best is None or h < best[3] or (h == best[3] and len(prefix) < len(best[0])):
            best = (prefix, w, y, h)

    if best is None:
        raise ValueError("Every orientation prefix is banned")
    return best


class CenterSearch:
    """
    IDA* for bringing w_mask to the target face and y_mask to the opposite face.

    Moves on the same axis as the previous move are only tried in increasing
    base order. A transposition table { (w, y) : g } is kept per iteration.
    """

    def __init__(self, pdb, target, banned=(), less_preferred=LESS_PREFERRED,
                 max_depth=MAX_DEPTH, max_seconds=None, verbose=False):
        self.heuristic = HeuristicEvaluator(pdb, target)
        self.target = target
        self.banned = tuple(banned)
        self.max_depth = max_depth
        self.max_seconds = max_seconds
        self.verbose = verbose

        allowed = [m for m in range(LAYER_MOVE_COUNT) if not is_banned(MOVE_NAMES[m], self.banned)]
        # Stable sort keeps axis order inside both groups
        allowed.sort(key=lambda m: any(p in MOVE_NAMES[m] for p in less_preferred))

        # (move index, base index, axis, mask permutation)
        self.moves = tuple((m, m // 3, m // 12, MASK_MOVES[m]) for m in allowed)

        self.nodes = 0
        self.path = []
        self._visited = {}
        self._deadline = None

    def _search(self, w, y, g, bound, last_base):
        self.nodes += 1
        if self._deadline is not None and self.nodes % DEADLINE_CHECK_NODES == 0:
            if time.perf_counter() > self._deadline:
                raise SearchTimeout()

        h = self.heuristic(w, y)
        f = g + h
        if f > bound:
            return f, False
        if h == 0:
            return f, True

        key = (w, y)
        seen = self._visited.get(key)
        if seen is not None and seen <= g:
            return math.inf, False
        self._visited[key] = g

        lowest = math.inf
        last_axis = -1 if last_base is None else last_base // 4
        for m, base, axis, move in self.moves:
            if axis == last_axis and base <= last_base:
                continue

            self.path.append(m)
            t, found = self._search(move(w), move(y), g + 1, bound, base)
            if found:
                return t, True
            self.path.pop()

            if t < lowest:
                lowest = t
        return lowest, False

    def run(self, w_mask, y_mask):
        """
        Returns (status, move_names) where status is SOLVED, NO_SOLUTION
        or TIMED_OUT. self.nodes holds the total across all iterations.
        """
        self.nodes = 0
        self.path = []
        self._deadline = None
        if self.max_seconds is not None:
            self._deadline = time.perf_counter() + self.max_seconds

        bound = self.heuristic(w_mask, y_mask)
        while bound <= self.max_depth:
            if self.verbose:
                print(f"[Search] Bound {bound} | Nodes so far: {self.nodes}", flush=True)

            self._visited = {}
            try:
                t, found = self._search(w_mask, y_mask, 0, bound, None)
            except SearchTimeout:
                self.path = []
                return TIMED_OUT, []
            finally:
                self._visited = {}

            if found:
                return SOLVED, [MOVE_NAMES[m] for m in self.path]
            if t == math.inf:
                break
            bound = t

        self.path = []
        return NO_SOLUTION, []
