#!/usr/bin/env python3
"""
generate_db.py: Pattern database for one color's 4 centers.
Distance (all 42 moves, rotations included) from every 4-of-24 mask to the U face.
"""
import argparse
import pickle
import sys
import threading
from collections import deque
from math import comb

from center_utils import (ALL_MOVES, MASK_MOVES, MaskPermutation,
                          compose, face_mask, identity)

DEPTH_LIMIT = 8
DB_FILE = "centers_pdb.pkl"
GOAL_MASK = face_mask('U')
UNKNOWN = -1
MASK_COUNT = comb(24, 4)

# Whole-cube turns that bring each face onto U
FACE_TRANSFORM_MOVES = {
    'U': (),
    'D': ("Rw2", "Lw2"),
    'F': ("Rw", "Lw'"),
    'B': ("Rw'", "Lw"),
    'R': ("Fw'", "Bw"),
    'L': ("Fw", "Bw'"),
}


class PatternDatabaseError(RuntimeError):
    pass


def build_face_transforms():
    transforms = {}
    for face, moves in FACE_TRANSFORM_MOVES.items():
        perm = identity()
        for m in moves:
            perm = compose(perm, ALL_MOVES[m])
        transforms[face] = perm
    return transforms


FACE_TRANSFORMS = build_face_transforms()
MASK_TRANSFORMS = {face: MaskPermutation(p) for face, p in FACE_TRANSFORMS.items()}


def generate(depth_limit=DEPTH_LIMIT, verbose=False):
    """
    Breadth-first expansion from the U face mask.
    Returns (table, depth_counts) where table is { mask : distance }.
    """
    table = {GOAL_MASK: 0}
    queue = deque([GOAL_MASK])
    depth_counts = {}

    if verbose:
        print(f"[PDB] Generating database to depth {depth_limit}...", flush=True)

    while queue:
        curr = queue.popleft()
        depth = table[curr]
        depth_counts[depth] = depth_counts.get(depth, 0) + 1

        if depth >= depth_limit:
            continue

        # Every move counts here, rotations too
        for move in MASK_MOVES:
            nxt = move(curr)
            if nxt not in table:
                table[nxt] = depth + 1
                queue.append(nxt)

    if verbose:
        print(f"[PDB] Masks reached: {len(table)} / {MASK_COUNT}", flush=True)
        print(f"[PDB] Masks per depth: {dict(sorted(depth_counts.items()))}", flush=True)

    return table, depth_counts


class PatternDatabase:
    """
    Read-only distance table shared by every solve in the process.
    Use PatternDatabase.instance() to get the lazily built copy.
    """

    _instance = None
    _lock = threading.Lock()

    def __init__(self, table):
        self.table = table

    @classmethod
    def instance(cls, verbose=False):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    table, _ = generate(verbose=verbose)
                    cls._instance = cls(table)
        return cls._instance

    @classmethod
    def install(cls, pdb):
        """Replace the process-wide table, e.g. with one loaded from disk."""
        with cls._lock:
            cls._instance = pdb
        return pdb

    @classmethod
    def load(cls, path):
        with open(path, "rb") as f:
            table = pickle.load(f)

        if not isinstance(table, dict) or len(table) != MASK_COUNT or table.get(GOAL_MASK) != 0:
            raise PatternDatabaseError(f"{path} does not hold a complete center database")
        return cls(table)

    def save(self, path):
        with open(path, "wb") as f:
            pickle.dump(self.table, f)

    def __len__(self):
        return len(self.table)

    def lookup(self, mask):
        dist = self.table.get(mask, UNKNOWN)
        if dist == UNKNOWN:
            raise PatternDatabaseError(f"No distance recorded for mask {mask:#08x}")
        return dist

    def distance(self, mask, face):
        """Moves needed to gather the 4 centers of mask on the given face."""
        return self.lookup(MASK_TRANSFORMS[face](mask))


def main():
    parser = argparse.ArgumentParser(description="Generate the 4x4 center pattern database")
    parser.add_argument("--output", default=DB_FILE, help=f"Pickle file to write (default {DB_FILE})")
    parser.add_argument("--depth", type=int, default=DEPTH_LIMIT, help="BFS depth limit")
    args = parser.parse_args()

    table, _ = generate(depth_limit=args.depth, verbose=True)

    missing = MASK_COUNT - len(table)
    if missing:
        print(f"Error: {missing} masks not reached within depth {args.depth}.")
        sys.exit(1)

    PatternDatabase(table).save(args.output)
    print(f"Saved to {args.output}")


if __name__ == "__main__":
    main()
