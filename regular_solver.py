#!/usr/bin/env python3
"""
regular_solver.py: Single-machine 4x4 center solver.
Brings two colors (4 centers each) to a target face and its opposite face.
"""
import argparse
import os
import sys
import time

from center_search import (LESS_PREFERRED, MAX_DEPTH, NO_SOLUTION, SOLVED,
                           CenterSearch, select_orientation)
from center_utils import (COLOR_LETTERS, FACES, OPPOSITE_FACE, UNSET,
                          mask_of, visualize_centers)
from generate_db import DB_FILE, PatternDatabase, PatternDatabaseError
from solution_format import format_solution

INVALID_INPUT = "INVALID_INPUT"
UNSET_TOKENS = ('.', '-', '-1')


class SolveResult:

    def __init__(self, status, forward=(), prefix=(), setup=(), move_count=0,
                 nodes=0, elapsed=0.0, message="", target=None, colors=None):
        self.status = status
        self.forward = list(forward)
        self.prefix = list(prefix)
        self.setup = list(setup)
        self.move_count = move_count
        self.nodes = nodes
        self.elapsed = elapsed
        self.message = message
        self.target = target
        self.colors = colors

    @property
    def solved(self):
        return self.status == SOLVED

    @property
    def forward_text(self):
        return " ".join(self.forward)

    @property
    def setup_text(self):
        return " ".join(self.setup)

    def summary(self):
        if self.solved:
            extra = " (+Setup)" if self.prefix else ""
            return f"{self.move_count} Moves{extra} | Time: {self.elapsed * 1000:.1f}ms | Nodes: {self.nodes}"
        if self.status == INVALID_INPUT:
            return self.message
        return f"{self.status} | Nodes: {self.nodes}"

    def __repr__(self):
        return f"SolveResult({self.status}, {self.forward_text!r}, moves={self.move_count}, nodes={self.nodes})"


def count_colors(state):
    counts = [0] * len(COLOR_LETTERS)
    for c in state:
        if c == UNSET:
            continue
        if not 0 <= c < len(counts):
            raise ValueError(f"Unknown color mark {c}")
        counts[c] += 1
    return counts


def pick_colors(state, colors=None):
    """
    Chooses the (target, opposite) color ids.
    Raises ValueError when the two colors do not have exactly 4 centers each.
    """
    counts = count_colors(state)

    if colors is not None:
        a, b = colors
        for c in (a, b):
            if not 0 <= c < len(counts):
                raise ValueError(f"Unknown color id {c}")
        if a == b:
            raise ValueError(f"Tracked colors must differ, got {a} twice")
        if counts[a] != 4 or counts[b] != 4:
            raise ValueError(f"Each tracked color needs exactly 4 centers, counts: {counts}")
        return a, b

    # White and yellow first, otherwise any two colors with 4 centers
    if counts[0] == 4 and counts[1] == 4:
        return 0, 1

    candidates = [c for c, cnt in enumerate(counts) if cnt == 4]
    if len(candidates) != 2:
        raise ValueError(f"Each tracked color needs exactly 4 centers, counts: {counts}")
    return candidates[0], candidates[1]


def parse_state(text):
    """
    State string -> tuple of 24 color ids.
    Tokens are ints, color letters (WYGBRO) or . / - for unset.
    """
    tokens = text.replace(",", " ").split()
    if len(tokens) == 1 and len(tokens[0]) == 24:
        tokens = list(tokens[0])

    state = []
    for tok in tokens:
        if tok in UNSET_TOKENS:
            state.append(UNSET)
        elif len(tok) == 1 and tok.upper() in COLOR_LETTERS:
            state.append(COLOR_LETTERS.index(tok.upper()))
        else:
            val = int(tok)
            if not 0 <= val < len(COLOR_LETTERS):
                raise ValueError(f"Color id out of range: {tok}")
            state.append(val)

    if len(state) != 24:
        raise ValueError(f"Expected 24 centers, got {len(state)}")
    return tuple(state)


def solve_centers(state, target='U', banned=(), colors=None, less_preferred=LESS_PREFERRED,
                  max_depth=MAX_DEPTH, max_seconds=None, pdb=None, verbose=False):
    """
    Solve for the two tracked colors of state.

    The first color goes to target, the second to the opposite face.
    Bad color counts give an INVALID_INPUT result; an unknown face or a
    state of the wrong length raises ValueError.
    """
    if target not in FACES:
        raise ValueError(f"Unknown target face '{target}'")
    if len(state) != 24:
        raise ValueError(f"Expected 24 centers, got {len(state)}")

    try:
        w_id, y_id = pick_colors(state, colors)
    except ValueError as e:
        if verbose:
            print(f"[Solver] {e}", flush=True)
        return SolveResult(INVALID_INPUT, message=str(e), target=target)

    if pdb is None:
        pdb = PatternDatabase.instance(verbose=verbose)

    start_time = time.perf_counter()
    w_mask = mask_of(state, w_id)
    y_mask = mask_of(state, y_id)

    prefix, w_mask, y_mask, h = select_orientation(pdb, w_mask, y_mask, target, banned)
    if verbose:
        print(f"[Solver] Orientation: '{' '.join(prefix)}' | h = {h}", flush=True)

    search = CenterSearch(pdb, target, banned=banned, less_preferred=less_preferred,
                          max_depth=max_depth, max_seconds=max_seconds, verbose=verbose)
    status, path = search.run(w_mask, y_mask)
    elapsed = time.perf_counter() - start_time

    if status != SOLVED:
        return SolveResult(status, nodes=search.nodes, elapsed=elapsed,
                           target=target, colors=(w_id, y_id))

    forward, setup = format_solution(prefix, path, target)
    return SolveResult(SOLVED, forward=forward, prefix=prefix, setup=setup,
                       move_count=len(path), nodes=search.nodes, elapsed=elapsed,
                       target=target, colors=(w_id, y_id))


# --- Batch helpers (shared with mpi_solver.py) ---

def parse_task_line(line):
    """'TARGET state...' -> (target, state), None for blank and # lines."""
    line = line.strip()
    if not line or line.startswith("#"):
        return None

    target, _, rest = line.partition(" ")
    target = target.upper()
    if target not in FACES:
        raise ValueError(f"Unknown target face '{target}'")
    return target, parse_state(rest)


def read_tasks(path):
    tasks = []
    with open(path, 'r') as f:
        for line in f:
            task = parse_task_line(line)
            if task is not None:
                tasks.append(task)
    return tasks


def solve_batch(tasks, banned=(), less_preferred=LESS_PREFERRED, max_depth=MAX_DEPTH,
                max_seconds=None, pdb=None):
    return [solve_centers(state, target, banned=banned, less_preferred=less_preferred,
                          max_depth=max_depth, max_seconds=max_seconds, pdb=pdb)
            for target, state in tasks]


def split_tasks(tasks, size):
    """Pads with None so every one of size ranks gets an equal chunk."""
    tasks = list(tasks)
    pad_needed = (size - (len(tasks) % size)) % size
    tasks.extend([None] * pad_needed)

    k = len(tasks) // size
    return [tasks[i * k: (i + 1) * k] for i in range(size)]


def cluster_stats_lines(counts):
    """Per-rank node statistics table."""
    total = sum(counts)
    lines = [
        f"{'Rank':<10} | {'Nodes Explored':<15} | {'Contribution':<12}",
        "-" * 45,
    ]
    for r, count in enumerate(counts):
        pct = (count / total * 100) if total > 0 else 0
        lines.append(f"{r:<10} | {count:<15} | {pct:.1f}%")
    lines.append("-" * 45)
    lines.append(f"Total Nodes Explored: {total}")
    return lines


def print_result(result):
    if result.solved:
        print("\n" + "=" * 40)
        print("*** SOLUTION FOUND ***")
        print(f"Moves: {result.move_count}")
        print(f"Sequence: {result.forward_text}")
        print(f"Setup: {result.setup_text}")
        print(result.summary())
        print("=" * 40)
    elif result.status == INVALID_INPUT:
        print(f"Error: {result.message}")
    elif result.status == NO_SOLUTION:
        print(f"Search exhausted. No solution within depth. Nodes: {result.nodes}")
    else:
        print(f"Search stopped ({result.status}). Nodes: {result.nodes}")


def load_database(path):
    if path and os.path.exists(path):
        print(f"Loading {path}...")
        pdb = PatternDatabase.install(PatternDatabase.load(path))
        print("Database loaded.")
        return pdb

    if path:
        print(f"{path} missing, building database in memory (run generate_db.py to cache it).")
    return PatternDatabase.instance(verbose=True)


def main():
    parser = argparse.ArgumentParser(description="4x4 two-color center solver")
    parser.add_argument("input", help="State string (24 tokens) or file path")
    parser.add_argument("--target", default="U", choices=list(FACES), help="Face for the first color")
    parser.add_argument("--ban", action="append", default=[], help="Move prefix to avoid (repeatable)")
    parser.add_argument("--last", action="append", default=None,
                        help=f"Move name fragment to try last (repeatable, default {' '.join(LESS_PREFERRED)})")
    parser.add_argument("--max-depth", type=int, default=MAX_DEPTH, help="IDA* bound cap")
    parser.add_argument("--timeout", type=float, default=None, help="Give up after this many seconds")
    parser.add_argument("--db", default=DB_FILE, help="Pickled pattern database")
    parser.add_argument("--show", action="store_true", help="Draw the centers before solving")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    try:
        with open(args.input, 'r') as f:
            content = f.read().strip()
    except FileNotFoundError:
        content = args.input

    try:
        start_state = parse_state(content)
    except ValueError as e:
        print(f"Error: Invalid input format. {e}")
        sys.exit(1)

    if args.show:
        visualize_centers(start_state)

    try:
        pdb = load_database(args.db)
    except PatternDatabaseError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"[Solver] Target {args.target}, opposite {OPPOSITE_FACE[args.target]}...")
    result = solve_centers(start_state, args.target, banned=args.ban,
                           less_preferred=args.last or LESS_PREFERRED, max_depth=args.max_depth,
                           max_seconds=args.timeout, pdb=pdb, verbose=args.verbose)
    print_result(result)
    sys.exit(0 if result.solved else 1)


if __name__ == "__main__":
    main()
