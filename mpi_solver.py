#!/usr/bin/env python3
"""
mpi_solver.py: Distributed batch solver for 4x4 centers using MPI.
Rank 0 reads a task file (one 'TARGET state' per line), scatters the tasks,
every rank solves its share and rank 0 prints the results and statistics.
"""
from mpi4py import MPI
import argparse
import sys

from center_search import LESS_PREFERRED, MAX_DEPTH
from generate_db import DB_FILE, PatternDatabase, PatternDatabaseError
from regular_solver import (cluster_stats_lines, print_result, read_tasks,
                            solve_centers, split_tasks)


def main():
    # --- MPI INIT ---
    comm = MPI.COMM_WORLD
    rank = comm.Get_rank()
    size = comm.Get_size()

    parser = argparse.ArgumentParser()
    parser.add_argument("input", help="Task file: one 'TARGET state...' per line")
    parser.add_argument("--ban", action="append", default=[], help="Move prefix to avoid (repeatable)")
    parser.add_argument("--last", action="append", default=None,
                        help=f"Move name fragment to try last (repeatable, default {' '.join(LESS_PREFERRED)})")
    parser.add_argument("--max-depth", type=int, default=MAX_DEPTH)
    parser.add_argument("--timeout", type=float, default=None, help="Per-task time limit in seconds")
    parser.add_argument("--db", default=DB_FILE, help="Pickled pattern database")
    args = parser.parse_args()

    # --- 1. Load Database (every node keeps its own copy) ---
    try:
        pdb = PatternDatabase.install(PatternDatabase.load(args.db))
    except FileNotFoundError:
        pdb = PatternDatabase.instance()
    except PatternDatabaseError as e:
        print(f"[Node {rank}] Error loading DB: {e}", flush=True)
        comm.Abort(1)
        sys.exit(1)

    print(f"[Node {rank}] Database ready. Active.", flush=True)

    # BARRIER 1: Ensure all nodes are ready before Manager starts
    comm.Barrier()

    # --- 2. Setup Manager (Rank 0) ---
    chunks = []
    if rank == 0:
        try:
            tasks = read_tasks(args.input)
        except (OSError, ValueError) as e:
            print(f"Error: Invalid task file. {e}", flush=True)
            comm.Abort(1)
            sys.exit(1)

        print(f"[Manager] {len(tasks)} tasks over {size} nodes", flush=True)
        chunks = split_tasks(list(enumerate(tasks)), size)

    local_tasks = comm.scatter(chunks, root=0)

    # --- 3. Local Computation ---
    local_results = []
    local_node_count = 0

    for task in local_tasks:
        if task is None:
            continue

        idx, (target, state) = task
        result = solve_centers(state, target, banned=args.ban,
                               less_preferred=args.last or LESS_PREFERRED, max_depth=args.max_depth,
                               max_seconds=args.timeout, pdb=pdb)
        local_node_count += result.nodes
        local_results.append((idx, result))

    # --- 4. Gather Results ---
    all_results = comm.gather(local_results, root=0)
    all_counts = comm.gather(local_node_count, root=0)

    if rank == 0:
        ordered = sorted((r for batch in all_results for r in batch), key=lambda item: item[0])
        solved = 0
        for idx, result in ordered:
            print(f"\n[Task {idx}] Target {result.target}", flush=True)
            print_result(result)
            if result.solved:
                solved += 1

        print("\n--- Cluster Statistics ---", flush=True)
        for line in cluster_stats_lines(all_counts):
            print(line, flush=True)
        print(f"Solved: {solved} / {len(ordered)}", flush=True)


if __name__ == "__main__":
    main()
