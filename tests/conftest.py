import random

import pytest

from center_utils import LAYER_MOVE_COUNT, MASK_MOVES, face_mask
from generate_db import PatternDatabase

BFS_DEPTH = 4


@pytest.fixture(scope="session")
def pdb():
    return PatternDatabase.instance()


def neighbours(w, y):
    for m in range(LAYER_MOVE_COUNT):
        move = MASK_MOVES[m]
        yield move(w), move(y)


@pytest.fixture(scope="session")
def goal_distances():
    """
    Exact layer-move distances to (W on U, Y on D) for every mask pair
    within BFS_DEPTH moves, by plain breadth-first search.
    """
    goal = (face_mask('U'), face_mask('D'))
    dist = {goal: 0}
    frontier = [goal]
    for depth in range(1, BFS_DEPTH + 1):
        next_frontier = []
        for w, y in frontier:
            for nxt in neighbours(w, y):
                if nxt not in dist:
                    dist[nxt] = depth
                    next_frontier.append(nxt)
        frontier = next_frontier
    return dist


@pytest.fixture(scope="session")
def depth_five_states(goal_distances):
    """
    Mask pairs exactly 5 moves from the goal: unseen neighbours of
    depth-4 pairs, since every pair within 4 moves is already known.
    """
    rng = random.Random(5)
    outer = sorted(k for k, d in goal_distances.items() if d == BFS_DEPTH)
    found = set()
    for w, y in rng.sample(outer, min(len(outer), 200)):
        for nxt in neighbours(w, y):
            if nxt not in goal_distances:
                found.add(nxt)
    return sorted(found)
