# /pathgraph/levels.py

from typing import Dict, Optional, Sequence, Set

from pathgraph.exceptions import CycleEncounteredError
from pathgraph.models import LearningNode
from pathgraph.validator import index_nodes


def calculate_node_levels(nodes: Sequence[LearningNode]) -> Dict[str, int]:
    """
    Returns the level of every node: 0 without prerequisites, otherwise one
    more than its highest prerequisite. Prerequisites that are not in
    `nodes` count as level 0.

    Raises:
        CycleEncounteredError: if a node is reached again while its own
            level is still being resolved.
    """
    index = index_nodes(nodes)
    levels: Dict[str, int] = {}
    in_progress: Set[str] = set()

    # Explicit stack: long prerequisite chains must not hit the recursion limit
    for root in nodes:
        if root.id in levels:
            continue
        in_progress.add(root.id)
        stack = [(root.id, iter(index[root.id].prerequisites))]

        while stack:
            node_id, prereqs = stack[-1]
            descended = False
            for prereq_id in prereqs:
                if prereq_id in levels or prereq_id not in index:
                    continue
                if prereq_id in in_progress:
                    raise CycleEncounteredError(prereq_id)
                in_progress.add(prereq_id)
                stack.append((prereq_id, iter(index[prereq_id].prerequisites)))
                descended = True
                break
            if descended:
                continue

            stack.pop()
            in_progress.discard(node_id)
            prerequisites = index[node_id].prerequisites
            levels[node_id] = max((levels.get(p, 0) for p in prerequisites), default=-1) + 1

    return levels


def count_levels(nodes: Sequence[LearningNode], levels: Optional[Dict[str, int]] = None) -> int:
    """Number of distinct levels of a path; 0 for an empty path."""
    if not nodes:
        return 0
    if levels is None:
        levels = calculate_node_levels(nodes)
    return max(levels.values()) + 1
