# /pathgraph/validator.py

from typing import Dict, List, Optional, Sequence, Set, Union

from pathgraph.models import LearningNode, LearningPath, LearningPathDraft, ValidationResult

NO_TERMINAL_NODES = "Path has no terminal nodes - all nodes have dependencies"
NO_STARTING_NODES = "Path has no starting nodes - all nodes have prerequisites"


def missing_prerequisite_issue(prereq_id: str, node_id: str) -> str:
    return f"Missing prerequisite {prereq_id} for node {node_id}"

def circular_dependency_issue(node_id: str) -> str:
    return f"Circular dependency detected for node {node_id}"


def index_nodes(nodes: Sequence[LearningNode]) -> Dict[str, LearningNode]:
    """Maps node ids to nodes. When ids repeat, the first node wins."""
    index: Dict[str, LearningNode] = {}
    for node in nodes:
        index.setdefault(node.id, node)
    return index


def cycle_reachability(index: Dict[str, LearningNode]) -> Dict[str, bool]:
    """
    For every indexed node, whether its prerequisite closure contains a
    cycle (the node sits on one or reaches one).

    One iterative depth-first pass, so deep chains do not hit the recursion
    limit and shared prerequisites (diamonds) are walked once. Missing
    prerequisites are skipped here; they are reported separately.
    """
    reaches: Dict[str, bool] = {}
    on_stack: Set[str] = set()

    for root_id in index:
        if root_id in reaches:
            continue
        reaches[root_id] = False
        on_stack.add(root_id)
        stack = [(root_id, iter(index[root_id].prerequisites))]

        while stack:
            node_id, prereqs = stack[-1]
            descended = False
            for prereq_id in prereqs:
                if prereq_id not in index:
                    continue
                if prereq_id in on_stack:
                    reaches[node_id] = True
                elif prereq_id not in reaches:
                    reaches[prereq_id] = False
                    on_stack.add(prereq_id)
                    stack.append((prereq_id, iter(index[prereq_id].prerequisites)))
                    descended = True
                    break
                elif reaches[prereq_id]:
                    reaches[node_id] = True
            if descended:
                continue

            stack.pop()
            on_stack.discard(node_id)
            if stack and reaches[node_id]:
                reaches[stack[-1][0]] = True

    return reaches


def _reaches(start_id: str, target_id: str, index: Dict[str, LearningNode]) -> bool:
    seen: Set[str] = set()
    pending = [start_id]
    while pending:
        node_id = pending.pop()
        if node_id == target_id:
            return True
        if node_id in seen or node_id not in index:
            continue
        seen.add(node_id)
        pending.extend(index[node_id].prerequisites)
    return False


def has_circular_dependency(
    node: LearningNode,
    index: Dict[str, LearningNode],
    reaches: Optional[Dict[str, bool]] = None,
) -> bool:
    """
    Whether a walk from `node` through its prerequisites ever comes back to
    a node already on the current chain.

    Pass `reaches` from `cycle_reachability` when checking many nodes of the
    same path.
    """
    if reaches is None:
        reaches = cycle_reachability(index)
    if index.get(node.id) is node:
        return reaches[node.id]

    # A second node sharing an id: its walk loops when it gets back to that id
    for prereq_id in node.prerequisites:
        if prereq_id not in index:
            continue
        if reaches[prereq_id] or _reaches(prereq_id, node.id, index):
            return True
    return False


def structure_issues(nodes: Sequence[LearningNode]) -> List[str]:
    issues: List[str] = []
    if not nodes:
        return issues

    depended_on = {prereq_id for node in nodes for prereq_id in node.prerequisites}
    if not any(node.id not in depended_on for node in nodes):
        issues.append(NO_TERMINAL_NODES)

    if not any(not node.prerequisites for node in nodes):
        issues.append(NO_STARTING_NODES)

    return issues


def validate(path: Union[LearningPath, LearningPathDraft]) -> ValidationResult:
    """
    Structural check of a path's node set. Never raises and never mutates.

    Issues are ordered: missing prerequisites, then cycles (one per node that
    sits on or reaches a cycle, not deduplicated), then the structural checks.
    """
    nodes = path.nodes
    issues: List[str] = []
    node_ids = {node.id for node in nodes}

    for node in nodes:
        for prereq_id in node.prerequisites:
            if prereq_id not in node_ids:
                issues.append(missing_prerequisite_issue(prereq_id, node.id))

    index = index_nodes(nodes)
    reaches = cycle_reachability(index)
    for node in nodes:
        if has_circular_dependency(node, index, reaches):
            issues.append(circular_dependency_issue(node.id))

    issues.extend(structure_issues(nodes))

    return ValidationResult(valid=not issues, issues=issues)
