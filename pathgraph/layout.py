# /pathgraph/layout.py

"""
Position computation for rendering a learning path.

Every function here is pure: it reads a node list and returns a fresh
`{node_id: NodePosition}` assignment. Prerequisites and validation state are
never touched, and none of the layouts validate their input graph.
"""

import math
import random
from typing import Dict, List, Optional, Sequence

from pathgraph.config import settings
from pathgraph.levels import calculate_node_levels
from pathgraph.models import LayoutAlgorithm, LearningNode, NodePosition

Positions = Dict[str, NodePosition]


def get_suggested_layout(node_count: int) -> LayoutAlgorithm:
    """Advisory choice of layout for a path with `node_count` nodes."""
    if node_count <= settings.CIRCULAR_MAX_NODES:
        return "circular"
    if node_count <= settings.HIERARCHICAL_MAX_NODES:
        return "hierarchical"
    return "force"


def default_grid_position(insertion_index: int) -> NodePosition:
    """Placement given to the `insertion_index`-th (1-based) node added to a path."""
    column = insertion_index % settings.GRID_COLUMNS
    row = insertion_index // settings.GRID_COLUMNS
    return NodePosition(x=column * settings.GRID_SPACING_X, y=row * settings.GRID_SPACING_Y)


def hierarchical_layout(nodes: Sequence[LearningNode]) -> Positions:
    """
    One horizontal row per level, rows `LEVEL_SPACING` apart, nodes of a row
    centred on x = 0 and `NODE_SPACING` apart.

    Raises CycleEncounteredError on a cyclic graph.
    """
    levels = calculate_node_levels(nodes)
    rows: Dict[int, List[LearningNode]] = {}
    for node in nodes:
        rows.setdefault(levels.get(node.id, 0), []).append(node)

    positions: Positions = {}
    for level, row in rows.items():
        start_x = -((len(row) - 1) * settings.NODE_SPACING) / 2
        for index, node in enumerate(row):
            positions[node.id] = NodePosition(
                x=start_x + index * settings.NODE_SPACING,
                y=level * settings.LEVEL_SPACING,
            )
    return positions


def circular_layout(nodes: Sequence[LearningNode]) -> Positions:
    """Nodes evenly spaced on a circle that grows with the node count."""
    if not nodes:
        return {}

    radius = max(settings.CIRCLE_MIN_RADIUS, len(nodes) * settings.CIRCLE_RADIUS_PER_NODE)
    angle_step = 2 * math.pi / len(nodes)

    positions: Positions = {}
    for index, node in enumerate(nodes):
        angle = index * angle_step
        positions[node.id] = NodePosition(x=radius * math.cos(angle), y=radius * math.sin(angle))
    return positions


def force_layout(nodes: Sequence[LearningNode], rng: Optional[random.Random] = None) -> Positions:
    """
    Spring simulation from random start positions.

    Each step pushes every pair apart with an inverse-square force, pulls each
    node and its prerequisites together in proportion to their distance, then
    moves every node by `FORCE_STEP` times its net force. Coincident pairs
    exert no force on each other. The step count is fixed and there is no
    convergence check.
    """
    rng = rng or random.Random()
    spread = settings.FORCE_SPREAD

    # Plain [x, y] lists while simulating, converted at the end
    coords: Dict[str, List[float]] = {}
    for node in nodes:
        coords[node.id] = [(rng.random() - 0.5) * spread, (rng.random() - 0.5) * spread]

    for _ in range(settings.FORCE_ITERATIONS):
        forces = {node_id: [0.0, 0.0] for node_id in coords}

        # Repulsion between every pair
        for i in range(len(nodes)):
            for j in range(i + 1, len(nodes)):
                a, b = nodes[i].id, nodes[j].id
                dx = coords[a][0] - coords[b][0]
                dy = coords[a][1] - coords[b][1]
                distance = math.hypot(dx, dy)
                if distance > 0:
                    force = settings.REPULSION_CONSTANT / (distance * distance)
                    fx = dx / distance * force
                    fy = dy / distance * force
                    forces[a][0] += fx
                    forces[a][1] += fy
                    forces[b][0] -= fx
                    forces[b][1] -= fy

        # Attraction along prerequisite edges
        for node in nodes:
            for prereq_id in node.prerequisites:
                if prereq_id not in coords:
                    continue
                dx = coords[prereq_id][0] - coords[node.id][0]
                dy = coords[prereq_id][1] - coords[node.id][1]
                distance = math.hypot(dx, dy)
                if distance > 0:
                    force = distance * settings.SPRING_CONSTANT
                    fx = dx / distance * force
                    fy = dy / distance * force
                    forces[node.id][0] += fx
                    forces[node.id][1] += fy
                    forces[prereq_id][0] -= fx
                    forces[prereq_id][1] -= fy

        for node_id, (fx, fy) in forces.items():
            coords[node_id][0] += fx * settings.FORCE_STEP
            coords[node_id][1] += fy * settings.FORCE_STEP

    return {node_id: NodePosition(x=x, y=y) for node_id, (x, y) in coords.items()}


def calculate_layout(
    nodes: Sequence[LearningNode],
    algorithm: LayoutAlgorithm,
    rng: Optional[random.Random] = None,
) -> Positions:
    if algorithm == "hierarchical":
        return hierarchical_layout(nodes)
    if algorithm == "circular":
        return circular_layout(nodes)
    if algorithm == "force":
        return force_layout(nodes, rng)
    raise ValueError(f"Unknown layout algorithm: {algorithm}")
