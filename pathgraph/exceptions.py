# /pathgraph/exceptions.py


class PathGraphError(Exception):
    """Base class for every error raised by the learning path engine."""


class NotFoundError(PathGraphError):
    """A path id or node id is not held by the store."""


class DuplicateNodeError(PathGraphError):
    """A node id is already present in the target path."""


class CircularDependencyError(PathGraphError):
    """Connecting two nodes would close a prerequisite cycle."""

    def __init__(self, from_node_id: str, to_node_id: str):
        self.from_node_id = from_node_id
        self.to_node_id = to_node_id
        super().__init__(
            f"Connection {from_node_id} -> {to_node_id} would create circular dependency"
        )


class CycleEncounteredError(PathGraphError):
    """Level calculation reached a node that is already being resolved."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Cycle encountered at node {node_id} while calculating levels")
