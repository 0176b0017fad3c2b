# /pathgraph/store.py

from abc import ABC, abstractmethod
import random
import threading
import uuid
from typing import Dict, List, Optional, Tuple, Union

from pathgraph import layout, validator
from pathgraph.config import settings
from pathgraph.exceptions import CircularDependencyError, DuplicateNodeError, NotFoundError
from pathgraph.levels import count_levels
from pathgraph.logger import get_logger
from pathgraph.models import (
    Connection,
    LayoutAlgorithm,
    LayoutMetadata,
    LayoutNode,
    LearningNode,
    LearningPath,
    LearningPathDraft,
    NodePosition,
    PathLayout,
    ValidationResult,
)

logger = get_logger(__name__)


class PathStoreInterface(ABC):
    """
    An abstract base class defining the operations of a learning path store.
    A durable backend implements the same contract as the in-memory one.
    """
    @abstractmethod
    def create(self, draft: LearningPathDraft) -> LearningPath:
        pass

    @abstractmethod
    def get_path(self, path_id: str) -> LearningPath:
        pass

    @abstractmethod
    def list_paths(self) -> List[LearningPath]:
        pass

    @abstractmethod
    def add_node(self, path_id: str, node: LearningNode) -> None:
        pass

    def validate(self, path: Union[LearningPath, LearningPathDraft]) -> ValidationResult:
        return validator.validate(path)

    @abstractmethod
    def move_node(self, path_id: str, node_id: str, position: NodePosition) -> None:
        pass

    @abstractmethod
    def connect_nodes(self, path_id: str, from_node_id: str, to_node_id: str) -> None:
        pass

    @abstractmethod
    def disconnect_nodes(self, path_id: str, from_node_id: str, to_node_id: str) -> None:
        pass

    @abstractmethod
    def get_path_layout(self, path_id: str) -> PathLayout:
        pass

    @abstractmethod
    def auto_layout(self, path_id: str, algorithm: LayoutAlgorithm) -> None:
        pass


class InMemoryPathStore(PathStoreInterface):
    """
    Process-lifetime store: one dict of paths keyed by path id and one
    side-table of node positions keyed by (path id, node id). Every path has
    its own lock, held by all mutations of that path, its position entries
    included, and by its layout snapshot.
    """
    def __init__(self, strict_connect_source: Optional[bool] = None, rng: Optional[random.Random] = None):
        if strict_connect_source is None:
            strict_connect_source = settings.STRICT_CONNECT_SOURCE
        self.strict_connect_source = strict_connect_source
        self._rng = rng
        self._paths: Dict[str, LearningPath] = {}
        self._positions: Dict[Tuple[str, str], NodePosition] = {}
        self._locks: Dict[str, threading.RLock] = {}

    # --- Helpers ---

    def _lock(self, path_id: str) -> threading.RLock:
        lock = self._locks.get(path_id)
        if lock is None:
            raise NotFoundError(f"Path {path_id} not found")
        return lock

    def _path(self, path_id: str) -> LearningPath:
        path = self._paths.get(path_id)
        if path is None:
            raise NotFoundError(f"Path {path_id} not found")
        return path

    @staticmethod
    def _node(path: LearningPath, node_id: str) -> LearningNode:
        for node in path.nodes:
            if node.id == node_id:
                return node
        raise NotFoundError(f"Node {node_id} not found in path {path.id}")

    def position_of(self, path_id: str, node_id: str) -> NodePosition:
        return self._positions.get((path_id, node_id), NodePosition()).model_copy()

    # --- Operations ---

    def create(self, draft: LearningPathDraft) -> LearningPath:
        """Stores the draft under a fresh id. The draft is not validated."""
        path_id = str(uuid.uuid4())
        copy = draft.model_copy(deep=True)
        path = LearningPath(id=path_id, title=copy.title, nodes=copy.nodes)
        self._locks[path_id] = threading.RLock()
        self._paths[path_id] = path
        logger.info(f"Created learning path '{path.title}' ({path_id}) with {len(path.nodes)} node(s)")
        return path

    def get_path(self, path_id: str) -> LearningPath:
        return self._path(path_id)

    def list_paths(self) -> List[LearningPath]:
        return list(self._paths.values())

    def add_node(self, path_id: str, node: LearningNode) -> None:
        with self._lock(path_id):
            path = self._path(path_id)
            if any(existing.id == node.id for existing in path.nodes):
                raise DuplicateNodeError(f"Node {node.id} already exists in path {path_id}")

            path.nodes.append(node)
            self._positions[(path_id, node.id)] = layout.default_grid_position(len(path.nodes))
        logger.info(f"Added {node.type} node {node.id} to path {path_id}")

    def move_node(self, path_id: str, node_id: str, position: NodePosition) -> None:
        with self._lock(path_id):
            self._node(self._path(path_id), node_id)
            self._positions[(path_id, node_id)] = position.model_copy()

    def connect_nodes(self, path_id: str, from_node_id: str, to_node_id: str) -> None:
        """
        Makes `from_node_id` a prerequisite of `to_node_id`.

        Only a cycle reported for the target node is undone, and only the
        prerequisite this call appended is removed. Other validation issues
        of the path are left alone.
        """
        with self._lock(path_id):
            path = self._path(path_id)
            to_node = self._node(path, to_node_id)
            if self.strict_connect_source:
                self._node(path, from_node_id)

            appended = from_node_id not in to_node.prerequisites
            if appended:
                to_node.prerequisites.append(from_node_id)

            result = validator.validate(path)
            if validator.circular_dependency_issue(to_node_id) in result.issues:
                if appended:
                    to_node.prerequisites.pop()
                logger.warning(f"Rejected connection {from_node_id} -> {to_node_id} in path {path_id}: cycle")
                raise CircularDependencyError(from_node_id, to_node_id)

        logger.info(f"Connected {from_node_id} -> {to_node_id} in path {path_id}")

    def disconnect_nodes(self, path_id: str, from_node_id: str, to_node_id: str) -> None:
        with self._lock(path_id):
            to_node = self._node(self._path(path_id), to_node_id)
            if from_node_id in to_node.prerequisites:
                to_node.prerequisites = [p for p in to_node.prerequisites if p != from_node_id]
                logger.info(f"Disconnected {from_node_id} -> {to_node_id} in path {path_id}")

    def get_path_layout(self, path_id: str) -> PathLayout:
        """
        Read-only snapshot for rendering. Raises CycleEncounteredError when
        the stored path is cyclic, since levels are undefined then.
        """
        with self._lock(path_id):
            path = self._path(path_id)
            nodes = [
                LayoutNode(
                    id=node.id,
                    title=node.title,
                    type=node.type,
                    position=self.position_of(path_id, node.id),
                    prerequisites=list(node.prerequisites),
                )
                for node in path.nodes
            ]
            connections = [
                Connection(from_=prereq_id, to=node.id)
                for node in path.nodes
                for prereq_id in node.prerequisites
            ]
            levels = count_levels(path.nodes)

        return PathLayout(
            nodes=nodes,
            connections=connections,
            metadata=LayoutMetadata(
                total_nodes=len(nodes),
                total_connections=len(connections),
                levels=levels,
                suggested_layout=layout.get_suggested_layout(len(nodes)),
            ),
        )

    def auto_layout(self, path_id: str, algorithm: LayoutAlgorithm) -> None:
        """Overwrites the position of every node of the path. Entries of ids no longer in the path stay."""
        with self._lock(path_id):
            path = self._path(path_id)
            positions = layout.calculate_layout(path.nodes, algorithm, self._rng)
            for node_id, position in positions.items():
                self._positions[(path_id, node_id)] = position
        logger.info(f"Applied {algorithm} layout to {len(positions)} node(s) of path {path_id}")
