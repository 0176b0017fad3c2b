from contextlib import contextmanager
from typing import List, Union

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from pathgraph.exceptions import (
    CircularDependencyError,
    CycleEncounteredError,
    DuplicateNodeError,
    NotFoundError,
)
from pathgraph.logger import get_logger
from pathgraph.models import (
    AssessmentNode,
    CourseNode,
    LayoutAlgorithm,
    LearningPath,
    LearningPathDraft,
    ModuleNode,
    NodePosition,
    PathLayout,
    ValidationResult,
)
from pathgraph.store import InMemoryPathStore, PathStoreInterface

logger = get_logger(__name__)

# --- Pydantic Models ---
class ConnectionRequest(BaseModel):
    from_node_id: str = Field(description="The node that becomes a prerequisite.")
    to_node_id: str = Field(description="The node that gains the prerequisite.")

# --- Router Initialization ---
router = APIRouter(
    prefix="/paths",
    tags=["Learning Paths"]
)

_store = InMemoryPathStore()

def get_store() -> PathStoreInterface:
    """The store shared by every request of this process."""
    return _store

@contextmanager
def _store_errors():
    """Turns engine errors into HTTP errors."""
    try:
        yield
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (CircularDependencyError, DuplicateNodeError, CycleEncounteredError) as e:
        raise HTTPException(status_code=409, detail=str(e))


# --- API Endpoints ---

@router.post("", response_model=LearningPath, status_code=201)
def create_path(draft: LearningPathDraft, store: PathStoreInterface = Depends(get_store)):
    """Creates a learning path. The nodes are stored as given, without validation."""
    return store.create(draft)


@router.get("", response_model=List[LearningPath])
def list_paths(store: PathStoreInterface = Depends(get_store)):
    return store.list_paths()


@router.post("/validate", response_model=ValidationResult)
def validate_draft(draft: LearningPathDraft, store: PathStoreInterface = Depends(get_store)):
    """Validates a path that has not been stored yet."""
    return store.validate(draft)


@router.get("/{path_id}", response_model=LearningPath)
def get_path(path_id: str, store: PathStoreInterface = Depends(get_store)):
    with _store_errors():
        return store.get_path(path_id)


@router.get("/{path_id}/validation", response_model=ValidationResult)
def validate_path(path_id: str, store: PathStoreInterface = Depends(get_store)):
    with _store_errors():
        return store.validate(store.get_path(path_id))


@router.post("/{path_id}/nodes", status_code=201)
def add_node(
    path_id: str,
    node: Union[CourseNode, ModuleNode, AssessmentNode],
    store: PathStoreInterface = Depends(get_store),
):
    with _store_errors():
        store.add_node(path_id, node)
    return {"message": f"Node {node.id} added to path {path_id}."}


@router.put("/{path_id}/nodes/{node_id}/position")
def move_node(path_id: str, node_id: str, position: NodePosition, store: PathStoreInterface = Depends(get_store)):
    with _store_errors():
        store.move_node(path_id, node_id, position)
    return {"message": f"Node {node_id} moved."}


@router.post("/{path_id}/connections")
def connect_nodes(path_id: str, request: ConnectionRequest, store: PathStoreInterface = Depends(get_store)):
    """Adds a prerequisite edge. Answers 409 when the edge would close a cycle."""
    with _store_errors():
        store.connect_nodes(path_id, request.from_node_id, request.to_node_id)
    return {"message": f"Connected {request.from_node_id} -> {request.to_node_id}."}


@router.delete("/{path_id}/connections")
def disconnect_nodes(
    path_id: str,
    from_node_id: str = Query(...),
    to_node_id: str = Query(...),
    store: PathStoreInterface = Depends(get_store),
):
    with _store_errors():
        store.disconnect_nodes(path_id, from_node_id, to_node_id)
    return {"message": f"Disconnected {from_node_id} -> {to_node_id}."}


@router.get("/{path_id}/layout", response_model=PathLayout)
def get_path_layout(path_id: str, store: PathStoreInterface = Depends(get_store)):
    with _store_errors():
        return store.get_path_layout(path_id)


@router.post("/{path_id}/auto-layout", response_model=PathLayout)
def auto_layout(
    path_id: str,
    algorithm: LayoutAlgorithm = Body(..., embed=True),
    store: PathStoreInterface = Depends(get_store),
):
    """
    Recomputes every node position of the path and returns the new layout.
    A cyclic path has no layout snapshot, so it is refused with 409 before
    any position is written.
    """
    with _store_errors():
        store.get_path_layout(path_id)
        store.auto_layout(path_id, algorithm)
        logger.info(f"Auto layout '{algorithm}' requested for path {path_id}")
        return store.get_path_layout(path_id)
