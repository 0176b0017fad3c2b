# /pathgraph/models.py

from typing import Annotated, List, Literal, Union
from pydantic import BaseModel, ConfigDict, Field

# Shared Pydantic data structures of the learning path engine.

LayoutAlgorithm = Literal["hierarchical", "circular", "force"]
NodeStatus = Literal["active", "completed", "locked"]
ConnectionType = Literal["prerequisite", "optional"]


class BaseLearningNode(BaseModel):
    id: str = Field(description="Identifier of the node, unique within its path.")
    title: str = Field(description="Display title of the node.")
    prerequisites: List[str] = Field(
        default_factory=list,
        description="Ids of the nodes that must be completed before this one.",
    )

class CourseNode(BaseLearningNode):
    type: Literal["course"] = "course"
    course_id: str = Field(description="The course this node refers to.")

class ModuleNode(BaseLearningNode):
    type: Literal["module"] = "module"
    module_id: str = Field(description="The module this node refers to.")

class AssessmentNode(BaseLearningNode):
    type: Literal["assessment"] = "assessment"
    assessment_id: str = Field(description="The assessment this node refers to.")

LearningNode = Annotated[
    Union[CourseNode, ModuleNode, AssessmentNode],
    Field(discriminator="type"),
]


class LearningPathDraft(BaseModel):
    """A learning path that has not been assigned an id yet."""
    title: str
    nodes: List[LearningNode] = Field(default_factory=list)

class LearningPath(LearningPathDraft):
    id: str = Field(description="Identifier generated by the store on create.")


class NodePosition(BaseModel):
    x: float = 0.0
    y: float = 0.0


class ValidationResult(BaseModel):
    valid: bool
    issues: List[str] = Field(default_factory=list)


class LayoutNode(BaseModel):
    id: str
    title: str
    type: str
    position: NodePosition
    prerequisites: List[str]
    status: NodeStatus = "active"

class Connection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from", description="Id of the prerequisite node.")
    to: str = Field(description="Id of the dependent node.")
    type: ConnectionType = "prerequisite"

class LayoutMetadata(BaseModel):
    total_nodes: int
    total_connections: int
    levels: int = Field(description="Number of distinct prerequisite levels.")
    suggested_layout: LayoutAlgorithm

class PathLayout(BaseModel):
    nodes: List[LayoutNode]
    connections: List[Connection]
    metadata: LayoutMetadata
