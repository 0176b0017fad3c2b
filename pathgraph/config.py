from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    """
    Centralized engine settings. Pydantic's BaseSettings will automatically
    load these from environment variables or a .env file.
    """
    # --- Logging ---
    LOG_LEVEL: str = Field("INFO", description="Level for the structured JSON loggers.")

    # --- Store Behaviour ---
    STRICT_CONNECT_SOURCE: bool = Field(False, description="Require the source node to exist when connecting nodes.")

    # --- Default Grid Placement (add_node) ---
    GRID_COLUMNS: int = Field(4, description="Columns of the default placement grid.")
    GRID_SPACING_X: float = Field(250.0, description="Horizontal spacing of the default placement grid.")
    GRID_SPACING_Y: float = Field(150.0, description="Vertical spacing of the default placement grid.")

    # --- Hierarchical Layout ---
    LEVEL_SPACING: float = Field(200.0, description="Vertical distance between two levels.")
    NODE_SPACING: float = Field(150.0, description="Horizontal distance between nodes of one level.")

    # --- Circular Layout ---
    CIRCLE_MIN_RADIUS: float = Field(100.0, description="Smallest radius of the circular layout.")
    CIRCLE_RADIUS_PER_NODE: float = Field(20.0, description="Radius growth per node of the circular layout.")

    # --- Force-Directed Layout ---
    FORCE_ITERATIONS: int = Field(50, description="Fixed number of spring simulation steps.")
    FORCE_SPREAD: float = Field(400.0, description="Side of the square used for random initial positions.")
    REPULSION_CONSTANT: float = Field(1000.0, description="Numerator of the inverse-square repulsion.")
    SPRING_CONSTANT: float = Field(0.1, description="Attraction per unit of distance along a prerequisite edge.")
    FORCE_STEP: float = Field(0.1, description="Fraction of the net force applied to a position per step.")

    # --- Layout Suggestion Heuristic ---
    CIRCULAR_MAX_NODES: int = Field(5, description="Largest node count for which circular layout is suggested.")
    HIERARCHICAL_MAX_NODES: int = Field(15, description="Largest node count for which hierarchical layout is suggested.")

    # --- API ---
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost", "http://localhost:3000"],
        description="Origins allowed to call the API (the designer UI).",
    )

    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

settings = Settings()
