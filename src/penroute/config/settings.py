"""Configuration settings for Penroute."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class RouteMode(str, Enum):
    """How the points sampled inside a cell are ordered into a route."""

    RAW = "raw"
    SPIRAL = "spiral"
    TSP = "tsp"


class CollisionDiscipline(str, Enum):
    """Order in which route collisions are resolved."""

    PLAIN = "plain"
    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"


class SamplingConfig(BaseModel):
    """Configuration for density-driven point sampling."""

    voronoi_grid_dim: int = Field(
        default=800,
        ge=1,
        description="Lattice resolution used to sample Voronoi sites",
    )
    voronoi_samples: int = Field(
        default=900,
        ge=0,
        description="Maximum number of Voronoi sites",
    )
    cell_grid_dim: int = Field(
        default=80,
        ge=1,
        description="Lattice resolution used inside each cell",
    )
    max_cell_samples: int = Field(
        default=80,
        ge=0,
        description="Maximum number of points sampled per cell",
    )
    cell_density_factor: float = Field(
        default=0.04,
        gt=0.0,
        le=1.0,
        description="Multiplier applied to the caller density inside a cell",
    )


class VoronoiConfig(BaseModel):
    """Configuration for the Voronoi partition of the unit square."""

    pad: float = Field(
        default=0.02,
        ge=0.0,
        lt=0.5,
        description="Padding applied when mapping sites into the unit square",
    )
    poly_threshold: float = Field(
        default=0.5,
        gt=0.0,
        description="Cells with a bounding-square edge at or above this are dropped",
    )
    center: tuple[float, float] = Field(
        default=(0.5, 0.5),
        description="Center of the radial site density",
    )
    density_scale: float = Field(
        default=1.5,
        ge=0.0,
        description="How fast site density falls off with distance to the center",
    )
    density_bias: float = Field(
        default=1.0,
        description="Site density at the center",
    )


class PageConfig(BaseModel):
    """Page dimensions in millimeters."""

    width: float = Field(default=210.0, gt=0.0, description="Page width (mm)")
    height: float = Field(default=297.0, gt=0.0, description="Page height (mm)")


class RouteConfig(BaseModel):
    """Configuration for turning sampled points into routes."""

    mode: RouteMode = Field(
        default=RouteMode.RAW,
        description="Point ordering inside each cell",
    )
    min_cell_points: int = Field(
        default=5,
        ge=0,
        description="Cells with fewer sampled points produce no route",
    )
    tsp_time_budget: float = Field(
        default=0.05,
        gt=0.0,
        description="Wall-clock budget (seconds) given to the tour solver per cell",
    )
    connect_distance: float = Field(
        default=20.0,
        gt=0.0,
        description="Consecutive points further apart than this lift the pen (mm)",
    )
    discipline: CollisionDiscipline = Field(
        default=CollisionDiscipline.SEQUENTIAL,
        description="Collision discipline between flow routes (see build_flow_routes)",
    )


class FlowConfig(BaseModel):
    """Configuration for flow-field routes limited by a passage counter."""

    step_length: float = Field(
        default=1.0,
        gt=0.0,
        description="Distance travelled per step (mm)",
    )
    granularity: float = Field(
        default=2.0,
        gt=0.0,
        description="Passage counter cell size (mm)",
    )
    max_passage: int = Field(
        default=3,
        ge=1,
        description="Routes stop when a passage cell is crossed more often than this",
    )
    max_steps: int = Field(
        default=400,
        ge=1,
        description="Hard cap of steps per route",
    )


class ProcessingConfig(BaseModel):
    """Configuration for parallel cell processing."""

    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Max worker processes (None = auto, 1 = run inline)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class PenrouteSettings(BaseModel):
    """Main application settings."""

    sampling: SamplingConfig = Field(default_factory=SamplingConfig)
    voronoi: VoronoiConfig = Field(default_factory=VoronoiConfig)
    page: PageConfig = Field(default_factory=PageConfig)
    route: RouteConfig = Field(default_factory=RouteConfig)
    flow: FlowConfig = Field(default_factory=FlowConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PenrouteSettings:
    """Get default application settings."""
    return PenrouteSettings()
