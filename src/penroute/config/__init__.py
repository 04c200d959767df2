"""Configuration management for penroute.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- SamplingConfig: Site and per-cell sampling settings
- VoronoiConfig: Partition settings
- RouteConfig: Route ordering and collision settings
- FlowConfig: Flow-field routing settings
- PenrouteSettings: Main application settings
"""

from penroute.config.settings import (
    CollisionDiscipline,
    FlowConfig,
    LoggingConfig,
    PageConfig,
    PenrouteSettings,
    ProcessingConfig,
    RouteConfig,
    RouteMode,
    SamplingConfig,
    VoronoiConfig,
    get_default_settings,
)

__all__ = [
    "CollisionDiscipline",
    "FlowConfig",
    "LoggingConfig",
    "PageConfig",
    "PenrouteSettings",
    "ProcessingConfig",
    "RouteConfig",
    "RouteMode",
    "SamplingConfig",
    "VoronoiConfig",
    "get_default_settings",
]
