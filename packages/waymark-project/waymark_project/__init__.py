"""waymark-project - Versioned project documents for the waymark engine."""
from __future__ import annotations

from waymark_project.errors import ProjectError
from waymark_project.loader import (
    build_route,
    dump_project,
    load_project,
    parse_project,
    save_project,
)
from waymark_project.samples import default_project, sample_project
from waymark_project.schema import SCHEMA_VERSION, PathTrack, Project

__all__ = [
    "Project",
    "PathTrack",
    "ProjectError",
    "SCHEMA_VERSION",
    "load_project",
    "parse_project",
    "dump_project",
    "save_project",
    "build_route",
    "default_project",
    "sample_project",
]
