"""Read and write project documents, and build engine routes from them."""
from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from waymark.route import Route
from waymark_project.errors import ProjectError
from waymark_project.schema import PathTrack, Project

logger = logging.getLogger(__name__)


def _field_errors(e: ValidationError) -> str:
    return "; ".join(
        f"{' -> '.join(str(x) for x in err['loc'])}: {err['msg']}"
        for err in e.errors()
    )


def parse_project(text: str | bytes, source: Path | str | None = None) -> Project:
    """Validate a JSON project document. Raises ProjectError on failure."""
    try:
        project = Project.model_validate_json(text)
    except ValidationError as e:
        raise ProjectError(source, f"Schema validation failed: {_field_errors(e)}") from e
    logger.debug(
        "parsed project %r: %d tracks (%d path)",
        project.meta.title,
        len(project.tracks),
        len(project.path_tracks),
    )
    return project


def load_project(path: Path | str) -> Project:
    """Load and validate a project file. Raises ProjectError on failure."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ProjectError(path, str(e)) from e
    return parse_project(text, source=path)


def dump_project(project: Project) -> str:
    return project.model_dump_json(by_alias=True, indent=2)


def save_project(project: Project, path: Path | str) -> None:
    Path(path).write_text(dump_project(project), encoding="utf-8")


def build_route(project: Project, track_id: str | None = None) -> Route:
    """Build the engine route for one path track of ``project``."""
    track: PathTrack | None = project.path_track(track_id)
    if track is None:
        wanted = "any path track" if track_id is None else f"path track '{track_id}'"
        raise ProjectError(project.meta.title, f"Project has no {wanted}")
    return Route.build(
        track.to_waypoints(),
        track.timing_config(),
        tension=track.smoothing.tension,
    )
