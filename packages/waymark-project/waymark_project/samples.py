"""Starter projects."""
from __future__ import annotations

from waymark.types import PauseMode, TimingMode
from waymark_project.schema import (
    Asset,
    CameraTrack,
    PathTrack,
    PauseSettings,
    Project,
    TimingSettings,
    WaypointModel,
)


def default_project() -> Project:
    """An empty project with every setting at its default."""
    return Project()


def sample_project() -> Project:
    """A small demonstration project with one path and a camera following it."""
    project = default_project()
    project.assets.append(
        Asset(
            id="img:sample-bg",
            type="image",
            name="sample-background.png",
            mime_type="image/png",
            path="assets/sample-background.png",
        )
    )
    project.tracks.append(
        PathTrack(
            id="path:main",
            name="Main Path",
            background_asset_id="img:sample-bg",
            timing=TimingSettings(
                mode=TimingMode.CONSTANT_SPEED,
                pause=PauseSettings(mode=PauseMode.SECONDS, seconds=2.0),
            ),
            waypoints=[
                WaypointModel(id="wp1", x=100, y=100),
                WaypointModel(id="wp2", x=300, y=200, is_major=False),
                WaypointModel(id="wp3", x=500, y=150),
                WaypointModel(id="wp4", x=700, y=300),
            ],
        )
    )
    project.tracks.append(
        CameraTrack(id="cam:main", type="camera", name="Main Camera", followPathId="path:main")
    )
    return project
