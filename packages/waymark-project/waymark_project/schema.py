"""Versioned project document schema.

Documents are JSON with camelCase keys. Only path tracks feed the engine;
camera and label tracks are validated loosely and carried through untouched.
"""
from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from waymark.types import PauseMode, TimingConfig, TimingMode, Waypoint

SCHEMA_VERSION = 1


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WaypointModel(_Model):
    id: str
    x: float
    y: float
    is_major: bool = True
    label_id: str | None = None

    def to_waypoint(self) -> Waypoint:
        return Waypoint(self.id, self.x, self.y, self.is_major, self.label_id)


class Asset(_Model):
    id: str
    type: Literal["image", "audio", "custom"]
    name: str
    mime_type: str
    path: str
    data: str | None = None  # base64 for embedded assets


class PauseSettings(_Model):
    mode: PauseMode = PauseMode.NONE
    seconds: float = Field(default=2.0, ge=0.0)


class TimingSettings(_Model):
    mode: TimingMode = TimingMode.CONSTANT_TIME
    base_speed_px_per_sec: float = Field(default=200.0, gt=0.0)
    ease_in_out: bool = True
    pause: PauseSettings = Field(default_factory=PauseSettings)


class Smoothing(_Model):
    type: Literal["catmullRomCentripetal"] = "catmullRomCentripetal"
    tension: float = Field(default=0.5, ge=0.0, le=1.0)


class Stroke(_Model):
    color: str = "#FF6B6B"
    thickness: float = Field(default=6.0, gt=0.0)
    variant: Literal["line", "dashed", "dots", "squiggle"] = "line"


class WaypointStyle(_Model):
    shape: Literal["circle", "square", "none"] = "circle"
    size: float = Field(default=10.0, ge=0.0)


class Head(_Model):
    kind: Literal["none", "arrow", "dot", "custom"] = "arrow"
    custom_asset_id: str | None = None
    rotation_offset_deg: float = 0.0


class PathStyle(_Model):
    stroke: Stroke = Field(default_factory=Stroke)
    waypoint: WaypointStyle = Field(default_factory=WaypointStyle)
    head: Head = Field(default_factory=Head)


class PathTrack(_Model):
    id: str
    type: Literal["path"] = "path"
    name: str = ""
    background_asset_id: str | None = None
    timing: TimingSettings = Field(default_factory=TimingSettings)
    style: PathStyle = Field(default_factory=PathStyle)
    smoothing: Smoothing = Field(default_factory=Smoothing)
    waypoints: list[WaypointModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def unique_waypoint_ids(self) -> PathTrack:
        seen: set[str] = set()
        for wp in self.waypoints:
            if wp.id in seen:
                raise ValueError(f"duplicate waypoint id '{wp.id}' in track '{self.id}'")
            seen.add(wp.id)
        return self

    def to_waypoints(self) -> list[Waypoint]:
        return [wp.to_waypoint() for wp in self.waypoints]

    def timing_config(self) -> TimingConfig:
        return TimingConfig(
            mode=self.timing.mode,
            base_speed_px_per_sec=self.timing.base_speed_px_per_sec,
            pause_mode=self.timing.pause.mode,
            pause_seconds=self.timing.pause.seconds,
            ease_in_out=self.timing.ease_in_out,
        )


class CameraTrack(_Model):
    model_config = ConfigDict(extra="allow")

    id: str
    type: Literal["camera"]
    name: str = ""


class LabelsTrack(_Model):
    model_config = ConfigDict(extra="allow")

    id: str
    type: Literal["labels"]


Track = Annotated[Union[PathTrack, CameraTrack, LabelsTrack], Field(discriminator="type")]


class Meta(_Model):
    title: str = "Untitled Project"
    attribution: str = ""
    locale: str = "en-GB"


class Accessibility(_Model):
    alt_text: str = ""
    reduced_motion: bool = False
    palette_id: str = "cb-safe-01"


class ContrastOverlay(_Model):
    mode: Literal["linear"] = "linear"
    value: float = Field(default=0.0, ge=-0.9, le=0.9)


class Settings(_Model):
    contrast_overlay: ContrastOverlay = Field(default_factory=ContrastOverlay)
    fps: int = Field(default=25, gt=0)


class PngSequence(_Model):
    enabled: bool = True


class ExportSettings(_Model):
    format: Literal["webm", "pngSequence"] = "webm"
    overlay_alpha: bool = False
    png_sequence: PngSequence = Field(default_factory=PngSequence)


class Project(_Model):
    schema_version: int = SCHEMA_VERSION
    meta: Meta = Field(default_factory=Meta)
    a11y: Accessibility = Field(default_factory=Accessibility)
    assets: list[Asset] = Field(default_factory=list)
    settings: Settings = Field(default_factory=Settings)
    tracks: list[Track] = Field(default_factory=list)
    export: ExportSettings = Field(default_factory=ExportSettings)

    @field_validator("schema_version")
    @classmethod
    def supported_version(cls, v: int) -> int:
        if v != SCHEMA_VERSION:
            raise ValueError(f"unsupported schemaVersion {v} (expected {SCHEMA_VERSION})")
        return v

    @property
    def path_tracks(self) -> list[PathTrack]:
        return [t for t in self.tracks if isinstance(t, PathTrack)]

    def path_track(self, track_id: str | None = None) -> PathTrack | None:
        """The path track named ``track_id``, or the first path track."""
        for track in self.path_tracks:
            if track_id is None or track.id == track_id:
                return track
        return None

    def asset(self, asset_id: str) -> Asset | None:
        for asset in self.assets:
            if asset.id == asset_id:
                return asset
        return None
