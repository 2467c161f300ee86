"""Path, waypoint and marker renderer."""
from __future__ import annotations

import math

import pygame

from waymark.route import Route
from waymark_project.schema import PathStyle

from ui.constants import (
    CANVAS_BG,
    CANVAS_H,
    CANVAS_W,
    DOT_RADIUS,
    GRID_COLOR,
    HEAD_COLOR,
    HEAD_LENGTH,
    HEAD_WIDTH,
    MAJOR_COLOR,
    MINOR_COLOR,
    TRAIL_DIM,
)


def hex_color(value: str) -> tuple[int, int, int]:
    value = value.lstrip("#")
    return tuple(int(value[i : i + 2], 16) for i in (0, 2, 4))  # type: ignore[return-value]


def draw_canvas(surface: pygame.Surface, background: pygame.Surface | None) -> None:
    """Background image, or a plain grid when the project has none."""
    if background is not None:
        surface.blit(background, (0, 0))
        return
    pygame.draw.rect(surface, CANVAS_BG, (0, 0, CANVAS_W, CANVAS_H))
    for gx in range(0, CANVAS_W, 40):
        pygame.draw.line(surface, GRID_COLOR, (gx, 0), (gx, CANVAS_H))
    for gy in range(0, CANVAS_H, 40):
        pygame.draw.line(surface, GRID_COLOR, (0, gy), (CANVAS_W, gy))


def draw_route(
    surface: pygame.Surface,
    route: Route,
    style: PathStyle,
    progress: float,
) -> None:
    """Draw the full path dimmed, the travelled part in the stroke color, and the marker."""
    points = [(p.x, p.y) for p in route.points]
    if len(points) > 1:
        pygame.draw.lines(surface, TRAIL_DIM, False, points, 2)

    # Travelled part: curve points up to the marker, then the marker itself
    travelled = route.arc_length_at_progress(progress)
    marker = route.position_at_progress(progress)
    trail = [pt for pt, s in zip(points, route.arc_lengths) if s <= travelled]
    trail.append((marker.x, marker.y))
    if len(trail) > 1:
        width = max(1, int(style.stroke.thickness))
        pygame.draw.lines(surface, hex_color(style.stroke.color), False, trail, width)

    if style.waypoint.shape != "none":
        size = int(style.waypoint.size)
        for wp in route.waypoints:
            color = MAJOR_COLOR if wp.is_major else MINOR_COLOR
            radius = size // 2 if wp.is_major else max(2, size // 4)
            if style.waypoint.shape == "square":
                rect = pygame.Rect(0, 0, radius * 2, radius * 2)
                rect.center = (int(wp.x), int(wp.y))
                pygame.draw.rect(surface, color, rect, 1)
            else:
                pygame.draw.circle(surface, color, (int(wp.x), int(wp.y)), radius, 1)

    heading = route.heading_at_progress(progress) + style.head.rotation_offset_deg
    draw_head(surface, style.head.kind, marker.x, marker.y, heading)


def draw_head(surface: pygame.Surface, kind: str, x: float, y: float, heading_deg: float) -> None:
    if kind == "none":
        return
    if kind != "arrow":
        pygame.draw.circle(surface, HEAD_COLOR, (int(x), int(y)), DOT_RADIUS)
        return
    a = math.radians(heading_deg)
    dx, dy = math.cos(a), math.sin(a)
    tip = (x + dx * HEAD_LENGTH / 2, y + dy * HEAD_LENGTH / 2)
    bx, by = x - dx * HEAD_LENGTH / 2, y - dy * HEAD_LENGTH / 2
    left = (bx - dy * HEAD_WIDTH / 2, by + dx * HEAD_WIDTH / 2)
    right = (bx + dy * HEAD_WIDTH / 2, by - dx * HEAD_WIDTH / 2)
    pygame.draw.polygon(surface, HEAD_COLOR, [tip, left, right])
