"""Info panel (sidebar) and bottom status bar."""
from __future__ import annotations

import pygame

from waymark.types import RuntimeState

from ui.constants import (
    CANVAS_H,
    CANVAS_W,
    LABEL_COLOR,
    PHASE_COLORS,
    SCREEN_W,
    SIDEBAR_BG,
    SIDEBAR_W,
    STATUS_BG,
    STATUS_H,
    TEXT_COLOR,
    TEXT_DIM,
)


def draw_sidebar(
    surface: pygame.Surface,
    font: pygame.font.Font,
    title: str,
    state: RuntimeState,
    total_duration: float,
    total_frames: int,
    last_signal: str,
) -> None:
    """Draw right-side info panel."""
    x = CANVAS_W
    pygame.draw.rect(surface, SIDEBAR_BG, (x, 0, SIDEBAR_W, CANVAS_H))
    pygame.draw.line(surface, (50, 50, 70), (x, 0), (x, CANVAS_H))

    pad = 10
    line_h = 22
    cx = x + pad
    cy = 8

    surface.blit(font.render(title[:18], True, LABEL_COLOR), (cx, cy))
    cy += line_h + 4

    phase = state.phase.value
    surface.blit(font.render(f"State: {phase}", True, PHASE_COLORS[phase]), (cx, cy))
    cy += line_h + 8

    rows = [
        f"Time: {state.time:6.2f}s",
        f"  of  {total_duration:6.2f}s",
        f"Frame: {state.frame}/{total_frames - 1}",
        f"Prog: {state.normalized_progress:6.1%}",
        f"Step: {state.step}",
        f"Seg:  {state.current_segment_index}",
        f"Speed: {state.speed:g}x",
        f"FPS: {state.fps}",
    ]
    for row in rows:
        surface.blit(font.render(row, True, TEXT_COLOR), (cx, cy))
        cy += line_h

    cy += 8
    surface.blit(font.render("Last signal:", True, TEXT_DIM), (cx, cy))
    cy += line_h
    surface.blit(font.render(last_signal[:18], True, TEXT_DIM), (cx, cy))


def draw_status_bar(surface: pygame.Surface, font: pygame.font.Font, message: str = "") -> None:
    """Draw bottom key-bindings bar."""
    y = CANVAS_H
    pygame.draw.rect(surface, STATUS_BG, (0, y, SCREEN_W, STATUS_H))
    pygame.draw.line(surface, (50, 50, 70), (0, y), (SCREEN_W, y))

    text = message or (
        "[Space] Play/Pause  [<-/->] Step  [Home/End] Seek  [+/-] Speed  "
        "[E] Export PNG  [J] Export JSONL  [Esc] Quit"
    )
    label = font.render(text, True, TEXT_DIM)
    surface.blit(label, (8, y + STATUS_H // 2 - label.get_height() // 2))
