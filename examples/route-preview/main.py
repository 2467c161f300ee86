"""Route Preview - Interactive playback and frame export for a waymark project.

Exercises waymark, waymark-project, waymark-remote, and waymark-export.

Usage:
  python main.py [project.json]

Without a project file the built-in sample project is shown.

Controls:
  Space       Play / pause
  Left/Right  Previous / next major waypoint
  Home/End    Seek to start / end
  +/-         Double / halve playback speed
  E           Export a PNG sequence into ./frames
  J           Export frame states as JSON lines into ./frames
  Click       Resume after a click-mode pause
  Esc         Quit
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import pygame

from waymark import Runtime
from waymark_export import FrameState, JsonLinesSink, export_frames
from waymark_project import build_route, load_project, sample_project
from waymark_remote import RemoteControl, SignalBus

from ui.constants import (
    BG_COLOR,
    CANVAS_H,
    CANVAS_W,
    EXPORT_DIR,
    FPS,
    SCREEN_H,
    SCREEN_W,
)
from ui.route import draw_canvas, draw_route
from ui.status import draw_sidebar, draw_status_bar

logger = logging.getLogger("route-preview")


class PngSequenceSink:
    """Renders each exported frame offscreen and saves it as a PNG."""

    def __init__(self, preview: Preview, directory: Path) -> None:
        self._preview = preview
        self._directory = directory
        self._surface = pygame.Surface((CANVAS_W, CANVAS_H))
        directory.mkdir(parents=True, exist_ok=True)

    def write(self, frame: FrameState) -> None:
        self._preview.draw_frame(self._surface, frame.progress)
        pygame.image.save(self._surface, str(self._directory / f"frame_{frame.index:05d}.png"))

    def close(self) -> None:
        pass


class Preview:
    """Holds the project, route, runtime and remote-control wiring."""

    def __init__(self, project_path: str | None) -> None:
        self.project = load_project(project_path) if project_path else sample_project()
        self.track = self.project.path_track()
        self.route = build_route(self.project)
        self.source_dir = Path(project_path).parent if project_path else Path.cwd()

        self.bus = SignalBus()
        self.runtime = Runtime(fps=self.project.settings.fps)
        self.remote = RemoteControl(self.runtime, self.bus)
        self.last_signal = "-"
        self.message = ""

        for name in ("ready", "state", "ended"):
            self.bus.subscribe(name, self._on_signal)

        self.background = self._load_background()
        self.runtime.set_timing_map(self.route.timing_map)

    def _on_signal(self, signal: str, data: dict) -> None:
        self.last_signal = signal
        logger.debug("%s %s", signal, data)

    def _load_background(self) -> pygame.Surface | None:
        asset_id = self.track.background_asset_id if self.track else None
        asset = self.project.asset(asset_id) if asset_id else None
        if asset is None:
            return None
        path = self.source_dir / asset.path
        if not path.exists():
            logger.warning("background %s not found", path)
            return None
        image = pygame.image.load(str(path))
        return pygame.transform.smoothscale(image, (CANVAS_W, CANVAS_H))

    def draw_frame(self, surface: pygame.Surface, progress: float) -> None:
        draw_canvas(surface, self.background)
        draw_route(surface, self.route, self.track.style, progress)

    # --- Commands ---

    def seek_relative_step(self, delta: int) -> None:
        self.remote.dispatch({"type": "seekToStep", "step": self.runtime.state.step + delta})

    def scale_speed(self, factor: float) -> None:
        self.remote.dispatch({"type": "setSpeed", "speed": self.runtime.state.speed * factor})

    def export_png(self) -> None:
        directory = Path(EXPORT_DIR)
        count = export_frames(self.runtime, self.route, PngSequenceSink(self, directory))
        self.message = f"Exported {count} PNG frames to {directory}/"

    def export_jsonl(self) -> None:
        target = Path(EXPORT_DIR) / "frames.jsonl"
        target.parent.mkdir(parents=True, exist_ok=True)
        count = export_frames(self.runtime, self.route, JsonLinesSink(target))
        self.message = f"Exported {count} frame states to {target}"


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Route Preview - waymark demo")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 13)
    canvas = pygame.Surface((CANVAS_W, CANVAS_H))

    preview = Preview(sys.argv[1] if len(sys.argv) > 1 else None)
    runtime = preview.runtime
    running = True

    while running:
        clock.tick(FPS)

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                preview.message = ""
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    runtime.toggle_play_pause()
                elif event.key == pygame.K_RIGHT:
                    preview.seek_relative_step(1)
                elif event.key == pygame.K_LEFT:
                    preview.seek_relative_step(-1)
                elif event.key == pygame.K_HOME:
                    runtime.seek_to_start()
                elif event.key == pygame.K_END:
                    runtime.seek_to_end()
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    preview.scale_speed(2.0)
                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    preview.scale_speed(0.5)
                elif event.key == pygame.K_e:
                    preview.export_png()
                elif event.key == pygame.K_j:
                    preview.export_jsonl()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if runtime.awaiting_resume:
                    runtime.play()

        # --- Tick ---
        runtime.update(pygame.time.get_ticks() / 1000.0)

        # --- Render ---
        screen.fill(BG_COLOR)
        state = runtime.state
        preview.draw_frame(canvas, state.normalized_progress)
        screen.blit(canvas, (0, 0))

        draw_sidebar(
            screen,
            font,
            title=preview.project.meta.title,
            state=state,
            total_duration=preview.route.timing_map.total_duration,
            total_frames=runtime.total_frames,
            last_signal=preview.last_signal,
        )
        draw_status_bar(screen, font, preview.message)

        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
