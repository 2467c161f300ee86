"""Layout constants and color definitions."""

# Display refresh; playback cadence comes from the project fps
FPS = 60

# Layout dimensions
CANVAS_W = 800
CANVAS_H = 480
SIDEBAR_W = 170
STATUS_H = 36

SCREEN_W = CANVAS_W + SIDEBAR_W
SCREEN_H = CANVAS_H + STATUS_H

# Marker
HEAD_LENGTH = 18
HEAD_WIDTH = 12
DOT_RADIUS = 7

# Colors
BG_COLOR = (20, 20, 30)
CANVAS_BG = (32, 36, 48)
GRID_COLOR = (42, 46, 60)
SIDEBAR_BG = (25, 25, 38)
STATUS_BG = (35, 35, 50)
TEXT_COLOR = (200, 200, 210)
TEXT_DIM = (120, 120, 140)
LABEL_COLOR = (180, 180, 200)
TRAIL_DIM = (70, 70, 90)
MAJOR_COLOR = (255, 255, 255)
MINOR_COLOR = (140, 140, 160)
HEAD_COLOR = (255, 220, 120)

# Phase name -> color
PHASE_COLORS: dict[str, tuple[int, int, int]] = {
    "idle": (120, 120, 140),
    "ready": (0, 220, 220),
    "playing": (60, 220, 80),
    "paused": (255, 160, 40),
    "ended": (220, 80, 220),
}

EXPORT_DIR = "frames"
