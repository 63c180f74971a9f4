#!/usr/bin/env python3
"""
Shared constants for Orrery Simulator (screen pixels and radians unless stated otherwise).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""

# Projection
BASE_FOV = 800.0  # perspective scale at zoom 1.0
CAMERA_DISTANCE = 1500.0  # camera sits at (0, 0, -CAMERA_DISTANCE) looking toward +Z
MIN_DEPTH = 1.0  # depth clamp; keeps the perspective divide positive

# Camera controls
DEFAULT_ZOOM = 0.7
ZOOM_STEP = 0.1  # per wheel notch
MIN_ZOOM = 0.2
MAX_ZOOM = 5.0
DEFAULT_YAW = 0.5
DEFAULT_PITCH = 0.5
PITCH_LIMIT = 1.5  # radians, symmetric
ROTATE_SENS = 0.005  # radians per pixel of drag
PAN_SENS = 1.0  # screen pixels per pixel of drag

# Pointer buttons (pygame numbering)
PRIMARY_BUTTON = 1
SECONDARY_BUTTON = 3

# Star
SUN_RADIUS = 30.0
SUN_COLOR = (255, 255, 0)

# Asteroid belt
NUM_ASTEROIDS = 150
BELT_INNER = 400.0
BELT_OUTER = 500.0
ASTEROID_MIN_SPEED = 0.010  # radians per tick
ASTEROID_MAX_SPEED = 0.015
DEFAULT_SEED = 43

# Timing: angular speeds are expressed in radians per reference tick
TARGET_FPS = 60
TICK_SECONDS = 1.0 / 60.0
MAX_TICKS_PER_FRAME = 5.0  # cap after a stall (window drag, breakpoint)

# Rendering (viewport)
VIEW_WIDTH = 1600
VIEW_HEIGHT = 1000
BACKGROUND_COLOR = (0, 0, 0)
ORBIT_COLOR = (80, 80, 80)
ASTEROID_COLOR = (140, 140, 140)
SELECTION_COLOR = (255, 255, 255)
HUD_COLOR = (200, 200, 200)
ORBIT_SEGMENTS = 48
SELECTION_MARGIN = 6.0  # highlight ring = screen radius + margin

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000

# Data sources
DEFAULT_DATA_FILE = "data/planets.txt"
SQLITE_SUFFIXES = (".db", ".sqlite", ".sqlite3")
TEXTURE_TIMEOUT = 10.0  # seconds
TEXTURE_USER_AGENT = "orrery-sim/1.0"
