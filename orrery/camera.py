#!/usr/bin/env python3
"""
Camera utilities for the perspective orbital view.
"""
from typing import Tuple

from .constants import (
    BASE_FOV,
    CAMERA_DISTANCE,
    DEFAULT_PITCH,
    DEFAULT_YAW,
    DEFAULT_ZOOM,
    MAX_ZOOM,
    MIN_ZOOM,
    PAN_SENS,
    PITCH_LIMIT,
    ROTATE_SENS,
    ZOOM_STEP,
)
from .projection import ViewParams
from .vector_utils import clamp


class Camera3D:
    """
    Orbit camera: yaw/pitch rotation, screen-space pan and a zoom factor.

    The effective field-of-view scale is BASE_FOV * zoom. Zoom is clamped to
    [MIN_ZOOM, MAX_ZOOM] and pitch to [-PITCH_LIMIT, PITCH_LIMIT]; out-of-range
    input is absorbed silently.
    """

    def __init__(self, yaw=DEFAULT_YAW, pitch=DEFAULT_PITCH, zoom=DEFAULT_ZOOM,
                 rotate_sens=ROTATE_SENS, pan_sens=PAN_SENS):
        self.yaw = yaw
        self.pitch = clamp(pitch, -PITCH_LIMIT, PITCH_LIMIT)
        self.pan_x = 0.0
        self.pan_y = 0.0
        self.zoom = clamp(zoom, MIN_ZOOM, MAX_ZOOM)
        self.rotate_sens = rotate_sens
        self.pan_sens = pan_sens

    @property
    def fov(self) -> float:
        return BASE_FOV * self.zoom

    def zoom_by(self, direction: float) -> None:
        """One wheel notch: step toward the sign of direction."""
        if direction > 0:
            self.zoom += ZOOM_STEP
        elif direction < 0:
            self.zoom -= ZOOM_STEP
        self.zoom = clamp(self.zoom, MIN_ZOOM, MAX_ZOOM)

    def rotate(self, dx: float, dy: float) -> None:
        self.yaw += dx * self.rotate_sens
        self.pitch = clamp(self.pitch + dy * self.rotate_sens, -PITCH_LIMIT, PITCH_LIMIT)

    def pan(self, dx: float, dy: float) -> None:
        self.pan_x += dx * self.pan_sens
        self.pan_y += dy * self.pan_sens

    def reset(self) -> None:
        self.yaw = DEFAULT_YAW
        self.pitch = DEFAULT_PITCH
        self.pan_x = 0.0
        self.pan_y = 0.0
        self.zoom = DEFAULT_ZOOM

    def view(self, width: int, height: int) -> ViewParams:
        """Freeze the current pose into projection parameters for a width x height viewport."""
        center: Tuple[float, float] = (width / 2.0, height / 2.0)
        return ViewParams.from_angles(
            self.yaw, self.pitch, CAMERA_DISTANCE, self.fov, center, (self.pan_x, self.pan_y)
        )
