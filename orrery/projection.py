#!/usr/bin/env python3
"""
Projection Engine for Orrery Simulator

Responsibilities
- Map a point of the X/Z orbital plane to a screen point and a depth value, given a
  camera pose expressed as precomputed yaw/pitch cosines and sines.
- Derive perspective-scaled screen radii.
- Project whole circular orbits as closed polylines for the renderer.

Conventions
- The orbital plane has no height: a world point is (world_x, 0, world_z).
- Yaw rotates about the vertical (Y) axis, pitch about the horizontal (X) axis.
- The camera sits at (0, 0, -camera_distance) looking toward +Z; screen Y grows downward
  exactly as the rotated Y does, so no flip is applied.
- Depth is clamped to MIN_DEPTH, so points at or behind the camera collapse onto the
  near plane instead of flipping sign or dividing by zero.

Single-axis "tilt only" views are the yaw = 0 case of the same transform.

Every function here is pure: identical input yields identical output.
"""
import math
from dataclasses import dataclass
from typing import List, Tuple

from .constants import MIN_DEPTH, ORBIT_SEGMENTS


@dataclass(frozen=True)
class ViewParams:
    """
    Per-frame camera parameters consumed by project_xz.

    Fields:
    - cos_yaw, sin_yaw, cos_pitch, sin_pitch: rotation terms, computed once per frame
    - camera_distance: distance of the camera along the viewing axis
    - fov: effective field-of-view scale (base fov times zoom)
    - center_x, center_y: screen center in pixels
    - pan_x, pan_y: screen-space pan offset in pixels
    """
    cos_yaw: float
    sin_yaw: float
    cos_pitch: float
    sin_pitch: float
    camera_distance: float
    fov: float
    center_x: float
    center_y: float
    pan_x: float = 0.0
    pan_y: float = 0.0

    @classmethod
    def from_angles(cls, yaw: float, pitch: float, camera_distance: float, fov: float,
                    center: Tuple[float, float], pan: Tuple[float, float] = (0.0, 0.0)) -> "ViewParams":
        return cls(
            cos_yaw=math.cos(yaw),
            sin_yaw=math.sin(yaw),
            cos_pitch=math.cos(pitch),
            sin_pitch=math.sin(pitch),
            camera_distance=camera_distance,
            fov=fov,
            center_x=center[0],
            center_y=center[1],
            pan_x=pan[0],
            pan_y=pan[1],
        )


def project_xz(world_x: float, world_z: float, view: ViewParams) -> Tuple[float, float, float]:
    """
    Project an orbital-plane point to (screen_x, screen_y, depth).

    1) yaw about Y:   x1 = x cos(yaw) + z sin(yaw),  z1 = -x sin(yaw) + z cos(yaw),  y1 = 0
    2) pitch about X: y2 = y1 cos(pitch) - z1 sin(pitch),  z2 = y1 sin(pitch) + z1 cos(pitch)
    3) depth = max(z2 + camera_distance, MIN_DEPTH)
    4) screen = center + pan + (x2, y2) * fov / depth
    """
    x1 = world_x * view.cos_yaw + world_z * view.sin_yaw
    z1 = -world_x * view.sin_yaw + world_z * view.cos_yaw
    y1 = 0.0

    y2 = y1 * view.cos_pitch - z1 * view.sin_pitch
    z2 = y1 * view.sin_pitch + z1 * view.cos_pitch
    x2 = x1

    depth = z2 + view.camera_distance
    if depth < MIN_DEPTH:
        depth = MIN_DEPTH

    inv = view.fov / depth
    sx = view.center_x + view.pan_x + x2 * inv
    sy = view.center_y + view.pan_y + y2 * inv
    return (sx, sy, depth)


def screen_radius(base_radius: float, fov: float, depth: float) -> float:
    """Perspective-scaled radius: base_radius * fov / depth."""
    return base_radius * fov / depth


def orbit_ring(radius: float, view: ViewParams, segments: int = ORBIT_SEGMENTS) -> List[Tuple[float, float]]:
    """Closed polyline (segments + 1 points) tracing a circular orbit around the origin."""
    points: List[Tuple[float, float]] = []
    segments = max(3, int(segments))
    for seg in range(segments + 1):
        t = seg / segments * 2.0 * math.pi
        sx, sy, _ = project_xz(math.cos(t) * radius, math.sin(t) * radius, view)
        points.append((sx, sy))
    return points
