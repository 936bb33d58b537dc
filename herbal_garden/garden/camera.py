"""
First-person camera movement.

One ``step`` advances the walking camera by a frame: eases velocity toward
the WASD target, bobs the head while walking and clamps the position to the
garden's collision boundary.
"""

import math
from dataclasses import dataclass, field

EYE_HEIGHT = 1.65
MOVE_SPEED = 4.0
ACCELERATION = 8.0
DECELERATION = 6.0
HEAD_BOB_AMOUNT = 0.02
HEAD_BOB_SPEED = 8.0
MAX_FRAME_DELTA = 0.1
SNAP_THRESHOLD = 0.01
BOB_MIN_SPEED = 0.5
SETTLE_RATE = 5.0
COLLISION_BOUNDARY = 14.0


@dataclass
class MoveKeys:
    forward: bool = False
    backward: bool = False
    left: bool = False
    right: bool = False

    @property
    def any(self) -> bool:
        return self.forward or self.backward or self.left or self.right


@dataclass
class CameraState:
    x: float = 0.0
    y: float = EYE_HEIGHT
    z: float = 0.0
    yaw: float = 0.0
    velocity: tuple[float, float] = field(default=(0.0, 0.0))


def move_direction(keys: MoveKeys, yaw: float) -> tuple[float, float]:
    """Normalised horizontal direction for the held keys, rotated by yaw."""
    dx = dz = 0.0
    if keys.forward:
        dz -= 1
    if keys.backward:
        dz += 1
    if keys.left:
        dx -= 1
    if keys.right:
        dx += 1

    length = math.hypot(dx, dz)
    if length > 0:
        dx, dz = dx / length, dz / length

    cos_y, sin_y = math.cos(yaw), math.sin(yaw)
    return (dx * cos_y + dz * sin_y, -dx * sin_y + dz * cos_y)


def clamp(value: float, limit: float = COLLISION_BOUNDARY) -> float:
    return max(-limit, min(limit, value))


def step(state: CameraState, keys: MoveKeys, delta: float, elapsed: float) -> CameraState:
    """
    Advance the camera by one frame.

    Args:
        state: Camera before the frame
        keys: Movement keys held this frame
        delta: Seconds since the previous frame, capped at 0.1
        elapsed: Seconds since the scene started, drives the head bob

    Returns:
        New camera state; the input is not modified
    """
    dt = min(delta, MAX_FRAME_DELTA)
    moving = keys.any

    dir_x, dir_z = move_direction(keys, state.yaw)
    target_x, target_z = (dir_x * MOVE_SPEED, dir_z * MOVE_SPEED) if moving else (0.0, 0.0)

    ease = ACCELERATION if moving else DECELERATION
    vel_x, vel_z = state.velocity
    vel_x += (target_x - vel_x) * ease * dt
    vel_z += (target_z - vel_z) * ease * dt

    if not moving:
        if abs(vel_x) < SNAP_THRESHOLD:
            vel_x = 0.0
        if abs(vel_z) < SNAP_THRESHOLD:
            vel_z = 0.0

    x = state.x + vel_x * dt
    z = state.z + vel_z * dt

    speed = math.hypot(vel_x, vel_z)
    if speed > BOB_MIN_SPEED:
        y = EYE_HEIGHT + math.sin(elapsed * HEAD_BOB_SPEED) * HEAD_BOB_AMOUNT * (speed / MOVE_SPEED)
    else:
        y = state.y + (EYE_HEIGHT - state.y) * SETTLE_RATE * dt

    return CameraState(x=clamp(x), y=y, z=clamp(z), yaw=state.yaw, velocity=(vel_x, vel_z))
