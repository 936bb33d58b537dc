"""
Test first-person camera stepping and distance-based fog.
"""
import math

import pytest

from herbal_garden.garden import camera, fog
from herbal_garden.garden.camera import CameraState, MoveKeys


@pytest.mark.unit
class TestCameraStep:
    def test_accelerates_forward_from_rest(self):
        nxt = camera.step(CameraState(), MoveKeys(forward=True), delta=0.05, elapsed=0.0)

        assert nxt.velocity == pytest.approx((0.0, -1.6))
        assert nxt.z == pytest.approx(-0.08)
        assert nxt.x == pytest.approx(0.0)
        assert nxt.y == pytest.approx(camera.EYE_HEIGHT)

    def test_frame_delta_is_capped(self):
        nxt = camera.step(CameraState(), MoveKeys(forward=True), delta=1.0, elapsed=0.0)
        assert nxt.velocity[1] == pytest.approx(-3.2)
        assert nxt.z == pytest.approx(-0.32)

    def test_direction_rotates_with_yaw(self):
        nxt = camera.step(CameraState(yaw=math.pi / 2), MoveKeys(forward=True), delta=0.05, elapsed=0.0)
        assert nxt.velocity[0] == pytest.approx(-1.6)
        assert nxt.velocity[1] == pytest.approx(0.0, abs=1e-9)

    def test_diagonal_is_normalised(self):
        assert math.hypot(*camera.move_direction(MoveKeys(forward=True, right=True), 0.0)) == pytest.approx(1.0)

    def test_idle_velocity_snaps_to_zero(self):
        state = CameraState(velocity=(0.005, 0.02))
        nxt = camera.step(state, MoveKeys(), delta=0.016, elapsed=0.0)
        assert nxt.velocity[0] == 0.0
        assert nxt.velocity[1] == pytest.approx(0.02 * (1 - 6 * 0.016))

    def test_clamped_to_collision_boundary(self):
        state = CameraState(x=13.99, z=-13.99, velocity=(4.0, -4.0))
        nxt = camera.step(state, MoveKeys(right=True, forward=True), delta=0.1, elapsed=0.0)
        assert nxt.x == camera.COLLISION_BOUNDARY
        assert nxt.z == -camera.COLLISION_BOUNDARY

    def test_head_bob_while_walking(self):
        state = CameraState(velocity=(0.0, -4.0))
        elapsed = 0.2
        nxt = camera.step(state, MoveKeys(forward=True), delta=0.016, elapsed=elapsed)
        assert nxt.y == pytest.approx(camera.EYE_HEIGHT + math.sin(elapsed * 8) * 0.02)

    def test_height_settles_when_stopped(self):
        nxt = camera.step(CameraState(y=1.75), MoveKeys(), delta=0.1, elapsed=0.0)
        assert nxt.y == pytest.approx(1.70)

    def test_input_state_unchanged(self):
        state = CameraState()
        camera.step(state, MoveKeys(left=True), delta=0.05, elapsed=0.0)
        assert state == CameraState()


@pytest.mark.unit
@pytest.mark.parametrize(
    "x,z,expected",
    [
        (0.0, 0.0, 0.045),
        (7.5, 0.0, 0.05125),
        (15.0, 0.0, 0.0575),
        (30.0, 40.0, 0.0575),
    ],
)
def test_fog_density(x, z, expected):
    assert fog.fog_density(x, z) == pytest.approx(expected)
