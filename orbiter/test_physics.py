import math
import unittest

import numpy as np

from orbiter.config import settings
from orbiter.models.celestial_body import CelestialBody
from orbiter.physics import quaternion
from orbiter.physics.forces import EngineThrust, NewtonianGravity
from orbiter.physics.solver import SymplecticEulerSolver, integrate_attitude
from orbiter.physics.state import State
from orbiter.physics.utils import specific_energy


class TestQuaternion(unittest.TestCase):

    def test_axis_angle_rotation(self):
        q = quaternion.from_axis_angle([0.0, 0.0, 1.0], math.pi / 2)
        np.testing.assert_array_almost_equal(quaternion.rotate(q, [1.0, 0.0, 0.0]), [0.0, 1.0, 0.0])
        q = quaternion.from_axis_angle([0.0, 1.0, 0.0], math.pi / 2)
        np.testing.assert_array_almost_equal(quaternion.rotate(q, [0.0, 0.0, 1.0]), [1.0, 0.0, 0.0])

    def test_multiply_applies_right_first(self):
        qz = quaternion.from_axis_angle([0.0, 0.0, 1.0], math.pi / 2)
        qx = quaternion.from_axis_angle([1.0, 0.0, 0.0], math.pi / 2)
        v = np.array([1.0, 0.0, 0.0])
        np.testing.assert_array_almost_equal(
            quaternion.rotate(quaternion.multiply(qx, qz), v),
            quaternion.rotate(qx, quaternion.rotate(qz, v)),
        )

    def test_identity_and_normalize(self):
        np.testing.assert_array_equal(quaternion.identity(), [0.0, 0.0, 0.0, 1.0])
        np.testing.assert_array_equal(quaternion.normalize([0.0, 0.0, 0.0, 0.0]), quaternion.identity())
        np.testing.assert_array_almost_equal(quaternion.normalize([0.0, 0.0, 0.0, 2.0]), quaternion.identity())
        np.testing.assert_array_equal(quaternion.from_axis_angle([0.0, 0.0, 0.0], 1.0), quaternion.identity())


class TestSolver(unittest.TestCase):

    def test_kick_then_drift(self):
        state = State([0.0, 0.0, 0.0], [1.0, 0.0, 0.0])
        out = SymplecticEulerSolver().step(state, [0.0, 2.0, 0.0], 0.5)
        np.testing.assert_array_almost_equal(out.v, [1.0, 1.0, 0.0])
        np.testing.assert_array_almost_equal(out.r, [0.5, 0.5, 0.0])
        # input untouched
        np.testing.assert_array_equal(state.v, [1.0, 0.0, 0.0])

    def test_state_requires_3d(self):
        with self.assertRaises(ValueError):
            State([0.0, 0.0], [0.0, 0.0, 0.0])
        with self.assertRaises(ValueError):
            State(np.zeros((3, 1)), np.zeros(3))

    def test_state_copy_is_independent(self):
        position = np.array([1.0, 2.0, 3.0])
        state = State(position, [0.0, 0.0, 1.0])
        position[0] = 9.0
        self.assertEqual(state.r[0], 1.0)
        twin = state.copy()
        twin.v[2] = 5.0
        np.testing.assert_array_equal(state.v, [0.0, 0.0, 1.0])

    def test_attitude(self):
        q0 = quaternion.identity()
        np.testing.assert_array_equal(integrate_attitude(q0, [0.0, 0.0, 0.0], 10.0), q0)
        q = integrate_attitude(q0, [0.0, 0.0, math.pi / 2], 1.0)
        np.testing.assert_array_almost_equal(quaternion.rotate(q, [1.0, 0.0, 0.0]), [0.0, 1.0, 0.0])


class TestForces(unittest.TestCase):

    def _body(self, gm, world):
        body = CelestialBody("b", np.zeros(3), np.zeros(3), gm, 1.0)
        body.world_position = np.array(world, dtype=float)
        return body

    def test_inverse_square(self):
        target = self._body(0.0, [0.0, 0.0, 0.0])
        source = self._body(4.0, [2.0, 0.0, 0.0])
        accel = NewtonianGravity(softening=0.0).acceleration(target, [source])
        np.testing.assert_array_almost_equal(accel, [1.0, 0.0, 0.0])

    def test_massless_sources_ignored(self):
        target = self._body(1.0, [0.0, 0.0, 0.0])
        ghost = self._body(0.0, [1.0, 0.0, 0.0])
        np.testing.assert_array_equal(NewtonianGravity().acceleration(target, [ghost]), np.zeros(3))

    def test_spacecraft_sources_ignored(self):
        target = self._body(1.0, [0.0, 0.0, 0.0])
        craft = self._body(settings.ROCKET_GM, [1e-7, 0.0, 0.0])
        np.testing.assert_array_equal(NewtonianGravity().acceleration(target, [craft]), np.zeros(3))
        # without the threshold the same source does attract
        accel = NewtonianGravity(massless_gm=0.0).acceleration(target, [craft])
        self.assertGreater(accel[0], 0.0)
        # and a spacecraft target is still pulled by real bodies
        self.assertLess(NewtonianGravity().acceleration(craft, [target])[0], 0.0)

    def test_softening_guards_coincident_bodies(self):
        target = self._body(1.0, [0.0, 0.0, 0.0])
        twin = self._body(1.0, [0.0, 0.0, 0.0])
        accel = NewtonianGravity().acceleration(target, [twin])
        self.assertTrue(np.all(np.isfinite(accel)))
        accel = NewtonianGravity(softening=0.0).acceleration(target, [twin])
        np.testing.assert_array_equal(accel, np.zeros(3))

    def test_thrust_follows_orientation(self):
        body = self._body(0.0, [0.0, 0.0, 0.0])
        thrust = EngineThrust(magnitude=2.0)
        np.testing.assert_array_equal(thrust.acceleration(body), np.zeros(3))
        body.throttle = 0.5
        body.orientation = quaternion.from_axis_angle([0.0, 0.0, 1.0], math.pi / 2)
        np.testing.assert_array_almost_equal(thrust.acceleration(body), [0.0, 1.0, 0.0])


class TestUtilsAndSettings(unittest.TestCase):

    def test_specific_energy(self):
        self.assertAlmostEqual(specific_energy([2.0, 0.0, 0.0], [0.0, 1.0, 0.0], 4.0), -1.5)
        self.assertTrue(math.isnan(specific_energy([0.0, 0.0, 0.0], [1.0, 0.0, 0.0], 1.0)))

    def test_settings_are_valid(self):
        settings.validate_settings()
        self.assertGreaterEqual(settings.FIRST_BODY_ID, 1)

    def test_clamps(self):
        self.assertEqual(settings.clamp_throttle(None), 0.0)
        self.assertEqual(settings.clamp_throttle(2.0), 1.0)
        self.assertEqual(settings.clamp_time_scale(None), settings.DEFAULT_TIME_SCALE)
        self.assertEqual(settings.clamp_time_scale(-1.0), settings.TIME_SCALE_MIN)
        self.assertEqual(settings.clamp_time_scale(1e12), settings.TIME_SCALE_MAX)


if __name__ == '__main__':
    unittest.main()
