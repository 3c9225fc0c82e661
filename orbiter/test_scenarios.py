import unittest

import numpy as np

from orbiter.config import settings
from orbiter.config.settings import AU, RAD_PER_DEG
from orbiter.simulation.scenarios import create_default_universe, spawn_rocket, spawn_scenario


class TestDefaultUniverse(unittest.TestCase):

    def test_bodies(self):
        universe = create_default_universe()
        self.assertEqual(
            [b.name for b in universe.bodies],
            ["sun", "earth", "rocket", "moon", "mars", "venus", "jupiter"],
        )
        sun = universe.find("sun")
        self.assertEqual(universe.root, sun.id)
        self.assertAlmostEqual(sun.gm, settings.GM_SUN)
        for name in ("earth", "mars", "venus", "jupiter"):
            self.assertEqual(universe.find(name).parent, sun.id)

    def test_declared_elements_survive_derivation(self):
        universe = create_default_universe()
        mars = universe.find("mars").orbital_elements
        self.assertAlmostEqual(mars.semimajor_axis, 1.523679, delta=1e-9)
        self.assertAlmostEqual(mars.eccentricity, 0.0935, delta=1e-9)
        self.assertAlmostEqual(mars.inclination, 1.850 * RAD_PER_DEG, delta=1e-9)
        self.assertAlmostEqual(mars.argument_of_perihelion, 286.537 * RAD_PER_DEG, delta=1e-9)
        self.assertEqual(mars.soi, 3e5)
        rocket = universe.find("rocket").orbital_elements
        self.assertAlmostEqual(rocket.semimajor_axis * AU, 10000.0, delta=1e-3)

    def test_time_scale(self):
        self.assertEqual(create_default_universe().time_scale, settings.DEFAULT_TIME_SCALE)
        self.assertEqual(create_default_universe(time_scale=60.0).time_scale, 60.0)


class TestSpawnRocket(unittest.TestCase):

    def test_elements_within_ranges(self):
        universe = create_default_universe()
        rng = np.random.default_rng(11)
        earth = universe.find("earth")
        for _ in range(10):
            body = universe.get(spawn_rocket(universe, rng=rng))
            el = body.orbital_elements
            self.assertEqual(body.parent, earth.id)
            self.assertTrue(10000.0 - 1e-6 <= el.semimajor_axis * AU <= 20000.0 + 1e-6)
            self.assertTrue(0.0 <= el.eccentricity <= 0.5 + 1e-9)
            self.assertTrue(0.0 <= el.inclination <= 30.0 * RAD_PER_DEG + 1e-12)
            self.assertEqual(body.gm, settings.ROCKET_GM)
            self.assertTrue(body.name.startswith("rocket"))
        universe.check_invariants()

    def test_seeded_spawns_are_reproducible(self):
        a = create_default_universe()
        b = create_default_universe()
        ida = spawn_rocket(a, rng=np.random.default_rng(5))
        idb = spawn_rocket(b, rng=np.random.default_rng(5))
        np.testing.assert_array_equal(a.get(ida).position, b.get(idb).position)
        np.testing.assert_array_equal(a.get(ida).velocity, b.get(idb).velocity)

    def test_named_parent(self):
        universe = create_default_universe()
        body = universe.get(spawn_rocket(universe, "mars", rng=np.random.default_rng(0)))
        self.assertEqual(body.parent, universe.find("mars").id)

    def test_unknown_parent(self):
        universe = create_default_universe()
        with self.assertRaises(ValueError):
            spawn_rocket(universe, "pluto")


class TestSpawnScenario(unittest.TestCase):

    def test_every_preset(self):
        universe = create_default_universe()
        for key, preset in settings.SCENARIOS.items():
            with self.subTest(scenario=key):
                body = universe.get(spawn_scenario(universe, key))
                self.assertEqual(universe.parent_of(body).name, preset["parent"])
                self.assertAlmostEqual(
                    body.orbital_elements.semimajor_axis * AU, preset["semimajor_axis_km"], delta=1e-3)
                self.assertLess(body.orbital_elements.eccentricity, 1e-9)
        universe.check_invariants()

    def test_unknown_scenario(self):
        with self.assertRaises(ValueError):
            spawn_scenario(create_default_universe(), "saturn")


if __name__ == '__main__':
    unittest.main()
