import math
import unittest

import numpy as np

from orrery import (
    Body,
    BodySpec,
    Diagnostics,
    FreeDynamic,
    KinematicOrbit,
    SimConfig,
    Simulation,
)


def sun_earth():
    sim = Simulation(SimConfig(G=0.001))
    sim.add_body(BodySpec("Sun", mass=1000.0, fixed=True, position=(0.0, 0.0, 0.0)))
    sim.add_body(BodySpec("Earth", mass=1.0, position=(100.0, 0.0, 0.0)))
    return sim


class TestSunEarthScenario(unittest.TestCase):

    def test_initial_circular_velocity(self):
        sim = sun_earth()
        sim.init_circular_orbits()
        earth = sim.find("Earth")
        self.assertAlmostEqual(np.linalg.norm(earth.velocity), 0.1, places=12)
        np.testing.assert_allclose(earth.velocity, [0.0, 0.0, 0.1], atol=1e-15)

    def test_first_step_uses_prior_acceleration(self):
        sim = sun_earth()
        sim.init_circular_orbits()
        earth = sim.find("Earth")
        np.testing.assert_allclose(earth.acceleration, [-1e-4, 0.0, 0.0], rtol=1e-12, atol=1e-18)

        a = earth.acceleration.copy()
        v0 = earth.velocity.copy()
        p0 = earth.position.copy()
        dt = 0.1

        sim.step(dt)

        v_half = v0 + a * (dt / 2)
        np.testing.assert_allclose(v_half, [-0.0001 * 0.05, 0.0, 0.1], rtol=1e-12)
        np.testing.assert_array_equal(earth.position, p0 + v_half * dt)
        np.testing.assert_array_equal(earth.velocity, v_half + a * (dt / 2))

    def test_acceleration_refreshed_after_step(self):
        sim = sun_earth()
        sim.init_circular_orbits()
        sim.step(0.1)
        earth = sim.find("Earth")
        r_vec = -earth.position
        r = np.linalg.norm(r_vec)
        expected = 0.001 * 1000.0 / r ** 2 * r_vec / r
        np.testing.assert_allclose(earth.acceleration, expected, rtol=1e-12)

    def test_time_advances(self):
        sim = sun_earth()
        sim.init_circular_orbits()
        for _ in range(5):
            sim.step(0.1)
        self.assertAlmostEqual(sim.time, 0.5)

    def test_default_dt_from_config(self):
        sim = sun_earth()
        sim.init_circular_orbits()
        sim.step()
        self.assertAlmostEqual(sim.time, 0.1)

    def test_orbit_stays_roughly_circular(self):
        sim = sun_earth()
        sim.init_circular_orbits()
        earth = sim.find("Earth")
        for _ in range(2000):
            sim.step(0.1)
        self.assertAlmostEqual(np.linalg.norm(earth.position), 100.0, delta=1.0)


class TestFixedInvariant(unittest.TestCase):

    def test_fixed_body_never_moves(self):
        sim = sun_earth()
        sim.add_body(BodySpec("Heavy", mass=5000.0, position=(0.0, 0.0, 50.0)))
        sim.init_circular_orbits()
        sun = sim.find("Sun")
        before = sun.position.copy()
        for _ in range(50):
            sim.step(0.5)
            np.testing.assert_array_equal(sun.position, before)
        self.assertTrue(np.any(sun.acceleration != 0.0))

    def test_initializer_skips_fixed(self):
        sim = sun_earth()
        sim.init_circular_orbits()
        np.testing.assert_array_equal(sim.find("Sun").velocity, np.zeros(3))


class TestSatelliteScenario(unittest.TestCase):

    def build(self):
        sim = Simulation()
        sim.add_body(BodySpec("Sun", mass=1000.0, position=(0.0, 0.0, 0.0), fixed=True))
        sim.add_body(BodySpec("Earth", mass=1.0, position=(100.0, 0.0, 0.0)))
        sim.add_body(BodySpec("Moon", mass=0.0123, parent="Earth",
                              orbit_radius=10.0, orbit_angle=0.0, orbit_speed=0.01))
        sim.init_circular_orbits()
        return sim

    def test_moon_tracks_moving_earth(self):
        sim = self.build()
        earth, moon = sim.find("Earth"), sim.find("Moon")
        start = earth.position.copy()
        for _ in range(10):
            sim.step(1.0)
        self.assertFalse(np.array_equal(start, earth.position))
        self.assertAlmostEqual(moon.orbit_angle, 0.1, places=12)
        a = moon.orbit_angle
        expected = earth.position + 10.0 * np.array([math.cos(a), 0.0, math.sin(a)])
        np.testing.assert_array_equal(moon.position, expected)

    def test_distance_to_parent_is_orbit_radius(self):
        sim = self.build()
        earth, moon = sim.find("Earth"), sim.find("Moon")
        for dt in (0.1, 1.0, 3.7, 0.0, 12.5):
            sim.step(dt)
            self.assertAlmostEqual(np.linalg.norm(moon.position - earth.position), 10.0, places=10)
        self.assertEqual(moon.orbit_radius, 10.0)

    def test_satellite_acceleration_is_zero(self):
        sim = self.build()
        moon = sim.find("Moon")
        for _ in range(3):
            sim.step(1.0)
            np.testing.assert_array_equal(moon.acceleration, np.zeros(3))

    def test_satellite_is_still_a_source(self):
        sim = Simulation()
        sim.add_body(BodySpec("A", mass=1.0, position=(0.0, 0.0, 0.0)))
        sim.add_body(BodySpec("B", mass=1.0, position=(0.0, 0.0, 0.0), fixed=True))
        sim.add_body(BodySpec("S", mass=50.0, parent="B", orbit_radius=10.0, orbit_angle=0.0))
        sim.compute_gravity()
        a = sim.find("A")
        # B coincides with A and is ignored; S sits at (10, 0, 0)
        np.testing.assert_allclose(a.acceleration, [0.001 * 50.0 / 100.0, 0.0, 0.0], rtol=1e-12)

    def test_satellite_velocity_is_not_integrated(self):
        sim = self.build()
        moon = sim.find("Moon")
        moon.velocity[...] = (1e6, 1e6, 1e6)
        earth = sim.find("Earth")
        sim.step(1.0)
        self.assertAlmostEqual(np.linalg.norm(moon.position - earth.position), 10.0, places=10)

    def test_vertical_offset(self):
        sim = Simulation()
        sim.add_body(BodySpec("P", mass=10.0, position=(1.0, 2.0, 3.0), fixed=True))
        sim.add_body(BodySpec("S", mass=0.1, parent="P", orbit_radius=4.0,
                              orbit_angle=math.pi / 2, vertical_offset=-1.5))
        s = sim.find("S")
        np.testing.assert_allclose(s.position, [1.0, 0.5, 7.0], atol=1e-12)
        sim.step(0.0)
        np.testing.assert_allclose(s.position, [1.0, 0.5, 7.0], atol=1e-12)


class TestStepArguments(unittest.TestCase):

    def test_negative_dt_rejected(self):
        sim = sun_earth()
        with self.assertRaises(ValueError):
            sim.step(-0.1)

    def test_non_finite_dt_rejected(self):
        sim = sun_earth()
        for bad in (float("nan"), float("inf")):
            with self.assertRaises(ValueError):
                sim.step(bad)

    def test_zero_dt_keeps_positions(self):
        sim = sun_earth()
        sim.init_circular_orbits()
        earth = sim.find("Earth")
        before = earth.position.copy()
        sim.step(0.0)
        np.testing.assert_array_equal(earth.position, before)


class NestedStepSimulation(Simulation):
    """Takes one extra step from inside the gravity pass once armed."""

    armed = False

    def compute_gravity(self):
        super().compute_gravity()
        if self.armed:
            self.armed = False
            self.step(0.1)


class TestNestedStep(unittest.TestCase):

    def test_clock_matches_integrated_steps(self):
        sim = NestedStepSimulation()
        sim.add_body(BodySpec("Sun", mass=1000.0, fixed=True, spin_speed=0.5))
        sim.add_body(BodySpec("Earth", mass=1.0, position=(100.0, 0.0, 0.0)))
        sim.init_circular_orbits()
        earth = sim.find("Earth")
        start = earth.position.copy()

        sim.armed = True
        sim.step(0.1)

        self.assertAlmostEqual(sim.time, 0.2)
        self.assertAlmostEqual(sim.find("Sun").spin_angle, 1.0)
        # both steps drifted Earth by about v*dt along z
        self.assertAlmostEqual(earth.position[2] - start[2], 0.02, places=6)


class TestCosmeticSpin(unittest.TestCase):

    def test_spin_advances_per_step(self):
        sim = Simulation()
        sim.add_body(BodySpec("Sun", mass=1000.0, fixed=True, spin_speed=0.25))
        for _ in range(4):
            sim.step(0.1)
        self.assertAlmostEqual(sim.find("Sun").spin_angle, 1.0)

    def test_views_read_current_state(self):
        sim = sun_earth()
        sim.init_circular_orbits()
        view = sim.view("Earth")
        sim.step(0.1)
        earth = sim.find("Earth")
        self.assertEqual(view.name, "Earth")
        self.assertEqual(view.position, tuple(float(x) for x in earth.position))
        self.assertEqual(len(sim.views()), 2)
        with self.assertRaises(AttributeError):
            view.position = (0.0, 0.0, 0.0)


class TestBodiesAddedDirectly(unittest.TestCase):

    def test_body_instances_are_accepted(self):
        sim = Simulation()
        sim.add_body(Body("Sun", 1000.0, position=(0.0, 0.0, 0.0)))
        moon = sim.add_body(Body("Moon", 1.0, KinematicOrbit(parent=0, radius=5.0, angle=0.0)))
        np.testing.assert_allclose(moon.position, [5.0, 0.0, 0.0])
        self.assertIsInstance(sim.find("Sun").mode, FreeDynamic)

    def test_divergence_reported(self):
        sim = Simulation(SimConfig(check_finite=True))
        sim.add_body(BodySpec("A", mass=1.0, position=(0.0, 0.0, 0.0)))
        sim.add_body(BodySpec("B", mass=1.0, position=(1.0, 0.0, 0.0)))
        sim.find("A").velocity[...] = (np.inf, 0.0, 0.0)
        with self.assertLogs("orrery.simulation", level="WARNING"):
            sim.step(0.1)
        self.assertTrue(Diagnostics(sim).has_diverged())


if __name__ == "__main__":
    unittest.main()
