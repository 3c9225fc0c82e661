# orbiter/simulation/scenarios.py
"""
Construction entry points: the default solar system and spacecraft spawning.
"""
import logging
import math
from typing import Optional

import numpy as np

from orbiter.config import settings
from orbiter.config.settings import AU, GM_SUN, R_SUN, RAD_PER_DEG
from orbiter.models.celestial_body import BodyParams, CelestialBody
from orbiter.physics import quaternion
from orbiter.physics.elements import OrbitalElements
from orbiter.simulation.universe import Universe

log = logging.getLogger(__name__)


def _rocket_orientation():
    return quaternion.multiply(
        quaternion.from_axis_angle([1.0, 0.0, 0.0], math.pi / 2.0),
        quaternion.from_axis_angle([0.0, 1.0, 0.0], math.pi / 2.0),
    )


def _planet(universe, parent, name, gm_km3, radius_km, color, a, e, i_deg, node_deg, argp_deg,
            soi, params=None):
    body = CelestialBody.from_orbital_elements(
        parent,
        OrbitalElements(
            semimajor_axis=a,
            eccentricity=e,
            inclination=i_deg * RAD_PER_DEG,
            ascending_node=node_deg * RAD_PER_DEG,
            argument_of_perihelion=argp_deg * RAD_PER_DEG,
            epoch=0.0,
            mean_anomaly=0.0,
            soi=soi,
        ),
        gm_km3 / AU / AU / AU,
        radius_km,
        name,
        params=params,
        orbit_color=color,
    )
    universe.add_body(body)
    return body


def create_default_universe(time_scale: Optional[float] = None, substeps: Optional[int] = None) -> Universe:
    """
    Sun, Earth with a rocket and the Moon, Venus, Mars and Jupiter, each at
    periapsis of its (approximately real) orbit.
    """
    universe = Universe(time_scale=time_scale, substeps=substeps)

    sun = CelestialBody("sun", np.zeros(3), np.zeros(3), GM_SUN, R_SUN, orbit_color="#ffffff")
    universe.add_body(sun)

    earth = _planet(
        universe, sun, "earth", 398600.0, 6534.0, "#3f7fff",
        a=1.0, e=0.0167086, i_deg=0.0, node_deg=-11.26064, argp_deg=114.20783, soi=1.0,
        params=BodyParams(
            axial_tilt=23.4392811 * RAD_PER_DEG,
            rotation_period=((23.0 * 60.0 + 56.0) * 60.0 + 4.10),
        ),
    )

    rocket = CelestialBody.from_orbital_elements(
        earth,
        OrbitalElements(semimajor_axis=10000.0 / AU, soi=1.0),
        settings.ROCKET_GM,
        settings.ROCKET_RADIUS,
        "rocket",
        orbit_color=settings.ROCKET_ORBIT_COLOR,
    )
    rocket.orientation = _rocket_orientation()
    universe.add_body(rocket)

    _planet(
        universe, earth, "moon", 4904.8695, 1737.1, "#5f5f5f",
        a=384399.0 / AU, e=0.048775, i_deg=-11.26064, node_deg=100.492, argp_deg=114.20783,
        soi=1e5,
    )
    _planet(
        universe, sun, "mars", 42828.0, 3389.5, "#ff3f1f",
        a=1.523679, e=0.0935, i_deg=1.850, node_deg=49.562, argp_deg=286.537, soi=3e5,
    )
    _planet(
        universe, sun, "venus", 324859.0, 6051.8, "#ffff7f",
        a=0.723332, e=0.006772, i_deg=3.39458, node_deg=76.680, argp_deg=54.884, soi=6e5,
    )
    _planet(
        universe, sun, "jupiter", 126686534.0, 69911.0, "#ff7f3f",
        a=5.204267, e=0.048775, i_deg=1.305, node_deg=100.492, argp_deg=275.066, soi=10e6,
    )

    log.debug("Default universe created with %d bodies", len(universe.bodies))
    return universe


def _parent_by_name(universe: Universe, name: str) -> CelestialBody:
    parent = universe.find(name)
    if parent is None:
        raise ValueError(f"Unknown parent body: {name!r}")
    return parent


def _add_rocket(universe, parent, elements):
    rocket = CelestialBody.from_orbital_elements(
        parent,
        elements,
        settings.ROCKET_GM,
        settings.ROCKET_RADIUS,
        f"rocket{universe.id_gen}",
        params=BodyParams(orientation=_rocket_orientation()),
        orbit_color=settings.ROCKET_ORBIT_COLOR,
    )
    return universe.add_body(rocket)


def spawn_rocket(universe: Universe, parent_name: Optional[str] = None,
                 rng: Optional[np.random.Generator] = None) -> int:
    """
    Add a spacecraft on a random orbit around the named body.
    Ranges come from settings.SPAWN_*; returns the new body's id.
    """
    parent = _parent_by_name(universe, parent_name or settings.SPAWN_PARENT)
    if rng is None:
        rng = np.random.default_rng(settings.DEFAULT_RANDOM_SEED)

    a_lo, a_hi = settings.SPAWN_SEMIMAJOR_AXIS_KM
    e_lo, e_hi = settings.SPAWN_ECCENTRICITY
    i_lo, i_hi = settings.SPAWN_INCLINATION_DEG
    n_lo, n_hi = settings.SPAWN_ASCENDING_NODE_DEG
    w_lo, w_hi = settings.SPAWN_ARGUMENT_OF_PERIHELION_DEG

    elements = OrbitalElements(
        semimajor_axis=float(rng.uniform(a_lo, a_hi)) / AU,
        eccentricity=float(rng.uniform(e_lo, e_hi)),
        inclination=float(rng.uniform(i_lo, i_hi)) * RAD_PER_DEG,
        ascending_node=float(rng.uniform(n_lo, n_hi)) * RAD_PER_DEG,
        argument_of_perihelion=float(rng.uniform(w_lo, w_hi)) * RAD_PER_DEG,
        epoch=0.0,
        mean_anomaly=0.0,
        soi=1.0,
    )
    body_id = _add_rocket(universe, parent, elements)
    log.info("Spawned rocket %d around %s (a=%.1f km, e=%.3f)",
             body_id, parent.name, elements.semimajor_axis * AU, elements.eccentricity)
    return body_id


def spawn_scenario(universe: Universe, scenario: str) -> int:
    """Add a spacecraft on one of the circular preset orbits in settings.SCENARIOS."""
    try:
        preset = settings.SCENARIOS[scenario]
    except KeyError:
        raise ValueError(f"Unknown scenario: {scenario!r}") from None

    parent = _parent_by_name(universe, preset["parent"])
    elements = OrbitalElements(
        semimajor_axis=preset["semimajor_axis_km"] / AU,
        eccentricity=preset.get("eccentricity", 0.0),
        ascending_node=preset.get("ascending_node", 0.0),
        soi=1.0,
    )
    body_id = _add_rocket(universe, parent, elements)
    log.info("Spawned rocket %d for scenario %r", body_id, preset["title"])
    return body_id
