# orbiter/pipeline/recorder.py
"""
Per-tick recording of orbital elements and two-body energy, for drift
diagnostics and plots.
"""
import logging
from typing import Dict, List

import numpy as np

from orbiter.physics.utils import specific_energy

log = logging.getLogger(__name__)

ELEMENT_KEYS = ("semimajor_axis", "eccentricity", "inclination",
                "ascending_node", "argument_of_perihelion")


class ElementHistory:
    """
    Column store keyed by body name: "tick", "sim_time", "position",
    one column per element in ELEMENT_KEYS, and "energy".
    """
    def __init__(self):
        self.records: Dict[str, Dict[str, List]] = {}

    def _columns(self, name):
        if name not in self.records:
            self.records[name] = {key: [] for key in ("tick", "sim_time", "position", "energy") + ELEMENT_KEYS}
        return self.records[name]

    def record(self, universe) -> None:
        for body in universe.bodies:
            parent = universe.parent_of(body)
            if parent is None:
                continue
            cols = self._columns(body.name)
            cols["tick"].append(universe.get_time())
            cols["sim_time"].append(universe.get_sim_time())
            cols["position"].append(body.position.copy())
            cols["energy"].append(specific_energy(body.position, body.velocity, parent.gm))
            for key in ELEMENT_KEYS:
                cols[key].append(getattr(body.orbital_elements, key))

    def names(self) -> List[str]:
        return list(self.records)

    def series(self, name: str, key: str) -> np.ndarray:
        return np.asarray(self.records[name][key], dtype=float)

    def drift(self, name: str, key: str) -> float:
        """Largest deviation of a column from its first recorded value."""
        values = self.series(name, key)
        if values.size == 0:
            return 0.0
        return float(np.max(np.abs(values - values[0])))


def run_recorded(universe, ticks: int) -> ElementHistory:
    history = ElementHistory()
    history.record(universe)
    universe.run(ticks, callback=history.record)
    for name in history.names():
        log.debug("%s: semimajor axis drift %.3e AU, eccentricity drift %.3e",
                  name, history.drift(name, "semimajor_axis"), history.drift(name, "eccentricity"))
    return history
