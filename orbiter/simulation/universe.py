# orbiter/simulation/universe.py
"""
The Universe owns every body in one list and drives the fixed-step tick.

Tick structure (per substep, bodies in list order):
  1. snapshot world positions by walking the tree from the root;
  2. every body accumulates gravity from the snapshot of all others;
  3. every body integrates its parent-relative state.
Bodies therefore read each other's substep-start state (simultaneous update).
Orbital elements are refreshed once per tick, after the last substep.

Ticking and inserting bodies must be serialised by the caller.
"""
import logging
from typing import Callable, Dict, List, Optional

from orbiter.config import settings
from orbiter.engine.partition import for_each_split, split_at
from orbiter.models.celestial_body import CelestialBody
from orbiter.physics.forces import EngineThrust, NewtonianGravity
from orbiter.physics.solver import SymplecticEulerSolver
from orbiter.physics.utils import InvariantError

log = logging.getLogger(__name__)


class Universe:
    def __init__(self, time_scale: Optional[float] = None, substeps: Optional[int] = None,
                 gravity=None, thrust=None, solver=None):
        self.bodies: List[CelestialBody] = []
        self.root: Optional[int] = None
        self.id_gen = settings.FIRST_BODY_ID
        self.sim_time = 0.0
        self.start_time = 0.0
        self.time_scale = settings.clamp_time_scale(time_scale)
        self.substeps = int(settings.SUBSTEPS if substeps is None else substeps)
        if self.substeps <= 0:
            raise ValueError("substeps must be > 0")
        self.gravity = gravity if gravity is not None else NewtonianGravity()
        self.thrust = thrust if thrust is not None else EngineThrust()
        self.solver = solver if solver is not None else SymplecticEulerSolver()
        self._time = 0
        self._index: Dict[int, int] = {}

    # ------------------------------------------------------------------
    # Tree bookkeeping
    # ------------------------------------------------------------------
    def add_body(self, body: CelestialBody) -> int:
        """
        Insert a body, assign its permanent id and link it into its parent's
        children. Its orbital elements are derived immediately.
        """
        if body.id is not None:
            raise InvariantError(f"{body.name!r} already belongs to a universe (id {body.id})")
        if body.parent is None:
            if self.root is not None:
                raise InvariantError(f"{body.name!r} has no parent but the universe already has a root")
        elif body.parent not in self._index:
            raise InvariantError(f"{body.name!r} refers to unknown parent id {body.parent}")

        body.id = self.id_gen
        self.id_gen += 1

        if body.parent is None:
            self.root = body.id
        else:
            self.get(body.parent).children.append(body.id)

        self._index[body.id] = len(self.bodies)
        self.bodies.append(body)

        center, rest = split_at(self.bodies, self._index[body.id])
        center.update_elements(rest)

        log.debug("Added %s (id %d, parent %s)", body.name, body.id, body.parent)
        return body.id

    def get(self, body_id: int) -> CelestialBody:
        try:
            return self.bodies[self._index[body_id]]
        except KeyError:
            raise KeyError(f"no body with id {body_id}") from None

    def find(self, name: str) -> Optional[CelestialBody]:
        for body in self.bodies:
            if body.name == name:
                return body
        return None

    def parent_of(self, body: CelestialBody) -> Optional[CelestialBody]:
        if body.parent is None:
            return None
        if body.parent not in self._index:
            raise InvariantError(f"{body.name!r} (id {body.id}) has no resolvable parent {body.parent}")
        return self.get(body.parent)

    def children_of(self, body: CelestialBody) -> List[CelestialBody]:
        return [self.get(child_id) for child_id in body.children]

    def check_invariants(self) -> None:
        """Raise InvariantError unless parents and children mirror each other exactly."""
        seen = set()
        roots = []
        for pos, body in enumerate(self.bodies):
            if body.id is None or body.id in seen:
                raise InvariantError(f"duplicate or missing id on {body.name!r}")
            seen.add(body.id)
            if self._index.get(body.id) != pos:
                raise InvariantError(f"index out of sync for {body.name!r}")
            if body.id >= self.id_gen:
                raise InvariantError(f"id {body.id} was never allocated")
            if body.parent is None:
                roots.append(body.id)
                continue
            parent = self.parent_of(body)
            if parent.children.count(body.id) != 1:
                raise InvariantError(
                    f"{parent.name!r} lists child {body.id} {parent.children.count(body.id)} times")
        if self.bodies and roots != [self.root]:
            raise InvariantError(f"expected exactly one root {self.root}, found {roots}")
        for body in self.bodies:
            for child_id in body.children:
                if child_id not in self._index or self.get(child_id).parent != body.id:
                    raise InvariantError(f"{body.name!r} lists {child_id} which is not its child")

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------
    def _locate(self) -> None:
        """Snapshot world positions, parents before children."""
        if self.root is None:
            return
        root = self.get(self.root)
        root.world_position = root.position.copy()
        stack = [root]
        while stack:
            body = stack.pop()
            for child in self.children_of(body):
                child.world_position = body.world_position + child.position
                stack.append(child)

    def update(self) -> None:
        """Advance every body by one tick of `time_scale` simulated seconds."""
        bodies = self.bodies
        dt = self.time_scale / self.substeps
        gravity = self.gravity
        thrust = self.thrust
        solver = self.solver

        for _ in range(self.substeps):
            self._locate()
            for_each_split(bodies, lambda center, rest: center.accumulate(rest, gravity))
            for_each_split(bodies, lambda center, rest: center.advance(rest, dt, thrust, solver))

        for_each_split(bodies, lambda center, rest: center.update_elements(rest))

        self._time += 1
        self.sim_time += self.time_scale

    def run(self, ticks: int, callback: Optional[Callable[["Universe"], None]] = None) -> None:
        for _ in range(int(ticks)):
            self.update()
            if callback is not None:
                callback(self)
        log.debug("Ran %d ticks, sim_time=%.1f s", ticks, self.sim_time)

    def get_time(self) -> int:
        return self._time

    def get_sim_time(self) -> float:
        return self.sim_time

    def set_time_scale(self, value: float) -> None:
        self.time_scale = settings.clamp_time_scale(value)

    def set_throttle(self, body_id: int, value: float) -> None:
        self.get(body_id).throttle = settings.clamp_throttle(value)

    def to_dict(self) -> dict:
        return {
            "simTime": self.sim_time,
            "startTime": self.start_time,
            "timeScale": self.time_scale,
            "bodies": [body.to_dict() for body in self.bodies],
        }
