# orbiter/main.py
import argparse
import logging

import numpy as np

from orbiter.config import settings
from orbiter.config.settings import AU
from orbiter.pipeline.recorder import run_recorded
from orbiter.pipeline.serialization import save_snapshot
from orbiter.simulation.scenarios import create_default_universe, spawn_rocket, spawn_scenario

# --- Setup logger ------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%H:%M:%S"
)
log = logging.getLogger("main")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the orbiter simulation headless.")
    parser.add_argument("--ticks", type=int, default=settings.DEFAULT_TICKS,
                        help="number of ticks to simulate")
    parser.add_argument("--time-scale", type=float, default=settings.DEFAULT_TIME_SCALE,
                        help="simulated seconds per tick")
    parser.add_argument("--rockets", type=int, default=0,
                        help="extra random spacecraft to spawn")
    parser.add_argument("--scenario", choices=sorted(settings.SCENARIOS), action="append", default=[],
                        help="spawn a spacecraft on a preset orbit (repeatable)")
    parser.add_argument("--seed", type=int, default=settings.DEFAULT_RANDOM_SEED)
    parser.add_argument("--out", default=settings.OUTPUT_DIR, help="output directory")
    parser.add_argument("--no-plots", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        universe = create_default_universe(time_scale=args.time_scale)
        rng = np.random.default_rng(args.seed)
        for _ in range(max(0, args.rockets)):
            spawn_rocket(universe, rng=rng)
        for name in args.scenario:
            spawn_scenario(universe, name)
        universe.check_invariants()

        log.info("Starting simulation: %d bodies, %d ticks, time_scale=%.1f s",
                 len(universe.bodies), args.ticks, universe.time_scale)
        history = run_recorded(universe, args.ticks)
        universe.check_invariants()

        for name in history.names():
            log.info("%-10s a=%.6e AU (drift %.2e km)  e=%.6f (drift %.2e)",
                     name,
                     universe.find(name).orbital_elements.semimajor_axis,
                     history.drift(name, "semimajor_axis") * AU,
                     universe.find(name).orbital_elements.eccentricity,
                     history.drift(name, "eccentricity"))

        snapshot_file = save_snapshot(universe, "universe", out_dir=args.out)
        log.info("Saved snapshot: %s", snapshot_file)

        if not args.no_plots:
            try:
                from orbiter.visualization.plots import plot_element_history, plot_trajectories
                plot_element_history(history, out_dir=args.out)
                plot_trajectories(history, out_dir=args.out)
                log.info("Plots generated.")
            except Exception as e:
                log.warning("Plotting failed: %s", e)

        log.info("All done at tick %d (sim_time=%.1f s).", universe.get_time(), universe.get_sim_time())
        return universe

    except Exception:
        log.exception("Fatal exception during run:")
        raise


if __name__ == "__main__":
    main()
