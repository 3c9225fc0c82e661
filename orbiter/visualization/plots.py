import logging
import os
import matplotlib.pyplot as plt
from orbiter.config.settings import OUTPUT_DIR, AU

log = logging.getLogger(__name__)


def plot_element_history(history, names=None, out_dir=None):
    """
    Plot semimajor axis and eccentricity vs simulated time for each body.
    """
    out_dir = out_dir or OUTPUT_DIR
    os.makedirs(out_dir, exist_ok=True)

    names = names or history.names()

    fig, (ax_a, ax_e) = plt.subplots(2, 1, figsize=(10, 8), sharex=True)

    for name in names:
        t = history.series(name, "sim_time")
        a = history.series(name, "semimajor_axis")
        e = history.series(name, "eccentricity")
        if a.size == 0:
            continue
        # relative change keeps bodies of very different size on one axis
        ax_a.plot(t, (a - a[0]) / a[0] if a[0] else a, label=name)
        ax_e.plot(t, e - e[0], label=name)

    ax_a.set_ylabel("Relative semimajor axis change")
    ax_e.set_ylabel("Eccentricity change")
    ax_e.set_xlabel("Simulated time (s)")
    ax_a.set_title("Orbital Element Drift")

    if len(names) <= 10:
        ax_a.legend()
    else:
        ax_a.legend(fontsize=8, ncol=2)

    save_path = os.path.join(out_dir, "element_drift.png")
    fig.tight_layout()
    fig.savefig(save_path)
    plt.close(fig)

    log.info("Saved: %s", save_path)
    return save_path


def plot_trajectories(history, names=None, out_dir=None):
    """
    Plot each body's parent-relative path in the reference plane (km).
    """
    out_dir = out_dir or OUTPUT_DIR
    os.makedirs(out_dir, exist_ok=True)

    names = names or history.names()

    plt.figure(figsize=(8, 8))
    for name in names:
        pos = history.series(name, "position")
        if pos.size == 0:
            continue
        plt.plot(pos[:, 0] * AU, pos[:, 1] * AU, label=name)
        plt.scatter([pos[-1, 0] * AU], [pos[-1, 1] * AU], s=8)

    plt.xlabel("x (km, parent frame)")
    plt.ylabel("y (km, parent frame)")
    plt.title("Parent-relative Trajectories")
    plt.axis("equal")
    plt.legend(fontsize=8)

    save_path = os.path.join(out_dir, "trajectories.png")
    plt.tight_layout()
    plt.savefig(save_path)
    plt.close()

    log.info("Saved: %s", save_path)
    return save_path
