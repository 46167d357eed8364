from __future__ import annotations

from typing import Optional, Sequence

from foxesrabbits.grid import EnergyStat


def plot_history(history: Sequence[EnergyStat], out_path: Optional[str] = None, title: str = "Energy per species"):
    """Fox and rabbit energy totals per day. Saves to ``out_path`` or shows the figure."""
    try:
        import matplotlib.pyplot as plt
        from matplotlib.ticker import MaxNLocator
    except Exception as exc:
        raise RuntimeError("matplotlib is required for plotting") from exc

    days = list(range(len(history)))
    fox_energy = [stat.foxes.value for stat in history]
    rabbit_energy = [stat.rabbits.value for stat in history]

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(days, fox_energy, label="foxes", color="tab:orange")
    ax.plot(days, rabbit_energy, label="rabbits", color="tab:blue")
    ax.set_xlabel("day")
    ax.set_ylabel("total energy")
    ax.set_title(title)
    ax.legend()
    ax.grid(True)
    ax.set_xlim([0, max(len(history) - 1, 1)])
    ax.set_ylim([0, max(fox_energy + rabbit_energy + [1])])
    ax.xaxis.set_major_locator(MaxNLocator(integer=True))

    fig.tight_layout()
    if out_path:
        fig.savefig(out_path)
        plt.close(fig)
    else:
        plt.show()
    return fig
