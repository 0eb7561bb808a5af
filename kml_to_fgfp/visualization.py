"""Route preview: plan view and vertical profile."""

from __future__ import annotations

from typing import List, Tuple

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from .summary import leg_distances_nm
from .waypoint import Waypoint


def plot_route(
    waypoints: List[Waypoint],
    title: str = "Flight plan route",
    annotate: bool = True,
) -> Tuple[plt.Figure, np.ndarray]:
    fig, axes = plt.subplots(1, 2, figsize=(12, 5), gridspec_kw={'width_ratios': [3, 2]})
    ax_plan, ax_prof = axes

    if waypoints:
        lons = np.array([w.lon for w in waypoints], dtype=float)
        lats = np.array([w.lat for w in waypoints], dtype=float)
        alts = np.array([w.altitude_ft for w in waypoints], dtype=float)
        dist = np.concatenate([[0.0], np.cumsum(leg_distances_nm(waypoints))])

        ax_plan.plot(lons, lats, linewidth=2.0, color='green')
        ax_plan.scatter(lons, lats, marker='^', s=40, color='k', zorder=3)
        # First/last fix
        ax_plan.scatter([lons[0]], [lats[0]], s=90, color='red', zorder=4)
        ax_plan.scatter([lons[-1]], [lats[-1]], s=90, color='blue', zorder=4)
        if annotate:
            for w in waypoints:
                ax_plan.annotate(w.ident, (w.lon, w.lat), textcoords='offset points', xytext=(4, 4), fontsize=7)

        ax_prof.plot(dist, alts, linewidth=2.0, color='tab:blue', drawstyle='steps-post')
        ax_prof.scatter(dist, alts, s=15, color='k')
        ax_prof.set_ylim(bottom=0.0)
    else:
        ax_plan.text(0.5, 0.5, 'No waypoints', ha='center', va='center', transform=ax_plan.transAxes)

    ax_plan.set_title(title)
    ax_plan.set_xlabel("Longitude (deg)")
    ax_plan.set_ylabel("Latitude (deg)")
    ax_plan.set_aspect('equal', adjustable='datalim')
    ax_plan.grid(True, alpha=0.3)

    ax_prof.set_title("Vertical profile")
    ax_prof.set_xlabel("Distance (NM)")
    ax_prof.set_ylabel("Altitude (ft)")
    ax_prof.grid(True, alpha=0.3)

    fig.tight_layout()
    return fig, axes


def save_figure(fig: plt.Figure, path: str, dpi: int = 150) -> None:
    fig.savefig(path, dpi=dpi)
    plt.close(fig)
