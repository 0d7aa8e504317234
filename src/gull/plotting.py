"""
Maps of the geomagnetic field.
"""

from typing import Optional
import matplotlib.pyplot as plt
import numpy as np

from .models.magnetic_field import compute_field
from .models.snapshot import Snapshot
from .models.workspace import Workspace

def intensity_grid(snapshot: Snapshot, latitudes: np.ndarray,
                   longitudes: np.ndarray, altitude: float = 0.) -> np.ndarray:
    """
    Total intensity of the field over a latitude x longitude grid.

    Returns:
        Array of shape (len(latitudes), len(longitudes)) [T]
    """
    workspace = Workspace(snapshot.order)
    intensity = np.empty((len(latitudes), len(longitudes)))
    for i, latitude in enumerate(latitudes):
        for j, longitude in enumerate(longitudes):
            intensity[i, j] = compute_field(
                snapshot, latitude, longitude, altitude, workspace).norm()
    return intensity

def plot_intensity_map(snapshot: Snapshot, altitude: float = 0.,
                       step: float = 1.0, title: Optional[str] = None):
    """
    Plot the total intensity of the geomagnetic field over the Earth, in Gauss.

    Args:
        snapshot: Geomagnetic snapshot
        altitude: Altitude above the WGS84 ellipsoid [m]
        step: Grid step [deg]
        title: Optional figure title

    Returns:
        The matplotlib figure
    """
    longitudes = np.arange(-180., 180. + 0.5 * step, step)
    latitudes = np.arange(-90., 90. + 0.5 * step, step)
    intensity = intensity_grid(snapshot, latitudes, longitudes, altitude)

    fig, ax = plt.subplots()
    mesh = ax.pcolormesh(longitudes, latitudes, intensity * 1E+04,  # T -> G
                         vmin=0., vmax=0.7, cmap="hot", shading="auto")
    ax.set_xlabel("longitude (deg)")
    ax.set_ylabel("latitude (deg)")
    ax.set_title(title or "Earth magnetic field, in Gauss.")
    fig.colorbar(mesh, ax=ax)
    return fig
