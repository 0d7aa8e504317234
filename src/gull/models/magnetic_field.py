from dataclasses import dataclass
from datetime import date, datetime
import math
from typing import NamedTuple, Optional, Tuple, Union
import numpy as np

from ..exceptions import (
    DomainError,
    ErrorHandler,
    GullError,
    Operation,
    report_error
)
from ..utils.validation import validate_range
from .coefficients import coefficient_count
from .snapshot import Snapshot, load_snapshot
from .workspace import Workspace

EARTH_REFERENCE_RADIUS = 6371.2  # km
WGS84_A2 = 40680631.59  # km^2, squared semi-major axis
WGS84_B2 = 40408299.98  # km^2, squared semi-minor axis
POLE_DISTANCE = 0.001  # deg
POLE_LATITUDE = 89.999  # deg, about 300 ft from the pole

class FieldVector(NamedTuple):
    """Magnetic field components in a local East, North, Upward frame [T]."""
    east: float
    north: float
    up: float

    def norm(self) -> float:
        return math.sqrt(self.east**2 + self.north**2 + self.up**2)

    def as_array(self) -> np.ndarray:
        return np.array([self.east, self.north, self.up])

@dataclass
class MagneticFieldState:
    """Magnetic field state."""
    field_vector: np.ndarray  # [T], ENU
    field_strength: float  # [T]
    timestamp: Union[date, datetime]

def _east_term(aa: float, bb: float, sl: float, cl: float, p: float, q: float,
               n: int, m: int, slat: float, clat: float) -> float:
    """
    Contribution of an (n, m > 0) term to the eastward component.

    Close to the poles, i.e. when clat <= 0, the division by clat is replaced
    by a product with slat.
    """
    if clat > 0:
        return (aa * sl - bb * cl) * m * p / ((n + 1.) * clat)
    return (aa * sl - bb * cl) * q * slat

def _compute_field(snapshot: Snapshot, latitude: float, longitude: float,
                   altitude: float, workspace: Workspace) -> FieldVector:
    # Check the altitude
    altitude *= 1E-03  # m -> km
    if not validate_range(altitude, snapshot.altitude_min, snapshot.altitude_max):
        raise DomainError(f"invalid altitude value: {altitude:.5E}",
                          Operation.SNAPSHOT_FIELD)

    order = snapshot.order
    coefficients = snapshot.coefficients
    workspace.resize_for(order)
    sl, cl, p, q = workspace.sl, workspace.cl, workspace.p, workspace.q

    # Sine and cosine of the latitude, with protection against poles
    slat = math.sin(math.radians(latitude))
    if (90. - latitude) < POLE_DISTANCE:
        aa = POLE_LATITUDE
    elif (90. + latitude) < POLE_DISTANCE:
        aa = -POLE_LATITUDE
    else:
        aa = latitude
    clat = math.cos(math.radians(aa))

    longitude = math.radians(longitude)
    sl[0] = math.sin(longitude)
    cl[0] = math.cos(longitude)

    # Convert to geocentric
    aa = WGS84_A2 * clat * clat
    bb = WGS84_B2 * slat * slat
    cc = aa + bb
    dd = math.sqrt(cc)
    r = math.sqrt(altitude * (altitude + 2. * dd) + (WGS84_A2 * aa + WGS84_B2 * bb) / cc)
    ratio = EARTH_REFERENCE_RADIUS / r
    cd = (altitude + dd) / r
    sd = (WGS84_A2 - WGS84_B2) * slat * clat / (dd * r)
    slat, clat = slat * cd - clat * sd, clat * cd + slat * sd

    # Seed the Legendre recurrence with the degree 1 and 2 terms
    npq = coefficient_count(order)
    sqrt3 = math.sqrt(3.)
    seed = min(npq, 4)
    p[:seed] = (2. * slat, 2. * clat, 4.5 * slat * slat - 1.5,
                3. * sqrt3 * clat * slat)[:seed]
    q[:seed] = (-clat, slat, -3. * clat * slat,
                sqrt3 * (slat * slat - clat * clat))[:seed]

    x = y = z = 0.
    rr = 0.
    n, m = 0, 1
    for k in range(npq):
        if m > n:
            m = 0
            n += 1
            rr = ratio ** (n + 2)
        if k >= 4:
            if m == n:
                # Sectoral term
                aa = math.sqrt(1. - 0.5 / m)
                j = k - n - 1
                p[k] = (1. + 1. / m) * aa * clat * p[j]
                q[k] = aa * (clat * q[j] + slat / m * p[j])
                sl[m - 1] = sl[m - 2] * cl[0] + cl[m - 2] * sl[0]
                cl[m - 1] = cl[m - 2] * cl[0] - sl[m - 2] * sl[0]
            else:
                aa = math.sqrt(n * n - m * m)
                bb = math.sqrt((n - 1.) * (n - 1.) - m * m) / aa
                cc = (2. * n - 1.) / aa
                ii = k - n
                j = k - 2 * n + 1
                p[k] = (n + 1.) * (cc * slat / n * p[ii] - bb / (n - 1.) * p[j])
                q[k] = cc * (slat * q[ii] - clat / n * p[ii]) - bb * q[j]

        aa = rr * coefficients[k, 0]
        if m == 0:
            x += aa * q[k]
            z -= aa * p[k]
        else:
            bb = rr * coefficients[k, 1]
            cc = aa * cl[m - 1] + bb * sl[m - 1]
            x += cc * q[k]
            z -= cc * p[k]
            y += _east_term(aa, bb, sl[m - 1], cl[m - 1], p[k], q[k],
                            n, m, slat, clat)
        m += 1

    # Rotate back to the geodetic frame, and convert from nT to T
    return FieldVector(
        east=float(y * 1E-09),
        north=float((x * cd + z * sd) * 1E-09),
        up=float(-(z * cd - x * sd) * 1E-09)
    )

def compute_field(snapshot: Snapshot, latitude: float, longitude: float,
                  altitude: float = 0., workspace: Optional[Workspace] = None,
                  error_handler: Optional[ErrorHandler] = None) -> FieldVector:
    """
    Compute the geomagnetic field components.

    This follows the shval3 routine of geomag70, itself based on the 'igrf'
    subroutine by D. R. Barraclough and S. R. C. Malin, report no. 71/1,
    Institute of Geological Sciences, U.K.

    Args:
        snapshot: Geomagnetic snapshot
        latitude: Geodetic latitude [deg]
        longitude: Geodetic longitude [deg]
        altitude: Altitude above the WGS84 ellipsoid [m]
        workspace: Optional scratch memory, reused between calls. A
            temporary one is used if omitted
        error_handler: Optional callback notified with the error context
            before any error is raised

    Returns:
        FieldVector with the East, North and Upward components [T]

    Raises:
        DomainError: The altitude is outside of the snapshot validity range
        AllocationError: The workspace could not be allocated
    """
    if workspace is None:
        workspace = Workspace()
    try:
        return _compute_field(snapshot, latitude, longitude, altitude, workspace)
    except GullError as error:
        raise report_error(error, Operation.SNAPSHOT_FIELD, error_handler) from None

class MagneticFieldModel:
    def __init__(self, path: str, date: Union[date, datetime, None] = None):
        """
        Initialize magnetic field model.

        Args:
            path: Model data file, e.g. IGRF13.COF
            date: Date of the snapshot, defaults to today
        """
        self.date = date if date is not None else datetime.now().date()
        self.snapshot = load_snapshot(path, self.date.day, self.date.month,
                                      self.date.year)
        self.workspace = Workspace(self.snapshot.order)
        self.state: Optional[MagneticFieldState] = None

    @classmethod
    def from_config(cls, config) -> 'MagneticFieldModel':
        """Create the model described by a GullConfig."""
        return cls(config.model.path, config.model.date)

    @property
    def order(self) -> int:
        return self.snapshot.order

    @property
    def altitude_range(self) -> Tuple[float, float]:
        """Validity range of the model [m]."""
        _, altitude_min, altitude_max = self.snapshot.info()
        return altitude_min, altitude_max

    def calculate_magnetic_field(self, latitude: float, longitude: float,
                                 altitude: float = 0.) -> np.ndarray:
        """
        Calculate Earth's magnetic field vector at a given location.

        Args:
            latitude: Geodetic latitude [deg]
            longitude: Geodetic longitude [deg]
            altitude: Altitude above the WGS84 ellipsoid [m]

        Returns:
            Field vector [T] in East, North, Upward coordinates
        """
        field = compute_field(self.snapshot, latitude, longitude, altitude,
                              self.workspace)
        B = field.as_array()
        self.state = MagneticFieldState(
            field_vector=B,
            field_strength=field.norm(),
            timestamp=self.date
        )
        return B

    def close(self):
        """Release the snapshot and the workspace."""
        self.snapshot.destroy()
        self.workspace = Workspace()
