"""
Snapshots of a geomagnetic model at a given date.

Models are read from geomag70 .COF files, e.g. IGRF13.COF or WMM2015.COF.
These are made of data sets, each one starting with a header line followed
by the Gaussian coefficients of the data set, one (n, m) pair per line.
All lines are 80 characters wide, line feed excluded.
"""

from dataclasses import dataclass
import logging
from typing import List, Optional, Tuple

import numpy as np

from ..exceptions import (
    AllocationError,
    ErrorHandler,
    FormatError,
    GullError,
    MissingDataError,
    Operation,
    PathError,
    report_error
)
from ..utils.time import decimal_year
from .coefficients import CoefficientStore, coefficient_count, coefficient_index

logger = logging.getLogger(__name__)

LINE_WIDTH = 81  # Including the line feed

@dataclass
class DataSet:
    """Header of a data set, and where its coefficients start."""
    epoch: float
    nmax1: int
    nmax2: int
    yrmin: float
    yrmax: float
    altmin: float  # [km]
    altmax: float  # [km]
    position: int = 0
    line: int = 0

    @classmethod
    def parse(cls, text: str) -> Optional['DataSet']:
        """Parse a header line, or return None if it is malformed."""
        tokens = text.split()
        if len(tokens) < 9:
            return None
        try:
            # tokens[0] is the model name and tokens[4] is not used
            int(tokens[4])
            return cls(
                epoch=float(tokens[1]),
                nmax1=int(tokens[2]),
                nmax2=int(tokens[3]),
                yrmin=float(tokens[5]),
                yrmax=float(tokens[6]),
                altmin=float(tokens[7]),
                altmax=float(tokens[8])
            )
        except ValueError:
            return None

    def covers(self, date: float) -> bool:
        return self.yrmin <= date <= self.yrmax

def _parse_coefficients(text: str) -> Optional[Tuple[int, int, float, float, float, float]]:
    tokens = text.split()
    if len(tokens) < 6:
        return None
    try:
        return (int(tokens[0]), int(tokens[1]), float(tokens[2]),
                float(tokens[3]), float(tokens[4]), float(tokens[5]))
    except ValueError:
        return None

class Snapshot:
    """
    Geomagnetic model resolved at a given date.

    A snapshot is immutable. Its coefficients are stored as a read-only
    array with one (g, h) row per (n, m) pair, in nT.
    """

    def __init__(self, order: int, altitude_min: float, altitude_max: float,
                 coefficients: np.ndarray, date: Optional[float] = None,
                 path: Optional[str] = None):
        coefficients = np.array(coefficients, dtype=float)
        if coefficients.shape != (coefficient_count(order), 2):
            raise ValueError(
                f"expected {coefficient_count(order)} coefficient pairs "
                f"for order {order}, got shape {coefficients.shape}")
        coefficients.setflags(write=False)
        self._order = order
        self._altitude_min = altitude_min
        self._altitude_max = altitude_max
        self._coefficients = coefficients
        self._date = date
        self._path = path

    @property
    def order(self) -> int:
        return self._order

    @property
    def altitude_min(self) -> float:
        """Minimum valid altitude [km]."""
        return self._altitude_min

    @property
    def altitude_max(self) -> float:
        """Maximum valid altitude [km]."""
        return self._altitude_max

    @property
    def date(self) -> Optional[float]:
        """Decimal year of the snapshot."""
        return self._date

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def coefficients(self) -> np.ndarray:
        if self._coefficients is None:
            raise ValueError("snapshot has been destroyed")
        return self._coefficients

    @property
    def destroyed(self) -> bool:
        return self._coefficients is None

    def coefficient(self, degree: int, order: int) -> Tuple[float, float]:
        """Return the (g, h) pair of the given degree and order."""
        g, h = self.coefficients[coefficient_index(degree, order, self._order)]
        return float(g), float(h)

    def info(self) -> Tuple[int, float, float]:
        """
        Basic information on the snapshot.

        Returns:
            Tuple of (order, altitude_min, altitude_max), altitudes in m
        """
        if self.destroyed:
            raise ValueError("snapshot has been destroyed")
        return self._order, self._altitude_min * 1E+03, self._altitude_max * 1E+03

    def destroy(self):
        """Release the coefficients. The snapshot is unusable afterwards."""
        self._coefficients = None

    def __enter__(self) -> 'Snapshot':
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.destroy()

    def __repr__(self) -> str:
        return (f"Snapshot(order={self._order}, altitude=[{self._altitude_min}, "
                f"{self._altitude_max}] km, date={self._date})")

def _syntax_error(path: str, line: int) -> FormatError:
    return FormatError(f"invalid syntax [{path}:{line}]",
                       Operation.SNAPSHOT_CREATE, path, line)

def _scan_data_sets(fid, path: str, date: float) -> List[DataSet]:
    """Locate the data set(s) relevant for the given date."""
    data_sets: List[DataSet] = []
    line = 0
    while True:
        text = fid.readline()
        if not text:
            break
        line += 1
        if len(text) != LINE_WIDTH:
            raise _syntax_error(path, line)
        if not text.startswith("   "):
            continue

        header = DataSet.parse(text)
        if header is None:
            raise _syntax_error(path, line)
        if not data_sets and not header.covers(date):
            continue

        # Backup where the coefficients of this data set start
        header.position = fid.tell()
        header.line = line
        data_sets.append(header)
        if len(data_sets) == 2 or data_sets[0].nmax2 > 0:
            break
    return data_sets

def _read_coefficients(fid, path: str, data_sets: List[DataSet],
                       store: CoefficientStore):
    single = len(data_sets) == 1
    for index, data_set in enumerate(data_sets):
        fid.seek(data_set.position)
        line = data_set.line
        count = coefficient_count(store.order if single else data_set.nmax1)
        for _ in range(count):
            line += 1
            text = fid.readline()
            if len(text) != LINE_WIDTH:
                raise _syntax_error(path, line)
            values = _parse_coefficients(text)
            if values is None:
                raise _syntax_error(path, line)
            i, j, g1, h1, g2, h2 = values
            try:
                slot = store.slot(i, j)
            except IndexError:
                raise _syntax_error(path, line)

            if single:
                target, values = slot, (g1, h1, g2, h2)
            elif index == 0:
                target, values = slot[0:2], (g1, h1)
            else:
                target, values = slot[2:4], (g1, h1)
            if np.any(target != 0.):
                # Duplicated line
                raise _syntax_error(path, line)
            target[:] = values

def _read_snapshot(path: str, date: float) -> Snapshot:
    try:
        fid = open(path, "r", encoding="latin-1")
    except OSError:
        raise PathError(f"could not open file `{path}`",
                        Operation.SNAPSHOT_CREATE, path)

    with fid:
        data_sets = _scan_data_sets(fid, path, date)
        if not data_sets or (len(data_sets) == 1 and data_sets[0].nmax2 <= 0):
            raise MissingDataError(f"missing data in file `{path}`",
                                   Operation.SNAPSHOT_CREATE, path)

        if len(data_sets) == 1:
            order = max(data_sets[0].nmax1, data_sets[0].nmax2)
        else:
            order = max(data_sets[0].nmax1, data_sets[1].nmax1)
        if order < 1:
            raise _syntax_error(path, data_sets[0].line)
        try:
            store = CoefficientStore(order, width=4)
        except MemoryError:
            raise AllocationError("could not allocate memory",
                                  Operation.SNAPSHOT_CREATE)

        _read_coefficients(fid, path, data_sets, store)

    # Interpolate or extrapolate for the required date
    first = data_sets[0]
    if len(data_sets) == 1:
        coefficients = store.extrapolate(date - first.epoch)
        altmin, altmax = first.altmin, first.altmax
        logger.debug(f"Extrapolating {path} from epoch {first.epoch} "
                     f"(line {first.line}) to {date:.4f}")
    else:
        second = data_sets[1]
        if second.epoch == first.epoch:
            raise _syntax_error(path, second.line)
        t = (date - first.epoch) / (second.epoch - first.epoch)
        coefficients = store.interpolate(t)
        altmin = max(first.altmin, second.altmin)
        altmax = min(first.altmax, second.altmax)
        logger.debug(f"Interpolating {path} between epochs {first.epoch} "
                     f"(line {first.line}) and {second.epoch} "
                     f"(line {second.line}) at {date:.4f}")

    return Snapshot(order, altmin, altmax, coefficients, date=date, path=path)

def load_snapshot(path: str, day: int, month: int, year: int,
                  error_handler: Optional[ErrorHandler] = None) -> Snapshot:
    """
    Create a snapshot of a geomagnetic model.

    Args:
        path: Data file (geomag70 .COF format)
        day: Day in the month, in [1, 31]
        month: Month of the year, in [1, 12]
        year: Year number, e.g. 2016
        error_handler: Optional callback notified with the error context
            before any error is raised

    Returns:
        The snapshot at the requested date

    Raises:
        DomainError: The date is not valid
        PathError: The data file could not be opened
        FormatError: The data file is malformed. The faulty line is given
            by the `line` attribute
        MissingDataError: No data set covers the requested date
        AllocationError: Memory could not be allocated
    """
    path = str(path)
    try:
        date = decimal_year(day, month, year)
        snapshot = _read_snapshot(path, date)
    except GullError as error:
        error = report_error(error, Operation.SNAPSHOT_CREATE, error_handler)
        logger.error(str(error))
        raise error from None

    logger.info(f"Loaded {path} at {day:02d}/{month:02d}/{year}: "
                f"order {snapshot.order}, altitude "
                f"[{snapshot.altitude_min}, {snapshot.altitude_max}] km")
    return snapshot
