"""
Shared fixtures: synthetic geomag70 .COF data files.

Lines are padded to 80 characters and terminated by a line feed, as in
the IGRF and WMM distributions.
"""

from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import numpy as np
import pytest

Coefficients = Dict[Tuple[int, int], Sequence[float]]

def cof_line(text: str) -> str:
    assert len(text) <= 80, text
    return text.ljust(80) + "\n"

def header_line(name: str, epoch, nmax1: int, nmax2: int, yrmin, yrmax,
                altmin, altmax) -> str:
    fields = [name, str(epoch), str(nmax1), str(nmax2), "0",
              str(yrmin), str(yrmax), str(altmin), str(altmax)]
    return cof_line("   " + " ".join(fields))

def coefficient_line(n: int, m: int, g1=0., h1=0., g2=0., h2=0.) -> str:
    return cof_line(f"{n:3d}{m:3d} {g1:12.2f} {h1:12.2f} {g2:12.2f} {h2:12.2f}")

def data_set(header: str, nmax: int, coefficients: Coefficients) -> List[str]:
    """Header plus one line per (n, m) pair up to degree nmax."""
    lines = [header]
    for n in range(1, nmax + 1):
        for m in range(n + 1):
            lines.append(coefficient_line(n, m, *coefficients.get((n, m), ())))
    return lines

# Two consecutive data sets of degree 2. The first one has no secular
# variation, the second one does.
DGRF2015: Coefficients = {
    (1, 0): (-29440.0, 0.0),
    (1, 1): (-1501.0, 4797.0),
    (2, 0): (-2446.0, 0.0),
    (2, 1): (3013.0, -2845.0),
    (2, 2): (1677.0, -642.0),
}

IGRF2020: Coefficients = {
    (1, 0): (-29404.8, 0.0, 5.7, 0.0),
    (1, 1): (-1450.9, 4652.5, 7.4, -25.9),
    (2, 0): (-2499.6, 0.0, -11.0, 0.0),
    (2, 1): (2982.0, -2991.6, -7.0, -30.2),
    (2, 2): (1677.0, -734.6, -2.1, -22.4),
}

def igrf_lines() -> List[str]:
    return (
        data_set(header_line("DGRF2015", "2015.00", 2, 0, "2015.00", "2020.00",
                             "-1.0", "600.0"), 2, DGRF2015) +
        data_set(header_line("IGRF2020", "2020.00", 2, 2, "2020.00", "2025.00",
                             "-1.0", "400.0"), 2, IGRF2020)
    )

def dipole_lines(g10=-30000., g11=0., h11=0.) -> List[str]:
    header = header_line("DIPOLE", "2020.00", 1, 1, "2020.00", "2025.00",
                         "-1.0", "600.0")
    return data_set(header, 1, {(1, 0): (g10,), (1, 1): (g11, h11)})

def random_coefficients(rng: np.random.Generator, nmax: int,
                        secular: bool = False) -> Coefficients:
    """Seeded random coefficients, rounded to the precision of the file."""
    coefficients = {}
    for n in range(1, nmax + 1):
        for m in range(n + 1):
            values = [round(float(x), 2) for x in rng.uniform(-3e+04, 3e+04, 2) / n**2]
            if secular:
                values += [round(float(x), 2) for x in rng.uniform(-50., 50., 2)]
            if m == 0:
                values[1::2] = [0.] * len(values[1::2])
            coefficients[n, m] = tuple(values)
    return coefficients

# Two consecutive data sets of degree 8, exercising the full Legendre
# recurrence.
HIGH_DEGREE = 8
_rng = np.random.default_rng(20170701)
HIGH2015: Coefficients = random_coefficients(_rng, HIGH_DEGREE)
HIGH2020: Coefficients = random_coefficients(_rng, HIGH_DEGREE, secular=True)

def high_degree_lines() -> List[str]:
    return (
        data_set(header_line("HIGH2015", "2015.00", HIGH_DEGREE, 0, "2015.00",
                             "2020.00", "-1.0", "600.0"), HIGH_DEGREE, HIGH2015) +
        data_set(header_line("HIGH2020", "2020.00", HIGH_DEGREE, HIGH_DEGREE,
                             "2020.00", "2025.00", "-1.0", "400.0"),
                 HIGH_DEGREE, HIGH2020)
    )

@pytest.fixture
def write_cof(tmp_path):
    """Factory writing lines to a .COF file in a temporary directory."""
    def write(lines: List[str], name: str = "model.COF") -> Path:
        path = tmp_path / name
        with open(path, "w", encoding="ascii", newline="\n") as fh:
            fh.writelines(lines)
        return path
    return write

@pytest.fixture
def igrf_path(write_cof) -> Path:
    return write_cof(igrf_lines(), "IGRF.COF")

@pytest.fixture
def dipole_path(write_cof) -> Path:
    return write_cof(dipole_lines(), "DIPOLE.COF")

@pytest.fixture
def high_degree_path(write_cof) -> Path:
    return write_cof(high_degree_lines(), "HIGH.COF")
