"""Readers for the site and soil parameter files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from cropgrid.model import Site, SoilConstants, Table, WaterBalance

_MAX_WORD = 98

_NONBLANK_RUN = re.compile(r"\S+")
_WORD = re.compile(r"\s*(\S+)")
_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_SKIPPED_LINE_STARTS = "* \n\r"


class InputFileError(Exception):
    """A parameter file is missing, unreadable or malformed."""


@dataclass(frozen=True)
class ParameterFile:
    """Names of the scalar parameters and tables a parameter file holds."""

    scalars: tuple[str, ...]
    tables: tuple[str, ...]


SITE_FILE = ParameterFile(
    scalars=(
        "IZT", "IFUNRN", "IDRAIN", "SSMAX", "WAV", "ZTI",
        "DD", "RDMSOL", "NOTINF", "SSI", "SMLIM", "CO2",
    ),
    tables=("NINFTB",),
)

SOIL_FILE = ParameterFile(
    scalars=(
        "SMW", "SMFCF", "SM0", "CRAIRC", "K0", "SOPE",
        "KSUB", "SPADS", "SPODS", "SPASS", "SPOSS", "DEFLIM",
    ),
    tables=("SMTAB", "CONTAB"),
)

CROP_FILE = ParameterFile(
    scalars=(
        "TBASEM", "TEFFMX", "TSUMEM", "IDSL", "DLO", "DLC", "VERNSAT",
        "VERNBASE", "TSUM1", "TSUM2", "DVSI", "DVSEND", "TDWI", "RGRLAI",
        "SPA", "SPAN", "TBASE", "CVL", "CVO", "CVR", "CVS", "Q10", "RML",
        "RMO", "RMR", "RMS", "PERDL", "CFET", "DEPNR", "IAIRDU", "RDI",
        "RRI", "RDMCR", "RDRLV_NPK", "DVS_NPK_STOP", "DVS_NPK_TRANSL",
        "NPK_TRANSLRT_FR", "NCRIT_FR", "PCRIT_FR", "KCRIT_FR", "NMAXRT_FR",
        "NMAXST_FR", "PMAXRT_FR", "PMAXST_FR", "KMAXRT_FR", "KMAXST_FR",
        "NLAI_NPK", "NLUE_NPK", "NMAXSO", "PMAXSO", "KMAXSO", "NPART",
        "NSLA_NPK", "NRESIDLV", "NRESIDST", "NRESIDRT", "PRESIDLV",
        "PRESIDST", "PRESIDRT", "KRESIDLV", "KRESIDST", "KRESIDRT",
        "TCNT", "TCPT", "TCKT", "NFIX_FR",
    ),
    tables=(
        "VERNRTB", "DTSMTB", "SLATB", "SSATB", "KDIFTB", "EFFTB", "AMAXTB",
        "TMPFTB", "TMNFTB", "CO2AMAXTB", "CO2EFFTB", "CO2TRATB", "RFSETB",
        "FRTB", "FLTB", "FSTB", "FOTB", "RDRRTB", "RDRSTB", "NMAXLV_TB",
        "PMAXLV_TB", "KMAXLV_TB",
    ),
)

MANAGEMENT_FILE = ParameterFile(
    scalars=(
        "NRFTAB", "PRFTAB", "KRFTAB", "NMINS", "RTNMINS",
        "PMINS", "RTPMINS", "KMINS", "RTKMINS",
    ),
    tables=("FERNTAB", "FERPTAB", "FERKTAB", "IRRTAB"),
)


def _check_word(word: str) -> None:
    if len(word) > _MAX_WORD:
        raise InputFileError("very long strings in the input file")


def _read_value(text: str, pos: int, name: str) -> tuple[float, int]:
    """Read the number after the next '=' following ``pos``."""
    equals = text.find("=", pos)
    if equals < 0:
        raise InputFileError(f"no '=' after parameter {name}")
    match = _NUMBER.match(text, equals + 1)
    if match is None:
        raise InputFileError(f"no number after parameter {name}")
    return float(match.group(1)), match.end()


def parse_scalars(text: str, names) -> dict[str, float]:
    """Read ``NAME = value`` parameters that appear in the order of ``names``."""
    values: dict[str, float] = {}
    pos = 0
    for name in names:
        for match in _NONBLANK_RUN.finditer(text, pos):
            _check_word(match.group())
            if match.group() == name:
                values[name], pos = _read_value(text, match.end(), name)
                break
        else:
            raise InputFileError(f"parameter {name} not found")
    for match in _NONBLANK_RUN.finditer(text, pos):
        _check_word(match.group())
    return values


def _parse_scalars_anywhere(text: str, names) -> dict[str, float]:
    """Read ``NAME = value`` parameters, each at its first occurrence."""
    values: dict[str, float] = {}
    for name in names:
        for match in _NONBLANK_RUN.finditer(text):
            _check_word(match.group())
            if match.group() == name:
                values[name], _ = _read_value(text, match.end(), name)
                break
        else:
            raise InputFileError(f"parameter {name} not found")
    return values


def _scan(pattern: re.Pattern[str], line: str, pos: int) -> tuple[str, int] | None:
    match = pattern.match(line, pos)
    if match is None:
        return None
    return match.group(1), match.end()


def _parse_point(line: str, pos: int = 0) -> tuple[float, float] | None:
    """Parse ``x <separator> y`` starting at ``pos``."""
    x = _scan(_NUMBER, line, pos)
    if x is None:
        return None
    separator = _scan(_WORD, line, x[1])
    if separator is None:
        return None
    y = _scan(_NUMBER, line, separator[1])
    if y is None:
        return None
    return float(x[0]), float(y[0])


def parse_tables(text: str, names) -> dict[str, Table]:
    """Read ``NAME = x, y`` tables whose further points follow one per line."""
    lines = text.splitlines(keepends=True)
    tables: dict[str, Table] = {}
    for name in names:
        remaining = iter(lines)
        for line in remaining:
            if not line or line[0] in _SKIPPED_LINE_STARTS:
                continue
            words = line.split()
            if not words or words[0] != name:
                continue
            label = _scan(_WORD, line, 0)
            equals = _scan(_WORD, line, label[1]) if label else None
            first = _parse_point(line, equals[1]) if equals else None
            if first is None:
                raise InputFileError(f"table {name} has no first point")
            points = [first]
            for following in remaining:
                point = _parse_point(following)
                if point is None:
                    break
                points.append(point)
            tables[name] = Table(points)
            break
    missing = [name for name in names if name not in tables]
    if missing:
        raise InputFileError(f"tables not found: {', '.join(missing)}")
    return tables


def _read_text(path: str | PathLike[str]) -> str:
    try:
        return Path(path).read_text()
    except OSError as err:
        raise InputFileError(f"Cannot open input file {path}.") from err


def read_site_data(path: str | PathLike[str]) -> tuple[Site, float]:
    """Read a site file; return the site and its atmospheric CO2 concentration."""
    text = _read_text(path)
    try:
        values = parse_scalars(text, SITE_FILE.scalars)
    except InputFileError as err:
        raise InputFileError(
            f"Something wrong with the Site variables in file {path}: {err}"
        ) from err
    try:
        tables = parse_tables(text, SITE_FILE.tables)
    except InputFileError as err:
        raise InputFileError(
            f"Something wrong with the Site tables in file {path}: {err}"
        ) from err

    site = Site(
        flag_ground_water=values["IZT"],
        inf_rain_dependent=values["IFUNRN"],
        flag_drains=values["IDRAIN"],
        max_surface_storage=values["SSMAX"],
        init_soil_moisture=values["WAV"],
        groundwater_depth=values["ZTI"],
        drain_depth=values["DD"],
        soil_lim_root_depth=values["RDMSOL"],
        not_infiltrating=values["NOTINF"],
        surface_storage=values["SSI"],
        max_init_soil_m=values["SMLIM"],
        not_inf_table=tables["NINFTB"],
    )
    return site, values["CO2"]


def read_soil_data(path: str | PathLike[str]) -> WaterBalance:
    """Read a soil file into a water balance with all states at zero."""
    text = _read_text(path)
    try:
        values = _parse_scalars_anywhere(text, SOIL_FILE.scalars)
    except InputFileError as err:
        raise InputFileError(
            f"Something wrong with the Soil variables in file {path}: {err}"
        ) from err
    try:
        tables = parse_tables(text, SOIL_FILE.tables)
    except InputFileError as err:
        raise InputFileError(
            f"Something wrong with the Soil tables in file {path}: {err}"
        ) from err

    constants = SoilConstants(
        moisture_wp=values["SMW"],
        moisture_fc=values["SMFCF"],
        moisture_sat=values["SM0"],
        critical_soil_air_c=values["CRAIRC"],
        k0=values["K0"],
        max_percol_rtz=values["SOPE"],
        max_percol_subs=values["KSUB"],
    )
    return WaterBalance(
        ct=constants,
        volumetric_soil_moisture=tables["SMTAB"],
        hydraulic_conductivity=tables["CONTAB"],
    )