"""Reference evaporation after Penman (1948) and Penman-Monteith (FAO)."""

from __future__ import annotations

import math
from dataclasses import dataclass

from cropgrid.model import Evaporation, limit

# Penman constants
_PSYCHROMETRIC_MBAR = 0.67  # psychrometric instrument constant (mbar C-1)
_ALBEDO_WATER = 0.05
_ALBEDO_SOIL = 0.15
_LATENT_HEAT = 2.45e6  # latent heat of evaporation of water (J kg-1 = J mm-1)
_STEFAN_BOLTZMANN = 4.9e-3  # J m-2 d-1 K-4

# Penman-Monteith constants
_PSYCHROMETRIC_KPA = 0.665
_ALBEDO_CANOPY = 0.23
_SURFACE_RESISTANCE = 70.0  # s m-1, reference crop canopy
_STEFAN_BOLTZMANN_PM = 4.903e-3
_SOIL_HEAT_FLUX = 0.0


@dataclass(frozen=True)
class WeatherDay:
    """Weather of one day at one grid cell.

    Temperatures in Celsius, radiation in J m-2 d-1, rain in cm d-1,
    wind speed in m s-1 and vapour pressure in kPa.
    """

    tmin: float
    tmax: float
    radiation: float
    rain: float = 0.0
    windspeed: float = 0.0
    vapour: float = 0.0


def penman(
    weather: WeatherDay,
    temp: float,
    altitude: float,
    angstrom_a: float,
    angstrom_b: float,
    atmospheric_transmission: float,
) -> Evaporation:
    """Open water (E0) and bare soil (ES0) evaporation in cm d-1.

    ``temp`` is the mean daily temperature; the returned ET0 is left at zero.
    """
    temp_diff = weather.tmax - weather.tmin
    wind_coefficient = 0.54 + 0.35 * limit(0.0, 1.0, (temp_diff - 12.0) / 4.0)

    # Barometric pressure (mbar) and psychrometric constant (mbar C-1)
    pressure = 1013.0 * math.exp(-0.034 * altitude / (temp + 273.0))
    gamma = _PSYCHROMETRIC_MBAR * pressure / 1013.0

    # Saturated vapour pressure (Goudriaan 1977) and the slope of its curve
    saturated = 6.10588 * math.exp(17.32491 * temp / (temp + 238.102))
    delta = 238.102 * 17.32491 * saturated / (temp + 238.102) ** 2
    # Measured vapour pressure in hPa, not above saturation
    vapour = min(10.0 * weather.vapour, saturated)

    # Relative sunshine duration from the Angstrom formula
    sunshine = limit(
        0.0, 1.0, (atmospheric_transmission - angstrom_a) / angstrom_b
    )

    # Net outgoing long-wave radiation after Brunt (1932), J m-2 d-1
    longwave = (
        _STEFAN_BOLTZMANN
        * (temp + 273.0) ** 4
        * (0.56 - 0.079 * math.sqrt(vapour))
        * (0.1 + 0.9 * sunshine)
    )

    # Net absorbed radiation, mm d-1
    net_water = (weather.radiation * (1.0 - _ALBEDO_WATER) - longwave) / _LATENT_HEAT
    net_soil = (weather.radiation * (1.0 - _ALBEDO_SOIL) - longwave) / _LATENT_HEAT

    # Evaporative demand of the atmosphere, mm d-1
    demand = (
        0.26
        * max(0.0, saturated - vapour)
        * (0.5 + wind_coefficient * weather.windspeed)
    )

    e0 = max(0.0, 0.1 * (delta * net_water + gamma * demand) / (delta + gamma))
    es0 = max(0.0, 0.1 * (delta * net_soil + gamma * demand) / (delta + gamma))
    return Evaporation(e0=e0, es0=es0)


def _saturated_vapour_kpa(temperature: float) -> float:
    return 0.6108 * math.exp((17.27 * temperature) / (237.3 + temperature))


def penman_monteith(
    weather: WeatherDay,
    temp: float,
    altitude: float,
    angot_radiation: float,
) -> float:
    """Reference crop evapotranspiration ET0 in cm d-1."""
    # Atmospheric pressure at a standard temperature of 293 K (kPa)
    pressure = 101.3 * ((293.0 - 0.0065 * altitude) / 293.0) ** 5.26
    gamma = _PSYCHROMETRIC_KPA * pressure * 1.0e-3

    # Slope of the saturated vapour pressure curve at mean temperature
    delta = (4098.0 * _saturated_vapour_kpa(temp)) / (temp + 237.3) ** 2

    saturated = (
        _saturated_vapour_kpa(weather.tmax) + _saturated_vapour_kpa(weather.tmin)
    ) / 2.0
    vapour = min(weather.vapour, saturated)

    # Preliminary net outgoing long-wave radiation (J m-2 d-1)
    stb_tmax = _STEFAN_BOLTZMANN_PM * (273.16 + weather.tmax) ** 4
    stb_tmin = _STEFAN_BOLTZMANN_PM * (273.16 + weather.tmin) ** 4
    longwave_base = ((stb_tmax + stb_tmin) / 2.0) * (0.34 - 0.14 * math.sqrt(vapour))

    # Clear sky radiation from Angot top-of-atmosphere radiation
    clear_sky = (0.75 + 2e-05 * altitude) * angot_radiation
    if clear_sky <= 0:
        return 0.0

    longwave = longwave_base * (1.35 * (weather.radiation / clear_sky) - 0.35)
    radiative = ((1 - _ALBEDO_CANOPY) * weather.radiation - longwave) / _LATENT_HEAT
    aerodynamic = (900.0 / (temp + 273.0)) * weather.windspeed * (saturated - vapour)
    modified_gamma = gamma * (1.0 + (_SURFACE_RESISTANCE / 208.0 * weather.windspeed))

    et0 = (delta * (radiative - _SOIL_HEAT_FLUX)) / (delta + modified_gamma) + (
        gamma * aerodynamic
    ) / (delta + modified_gamma)
    return max(0.0, 0.1 * et0)