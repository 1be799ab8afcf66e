"""Text records for the daily and seasonal output files."""

from __future__ import annotations

from cropgrid.model import Crop, WaterBalance

_DAILY_HEADER = (
    "Lat,Lon,Year,Day,Dev_Stage,tsum_emergence,Trans,EvaWater,EvaSoil,"
    "N_demand,P_demand\n"
)
_ANNUAL_HEADER = (
    "Lat,Lon,Year,Day,Storage,GrowthDay,N_Uptake,P_Uptake,N_grain,P_grain,"
    "N_residue,P_Residue\n"
)

_DAILY_FORMAT = (
    "%7.2f\t%7.2f\t%4d\t%3d"
    "\t%4.2f\t%4.2f"
    "\t%4.2f\t%4.2f\t%4.2f"
    "\t%4.2f\t%4.2f\n"
)
_ANNUAL_FORMAT = (
    "%7.2f\t%7.2f\t%4d\t%3d"
    "\t%4.2f\t%4.2d"
    "\t%4.2f\t%4.2f"
    "\t%4.2f\t%4.2f\t%4.2f\t%4.2f\n"
)


def daily_header() -> str:
    """Header line of the daily output file."""
    return _DAILY_HEADER


def annual_header() -> str:
    """Header line of the seasonal output file."""
    return _ANNUAL_HEADER


def format_daily(
    latitude: float,
    longitude: float,
    year: int,
    day: int,
    crop: Crop,
    water_balance: WaterBalance,
) -> str:
    """One line of daily crop stage, water use and N/P demand."""
    n_demand = crop.n_rt.demand_lv + crop.n_rt.demand_st + crop.n_rt.demand_ro
    p_demand = crop.p_rt.demand_lv + crop.p_rt.demand_st + crop.p_rt.demand_ro
    return _DAILY_FORMAT % (
        latitude,
        longitude,
        year,
        day,
        crop.st.development,
        crop.tsum_emergence,
        water_balance.rt.transpiration,
        water_balance.rt.evap_water,
        water_balance.rt.evap_soil,
        n_demand,
        p_demand,
    )


def format_annual(
    latitude: float, longitude: float, year: int, day: int, crop: Crop
) -> str:
    """One line of seasonal yield, nutrient uptake and grain/residue contents."""
    prm, st = crop.prm, crop.st
    n_residue = st.leaves * prm.n_residual_frac_lv + st.stems * prm.n_residual_frac_st
    p_residue = st.leaves * prm.p_residual_frac_lv + st.stems * prm.p_residual_frac_st
    return _ANNUAL_FORMAT % (
        latitude,
        longitude,
        year,
        day,
        st.storage,
        crop.growth_day,
        crop.n_st.uptake,
        crop.p_st.uptake,
        crop.n_st.storage,
        crop.p_st.storage,
        n_residue,
        p_residue,
    )