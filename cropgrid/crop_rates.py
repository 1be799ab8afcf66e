"""Resetting of daily rates and maintenance respiration of the crop."""

from __future__ import annotations

from cropgrid.model import Crop, DyingRates, GrowthRates, Site, WaterBalance, WaterRates

# Nutrient rate fields cleared each day; supply and per-organ
# translocation are carried over.
_NUTRIENT_RATE_FIELDS = (
    "death_lv",
    "death_st",
    "death_ro",
    "leaves",
    "stems",
    "storage",
    "roots",
    "demand_lv",
    "demand_st",
    "demand_ro",
    "demand_so",
    "transloc",
    "uptake",
    "uptake_lv",
    "uptake_st",
    "uptake_ro",
)

_REFERENCE_TEMPERATURE = 25.0


def zero_rates(crop: Crop, site: Site, water_balance: WaterBalance) -> None:
    """Set the daily rates of crop, site and water balance to zero."""
    crop.drt = DyingRates()
    crop.rt = GrowthRates()

    for rates in (crop.n_rt, crop.p_rt, crop.k_rt):
        for name in _NUTRIENT_RATE_FIELDS:
            setattr(rates, name, 0.0)

    site.rt_n_mins = site.rt_p_mins = site.rt_k_mins = 0.0
    site.rt_n_tot = site.rt_p_tot = site.rt_k_tot = 0.0

    # Transpiration is set elsewhere before the water balance rates run.
    water_balance.rt = WaterRates(transpiration=water_balance.rt.transpiration)


def maintenance_respiration(
    crop: Crop, total_assimilation: float, temp: float
) -> float:
    """Maintenance respiration (kg ha-1 d-1), never above ``total_assimilation``."""
    table = crop.prm.factor_senescence
    if table is None:
        raise ValueError("crop has no senescence factor table")
    prm, st = crop.prm, crop.st
    respiration = (
        prm.rel_respi_leaves * st.leaves
        + prm.rel_respi_storage * st.storage
        + prm.rel_respi_roots * st.roots
        + prm.rel_respi_stems * st.stems
    )
    respiration *= table.interpolate(st.development)
    respiration *= prm.q10 ** (0.1 * (temp - _REFERENCE_TEMPERATURE))
    return min(respiration, total_assimilation)