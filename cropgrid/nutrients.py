"""Nutrient (N, P, K) concentrations, demand, translocation and soil supply."""

from __future__ import annotations

from typing import Iterator

from cropgrid.model import Crop, Management, NutrientRates, NutrientStates, Site, Table

_NUTRIENTS = ("n", "p", "k")


def _pools(crop: Crop) -> Iterator[tuple[str, NutrientStates, NutrientRates]]:
    """Yield the nutrient letter with the crop's states and rates for it."""
    yield "n", crop.n_st, crop.n_rt
    yield "p", crop.p_st, crop.p_rt
    yield "k", crop.k_st, crop.k_rt


def _translocation_constant(crop: Crop, nutrient: str) -> float:
    return getattr(crop.prm, f"tc{nutrient}t")


def nutrient_max(crop: Crop) -> None:
    """Set the maximum N, P, K concentrations (kg kg-1 DM) in the crop organs.

    Leaf maxima follow the development stage; stem and root maxima are
    fixed fractions of the leaf maximum.
    """
    prm = crop.prm
    for nutrient, states, _ in _pools(crop):
        table: Table | None = getattr(prm, f"{nutrient}_max_leaves")
        if table is None:
            raise ValueError(
                f"crop has no maximum {nutrient.upper()} leaf concentration table"
            )
        states.max_lv = table.interpolate(crop.st.development)
        states.max_st = getattr(prm, f"{nutrient}_max_stems") * states.max_lv
        states.max_ro = getattr(prm, f"{nutrient}_max_roots") * states.max_lv
        states.max_so = getattr(prm, f"max_{nutrient}_storage")


def nutrient_optimum(crop: Crop) -> None:
    """Set the optimum N, P, K amounts (kg ha-1) in leaves and stems."""
    for nutrient, states, _ in _pools(crop):
        fraction = getattr(crop.prm, f"opt_{nutrient}_frac")
        states.optimum_lv = fraction * states.max_lv * crop.st.leaves
        states.optimum_st = fraction * states.max_st * crop.st.stems


def nutrient_demand(crop: Crop) -> None:
    """Set the N, P, K demand of the crop organs (kg ha-1 d-1)."""
    st = crop.st
    for nutrient, states, rates in _pools(crop):
        rates.demand_lv = max(states.max_lv * st.leaves - states.leaves, 0.0)
        rates.demand_st = max(states.max_st * st.stems - states.stems, 0.0)
        rates.demand_ro = max(states.max_ro * st.roots - states.roots, 0.0)
        rates.demand_so = max(
            states.max_so * st.storage - states.storage, 0.0
        ) / _translocation_constant(crop, nutrient)


def nutrient_translocation(crop: Crop) -> None:
    """Set the translocatable N, P, K amounts (kg ha-1) and the daily supply."""
    prm, st = crop.prm, crop.st
    for nutrient, states, rates in _pools(crop):
        residual_lv = getattr(prm, f"{nutrient}_residual_frac_lv")
        residual_st = getattr(prm, f"{nutrient}_residual_frac_st")
        residual_ro = getattr(prm, f"{nutrient}_residual_frac_ro")

        states.avail_lv = max(0.0, states.leaves - st.leaves * residual_lv)
        states.avail_st = max(0.0, states.stems - st.stems * residual_st)
        states.avail_ro = max(
            (states.avail_lv + states.avail_st) * prm.frac_transloc_roots,
            states.roots - st.roots * residual_ro,
        )
        states.avail = states.avail_lv + states.avail_st + states.avail_ro

        if st.development > prm.development_stage_nt:
            rates.supply = states.avail / _translocation_constant(crop, nutrient)
        else:
            rates.supply = 0.0


def nutrition_index(crop: Crop) -> None:
    """Set the N, P, K nutrition indices and the nutrient stress factor.

    Nutrient limitation is switched off in this model: every index, the
    combined NPK index and the stress factor are fixed at 1.
    """
    for _, states, _ in _pools(crop):
        states.indx = 1.0
    crop.npk_index = 1.0
    crop.nutrient_stress = 1.0


def soil_nutrient_rates(
    crop: Crop,
    site: Site,
    management: Management,
    fertilizer: tuple[float, float, float],
    step: float,
) -> None:
    """Set the soil N, P, K mineralization and total change rates (kg ha-1 d-1).

    ``fertilizer`` holds today's N, P and K applications (kg ha-1), of which
    the management uptake fractions become available to the crop.
    """
    applied = dict(zip(_NUTRIENTS, fertilizer, strict=True))
    mineralizing = (
        0.0 < crop.st.development <= crop.prm.development_stage_n_limit
    )
    for nutrient, _, rates in _pools(crop):
        if mineralizing:
            potential = getattr(management, f"{nutrient}_mins") * getattr(
                management, f"{nutrient}_recovery_frac"
            )
            mins = min(potential, getattr(site, f"st_{nutrient}_mins"))
        else:
            mins = 0.0
        setattr(site, f"rt_{nutrient}_mins", mins)

        available = applied[nutrient] * getattr(management, f"{nutrient}_uptake_frac")
        setattr(site, f"rt_{nutrient}_tot", available / step - rates.uptake + mins)