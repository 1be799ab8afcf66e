"""State, rate and parameter containers for the crop, soil and site simulation."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterable, Iterator


def limit(low: float, high: float, value: float) -> float:
    """Clamp ``value`` to the closed interval ``[low, high]``."""
    if value < low:
        return low
    if value > high:
        return high
    return value


@dataclass(frozen=True)
class Table:
    """A piecewise linear function given by ``(x, y)`` points in ascending x."""

    points: tuple[tuple[float, float], ...]

    def __init__(self, points: Iterable[tuple[float, float]]) -> None:
        pairs = tuple((float(x), float(y)) for x, y in points)
        if not pairs:
            raise ValueError("a table needs at least one point")
        object.__setattr__(self, "points", pairs)
        object.__setattr__(self, "_xs", tuple(x for x, _ in pairs))

    def __iter__(self) -> Iterator[tuple[float, float]]:
        return iter(self.points)

    def __len__(self) -> int:
        return len(self.points)

    def interpolate(self, x: float) -> float:
        """Return the linearly interpolated y at ``x``, clamped to the end values."""
        xs = self._xs  # type: ignore[attr-defined]
        if x <= xs[0]:
            return self.points[0][1]
        if x >= xs[-1]:
            return self.points[-1][1]
        upper = bisect_right(xs, x)
        x0, y0 = self.points[upper - 1]
        x1, y1 = self.points[upper]
        if x1 == x0:
            return y1
        return y0 + (x - x0) * (y1 - y0) / (x1 - x0)


@dataclass
class GrowthRates:
    """Daily growth rates of the crop organs (kg ha-1 d-1)."""

    roots: float = 0.0
    stems: float = 0.0
    leaves: float = 0.0
    lai_exp: float = 0.0
    storage: float = 0.0
    development: float = 0.0
    root_depth: float = 0.0
    vernalization: float = 0.0


@dataclass
class GrowthStates:
    """Accumulated crop organ weights and development."""

    roots: float = 0.0
    stems: float = 0.0
    leaves: float = 0.0
    lai: float = 0.0
    lai_exp: float = 0.0
    storage: float = 0.0
    development: float = 0.0
    root_depth: float = 0.0
    root_depth_prev: float = 0.0
    vernalization: float = 0.0


@dataclass
class DyingRates:
    """Death of crop organs, used for both rates and accumulated states."""

    roots: float = 0.0
    stems: float = 0.0
    leaves: float = 0.0


@dataclass
class NutrientRates:
    """Daily rates of one nutrient (N, P or K) in the crop (kg ha-1 d-1)."""

    roots: float = 0.0
    stems: float = 0.0
    leaves: float = 0.0
    storage: float = 0.0
    demand_lv: float = 0.0
    demand_st: float = 0.0
    demand_ro: float = 0.0
    demand_so: float = 0.0
    supply: float = 0.0
    transloc: float = 0.0
    transloc_lv: float = 0.0
    transloc_st: float = 0.0
    transloc_ro: float = 0.0
    uptake: float = 0.0
    uptake_lv: float = 0.0
    uptake_st: float = 0.0
    uptake_ro: float = 0.0
    death_lv: float = 0.0
    death_st: float = 0.0
    death_ro: float = 0.0


@dataclass
class NutrientStates:
    """Amounts and concentrations of one nutrient (N, P or K) in the crop."""

    roots: float = 0.0
    stems: float = 0.0
    leaves: float = 0.0
    storage: float = 0.0
    max_lv: float = 0.0
    max_st: float = 0.0
    max_ro: float = 0.0
    max_so: float = 0.0
    optimum_lv: float = 0.0
    optimum_st: float = 0.0
    indx: float = 0.0
    uptake: float = 0.0
    uptake_lv: float = 0.0
    uptake_st: float = 0.0
    uptake_ro: float = 0.0
    death_lv: float = 0.0
    death_st: float = 0.0
    death_ro: float = 0.0
    avail: float = 0.0
    avail_lv: float = 0.0
    avail_st: float = 0.0
    avail_ro: float = 0.0


@dataclass
class CropParameters:
    """Crop parameters and lookup tables."""

    # Partitioning tables as a function of development stage
    roots: Table | None = None
    stems: Table | None = None
    leaves: Table | None = None
    storage: Table | None = None

    vernalization_rate: Table | None = None
    delta_temp_sum: Table | None = None
    specific_leaf_area: Table | None = None
    specific_stem_area: Table | None = None
    k_diffuse_tb: Table | None = None
    eff_tb: Table | None = None
    max_assim_rate: Table | None = None
    factor_assim_rate_temp: Table | None = None
    factor_gross_assim_temp: Table | None = None
    factor_senescence: Table | None = None
    death_rate_stems: Table | None = None
    death_rate_roots: Table | None = None

    # Atmospheric CO2 corrections
    co2_amax_tb: Table | None = None
    co2_eff_tb: Table | None = None
    co2_tra_tb: Table | None = None

    # Maximum nutrient concentration in leaves as a function of development stage
    n_max_leaves: Table | None = None
    p_max_leaves: Table | None = None
    k_max_leaves: Table | None = None

    # Emergence
    temp_base_emergence: float = 0.0
    temp_eff_max: float = 0.0
    tsum_emergence: float = 0.0

    # Phenology
    identify_anthesis: int = 0
    optimum_daylength: float = 0.0
    critical_daylength: float = 0.0
    sat_vern_requirement: float = 0.0
    base_vern_requirement: float = 0.0
    temp_sum1: float = 0.0
    temp_sum2: float = 0.0
    initial_dvs: float = 0.0
    develop_stage_harvest: float = 0.0

    # Initial values
    initial_dry_weight: float = 0.0
    rel_increase_lai: float = 0.0

    # Green area
    specific_pod_area: float = 0.0
    life_span: float = 0.0
    temp_base_leaves: float = 0.0

    # Conversion of assimilates into biomass
    conversion_leaves: float = 0.0
    conversion_storage: float = 0.0
    conversion_roots: float = 0.0
    conversion_stems: float = 0.0

    # Maintenance respiration
    q10: float = 0.0
    rel_respi_leaves: float = 0.0
    rel_respi_storage: float = 0.0
    rel_respi_roots: float = 0.0
    rel_respi_stems: float = 0.0

    # Death rates
    max_rel_death_rate: float = 0.0

    # Water use
    correction_transp: float = 0.0
    crop_group_number: float = 0.0
    airducts: float = 0.0

    # Rooting
    init_rooting_depth: float = 0.0
    max_increase_root: float = 0.0
    max_rooting_depth: float = 0.0

    # Nutrients
    dying_leaves_npk_stress: float = 0.0
    development_stage_n_limit: float = 0.0
    development_stage_nt: float = 0.0
    frac_transloc_roots: float = 0.0
    opt_n_frac: float = 0.0
    opt_p_frac: float = 0.0
    opt_k_frac: float = 0.0
    n_max_roots: float = 0.0
    n_max_stems: float = 0.0
    p_max_roots: float = 0.0
    p_max_stems: float = 0.0
    k_max_roots: float = 0.0
    k_max_stems: float = 0.0
    nitrogen_stress_lai: float = 0.0
    nlue: float = 0.0
    max_n_storage: float = 0.0
    max_p_storage: float = 0.0
    max_k_storage: float = 0.0
    n_lv_partitioning: float = 0.0
    nutrient_stress_sla: float = 0.0
    n_residual_frac_lv: float = 0.0
    n_residual_frac_st: float = 0.0
    n_residual_frac_ro: float = 0.0
    p_residual_frac_lv: float = 0.0
    p_residual_frac_st: float = 0.0
    p_residual_frac_ro: float = 0.0
    k_residual_frac_lv: float = 0.0
    k_residual_frac_st: float = 0.0
    k_residual_frac_ro: float = 0.0
    tcnt: float = 0.0
    tcpt: float = 0.0
    tckt: float = 0.0
    n_fixation: float = 0.0


@dataclass
class Crop:
    """The crop of one simulation unit: parameters, states and rates."""

    emergence: int = 0
    sowing: int = 0
    seasons: int = 0
    growth_day: int = 0
    npk_index: float = 0.0
    nutrient_stress: float = 0.0
    days_oxygen_stress: float = 0.0
    tsum_emergence: float = 0.0
    fac_ro: float = 0.0
    fac_lv: float = 0.0
    fac_st: float = 0.0
    fac_so: float = 0.0

    prm: CropParameters = field(default_factory=CropParameters)

    rt: GrowthRates = field(default_factory=GrowthRates)
    st: GrowthStates = field(default_factory=GrowthStates)
    drt: DyingRates = field(default_factory=DyingRates)
    dst: DyingRates = field(default_factory=DyingRates)

    n_st: NutrientStates = field(default_factory=NutrientStates)
    p_st: NutrientStates = field(default_factory=NutrientStates)
    k_st: NutrientStates = field(default_factory=NutrientStates)

    n_rt: NutrientRates = field(default_factory=NutrientRates)
    p_rt: NutrientRates = field(default_factory=NutrientRates)
    k_rt: NutrientRates = field(default_factory=NutrientRates)

    leaf_properties: list = field(default_factory=list)


@dataclass
class SoilConstants:
    """Physical soil constants."""

    max_evap_water: float = 0.0
    moisture_fc: float = 0.0
    moisture_wp: float = 0.0
    moisture_sat: float = 0.0
    critical_soil_air_c: float = 0.0
    max_percol_rtz: float = 0.0
    max_percol_subs: float = 0.0
    max_surface_storage: float = 0.0
    k0: float = 0.0


@dataclass
class WaterStates:
    """Accumulated water balance amounts (cm)."""

    evap_water: float = 0.0
    evap_soil: float = 0.0
    infiltration: float = 0.0
    irrigation: float = 0.0
    loss: float = 0.0
    moisture: float = 0.0
    moisture_low: float = 0.0
    percolation: float = 0.0
    rain: float = 0.0
    root_zone_moisture: float = 0.0
    runoff: float = 0.0
    surface_storage: float = 0.0
    transpiration: float = 0.0
    water_root_ext: float = 0.0


@dataclass
class WaterRates:
    """Daily water balance rates (cm d-1)."""

    evap_water: float = 0.0
    evap_soil: float = 0.0
    infiltration: float = 0.0
    irrigation: float = 0.0
    loss: float = 0.0
    moisture: float = 0.0
    moisture_low: float = 0.0
    percolation: float = 0.0
    root_zone_moisture: float = 0.0
    runoff: float = 0.0
    transpiration: float = 0.0
    water_root_ext: float = 0.0


@dataclass
class WaterBalance:
    """The soil water balance of one simulation unit."""

    days_since_last_rain: float = 0.0
    soil_max_rooting_depth: float = 0.0
    water_stress: float = 0.0
    inf_previous_day: float = 0.0

    volumetric_soil_moisture: Table | None = None
    hydraulic_conductivity: Table | None = None

    ct: SoilConstants = field(default_factory=SoilConstants)
    st: WaterStates = field(default_factory=WaterStates)
    rt: WaterRates = field(default_factory=WaterRates)


@dataclass
class Site:
    """Site water parameters and soil mineral states and rates."""

    flag_ground_water: float = 0.0
    inf_rain_dependent: float = 0.0
    flag_drains: float = 0.0
    max_surface_storage: float = 0.0
    init_soil_moisture: float = 0.0
    groundwater_depth: float = 0.0
    drain_depth: float = 0.0
    soil_lim_root_depth: float = 0.0
    not_infiltrating: float = 0.0
    surface_storage: float = 0.0
    max_init_soil_m: float = 0.0

    st_n_tot: float = 0.0
    st_p_tot: float = 0.0
    st_k_tot: float = 0.0

    st_n_mins: float = 0.0
    st_p_mins: float = 0.0
    st_k_mins: float = 0.0

    rt_n_tot: float = 0.0
    rt_p_tot: float = 0.0
    rt_k_tot: float = 0.0

    rt_n_mins: float = 0.0
    rt_p_mins: float = 0.0
    rt_k_mins: float = 0.0

    # Fraction of precipitation that does not infiltrate, as a function of rain
    not_inf_table: Table | None = None


@dataclass
class Management:
    """Fertilizer, irrigation and mineralization settings.

    Dated tables hold ``(month, day, amount)`` entries.
    """

    n_fert_table: list[tuple[int, int, float]] = field(default_factory=list)
    p_fert_table: list[tuple[int, int, float]] = field(default_factory=list)
    k_fert_table: list[tuple[int, int, float]] = field(default_factory=list)
    irrigation: list[tuple[int, int, float]] = field(default_factory=list)

    n_mins: float = 0.0
    n_recovery_frac: float = 0.0
    p_mins: float = 0.0
    p_recovery_frac: float = 0.0
    k_mins: float = 0.0
    k_recovery_frac: float = 0.0
    n_uptake_frac: float = 0.0
    p_uptake_frac: float = 0.0
    k_uptake_frac: float = 0.0


@dataclass
class Evaporation:
    """Reference evaporation rates (cm d-1)."""

    e0: float = 0.0
    es0: float = 0.0
    et0: float = 0.0


@dataclass
class EvapTranspiration:
    """Maximum evaporation and transpiration rates (cm d-1)."""

    max_evap_water: float = 0.0
    max_evap_soil: float = 0.0
    max_transpiration: float = 0.0