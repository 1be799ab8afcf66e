"""Soil water balance of the rooted zone and the subsoil below it."""

from __future__ import annotations

import math

from cropgrid.model import Crop, EvapTranspiration, Site, Table, WaterBalance, limit


def _require(table: Table | None, what: str) -> Table:
    if table is None:
        raise ValueError(f"missing {what} table")
    return table


def initialize_water_balance(
    water_balance: WaterBalance,
    crop: Crop,
    site: Site,
    soil_evaporation_potential: float,
) -> None:
    """Set the initial water balance states at crop emergence.

    ``soil_evaporation_potential`` is the Penman bare soil evaporation ES0
    (cm d-1) used for the first day's soil evaporation.
    """
    k_diffuse_table = _require(crop.prm.k_diffuse_tb, "diffuse light extinction")
    wb, ct = water_balance, water_balance.ct

    # Crop growth has not started yet and there is no water stress
    wb.soil_max_rooting_depth = 0.0
    wb.water_stress = 1.0
    wb.inf_previous_day = 0.0

    # Initial soil moisture lies between wilting point and saturation
    site.max_init_soil_m = min(max(site.max_init_soil_m, ct.moisture_wp), ct.moisture_sat)

    wb.st.surface_storage = site.surface_storage

    # A rice crop starts on a saturated soil
    if crop.prm.airducts:
        site.max_init_soil_m = ct.moisture_sat

    wb.st.moisture = limit(
        ct.moisture_wp,
        site.max_init_soil_m,
        ct.moisture_wp + site.init_soil_moisture / crop.st.root_depth,
    )
    wb.st.root_zone_moisture = wb.st.moisture * crop.st.root_depth

    # Days since last rain, for soil evaporation
    wb.days_since_last_rain = 1.0
    if wb.st.moisture <= ct.moisture_wp + 0.5 * (ct.moisture_fc - ct.moisture_wp):
        wb.days_since_last_rain = 5.0

    # Moisture between the rooted zone and the maximum rooting depth
    wb.st.moisture_low = limit(
        0.0,
        ct.moisture_sat * (crop.prm.max_rooting_depth - crop.st.root_depth),
        site.init_soil_moisture
        + crop.prm.max_rooting_depth * ct.moisture_wp
        - wb.st.root_zone_moisture,
    )

    k_diffuse = k_diffuse_table.interpolate(crop.st.development)
    wb.rt.evap_soil = max(
        0.0, soil_evaporation_potential * math.exp(-0.75 * k_diffuse * crop.st.lai)
    )


def rate_water_balance(
    water_balance: WaterBalance,
    crop: Crop,
    site: Site,
    evtra: EvapTranspiration,
    rain: float,
    irrigation: float,
    step: float,
) -> None:
    """Compute today's water balance rates (cm d-1).

    ``rain`` and ``irrigation`` are today's amounts; the transpiration rate
    must already be set on the water balance.
    """
    wb, ct, rt = water_balance, water_balance.ct, water_balance.rt

    rt.irrigation = irrigation

    if wb.st.surface_storage > 1.0:
        rt.evap_water = evtra.max_evap_water
    elif wb.inf_previous_day >= 1.0:
        # At least 1 cm infiltrated yesterday: maximum soil evaporation
        rt.evap_soil = evtra.max_evap_soil
        wb.days_since_last_rain = 1.0
    else:
        wb.days_since_last_rain += 1.0
        days = wb.days_since_last_rain
        reduced = evtra.max_evap_soil * (math.sqrt(days) - math.sqrt(days - 1))
        rt.evap_soil = min(evtra.max_evap_soil, reduced + wb.inf_previous_day)

    # Preliminary infiltration rate
    if wb.st.surface_storage <= 0.1:
        if site.inf_rain_dependent:
            table = _require(site.not_inf_table, "non-infiltrating fraction")
            not_infiltrating = site.not_infiltrating * table.interpolate(rain)
        else:
            not_infiltrating = site.not_infiltrating
        preliminary = (
            (1.0 - not_infiltrating) * rain
            + rt.irrigation
            + wb.st.surface_storage / step
        )
    else:
        # Infiltration limited by the maximum percolation rate of the root zone
        available = wb.st.surface_storage + (
            rain * (1.0 - site.not_infiltrating) + rt.irrigation - rt.evap_soil
        ) * step
        preliminary = min(ct.max_percol_rtz * step, available) / step

    # Percolation from the rooted zone: excess over field capacity
    equilibrium = ct.moisture_fc * crop.st.root_depth
    perc_root_zone = limit(
        0.0,
        ct.max_percol_rtz,
        (wb.st.root_zone_moisture - equilibrium) / step
        - rt.transpiration
        - rt.evap_soil,
    )

    # Loss at the lower end of the maximum root zone
    subsoil_depth = crop.prm.max_rooting_depth - crop.st.root_depth
    equilibrium_low = ct.moisture_fc * subsoil_depth
    rt.loss = limit(
        0.0,
        ct.max_percol_subs,
        (wb.st.moisture_low - equilibrium_low) / step + perc_root_zone,
    )

    # Rice loses at most K0/20
    if crop.prm.airducts:
        rt.loss = min(rt.loss, 0.05 * ct.k0)

    # Percolation may not exceed the uptake capacity of the subsoil
    perc_subsoil = (
        subsoil_depth * ct.moisture_sat - wb.st.moisture_low
    ) / step + rt.loss
    rt.percolation = min(perc_root_zone, perc_subsoil)

    rt.infiltration = max(
        0.0,
        min(
            preliminary,
            (ct.moisture_sat - wb.st.moisture) * crop.st.root_depth / step
            + rt.transpiration
            + rt.evap_soil
            + rt.percolation,
        ),
    )

    rt.root_zone_moisture = (
        -rt.transpiration - rt.evap_soil - rt.percolation + rt.infiltration
    )
    rt.moisture_low = rt.percolation - rt.loss


def integrate_water_balance(
    water_balance: WaterBalance,
    crop: Crop,
    site: Site,
    rain: float,
    step: float,
) -> None:
    """Integrate today's water balance rates into the states."""
    wb, st, rt = water_balance, water_balance.st, water_balance.rt

    st.transpiration += rt.transpiration
    st.evap_water += rt.evap_water
    st.evap_soil += rt.evap_soil

    st.rain += rain
    st.infiltration += rt.infiltration
    st.irrigation += rt.irrigation

    # Surface storage and runoff
    pre_surface_storage = st.surface_storage + (
        rain + rt.irrigation - rt.evap_water - rt.infiltration
    ) * step
    st.surface_storage = min(pre_surface_storage, site.max_surface_storage)
    st.runoff += pre_surface_storage - st.surface_storage

    # Water in the rooted zone; a deficit is booked against soil evaporation
    st.root_zone_moisture += rt.root_zone_moisture * step
    if st.root_zone_moisture < 0.0:
        st.evap_soil += st.root_zone_moisture
        st.root_zone_moisture = 0.0

    st.percolation += rt.percolation * step
    st.loss += rt.loss * step
    st.moisture_low += rt.moisture_low

    # Water taken into the root zone as the roots grow deeper
    growth = crop.st.root_depth - crop.st.root_depth_prev
    if growth > 0.001:
        extension = st.moisture_low * growth / (
            crop.prm.max_rooting_depth - crop.st.root_depth_prev
        )
        extension = min(extension, st.moisture_low)
        st.moisture_low -= extension
        st.water_root_ext += extension
        st.root_zone_moisture += extension

    st.moisture = st.root_zone_moisture / crop.st.root_depth
    wb.inf_previous_day = rt.infiltration