import pytest

from cropgrid.model import (
    Crop,
    Evaporation,
    EvapTranspiration,
    Management,
    Site,
    Table,
    WaterBalance,
    limit,
)


def test_limit_inside_range_returns_value():
    assert limit(0.0, 1.0, 0.25) == 0.25


def test_limit_below_returns_low():
    assert limit(0.0, 1.0, -3.0) == 0.0


def test_limit_above_returns_high():
    assert limit(0.0, 1.0, 7.0) == 1.0


def test_table_requires_points():
    with pytest.raises(ValueError):
        Table([])


def test_table_clamps_below_first_point():
    table = Table([(0.0, 2.0), (1.0, 4.0)])
    assert table.interpolate(-5.0) == 2.0


def test_table_clamps_above_last_point():
    table = Table([(0.0, 2.0), (1.0, 4.0)])
    assert table.interpolate(10.0) == 4.0


def test_table_returns_exact_values_at_points():
    points = [(0.0, 1.0), (0.5, 3.0), (2.0, -1.0)]
    table = Table(points)
    for x, y in points:
        assert table.interpolate(x) == pytest.approx(y)


def test_table_interpolates_linearly():
    table = Table([(0.0, 0.0), (10.0, 10.0)])
    assert table.interpolate(5.0) == pytest.approx(5.0)


def test_table_interpolation_stays_between_neighbours():
    table = Table([(0.0, 1.0), (1.0, 3.0), (2.0, 2.0)])
    for step in range(1, 20):
        x = step / 10.0
        value = table.interpolate(x)
        assert 1.0 <= value <= 3.0


def test_single_point_table_is_constant():
    table = Table([(1.0, 0.7)])
    assert table.interpolate(-1.0) == 0.7
    assert table.interpolate(1.0) == 0.7
    assert table.interpolate(9.0) == 0.7


def test_table_iterates_and_has_length():
    table = Table([(0, 1), (2, 3)])
    assert len(table) == 2
    assert list(table) == [(0.0, 1.0), (2.0, 3.0)]


def test_crops_do_not_share_states():
    first = Crop()
    second = Crop()
    first.st.leaves = 12.0
    first.n_rt.uptake = 3.0
    assert second.st.leaves == 0.0
    assert second.n_rt.uptake == 0.0
    assert first.n_st is not first.p_st


def test_crop_dying_rates_and_states_are_separate():
    crop = Crop()
    crop.drt.leaves = 4.0
    assert crop.dst.leaves == 0.0


def test_water_balance_defaults_are_zero():
    balance = WaterBalance()
    assert balance.st.surface_storage == 0.0
    assert balance.rt.percolation == 0.0
    assert balance.ct.moisture_sat == 0.0
    assert balance.volumetric_soil_moisture is None


def test_site_and_management_defaults():
    site = Site()
    management = Management()
    assert site.not_inf_table is None
    assert site.rt_n_tot == 0.0
    assert management.irrigation == []
    assert Management().n_fert_table is not management.n_fert_table


def test_evaporation_containers_hold_values():
    evaporation = Evaporation(e0=0.3, es0=0.2, et0=0.25)
    evtra = EvapTranspiration(max_evap_soil=0.1)
    assert (evaporation.e0, evaporation.es0, evaporation.et0) == (0.3, 0.2, 0.25)
    assert evtra.max_evap_soil == 0.1
    assert evtra.max_transpiration == 0.0