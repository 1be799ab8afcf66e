import pytest

from cropgrid.model import Crop, WaterBalance
from cropgrid.output import annual_header, daily_header, format_annual, format_daily


def test_headers():
    assert daily_header() == (
        "Lat,Lon,Year,Day,Dev_Stage,tsum_emergence,Trans,EvaWater,EvaSoil,"
        "N_demand,P_demand\n"
    )
    assert annual_header() == (
        "Lat,Lon,Year,Day,Storage,GrowthDay,N_Uptake,P_Uptake,N_grain,P_grain,"
        "N_residue,P_Residue\n"
    )


def _daily_crop():
    crop = Crop()
    crop.st.development = 1.234
    crop.tsum_emergence = 150.0
    crop.n_rt.demand_lv = 1.0
    crop.n_rt.demand_st = 0.5
    crop.n_rt.demand_ro = 0.25
    crop.n_rt.demand_so = 100.0
    crop.p_rt.demand_lv = 0.1
    return crop


def test_format_daily_fields():
    water = WaterBalance()
    water.rt.transpiration = 0.3
    water.rt.evap_soil = 0.12
    line = format_daily(52.0, 5.5, 2001, 45, _daily_crop(), water)
    assert line.endswith("\n")
    fields = line.rstrip("\n").split("\t")
    assert len(fields) == 11
    assert len(fields[0]) == 7
    assert float(fields[0]) == 52.0
    assert float(fields[1]) == 5.5
    assert int(fields[2]) == 2001
    assert int(fields[3]) == 45
    assert float(fields[4]) == pytest.approx(1.23)
    assert float(fields[6]) == pytest.approx(0.3)
    assert float(fields[8]) == pytest.approx(0.12)
    assert float(fields[9]) == pytest.approx(1.75)
    assert float(fields[10]) == pytest.approx(0.1)


def test_format_annual_fields():
    crop = Crop()
    crop.st.storage = 8000.0
    crop.st.leaves = 1000.0
    crop.st.stems = 2000.0
    crop.prm.n_residual_frac_lv = 0.004
    crop.prm.n_residual_frac_st = 0.002
    crop.growth_day = 5
    crop.n_st.uptake = 120.0
    crop.p_st.storage = 20.0
    line = format_annual(-10.25, 120.5, 2002, 200, crop)
    fields = line.rstrip("\n").split("\t")
    assert len(fields) == 12
    assert float(fields[0]) == -10.25
    assert float(fields[4]) == 8000.0
    assert fields[5] == "  05"
    assert float(fields[6]) == 120.0
    assert float(fields[9]) == 20.0
    assert float(fields[10]) == pytest.approx(
        1000.0 * 0.004 + 2000.0 * 0.002
    )
    assert float(fields[11]) == 0.0


def test_format_annual_wide_values_not_truncated():
    crop = Crop()
    crop.st.storage = 12345.678
    crop.growth_day = 170
    fields = format_annual(0.0, 0.0, 1999, 1, crop).split("\t")
    assert float(fields[4]) == pytest.approx(12345.68)
    assert int(fields[5]) == crop.growth_day