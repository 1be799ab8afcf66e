import pytest

from cropgrid.inputs import (
    InputFileError,
    parse_scalars,
    parse_tables,
    read_site_data,
    read_soil_data,
)

SITE_TEXT = """** site parameters
IZT    = 0
IFUNRN = 1
IDRAIN = 0
SSMAX  = 0.5
WAV    = 20.0
ZTI    = 999.0
DD     = 0.0
RDMSOL = 120.0
NOTINF = 0.2
SSI    = 0.1
SMLIM  = 0.35
CO2    = 360.0

NINFTB = 0.0, 0.0
         0.5, 0.0
         1.5, 1.0
"""

SOIL_TEXT = """** soil parameters
SM0    = 0.45
SMW    = 0.10
SMFCF  = 0.30
CRAIRC = 0.06
K0     = 10.0
SOPE   = 1.5
KSUB   = 1.2
SPADS  = 0.1
SPODS  = 0.03
SPASS  = 0.2
SPOSS  = 0.05
DEFLIM = -0.3

SMTAB  = -1.0, 0.45
          1.0, 0.40
          4.2, 0.10
CONTAB = 0.0, 1.5
         4.2, -5.0
"""


def test_parse_scalars_reads_values_in_order():
    values = parse_scalars("A = 1.5\nB = -2\nC=3e2\n", ("A", "B"))
    assert values == {"A": 1.5, "B": -2.0}


def test_parse_scalars_requires_order():
    with pytest.raises(InputFileError):
        parse_scalars("B = 2\nA = 1\n", ("A", "B"))


def test_parse_scalars_missing_parameter():
    with pytest.raises(InputFileError):
        parse_scalars("A = 1\n", ("A", "B"))


def test_parse_scalars_rejects_long_words():
    text = "A = 1\n" + "x" * 120 + "\n"
    with pytest.raises(InputFileError):
        parse_scalars(text, ("A",))


def test_parse_scalars_requires_equals_sign():
    with pytest.raises(InputFileError):
        parse_scalars("A 1\n", ("A",))


def test_parse_tables_reads_continuation_lines():
    text = "TB = 0.0, 1.0\n 2.0, 3.0\n 4.0, 5.0\nOTHER = 1\n 9.0, 9.0\n"
    tables = parse_tables(text, ("TB",))
    assert list(tables["TB"]) == [(0.0, 1.0), (2.0, 3.0), (4.0, 5.0)]


def test_parse_tables_skips_comment_lines():
    text = "* TB = 7.0, 7.0\nTB = 1.0, 2.0\n"
    tables = parse_tables(text, ("TB",))
    assert list(tables["TB"]) == [(1.0, 2.0)]


def test_parse_tables_missing_table():
    with pytest.raises(InputFileError):
        parse_tables("TB = 1.0, 2.0\n", ("TB", "TC"))


def test_parse_tables_point_needs_separator():
    tables = parse_tables("TB = 1.0, 2.0\n 3.0 4.0\n", ("TB",))
    assert list(tables["TB"]) == [(1.0, 2.0)]


def test_read_site_data(tmp_path):
    path = tmp_path / "site.txt"
    path.write_text(SITE_TEXT)
    site, co2 = read_site_data(path)
    assert co2 == 360.0
    assert site.inf_rain_dependent == 1.0
    assert site.max_surface_storage == 0.5
    assert site.init_soil_moisture == 20.0
    assert site.not_infiltrating == pytest.approx(0.2)
    assert site.max_init_soil_m == pytest.approx(0.35)
    assert list(site.not_inf_table) == [(0.0, 0.0), (0.5, 0.0), (1.5, 1.0)]


def test_read_site_data_missing_table(tmp_path):
    path = tmp_path / "site.txt"
    path.write_text(SITE_TEXT.split("NINFTB")[0])
    with pytest.raises(InputFileError, match="Site tables"):
        read_site_data(path)


def test_read_soil_data_any_order(tmp_path):
    path = tmp_path / "soil.txt"
    path.write_text(SOIL_TEXT)
    wb = read_soil_data(path)
    assert wb.ct.moisture_sat == pytest.approx(0.45)
    assert wb.ct.moisture_wp == pytest.approx(0.10)
    assert wb.ct.moisture_fc == pytest.approx(0.30)
    assert wb.ct.k0 == 10.0
    assert wb.ct.max_percol_rtz == 1.5
    assert wb.ct.max_percol_subs == pytest.approx(1.2)
    assert list(wb.hydraulic_conductivity) == [(0.0, 1.5), (4.2, -5.0)]
    assert len(wb.volumetric_soil_moisture) == 3
    assert wb.st.root_zone_moisture == 0.0


def test_read_soil_data_missing_variable(tmp_path):
    path = tmp_path / "soil.txt"
    path.write_text(SOIL_TEXT.replace("KSUB", "XSUB"))
    with pytest.raises(InputFileError, match="Soil variables"):
        read_soil_data(path)


def test_missing_file(tmp_path):
    with pytest.raises(InputFileError, match="Cannot open"):
        read_soil_data(tmp_path / "absent.txt")