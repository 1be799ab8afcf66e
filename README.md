# cropgrid

Building blocks for a daily crop growth model. The crop, soil, site and
management state are held in plain dataclasses, and each daily process step
is a function that reads and updates them.

## Modules

- `cropgrid.model`: the state containers `Crop`, `CropParameters`,
  `GrowthRates`, `GrowthStates`, `DyingRates`, `NutrientStates`,
  `NutrientRates`, `WaterBalance`, `SoilConstants`, `WaterStates`,
  `WaterRates`, `Site`, `Management`, `Evaporation` and `EvapTranspiration`.
  It also holds `Table`, a piecewise linear lookup whose `interpolate(x)` is
  clamped to the end values, and `limit(low, high, value)`.
- `cropgrid.penman`: `penman(...)` returns an `Evaporation` with open water
  (`e0`) and bare soil (`es0`) evaporation after Penman (1948).
  `penman_monteith(...)` returns the FAO reference evapotranspiration ET0.
  Both take a `WeatherDay` and give their results in cm per day.
- `cropgrid.crop_rates`: `zero_rates(crop, site, water_balance)` clears the
  daily rates. `maintenance_respiration(crop, total_assimilation, temp)`
  returns the Q10-scaled maintenance respiration, which is never more than the
  assimilation.
- `cropgrid.nutrients`: `nutrient_max`, `nutrient_optimum`,
  `nutrient_demand`, `nutrient_translocation`, `nutrition_index` and
  `soil_nutrient_rates` handle N, P and K. In this model `nutrition_index`
  fixes every index and the nutrient stress factor at 1.
- `cropgrid.waterbalance`: `initialize_water_balance`,
  `rate_water_balance` and `integrate_water_balance` run a free-draining
  water balance for the root zone and the subsoil below it.
- `cropgrid.inputs`: `parse_scalars(text, names)` reads `NAME = value`
  parameters and `parse_tables(text, names)` reads `NAME = x, y` tables
  whose further points follow one per line. `read_site_data(path)` returns a
  `Site` together with the CO2 concentration. `read_soil_data(path)` returns
  a `WaterBalance` with the soil constants and tables filled in. The
  `ParameterFile` constants `SITE_FILE`, `SOIL_FILE`, `CROP_FILE` and
  `MANAGEMENT_FILE` list the parameter and table names of each file kind.
  Missing or malformed input raises `InputFileError`.
- `cropgrid.output`: `daily_header()`, `annual_header()`, `format_daily(...)`
  and `format_annual(...)` build the header and tab-separated lines of the
  daily and seasonal result files.

## Installation

```
pip install .
```

To install and run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from cropgrid.penman import WeatherDay, penman, penman_monteith

day = WeatherDay(tmin=10.0, tmax=24.0, radiation=18.0e6, rain=0.2,
                 windspeed=2.5, vapour=1.2)
temp = 0.5 * (day.tmin + day.tmax)

evaporation = penman(day, temp, altitude=50.0, angstrom_a=0.25,
                     angstrom_b=0.5, atmospheric_transmission=0.55)
print(evaporation.e0, evaporation.es0)

et0 = penman_monteith(day, temp, altitude=50.0, angot_radiation=35.0e6)
print(et0)
```

Radiation is in J m-2 d-1, vapour pressure in kPa and wind speed in m s-1.

## What the package does not do

The package has no command-line program and no driver that loops over days,
seasons or grid cells. It does not read weather or grid data files. It has no
astronomy, sowing or emergence, phenology, assimilation, growth or
partitioning steps, so callers supply the atmospheric transmission, Angot
radiation, transpiration, fertilizer and irrigation amounts themselves. The
crop and management files are described by `CROP_FILE` and
`MANAGEMENT_FILE`, but there is no reader that turns them into `Crop` or
`Management` objects. Those files can still be parsed with `parse_scalars`
and `parse_tables`.