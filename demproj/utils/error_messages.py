"""Different formatted error messages that can be used in demproj.

You can use these messages like this::

    raise ValueError(NON_POSITIVE_GDP_PER_CAPITA.format(
        gdp_per_capita=0.0,
        period=3,
        sector='building',
        region='USA',
    ))


* PERIOD_OUT_OF_RANGE(period, n_periods)
* UNKNOWN_MODEL_YEAR(year, years)
* NON_POSITIVE_GDP_PER_CAPITA(gdp_per_capita, period, sector, region)
* NON_POSITIVE_PREVIOUS_PRICE(price, period, sector, region)
* NON_FINITE_DEMAND_TERM(term, period, sector, region)
* UNSET_BASE_SCALER(period, sector, region)
* UNRECOGNIZED_FIELD(field, parser)
* MISSING_MARKET_INFO(item, info)

"""


PERIOD_OUT_OF_RANGE = (
    "Period {period} is out of range, the model time has {n_periods} "
    "periods."
)

UNKNOWN_MODEL_YEAR = (
    "Year {year} is not a model year. Model years are {years}."
)

NON_POSITIVE_GDP_PER_CAPITA = (
    "Scaled GDP per capita is {gdp_per_capita} in period {period} for "
    "sector '{sector}' in region '{region}'. Per capita based demand "
    "requires a strictly positive GDP per capita."
)

NON_POSITIVE_PREVIOUS_PRICE = (
    "Sector price of the previous period is {price} in period {period} "
    "for sector '{sector}' in region '{region}'. Cannot compute a price "
    "ratio."
)

NON_FINITE_DEMAND_TERM = (
    "The {term} evaluates to a non finite value in period {period} for "
    "sector '{sector}' in region '{region}'."
)

UNSET_BASE_SCALER = (
    "Base demand service not set in period {period} sector '{sector}' "
    "region '{region}'. Base scaler being set to 1."
)

UNRECOGNIZED_FIELD = (
    "Unrecognized field '{field}' found while parsing {parser}."
)

MISSING_MARKET_INFO = (
    "Item '{item}' was requested from {info} but was never set. "
    "Returning 0."
)
