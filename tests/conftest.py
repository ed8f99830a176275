from __future__ import annotations

import io

import pandas as pd
import pytest

RAW_HEADER = (
    "dateRep,year_week,cases_weekly,deaths_weekly,countriesAndTerritories,"
    "geoId,countryterritoryCode,popData2019,continentExp,"
    "notification_rate_per_100000_population_14-days"
)


def raw_weekly(rows: list[tuple[str, int, int, str, str]]) -> pd.DataFrame:
    """Build a raw ECDC weekly table from (dateRep, cases, deaths, name, code) tuples."""
    lines = [RAW_HEADER]
    for date_rep, cases, deaths, name, code in rows:
        lines.append(f"{date_rep},2020-51,{cases},{deaths},{name},XX,{code},1000000,Europe,12.5")
    return pd.read_csv(io.StringIO("\n".join(lines)))


def daily_frame(dates: list[str], iso3c: str = "ITA", name: str = "Italy") -> pd.DataFrame:
    n = len(dates)
    return pd.DataFrame({
        "iso3c": [iso3c] * n,
        "country_territory": [name] * n,
        "date": pd.to_datetime(dates),
        "cases": pd.array(range(100, 100 + n), dtype="Int64"),
        "deaths": pd.array(range(n), dtype="Int64"),
        "timestamp": pd.to_datetime(["2020-12-15 09:00:00"] * n),
    })


ITALY_DAILY_DATES = [
    "2020-01-01", "2020-02-15", "2020-03-20", "2020-04-30", "2020-06-01",
    "2020-07-15", "2020-09-01", "2020-10-15", "2020-11-30", "2020-12-14",
]


@pytest.fixture
def italy_daily() -> pd.DataFrame:
    return daily_frame(ITALY_DAILY_DATES)


@pytest.fixture
def italy_weekly_raw() -> pd.DataFrame:
    return raw_weekly([
        ("28/12/2020", 90000, 3000, "Italy", "ITA"),
        ("21/12/2020", 100000, 3500, "Italy", "ITA"),
    ])
