"""
===========================================================
ecdc.py
Author: Veronica Scerra
Last Updated: 2026-10-19
===========================================================

Description:
    Download ECDC Covid-19 case data. On 2020-12-14 the ECDC
    switched from daily to weekly reporting; this module splices
    the cached (discontinued) daily series together with the
    current weekly series into one tidy data frame.

Notes:
    - Weekly rows are only kept for dates after the cutover,
      daily rows cover everything up to and including it.
    - The cached snapshots live in the tidycovid19 GitHub
      repository and are already in the unified schema.
    - Network failures are not retried.
-----------------------------------------------------------
License: MIT
===========================================================
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Dict, List, Optional
import numpy as np
import pandas as pd

from dataio.data_info import data_info
from dataio.loaders import read_csv_url, read_rds_url
from dataio.logs import get_logger

logger = get_logger(__name__)

CUTOVER_DATE = pd.Timestamp("2020-12-14")

ECDC_WEEKLY_CSV = "https://opendata.ecdc.europa.eu/covid19/casedistribution/csv"
_CACHE_ROOT = "https://raw.githubusercontent.com/joachim-gassen/tidycovid19/master/cached_data"
ECDC_DAILY_RDS = f"{_CACHE_ROOT}/ecdc_covid19_daily.RDS"
ECDC_COMBINED_RDS = f"{_CACHE_ROOT}/ecdc_covid19.RDS"

# raw weekly column -> unified column
WEEKLY_FIELDS: Dict[str, str] = {
    "countryterritoryCode": "iso3c",
    "countriesAndTerritories": "country_territory",
    "dateRep": "date",
    "cases_weekly": "cases",
    "deaths_weekly": "deaths",
}


@dataclass(frozen=True)
class UnifiedRecord:
    """
    One country/date observation in the unified schema.

    Attributes:
    -----------
    iso3c: str, optional
        ISO3 country code, missing for some territories
    country_territory: str
        Display name of the country or territory
    date: pd.Timestamp
        Reporting date (daily until the cutover, weekly afterwards)
    cases: int, optional
        New cases attributed to that date/period
    deaths: int, optional
        New deaths attributed to that date/period
    timestamp: pd.Timestamp
        When the data was retrieved
    """

    iso3c: Optional[str]
    country_territory: str
    date: pd.Timestamp
    cases: Optional[int]
    deaths: Optional[int]
    timestamp: pd.Timestamp


UNIFIED_COLUMNS: List[str] = [f.name for f in fields(UnifiedRecord)]


@dataclass
class EcdcDownloadConfig:
    """
    Endpoints and options for the ECDC download
    """
    weekly_url: str = ECDC_WEEKLY_CSV
    daily_snapshot_url: str = ECDC_DAILY_RDS
    combined_snapshot_url: str = ECDC_COMBINED_RDS
    # last day covered by the daily series
    cutover: pd.Timestamp = CUTOVER_DATE
    # networking
    timeout_s: int = 60

# ---- Public API -----------------------------------------------------------

def download_ecdc_covid19_data(
    silent: bool = False,
    cached: bool = False,
    use_daily: bool = True,
    config: EcdcDownloadConfig = EcdcDownloadConfig(),
    now: Optional[datetime] = None,
) -> pd.DataFrame:
    """
    Download ECDC data on Covid-19 cases and deaths by country.

    Parameters
    ----------
    silent : bool
        Suppress progress messages.
    cached : bool
        Download the pre-built combined snapshot instead of querying
        the ECDC. Faster, and it already includes the daily data.
    use_daily : bool
        Use the cached daily data up to 2020-12-14 and the weekly
        ECDC data afterwards. Ignored when `cached` is True.
    config : EcdcDownloadConfig
        Endpoints, cutover date and request timeout.
    now : datetime, optional
        Retrieval timestamp stamped on the weekly rows. Defaults to
        the current time.

    Returns
    -------
    pd.DataFrame
        Columns 'iso3c', 'country_territory', 'date', 'cases',
        'deaths', 'timestamp'.

    Raises
    ------
    ValueError
        If `silent` or `cached` is not a single boolean, or the weekly
        data cannot be parsed.
    RuntimeError
        If any download fails.
    """
    silent = _check_flag("silent", silent)
    cached = _check_flag("cached", cached)
    use_daily = bool(use_daily)

    if not silent:
        logger.info("Start downloading ECDC Covid-19 case data")

    if cached:
        if not silent:
            logger.info("Downloading cached version of ECDC Covid-19 case data...")
        df = _read_snapshot(config.combined_snapshot_url, config)
        if not silent:
            stamp = df["timestamp"].iloc[0] if len(df) else None
            logger.info("done. Timestamp is %s", stamp)
        return df

    daily = None
    if use_daily:
        if not silent:
            logger.info("Downloading cached version of discontinued ECDC Covid-19 daily case data...")
        daily = _coerce_unified(_read_snapshot(config.daily_snapshot_url, config))
        if not silent:
            logger.info("done.")

    raw = read_csv_url(config.weekly_url, config.timeout_s)
    weekly = normalize_weekly(raw, now if now is not None else pd.Timestamp.now())

    if daily is not None:
        out = merge_daily_weekly(daily, weekly, cutover=config.cutover, silent=silent)
    else:
        out = weekly.loc[weekly["date"] > config.cutover].reset_index(drop=True)

    if not silent:
        logger.info("Done downloading ECDC Covid-19 case data")
        data_info("ecdc_covid19")
    return out


def normalize_weekly(raw: pd.DataFrame, now: datetime) -> pd.DataFrame:
    """
    Map the raw ECDC weekly table onto the unified schema.

    Every row gets the same `now` as its timestamp. The result is
    sorted by 'iso3c' and 'date'; rows without a country code sort last.
    """
    missing = [c for c in WEEKLY_FIELDS if c not in raw.columns]
    if missing:
        raise KeyError(f"Weekly data lacks expected columns {missing}. Available: {list(raw.columns)}")

    out = raw[list(WEEKLY_FIELDS)].rename(columns=WEEKLY_FIELDS)
    out["date"] = _parse_dmy(out["date"])
    out["cases"] = _parse_count(out["cases"], "cases_weekly")
    out["deaths"] = _parse_count(out["deaths"], "deaths_weekly")
    out["timestamp"] = _naive_local(now)

    out = out.sort_values(["iso3c", "date"], kind="mergesort", na_position="last")
    return out[UNIFIED_COLUMNS].reset_index(drop=True)


def merge_daily_weekly(
    daily: pd.DataFrame,
    weekly: pd.DataFrame,
    cutover: pd.Timestamp = CUTOVER_DATE,
    silent: bool = True,
) -> pd.DataFrame:
    """
    Append the weekly rows dated after `cutover` to the daily series.

    Daily rows come first and keep their order; nothing is re-sorted
    or de-duplicated.
    """
    cutover = pd.Timestamp(cutover)
    late = int((pd.to_datetime(daily["date"]) > cutover).sum()) if len(daily) else 0
    if late and not silent:
        logger.warning(
            "Daily series has %d rows after %s; they overlap the weekly series",
            late, cutover.date(),
        )

    weekly_after = weekly.loc[weekly["date"] > cutover]
    if not silent:
        logger.info(
            "Combining %d daily and %d weekly observations", len(daily), len(weekly_after)
        )

    parts = [part for part in (daily, weekly_after) if not part.empty]
    if not parts:
        return weekly_after.reset_index(drop=True)
    return pd.concat(parts, ignore_index=True)


def to_records(df: pd.DataFrame) -> List[UnifiedRecord]:
    """ Convert a unified data frame into a list of UnifiedRecord """
    records = []
    for row in df[UNIFIED_COLUMNS].to_dict("records"):
        records.append(UnifiedRecord(
            iso3c=_none_if_na(row["iso3c"]),
            country_territory=row["country_territory"],
            date=pd.Timestamp(row["date"]),
            cases=None if pd.isna(row["cases"]) else int(row["cases"]),
            deaths=None if pd.isna(row["deaths"]) else int(row["deaths"]),
            timestamp=pd.Timestamp(row["timestamp"]),
        ))
    return records

# ---- Internal helpers -----------------------------------------------------

def _check_flag(name: str, value) -> bool:
    # a single bool only: no lists, arrays, strings or ints
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    raise ValueError(f"'{name}' needs to be a single logical value")


def _parse_dmy(values: pd.Series) -> pd.Series:
    try:
        return pd.to_datetime(values.astype(str).str.strip(), format="%d/%m/%Y")
    except ValueError as e:
        raise ValueError(f"Could not parse 'dateRep' as day/month/year: {e}") from e


def _naive_local(now: datetime) -> pd.Timestamp:
    # snapshot timestamps are tz-naive local time; mixing in tz-aware values
    # would turn the merged column into objects
    stamp = pd.Timestamp(now)
    if stamp.tzinfo is not None:
        stamp = pd.Timestamp(stamp.to_pydatetime().astimezone().replace(tzinfo=None))
    return stamp


def _parse_count(values: pd.Series, column: str) -> pd.Series:
    try:
        return pd.to_numeric(values, errors="raise").astype("Int64")
    except (ValueError, TypeError) as e:
        raise ValueError(f"Column '{column}' holds non-integer counts: {e}") from e


def _read_snapshot(url: str, cfg: EcdcDownloadConfig) -> pd.DataFrame:
    df = read_rds_url(url, cfg.timeout_s)
    missing = [c for c in UNIFIED_COLUMNS if c not in df.columns]
    if missing:
        raise RuntimeError(f"Snapshot {url} lacks columns {missing}")
    return df


def _coerce_unified(df: pd.DataFrame) -> pd.DataFrame:
    # R Date / POSIXct may come back as objects depending on the reader
    df = df[UNIFIED_COLUMNS].copy()
    df["date"] = pd.to_datetime(df["date"])
    df["timestamp"] = pd.to_datetime(df["timestamp"])
    df["cases"] = df["cases"].astype("Int64")
    df["deaths"] = df["deaths"].astype("Int64")
    return df


def _none_if_na(value):
    return None if pd.isna(value) else value


if __name__ == "__main__":
    # Example quick run: python -m dataio.ecdc
    out = download_ecdc_covid19_data(cached=True)
    print(out.head())
    print(f"\nRows: {len(out):,}")
