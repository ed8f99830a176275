"""
===========================================================
loaders.py
Author: Veronica Scerra
Last Updated: 2026-10-19
===========================================================

Description:
    Minimal remote loaders. Fetch a delimited text file or a
    (gzip-compressed) R serialized data frame from a URL and
    return a pandas DataFrame.

Notes:
    - No retries: any failure is raised as RuntimeError.
    - RDS files are decoded with pyreadr, which needs a local
      path, so the payload is spooled to a temporary file.
-----------------------------------------------------------
License: MIT
===========================================================
"""

from __future__ import annotations
import io
import os
import tempfile
import pandas as pd
import pyreadr
from pyreadr.custom_errors import LibrdataError, PyreadrError
import requests

USER_AGENT = "Mozilla/5.0 (dataio-loader)"


def fetch_bytes(url: str, timeout_s: int = 60) -> bytes:
    """
    GET `url` and return the response body.

    Raises RuntimeError on transport errors, non-200 responses
    and empty payloads.
    """
    headers = {"User-Agent": USER_AGENT}
    try:
        resp = requests.get(url, headers=headers, timeout=timeout_s)
    except requests.RequestException as e:
        raise RuntimeError(f"Failed to fetch URL: {url}\n{e}") from e

    if resp.status_code != 200:
        raise RuntimeError(f"HTTP {resp.status_code} fetching {url}")

    content = resp.content or b""
    if not content:
        raise RuntimeError(f"Downloaded 0 bytes from {url}")
    return content


def read_csv_url(url: str, timeout_s: int = 60) -> pd.DataFrame:
    """
    Load a CSV file from `url`.

    Parameters
    ----------
    url : str
        Direct download link of the CSV file.
    timeout_s : int
        Seconds before the request is abandoned.

    Returns
    -------
    pd.DataFrame
        Raw table with whitespace stripped from column names.
    """
    content = fetch_bytes(url, timeout_s)
    try:
        df = pd.read_csv(io.BytesIO(content))
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise RuntimeError(f"Response from {url} contained no usable CSV data.") from e
    return _standardize_columns(df)


def read_rds_url(url: str, timeout_s: int = 60) -> pd.DataFrame:
    """
    Load a single data frame stored as an .RDS file at `url`.
    """
    content = fetch_bytes(url, timeout_s)
    fd, path = tempfile.mkstemp(suffix=".RDS")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(content)
        try:
            result = pyreadr.read_r(path)
        except (LibrdataError, PyreadrError) as e:
            raise RuntimeError(f"Could not deserialize RDS payload from {url}") from e
    finally:
        os.remove(path)

    if len(result) != 1:
        raise RuntimeError(f"Expected exactly one data frame in {url}, found {len(result)}")
    return next(iter(result.values()))


def _standardize_columns(df: pd.DataFrame) -> pd.DataFrame:
    # strip stray whitespace in header names
    df.columns = pd.Index([str(c).strip() for c in df.columns])
    return df
