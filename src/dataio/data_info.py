"""
===========================================================
data_info.py
Author: Veronica Scerra
Last Updated: 2026-10-19
===========================================================

Description:
    Metadata for the datasets the loaders can download, and a
    helper that reports it through the package logger.
-----------------------------------------------------------
License: MIT
===========================================================
"""

from __future__ import annotations
from typing import Dict

from dataio.logs import get_logger

logger = get_logger(__name__)

DATASETS: Dict[str, Dict[str, str]] = {
    "ecdc_covid19": {
        "name": "ECDC Covid-19 case data",
        "description": (
            "Daily (until 2020-12-14) and weekly (afterwards) new Covid-19 "
            "cases and deaths by country and territory, as published by the "
            "European Centre for Disease Prevention and Control."
        ),
        "url": (
            "https://www.ecdc.europa.eu/en/publications-data/"
            "download-todays-data-geographic-distribution-covid-19-cases-worldwide"
        ),
        "columns": "iso3c, country_territory, date, cases, deaths, timestamp",
        "license": "ECDC copyright policy, reuse with attribution",
    },
}


def data_info(name: str) -> Dict[str, str]:
    """ Log the metadata of dataset `name` and return it """
    if name not in DATASETS:
        raise KeyError(f"Unknown dataset '{name}'. Available: {sorted(DATASETS)}")
    info = DATASETS[name]
    logger.info("Data set: %s", info["name"])
    logger.info("Description: %s", info["description"])
    logger.info("Columns: %s", info["columns"])
    logger.info("Source: %s", info["url"])
    logger.info("License: %s", info["license"])
    return info
