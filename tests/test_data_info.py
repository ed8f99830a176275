from __future__ import annotations

import logging

import pytest

from dataio.data_info import DATASETS, data_info


def test_data_info_logs_and_returns_metadata(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="dataio.data_info"):
        info = data_info("ecdc_covid19")

    assert info is DATASETS["ecdc_covid19"]
    assert "Data set: ECDC Covid-19 case data" in caplog.text
    assert "ecdc.europa.eu" in caplog.text


def test_unknown_dataset() -> None:
    with pytest.raises(KeyError, match="ecdc_covid19"):
        data_info("no_such_data")
