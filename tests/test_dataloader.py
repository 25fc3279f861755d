"""
Test suite for the CSV data loader

Covers numeric coercion, month filtering, stable calendar ordering,
series construction and DataLoadFailure reporting.
"""

from pathlib import Path
from typing import Callable

import pandas as pd
import pytest

from linechart.Config_linechart import CATEGORY_KEYS, MONTHS
from linechart.DataLoader_linechart import (
    DataLoaderLineChart,
    DataLoadFailure,
    Point,
    build_series,
)


class TestDataLoaderLineChart:
    """Test loading and normalising the wide CSV"""

    def test_load_twelve_rows(self, sample_csv: Path) -> None:
        """Test a clean file loads all twelve months in order"""
        frame = DataLoaderLineChart(str(sample_csv)).load()
        assert len(frame) == 12
        assert frame["Month"].tolist() == MONTHS
        assert list(frame.columns) == ["Month"] + CATEGORY_KEYS
        assert frame.loc[2, "Refugee"] == 2480

    def test_out_of_order_rows_are_sorted(self, write_csv: Callable[..., Path]) -> None:
        """Test rows are sorted into calendar order regardless of file order"""
        path = write_csv(
            "Month,Economic,Family Sponsorship,Refugee,Other\n"
            "Dec,12,0,0,0\n"
            "Jan,1,0,0,0\n"
            "Jun,6,0,0,0\n"
            "Feb,2,0,0,0\n"
        )
        frame = DataLoaderLineChart(str(path)).load()
        assert frame["Month"].tolist() == ["Jan", "Feb", "Jun", "Dec"]
        assert frame["Economic"].tolist() == [1, 2, 6, 12]

    def test_unrecognised_and_missing_months_dropped(
        self, write_csv: Callable[..., Path]
    ) -> None:
        """Test rows with unknown or empty Month are silently dropped"""
        path = write_csv(
            "Month,Economic,Family Sponsorship,Refugee,Other\n"
            "Jan,1,1,1,1\n"
            "Foo,2,2,2,2\n"
            ",3,3,3,3\n"
            "march,4,4,4,4\n"
            "Feb,5,5,5,5\n"
        )
        loader = DataLoaderLineChart(str(path))
        frame = loader.load()
        assert frame["Month"].tolist() == ["Jan", "Feb"]
        assert loader.dropped_rows == 3

    def test_duplicate_months_keep_relative_order(
        self, write_csv: Callable[..., Path]
    ) -> None:
        """Test the sort is stable for duplicate months"""
        path = write_csv(
            "Month,Economic,Family Sponsorship,Refugee,Other\n"
            "Mar,30,0,0,0\n"
            "Jan,10,0,0,0\n"
            "Mar,31,0,0,0\n"
            "Feb,20,0,0,0\n"
            "Mar,32,0,0,0\n"
        )
        frame = DataLoaderLineChart(str(path)).load()
        assert frame["Month"].tolist() == ["Jan", "Feb", "Mar", "Mar", "Mar"]
        assert frame["Economic"].tolist() == [10, 20, 30, 31, 32]

    def test_non_numeric_and_missing_values_become_zero(
        self, write_csv: Callable[..., Path]
    ) -> None:
        """Test lenient coercion of value cells"""
        path = write_csv(
            "Month,Economic,Family Sponsorship,Refugee,Other\n"
            "Jan,n/a,,120,abc\n"
        )
        frame = DataLoaderLineChart(str(path)).load()
        row = frame.iloc[0]
        assert row["Economic"] == 0
        assert row["Family Sponsorship"] == 0
        assert row["Refugee"] == 120
        assert row["Other"] == 0
        for key in CATEGORY_KEYS:
            assert pd.api.types.is_numeric_dtype(frame[key])

    def test_missing_category_column_filled_with_zero(
        self, write_csv: Callable[..., Path]
    ) -> None:
        """Test an absent category column is created full of zeros"""
        path = write_csv("Month,Economic,Refugee\nJan,5,7\nFeb,6,8\n")
        frame = DataLoaderLineChart(str(path)).load()
        assert frame["Family Sponsorship"].tolist() == [0, 0]
        assert frame["Other"].tolist() == [0, 0]

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Test a missing resource is a DataLoadFailure"""
        with pytest.raises(DataLoadFailure, match="不存在"):
            DataLoaderLineChart(str(tmp_path / "nope.csv")).load()

    def test_empty_file_raises(self, write_csv: Callable[..., Path]) -> None:
        """Test an empty file is a DataLoadFailure"""
        path = write_csv("")
        with pytest.raises(DataLoadFailure):
            DataLoaderLineChart(str(path)).load()

    def test_missing_month_column_raises(self, write_csv: Callable[..., Path]) -> None:
        """Test a file without the Month column is a DataLoadFailure"""
        path = write_csv("Economic,Refugee\n1,2\n")
        with pytest.raises(DataLoadFailure, match="Month"):
            DataLoaderLineChart(str(path)).load()

    def test_malformed_csv_raises(self, write_csv: Callable[..., Path]) -> None:
        """Test a tokenizing error is a DataLoadFailure"""
        path = write_csv("Month,Economic\nJan,1\nFeb,2,3,4\n")
        with pytest.raises(DataLoadFailure):
            DataLoaderLineChart(str(path)).load()


class TestBuildSeries:
    """Test per-category series construction"""

    def test_one_series_per_category(self, sample_csv: Path) -> None:
        """Test series order and point counts"""
        frame = DataLoaderLineChart(str(sample_csv)).load()
        series = build_series(frame)
        assert [s.key for s in series] == CATEGORY_KEYS
        assert all(len(s.points) == len(frame) for s in series)

    def test_points_follow_frame_order(self, sample_csv: Path) -> None:
        """Test points carry month, value and category"""
        frame = DataLoaderLineChart(str(sample_csv)).load()
        refugee = build_series(frame)[2]
        assert refugee.points[2] == Point(key="Refugee", month="Mar", value=2480.0)
        assert [p.month for p in refugee.points] == MONTHS
        assert refugee.points[2].composite_key == "RefugeeMar"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
