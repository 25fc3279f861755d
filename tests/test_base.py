"""
Test suite for the line chart main flow

Covers the load-failure path, SVG export, dashboard creation
and the data summary.
"""

from pathlib import Path
from unittest.mock import patch

import dash
import pytest

from linechart.Base_linechart import BaseLineChart
from linechart.Config_linechart import ChartConfig


class TestLoadFailure:
    """Test that a failed load renders nothing"""

    def setup_method(self) -> None:
        self.missing = "/nonexistent/path/immigration.csv"

    def test_prepare_reports_error(self, chart_config: ChartConfig, capsys) -> None:
        """Test the error panel is shown and the surface stays empty"""
        chart_config.csv_path = self.missing
        chart = BaseLineChart(chart_config)

        assert chart.prepare() is False
        captured = capsys.readouterr()
        assert "CSV 載入失敗" in captured.out
        assert chart.controller is None
        assert chart.surface.line_elements() == []
        assert chart.surface.point_elements() == []
        assert chart.legend.items() == []

    def test_failure_logged(self, chart_config: ChartConfig) -> None:
        chart_config.csv_path = self.missing
        chart = BaseLineChart(chart_config)
        with patch.object(chart.logger, "error") as mock_error:
            chart.prepare()
        assert mock_error.call_args[0][0].startswith("CSV load error")

    def test_outputs_skipped(self, chart_config: ChartConfig, tmp_path: Path) -> None:
        chart_config.csv_path = self.missing
        chart = BaseLineChart(chart_config)
        target = tmp_path / "chart.svg"

        assert chart.export_svg(str(target)) is None
        assert not target.exists()
        assert chart.generate_dashboard() is None

    def test_malformed_csv(
        self, chart_config: ChartConfig, write_csv, capsys
    ) -> None:
        """Test a file without a Month column fails the same way"""
        chart_config.csv_path = str(write_csv("Economic,Refugee\n1,2\n", name="bad.csv"))
        chart = BaseLineChart(chart_config)
        assert chart.prepare() is False
        assert "CSV 載入失敗" in capsys.readouterr().out


class TestBaseLineChart:
    """Test the successful flow"""

    def test_export_svg(self, chart_config: ChartConfig, tmp_path: Path) -> None:
        chart = BaseLineChart(chart_config)
        target = tmp_path / "out" / "chart.svg"

        assert chart.export_svg(str(target)) == str(target)
        svg = target.read_text(encoding="utf-8")
        assert svg.count('class="line"') == 4
        assert svg.count('class="pt"') == 48

    def test_prepare_runs_once(self, chart_config: ChartConfig) -> None:
        chart = BaseLineChart(chart_config)
        assert chart.prepare() is True
        controller = chart.controller
        assert chart.prepare() is True
        assert chart.controller is controller
        assert len(chart.legend.items()) == 4

    def test_generate_dashboard(self, chart_config: ChartConfig) -> None:
        chart = BaseLineChart(chart_config)
        app = chart.generate_dashboard("/linechart/")
        assert isinstance(app, dash.Dash)
        assert app.config.url_base_pathname == "/linechart/"
        assert chart.callback_handler.controller is chart.controller

    def test_data_summary(self, chart_config: ChartConfig) -> None:
        chart = BaseLineChart(chart_config)
        assert chart.get_data_summary() == {}
        chart.prepare()

        summary = chart.get_data_summary()
        assert summary["有效列數"] == 12
        assert summary["捨棄列數"] == 0
        assert summary["月份範圍"] == "Jan 至 Dec"
        assert summary["y 軸上界"] == 12000


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
