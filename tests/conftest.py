"""Shared fixtures for the linechart test suite"""

from pathlib import Path
from typing import Callable

import pytest

from linechart.Config_linechart import ChartConfig, ConfigLoader
from linechart.DataLoader_linechart import DataLoaderLineChart, build_series
from linechart.InteractionController_linechart import InteractionController
from linechart.Surface_linechart import ChartSurface, LegendContainer

TWELVE_ROW_CSV = """Month,Economic,Family Sponsorship,Refugee,Other
Jan,9845,4120,2310,610
Feb,8930,3895,2155,575
Mar,10215,4310,2480,640
Apr,9770,4205,2390,620
May,10480,4460,2615,655
Jun,9905,4280,2540,630
Jul,11230,4690,2760,700
Aug,10860,4515,2695,685
Sep,9620,4150,2430,605
Oct,10035,4325,2505,625
Nov,9410,4060,2350,590
Dec,8725,3780,2205,560
"""


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write CSV text to a temporary file and return its path"""

    def _write(content: str, name: str = "data.csv") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_csv(write_csv: Callable[[str, str], Path]) -> Path:
    return write_csv(TWELVE_ROW_CSV)


@pytest.fixture
def chart_config(sample_csv: Path) -> ChartConfig:
    config = ConfigLoader().load_config()
    config.csv_path = str(sample_csv)
    return config


@pytest.fixture
def make_controller(chart_config: ChartConfig) -> Callable[[Path], InteractionController]:
    """Build a fully set-up controller for the given CSV"""

    def _make(csv_path: Path) -> InteractionController:
        frame = DataLoaderLineChart(str(csv_path)).load()
        surface = ChartSurface(chart_config.width, chart_config.height, chart_config.margin)
        controller = InteractionController(
            frame, build_series(frame), surface, LegendContainer(), chart_config
        )
        controller.setup()
        return controller

    return _make


@pytest.fixture
def controller(
    make_controller: Callable[[Path], InteractionController], sample_csv: Path
) -> InteractionController:
    return make_controller(sample_csv)
