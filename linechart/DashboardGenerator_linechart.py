"""
DashboardGenerator_linechart.py

【功能說明】
------------------------------------------------------------
本模組負責生成折線圖頁面的 Dash 布局：標題欄、圖例、圖表與 tooltip。
圖例由 LegendContainer 轉換而來，每個圖例項目使用 pattern-matching id，
供 CallbackHandler 以 ALL 一次處理所有類別。

【組件 ID】
------------------------------------------------------------
- {"type": "legend-item", "key": <類別>}：圖例項目（n_clicks）
- "line-chart"：dcc.Graph（hoverData，clear_on_unhover=True）
- "tooltip"：tooltip 容器

【常見易錯點】
------------------------------------------------------------
- 組件 ID 變動時需同步更新 CallbackHandler
- tooltip 以 position: absolute 定位，外層容器必須是 position: relative
- app.layout 為函數，每次載入頁面都重置控制器，圖例與 ToggleState 保持一致
"""

import logging
from typing import Any, Dict, List, Optional

import dash
import dash_bootstrap_components as dbc
from dash import dcc, html

from .ChartComponents_linechart import ChartComponents
from .InteractionController_linechart import InteractionController, TooltipState
from .Surface_linechart import LegendContainer, SvgElement
from .utils.DashAppUtils_utils_linechart import create_dash_app

LEGEND_ITEM_TYPE = "legend-item"
GRAPH_ID = "line-chart"
TOOLTIP_ID = "tooltip"


def legend_item_class(item: SvgElement) -> str:
    return " ".join(item.classes)


def tooltip_style(tooltip: TooltipState) -> Dict[str, Any]:
    return {
        "position": "absolute",
        "pointerEvents": "none",
        "opacity": tooltip.opacity,
        "left": f"{tooltip.left}px",
        "top": f"{tooltip.top}px",
    }


def tooltip_children(tooltip: TooltipState) -> List[Any]:
    return [html.Strong(tooltip.title), html.Br(), tooltip.body]


class DashboardGenerator:
    """
    Dash 界面生成器

    負責生成折線圖頁面的布局與 Dash 應用。
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.chart_components = ChartComponents(self.logger)
        self.app = None

    def create_app(
        self,
        controller: InteractionController,
        url_base_pathname: Optional[str] = None,
    ) -> dash.Dash:
        """
        創建 Dash 應用

        Args:
            controller: 已完成 setup() 的互動控制器
            url_base_pathname: URL 路徑前綴

        Returns:
            dash.Dash: Dash 應用實例
        """

        def serve_layout() -> html.Div:
            # 每次載入頁面都從全部可見開始
            with controller.lock:
                controller.reset()
                return self._create_layout(controller)

        self.app = create_dash_app(
            serve_layout,
            url_base_pathname=url_base_pathname,
            logger=self.logger,
        )
        return self.app

    def _create_layout(self, controller: InteractionController) -> html.Div:
        try:
            figure = self.chart_components.create_line_chart(controller.surface)
            return html.Div(
                [
                    self._create_header(),
                    dbc.Container(
                        [
                            self._create_legend(controller.legend),
                            html.Div(
                                [
                                    dcc.Graph(
                                        id=GRAPH_ID,
                                        figure=figure,
                                        clear_on_unhover=True,
                                        config={"displayModeBar": False},
                                    ),
                                    html.Div(
                                        tooltip_children(controller.tooltip),
                                        id=TOOLTIP_ID,
                                        className="tooltip-box",
                                        style=tooltip_style(controller.tooltip),
                                    ),
                                ],
                                style={"position": "relative"},
                            ),
                        ],
                        fluid=True,
                    ),
                ]
            )
        except Exception as e:
            self.logger.error(f"創建布局失敗: {e}")
            raise

    def _create_header(self) -> html.Div:
        """創建標題欄"""
        return html.Div(
            dbc.Navbar(
                dbc.Container(
                    dbc.NavbarBrand("安大略省 2024 年每月移民人數（按類別）", className="ms-2")
                ),
                color="dark",
                dark=True,
                className="mb-3",
            )
        )

    def _create_legend(self, legend: LegendContainer) -> html.Div:
        """由 LegendContainer 創建圖例，點擊項目切換類別"""
        items = []
        for item in legend.items():
            swatch, label = item.children
            items.append(
                html.Div(
                    [
                        html.Span(
                            className="swatch",
                            style={"backgroundColor": swatch.style["background-color"]},
                        ),
                        html.Span(label.text),
                    ],
                    id={"type": LEGEND_ITEM_TYPE, "key": item.key},
                    className=legend_item_class(item),
                    n_clicks=0,
                )
            )
        return html.Div(items, id="legend")
