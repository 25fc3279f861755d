"""
CallbackHandler_linechart.py

【功能說明】
------------------------------------------------------------
本模組負責註冊折線圖頁面的 Dash 回調，把瀏覽器事件轉交給 InteractionController：
- 圖例點擊 → controller.toggle → 返回新的圖表與圖例樣式
- 數據點 hover → controller.hover_point / hover_leave → 返回 tooltip 內容與樣式

【流程與數據流】
------------------------------------------------------------
```mermaid
flowchart TD
    A[用戶點擊圖例] -->|n_clicks| B[toggle_legend]
    B -->|toggle| C[InteractionController]
    C -->|surface| D[ChartComponents]
    D -->|figure| E[dcc.Graph]
    F[用戶 hover 數據點] -->|hoverData| G[update_tooltip]
    G -->|hover_point / hover_leave| C
    C -->|TooltipState| H[tooltip Div]
```

【常見易錯點】
------------------------------------------------------------
- 回調的業務邏輯放在 handle_* 方法中，Dash 回調函數只負責轉交，方便直接測試
- clear_on_unhover=True 時，離開數據點會收到 hoverData=None
- Dash 開發伺服器為多執行緒；handle_* 在 controller.lock 內完成狀態更新與讀取表面，事件依序處理
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from dash import ALL, Input, Output, ctx
from dash.exceptions import PreventUpdate

from .ChartComponents_linechart import ChartComponents
from .DashboardGenerator_linechart import (
    GRAPH_ID,
    LEGEND_ITEM_TYPE,
    TOOLTIP_ID,
    legend_item_class,
    tooltip_children,
    tooltip_style,
)
from .InteractionController_linechart import InteractionController


class CallbackHandler:
    """
    Dash 回調處理器

    負責圖例切換與 tooltip 顯示的互動功能。
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.chart_components = ChartComponents(self.logger)
        self.controller: Optional[InteractionController] = None

    def setup_callbacks(self, app, controller: InteractionController):
        self.controller = controller

        @app.callback(
            [
                Output(GRAPH_ID, "figure"),
                Output({"type": LEGEND_ITEM_TYPE, "key": ALL}, "className"),
            ],
            Input({"type": LEGEND_ITEM_TYPE, "key": ALL}, "n_clicks"),
            prevent_initial_call=True,
        )
        def toggle_legend(n_clicks):
            """切換類別可見性"""
            return self.handle_legend_click(ctx.triggered_id)

        @app.callback(
            [
                Output(TOOLTIP_ID, "children"),
                Output(TOOLTIP_ID, "style"),
            ],
            Input(GRAPH_ID, "hoverData"),
            prevent_initial_call=True,
        )
        def update_tooltip(hover_data):
            """顯示 / 隱藏 tooltip"""
            return self.handle_hover(hover_data)

        self.logger.info("回調函數註冊完成")

    def handle_legend_click(self, triggered_id: Optional[Dict[str, Any]]) -> Tuple[Any, List[str]]:
        if not triggered_id or self.controller is None:
            raise PreventUpdate

        with self.controller.lock:
            self.controller.click_legend(triggered_id["key"])
            figure = self.chart_components.create_line_chart(self.controller.surface)
            classes = [legend_item_class(item) for item in self.controller.legend.items()]
        return figure, classes

    def handle_hover(self, hover_data: Optional[Dict[str, Any]]) -> Tuple[List[Any], Dict[str, Any]]:
        if self.controller is None:
            raise PreventUpdate

        points = (hover_data or {}).get("points") or []
        with self.controller.lock:
            tooltip = None
            if points and points[0].get("customdata") is not None:
                page_x, page_y = self._pointer_position(points[0])
                tooltip = self.controller.hover_point(str(points[0]["customdata"]), page_x, page_y)

            if tooltip is None:
                tooltip = self.controller.hover_leave()
            return tooltip_children(tooltip), tooltip_style(tooltip)

    def _pointer_position(self, point: Dict[str, Any]) -> Tuple[float, float]:
        """以 bbox 中心近似滑鼠位置；沒有 bbox 時以數據座標加上邊距"""
        bbox = point.get("bbox")
        if bbox:
            return (bbox["x0"] + bbox["x1"]) / 2, (bbox["y0"] + bbox["y1"]) / 2

        margin = self.controller.surface.margin
        return float(point.get("x", 0)) + margin["left"], float(point.get("y", 0)) + margin["top"]
