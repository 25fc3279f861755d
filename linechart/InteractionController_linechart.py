"""
InteractionController_linechart.py

【功能說明】
------------------------------------------------------------
本模組為折線圖的互動核心，擁有所有頁面狀態：
- ToggleState：類別 → 是否可見，初始全部可見
- 已載入的數據、Series 快取、目前的比例尺
- 唯一的 tooltip 狀態

處理兩類事件：
- 圖例點擊：切換類別可見性、更新圖例的 off 樣式，重新計算垂直比例尺並重繪
- 數據點 hover：顯示 / 隱藏 tooltip

【流程與數據流】
------------------------------------------------------------
```mermaid
flowchart TD
    A[圖例點擊] -->|toggle| B[ToggleState]
    B -->|redraw| C[ScaleBuilder.build_y]
    C -->|y| D[Renderer.draw_y_axis]
    C -->|visible series, x, y| E[Renderer.draw]
    F[數據點 mouseenter] -->|hover_enter| G[TooltipState]
    H[數據點 mouseleave] -->|hover_leave| G
```

【常見易錯點】
------------------------------------------------------------
- 每個類別只有 visible ⇄ hidden 兩個狀態，只由圖例點擊切換
- 重繪時沿用原始 Series，不重新計算數值
- tooltip 內容在每次 hover_enter 時完整替換，同時只會有一個 tooltip
- Dash 開發伺服器以多執行緒處理請求，所有事件入口都持有 self.lock，事件依序處理
- 每次載入頁面都呼叫 reset()，狀態不跨頁面載入保留
"""

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

import pandas as pd

from .Config_linechart import CATEGORY_KEYS, ChartConfig
from .DataLoader_linechart import Point, Series
from .Renderer_linechart import Renderer
from .ScaleBuilder_linechart import LinearScale, PointScale, ScaleBuilder, format_grouped
from .Surface_linechart import ChartSurface, LegendContainer, SvgElement

TOOLTIP_OFFSET_X = 10
TOOLTIP_OFFSET_Y = -24


@dataclass
class TooltipState:
    """頁面唯一的 tooltip"""

    opacity: float = 0.0
    title: str = ""
    body: str = ""
    left: float = 0.0
    top: float = 0.0

    @property
    def visible(self) -> bool:
        return self.opacity > 0

    @property
    def html(self) -> str:
        return f"<strong>{self.title}</strong><br>{self.body}"

    @property
    def text(self) -> str:
        return f"{self.title}\n{self.body}"


class InteractionController:
    """
    互動控制器

    頁面啟動時建立一次，持有切換狀態、比例尺與 Series 快取，
    並以參數方式把目前的比例尺與可見 Series 傳給 Renderer。
    """

    def __init__(
        self,
        frame: pd.DataFrame,
        series: List[Series],
        surface: ChartSurface,
        legend: LegendContainer,
        config: ChartConfig,
        logger: Optional[logging.Logger] = None,
    ):
        self.frame = frame
        self.series = list(series)
        self.surface = surface
        self.legend = legend
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

        self.state: Dict[str, bool] = {key: True for key in CATEGORY_KEYS}
        self.colors = config.color_map()
        self.scale_builder = ScaleBuilder(surface.inner_width, surface.inner_height, self.logger)
        self.renderer = Renderer(
            surface,
            self.colors,
            point_radius=config.point_radius,
            on_hover=self.hover_enter,
            on_leave=self.hover_leave,
            logger=self.logger,
        )
        self.tooltip = TooltipState()
        self.lock = threading.RLock()
        self.x: Optional[PointScale] = None
        self.y: Optional[LinearScale] = None

    def setup(self) -> None:
        """以完整數據建立比例尺，畫出座標軸、所有 Series 與圖例"""
        self.x = self.scale_builder.build_x()
        self.y = self.scale_builder.build_y(self.frame, CATEGORY_KEYS)

        self.renderer.draw_x_axis(self.x)
        self.renderer.draw_y_axis(self.y, self.config.y_ticks)
        self.renderer.draw(self.series, self.x, self.y)

        for key in CATEGORY_KEYS:
            item = self.legend.add_item(key, self.colors[key])
            item.on("click", self._handle_legend_click)

        self.logger.info(f"初始繪製完成: {len(self.series)} 條折線，y 定義域 {self.y.domain}")

    def active_keys(self) -> List[str]:
        return [key for key in CATEGORY_KEYS if self.state[key]]

    def active_series(self) -> List[Series]:
        return [s for s in self.series if self.state[s.key]]

    def _handle_legend_click(self, element: SvgElement, **_) -> bool:
        return self.toggle(element.datum)

    def toggle(self, key: str) -> bool:
        """
        切換類別可見性並重繪

        Args:
            key: 類別鍵

        Returns:
            bool: 切換後是否可見
        """
        with self.lock:
            if key not in self.state:
                raise KeyError(f"未知的類別: {key}")

            self.state[key] = not self.state[key]
            self.legend.item(key).classed("off", not self.state[key])
            self.logger.info(f"圖例切換: {key} → {'顯示' if self.state[key] else '隱藏'}")

            self.redraw()
            return self.state[key]

    def redraw(self) -> None:
        """以目前可見類別重新計算垂直比例尺，更新左軸並重繪"""
        with self.lock:
            if self.x is None:
                raise RuntimeError("InteractionController.setup() 尚未執行")

            self.y = self.scale_builder.build_y(self.frame, self.active_keys())
            self.renderer.draw_y_axis(self.y, self.config.y_ticks)
            self.renderer.draw(self.active_series(), self.x, self.y)

    def reset(self) -> None:
        """回到初始狀態：所有類別可見、圖例無 off 樣式、tooltip 隱藏"""
        with self.lock:
            for key in CATEGORY_KEYS:
                self.state[key] = True
                self.legend.item(key).classed("off", False)
            self.hover_leave()
            self.redraw()

    def hover_enter(self, point: Point, page_x: float, page_y: float) -> TooltipState:
        """顯示 tooltip：月份、年份、類別與千分位數值"""
        with self.lock:
            self.tooltip.opacity = 1.0
            self.tooltip.title = f"{point.month} {self.config.year_label}"
            self.tooltip.body = f"{point.key}: {format_grouped(point.value)}"
            self.tooltip.left = page_x + TOOLTIP_OFFSET_X
            self.tooltip.top = page_y + TOOLTIP_OFFSET_Y
            return self.tooltip

    def hover_leave(self) -> TooltipState:
        with self.lock:
            self.tooltip.opacity = 0.0
            return self.tooltip

    def hover_point(self, point_key: str, page_x: float, page_y: float) -> Optional[TooltipState]:
        """依數據點鍵觸發 mouseenter；找不到（例如已被隱藏）時返回 None"""
        with self.lock:
            element = self.renderer.points.get(point_key)
            if element is None:
                return None
            return element.dispatch("mouseenter", page_x=page_x, page_y=page_y)

    def click_legend(self, key: str) -> bool:
        with self.lock:
            return self.legend.item(key).dispatch("click")
