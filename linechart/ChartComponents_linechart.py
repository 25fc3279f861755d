"""
ChartComponents_linechart.py

【功能說明】
------------------------------------------------------------
本模組負責把繪圖表面（ChartSurface）轉為 Plotly 圖表，供 Dash 頁面顯示。
圖表直接使用表面上的像素座標：
- 每條 path.line 轉為一條折線 trace（不參與 hover）
- 每個類別的 circle.pt 合併為一條 marker trace，customdata 為數據點鍵
- 座標軸刻度取自表面上 axis x / axis y 群組的 tick 元素

Plotly 自帶的 hover 標籤會關閉，改由 InteractionController 的 tooltip 顯示。

【常見易錯點】
------------------------------------------------------------
- y 軸範圍為 [inner_height, 0]，使像素座標的 0 位於上方
- customdata 必須是可 JSON 序列化的字串鍵
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

import plotly.graph_objs as go

from .Surface_linechart import ChartSurface, SvgElement

_PATH_POINT = re.compile(r"[ML]\s*(-?[\d.eE+-]+)\s*,\s*(-?[\d.eE+-]+)")


def parse_path(d: str) -> Tuple[List[float], List[float]]:
    """解析 'M x,y L x,y ...' 形式的 path 字串"""
    xs: List[float] = []
    ys: List[float] = []
    for x_str, y_str in _PATH_POINT.findall(d or ""):
        xs.append(float(x_str))
        ys.append(float(y_str))
    return xs, ys


class ChartComponents:
    """
    圖表組件生成器

    負責由繪圖表面生成 Plotly 圖表。
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def create_line_chart(self, surface: ChartSurface) -> go.Figure:
        """
        創建折線圖

        Args:
            surface: 目前的繪圖表面

        Returns:
            go.Figure: Plotly 圖表
        """
        try:
            fig = go.Figure()

            for element in surface.line_elements():
                xs, ys = parse_path(element.get("d", ""))
                fig.add_trace(
                    go.Scatter(
                        x=xs,
                        y=ys,
                        mode="lines",
                        name=str(element.key),
                        line=dict(width=2, color=element.get("stroke")),
                        hoverinfo="skip",
                    )
                )

            for key, markers in self._group_markers(surface.point_elements()).items():
                fig.add_trace(
                    go.Scatter(
                        x=[float(m.get("cx")) for m in markers],
                        y=[float(m.get("cy")) for m in markers],
                        mode="markers",
                        name=f"{key} points",
                        marker=dict(
                            color=markers[0].get("fill"),
                            size=float(markers[0].get("r", 3.5)) * 2,
                        ),
                        customdata=[str(m.key) for m in markers],
                        hoverinfo="none",
                    )
                )

            x_vals, x_text = self._axis_ticks(surface.x_axis)
            y_vals, y_text = self._axis_ticks(surface.y_axis)
            margin = surface.margin

            fig.update_layout(
                template=None,
                width=surface.width,
                height=surface.height,
                margin=dict(
                    l=margin["left"], r=margin["right"], t=margin["top"], b=margin["bottom"]
                ),
                showlegend=False,
                hovermode="closest",
                plot_bgcolor="#ffffff",
                paper_bgcolor="#ffffff",
                font=dict(color="#333333", size=12),
                xaxis=dict(
                    range=[0, surface.inner_width],
                    tickmode="array",
                    tickvals=x_vals,
                    ticktext=x_text,
                    showgrid=False,
                    zeroline=False,
                    showline=True,
                    linecolor="#333333",
                    ticks="outside",
                    fixedrange=True,
                ),
                yaxis=dict(
                    range=[surface.inner_height, 0],
                    tickmode="array",
                    tickvals=y_vals,
                    ticktext=y_text,
                    gridcolor="#eeeeee",
                    zeroline=False,
                    showline=True,
                    linecolor="#333333",
                    ticks="outside",
                    fixedrange=True,
                ),
            )
            return fig

        except Exception as e:
            self.logger.error(f"創建折線圖失敗: {e}")
            raise

    @staticmethod
    def _group_markers(markers: List[SvgElement]) -> Dict[str, List[SvgElement]]:
        groups: Dict[str, List[SvgElement]] = {}
        for marker in markers:
            groups.setdefault(marker.datum.key, []).append(marker)
        return groups

    @staticmethod
    def _axis_ticks(axis: SvgElement) -> Tuple[List[float], List[str]]:
        """tick 元素的 datum 為 (像素位置, 標籤)"""
        ticks = [tick.datum for tick in axis.select_all("g", "tick")]
        return [pos for pos, _ in ticks], [label for _, label in ticks]
