"""
Renderer_linechart.py

【功能說明】
------------------------------------------------------------
本模組負責在繪圖表面上繪製與更新座標軸、各類別折線與數據點。
draw() 以鍵值對照的方式維護元素：
- 折線以類別為鍵：新類別建立 path，消失的類別移除，既有的刷新形狀與顏色
- 數據點以「類別+月份」為鍵：新點建立 circle 並掛上 hover 事件，消失的點移除，既有的點只更新位置

【流程與數據流】
------------------------------------------------------------
```mermaid
flowchart TD
    A[InteractionController] -->|active series, x, y| B[Renderer.draw]
    B -->|reconcile 類別| C[g.lines > path.line]
    B -->|reconcile 類別+月份| D[g.points > circle.pt]
    A -->|y 比例尺| E[Renderer.draw_y_axis]
    A -->|x 比例尺，只畫一次| F[Renderer.draw_x_axis]
```

【常見易錯點】
------------------------------------------------------------
- 比例尺以參數傳入，不可快取在 Renderer 內，否則重建比例尺後會畫到舊位置
- 同樣的輸入重複呼叫 draw() 必須得到完全相同的元素與屬性
- 新建點的 hover 行為只在 enter 時掛載，update 不重複掛載
"""

import logging
from typing import Callable, Dict, Hashable, List, Optional, Sequence, Tuple

from .DataLoader_linechart import Point, Series
from .ScaleBuilder_linechart import LinearScale, PointScale, format_grouped_int
from .Surface_linechart import ChartSurface, SvgElement
from .utils.Reconciler_utils_linechart import ReconcileResult, reconcile

HoverHandler = Callable[[Point, float, float], object]
LeaveHandler = Callable[[], object]


def _fmt(value: float) -> str:
    return f"{round(value, 3):g}"


def line_path(points: Sequence[Point], x: PointScale, y: LinearScale) -> str:
    """依月份順序連接各點的 SVG path 字串，例如 'M34,120L102,98'"""
    if not points:
        return ""
    segments = [f"{_fmt(x(p.month))},{_fmt(y(p.value))}" for p in points]
    return "M" + "L".join(segments)


class Renderer:
    """
    圖表繪製器

    負責座標軸、折線與數據點的建立、更新與移除。
    """

    def __init__(
        self,
        surface: ChartSurface,
        colors: Dict[str, str],
        point_radius: float = 3.5,
        on_hover: Optional[HoverHandler] = None,
        on_leave: Optional[LeaveHandler] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.surface = surface
        self.colors = dict(colors)
        self.point_radius = point_radius
        self.on_hover = on_hover
        self.on_leave = on_leave
        self.logger = logger or logging.getLogger(__name__)

        self.lines: Dict[Hashable, SvgElement] = {}
        self.points: Dict[Hashable, SvgElement] = {}
        self.x_ticks: Dict[Hashable, SvgElement] = {}
        self.y_ticks: Dict[Hashable, SvgElement] = {}

    def draw(
        self, active_series: Sequence[Series], x: PointScale, y: LinearScale
    ) -> Tuple[ReconcileResult, ReconcileResult]:
        """
        依目前可見的 Series 對照並更新折線與數據點

        Args:
            active_series: 目前可見的 Series（保持原始點數據）
            x: 水平比例尺
            y: 垂直比例尺

        Returns:
            Tuple[ReconcileResult, ReconcileResult]: 折線與數據點的對照結果
        """
        line_result = self._draw_lines(active_series, x, y)
        flat = [point for series in active_series for point in series.points]
        point_result = self._draw_points(flat, x, y)

        self.logger.debug(
            f"重繪完成: 折線 +{len(line_result.entered)} -{len(line_result.exited)}，"
            f"數據點 +{len(point_result.entered)} -{len(point_result.exited)}"
        )
        return line_result, point_result

    def _draw_lines(self, active_series: Sequence[Series], x: PointScale, y: LinearScale) -> ReconcileResult:
        def enter(key: Hashable, series: Series) -> SvgElement:
            return self.surface.lines.append(
                "path",
                classes=["line"],
                key=key,
                datum=series,
                attrs={
                    "stroke": self.colors[series.key],
                    "d": line_path(series.points, x, y),
                },
            )

        def update(element: SvgElement, series: Series) -> None:
            element.datum = series
            element.set(stroke=self.colors[series.key], d=line_path(series.points, x, y))

        result = reconcile(
            self.lines, active_series, lambda s: s.key, enter, update, SvgElement.remove
        )
        self.lines = result.elements
        return result

    def _draw_points(self, flat: List[Point], x: PointScale, y: LinearScale) -> ReconcileResult:
        def enter(key: Hashable, point: Point) -> SvgElement:
            element = self.surface.points.append(
                "circle",
                classes=["pt"],
                key=key,
                datum=point,
                attrs={
                    "r": self.point_radius,
                    "cx": x(point.month),
                    "cy": y(point.value),
                    "fill": self.colors[point.key],
                },
            )
            element.on("mouseenter", self._handle_mouseenter)
            element.on("mouseleave", self._handle_mouseleave)
            return element

        def update(element: SvgElement, point: Point) -> None:
            element.datum = point
            element.set(cx=x(point.month), cy=y(point.value))

        result = reconcile(
            self.points, flat, lambda p: p.composite_key, enter, update, SvgElement.remove
        )
        self.points = result.elements
        return result

    def _handle_mouseenter(self, element: SvgElement, page_x: float = 0, page_y: float = 0):
        if self.on_hover is not None:
            return self.on_hover(element.datum, page_x, page_y)
        return None

    def _handle_mouseleave(self, element: SvgElement, **_):
        if self.on_leave is not None:
            return self.on_leave()
        return None

    def draw_x_axis(self, x: PointScale) -> None:
        """底部座標軸（月份），頁面生命週期內只畫一次"""
        axis = self.surface.x_axis
        r0, r1 = x.range
        self._axis_domain(axis, f"M{_fmt(r0)},6V0H{_fmt(r1)}V6")

        def enter(key: Hashable, label: str) -> SvgElement:
            tick = axis.append(
                "g",
                classes=["tick"],
                key=key,
                datum=(x(label), label),
                attrs={"transform": f"translate({_fmt(x(label))},0)"},
            )
            tick.append("line", attrs={"stroke": "currentColor", "y2": 6})
            tick.append("text", attrs={"fill": "currentColor", "y": 9, "dy": "0.71em"}, text=label)
            return tick

        def update(tick: SvgElement, label: str) -> None:
            tick.datum = (x(label), label)
            tick.set(transform=f"translate({_fmt(x(label))},0)")

        result = reconcile(self.x_ticks, x.ticks(), lambda label: label, enter, update, SvgElement.remove)
        self.x_ticks = result.elements

    def draw_y_axis(self, y: LinearScale, tick_count: int = 6) -> None:
        """左側座標軸（千分位整數），每次垂直比例尺定義域改變時重畫"""
        axis = self.surface.y_axis
        r0, r1 = y.range
        self._axis_domain(axis, f"M-6,{_fmt(r0)}H0V{_fmt(r1)}H-6")

        def place(tick: SvgElement, value: float) -> None:
            label = format_grouped_int(value)
            tick.datum = (y(value), label)
            tick.set(transform=f"translate(0,{_fmt(y(value))})")
            tick.children[1].text = label

        def enter(key: Hashable, value: float) -> SvgElement:
            tick = axis.append("g", classes=["tick"], key=key)
            tick.append("line", attrs={"stroke": "currentColor", "x2": -6})
            tick.append("text", attrs={"fill": "currentColor", "x": -9, "dy": "0.32em"})
            place(tick, value)
            return tick

        result = reconcile(self.y_ticks, y.ticks(tick_count), lambda v: v, enter, place, SvgElement.remove)
        self.y_ticks = result.elements

    @staticmethod
    def _axis_domain(axis: SvgElement, d: str) -> None:
        domains = axis.select_all("path", "domain")
        if domains:
            domains[0].set(d=d)
        else:
            axis.append("path", classes=["domain"], attrs={"stroke": "currentColor", "fill": "none", "d": d})
