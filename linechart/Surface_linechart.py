"""
Surface_linechart.py

【功能說明】
------------------------------------------------------------
本模組定義繪圖表面：一棵常駐於記憶體的 SVG 元素樹。
- ChartSurface：<svg> 根節點、平移後的繪圖群組，以及 axis x / axis y / lines / points 四個子群組
- LegendContainer：圖例容器，每個圖例項目含色塊與類別名稱

Renderer 直接增刪改這棵樹；ChartComponents 讀取它轉為 Plotly 圖表；
to_svg() 可把它序列化為獨立的 .svg 文件。

【常見易錯點】
------------------------------------------------------------
- 事件處理函數與 datum 只存在記憶體中，不會被序列化
- 寬高在建立時固定，不處理視窗縮放
"""

import xml.etree.ElementTree as ET
from typing import Any, Callable, Dict, Hashable, List, Optional

SVG_NS = "http://www.w3.org/2000/svg"


class SvgElement:
    """可掛載事件的輕量 SVG/HTML 元素節點"""

    def __init__(
        self,
        tag: str,
        attrs: Optional[Dict[str, Any]] = None,
        classes: Optional[List[str]] = None,
        text: Optional[str] = None,
        key: Optional[Hashable] = None,
        datum: Any = None,
    ):
        self.tag = tag
        self.attrs: Dict[str, Any] = dict(attrs or {})
        self.classes: List[str] = list(classes or [])
        self.style: Dict[str, str] = {}
        self.text = text
        self.key = key
        self.datum = datum
        self.children: List["SvgElement"] = []
        self.parent: Optional["SvgElement"] = None
        self.handlers: Dict[str, Callable[..., Any]] = {}

    def append(self, tag: str, **kwargs: Any) -> "SvgElement":
        child = SvgElement(tag, **kwargs)
        child.parent = self
        self.children.append(child)
        return child

    def remove(self) -> None:
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def set(self, **attrs: Any) -> "SvgElement":
        self.attrs.update(attrs)
        return self

    def get(self, name: str, default: Any = None) -> Any:
        return self.attrs.get(name, default)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def classed(self, name: str, on: bool) -> "SvgElement":
        if on and name not in self.classes:
            self.classes.append(name)
        elif not on and name in self.classes:
            self.classes.remove(name)
        return self

    def on(self, event: str, handler: Optional[Callable[..., Any]]) -> "SvgElement":
        if handler is None:
            self.handlers.pop(event, None)
        else:
            self.handlers[event] = handler
        return self

    def dispatch(self, event: str, **payload: Any) -> Any:
        """觸發事件；handler 以 (element, **payload) 呼叫"""
        handler = self.handlers.get(event)
        if handler is None:
            return None
        return handler(self, **payload)

    def select_all(self, tag: Optional[str] = None, cls: Optional[str] = None) -> List["SvgElement"]:
        """遞迴選取所有符合標籤與 class 的後代元素"""
        found = []
        for child in self.children:
            if (tag is None or child.tag == tag) and (cls is None or child.has_class(cls)):
                found.append(child)
            found.extend(child.select_all(tag, cls))
        return found

    def to_etree(self) -> ET.Element:
        attrs = {name: _format_attr(value) for name, value in self.attrs.items()}
        if self.classes:
            attrs["class"] = " ".join(self.classes)
        if self.style:
            attrs["style"] = ";".join(f"{name}:{value}" for name, value in self.style.items())
        node = ET.Element(self.tag, attrs)
        if self.text is not None:
            node.text = self.text
        for child in self.children:
            node.append(child.to_etree())
        return node

    def __repr__(self) -> str:
        return f"<SvgElement {self.tag} key={self.key!r} classes={self.classes}>"


def _format_attr(value: Any) -> str:
    if isinstance(value, float):
        return f"{round(value, 3):g}"
    return str(value)


class ChartSurface:
    """
    圖表繪圖表面

    結構與原頁面一致：
    svg#line-chart > g(translate) > [g.axis.x, g.axis.y, g.lines, g.points]
    """

    def __init__(self, width: int, height: int, margin: Dict[str, int]):
        self.width = width
        self.height = height
        self.margin = dict(margin)
        self.inner_width = width - self.margin["left"] - self.margin["right"]
        self.inner_height = height - self.margin["top"] - self.margin["bottom"]

        self.root = SvgElement(
            "svg",
            attrs={"xmlns": SVG_NS, "id": "line-chart", "width": width, "height": height},
        )
        self.plot = self.root.append(
            "g",
            attrs={"transform": f"translate({self.margin['left']},{self.margin['top']})"},
        )
        self.x_axis = self.plot.append(
            "g",
            attrs={"transform": f"translate(0,{self.inner_height})"},
            classes=["axis", "x"],
        )
        self.y_axis = self.plot.append("g", classes=["axis", "y"])
        self.lines = self.plot.append("g", classes=["lines"])
        self.points = self.plot.append("g", classes=["points"])

    def line_elements(self) -> List[SvgElement]:
        return self.lines.select_all("path", "line")

    def point_elements(self) -> List[SvgElement]:
        return self.points.select_all("circle", "pt")

    def to_svg(self) -> str:
        """序列化為獨立 SVG 文件字串"""
        return ET.tostring(self.root.to_etree(), encoding="unicode")


class LegendContainer:
    """圖例容器：div#legend > div.item > [span.swatch, span]"""

    def __init__(self):
        self.root = SvgElement("div", attrs={"id": "legend"})

    def add_item(self, key: str, color: str) -> SvgElement:
        item = self.root.append("div", classes=["item"], key=key, datum=key)
        swatch = item.append("span", classes=["swatch"])
        swatch.style["background-color"] = color
        item.append("span", text=key)
        return item

    def items(self) -> List[SvgElement]:
        return self.root.select_all("div", "item")

    def item(self, key: str) -> SvgElement:
        for element in self.items():
            if element.key == key:
                return element
        raise KeyError(key)
