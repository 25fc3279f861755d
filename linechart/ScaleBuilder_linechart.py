"""
ScaleBuilder_linechart.py

【功能說明】
------------------------------------------------------------
本模組負責由載入的數據推導水平與垂直比例尺：
- PointScale：月份標籤 → 等距水平像素位置，兩端各保留半個步長
- LinearScale：數值 → 垂直像素位置，定義域 [0, max] 取整到「好看」的刻度邊界

水平比例尺與繪圖尺寸在頁面生命週期內固定；
垂直比例尺在每次切換可見類別時重新計算。

【常見易錯點】
------------------------------------------------------------
- 可見類別為空或全部為 0 時，max 視為 1，避免退化的定義域
- nice() 會向外擴展定義域，因此上界永遠 >= 目前繪製的最大值
- 垂直比例尺的值域是反轉的（0 對應繪圖區底部）

【範例】
------------------------------------------------------------
- builder = ScaleBuilder(inner_width=816, inner_height=408)
  x = builder.build_x()
  y = builder.build_y(frame, ["Economic", "Refugee"])
  y.ticks(6)
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .Config_linechart import MONTHS

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _tick_spec(start: float, stop: float, count: float) -> Tuple[int, int, float]:
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / math.pow(10, power)
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1

    if power < 0:
        inc = math.pow(10, -power) / factor
        i1 = round(start * inc)
        i2 = round(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = math.pow(10, power) * factor
        i1 = round(start / inc)
        i2 = round(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1

    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def tick_increment(start: float, stop: float, count: float) -> float:
    """
    刻度步長；正數為步長本身，負數表示步長的倒數（小於 1 的步長）
    """
    if stop <= start or count <= 0:
        return 0
    return _tick_spec(start, stop, count)[2]


def ticks(start: float, stop: float, count: float) -> List[float]:
    """在 [start, stop] 之間產生約 count 個整齊的刻度值"""
    if not count > 0:
        return []
    if start == stop:
        return [start]

    reverse = stop < start
    if reverse:
        start, stop = stop, start

    i1, i2, inc = _tick_spec(start, stop, count)
    if i2 < i1:
        return []

    if inc < 0:
        values = [(i1 + i) / -inc for i in range(i2 - i1 + 1)]
    else:
        values = [(i1 + i) * inc for i in range(i2 - i1 + 1)]

    return values[::-1] if reverse else values


class PointScale:
    """類別型比例尺：等距分佈的點，兩端各保留 padding 個步長"""

    def __init__(
        self,
        domain: Sequence[str],
        output_range: Tuple[float, float],
        padding: float = 0.5,
    ):
        self.domain = list(domain)
        self.range = output_range
        self.padding = padding

        n = len(self.domain)
        start, stop = output_range
        self.step = (stop - start) / max(1, n - 1 + padding * 2)
        start += (stop - start - self.step * (n - 1)) * 0.5
        self._positions = {
            label: start + self.step * idx for idx, label in enumerate(self.domain)
        }

    def __call__(self, label: str) -> float:
        return self._positions[label]

    def ticks(self) -> List[str]:
        return list(self.domain)


class LinearScale:
    """連續型比例尺：定義域線性映射到值域"""

    def __init__(self, domain: Tuple[float, float], output_range: Tuple[float, float]):
        self.domain: Tuple[float, float] = (float(domain[0]), float(domain[1]))
        self.range: Tuple[float, float] = (float(output_range[0]), float(output_range[1]))

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return r0 + (r1 - r0) * 0.5
        return r0 + (float(value) - d0) / (d1 - d0) * (r1 - r0)

    def nice(self, count: int = 10) -> "LinearScale":
        """將定義域向外擴展到整齊的刻度邊界（就地修改並返回自身）"""
        start, stop = self.domain
        reverse = stop < start
        if reverse:
            start, stop = stop, start

        prestep = None
        for _ in range(10):
            step = tick_increment(start, stop, count)
            if step == prestep:
                self.domain = (stop, start) if reverse else (start, stop)
                break
            if step > 0:
                start = math.floor(start / step) * step
                stop = math.ceil(stop / step) * step
            elif step < 0:
                start = math.ceil(start * step) / step
                stop = math.floor(stop * step) / step
            else:
                break
            prestep = step

        return self

    def ticks(self, count: int = 10) -> List[float]:
        return ticks(self.domain[0], self.domain[1], count)


def format_grouped(value: float) -> str:
    """千分位格式（整數不帶小數點），例如 1200 → '1,200'"""
    number = float(value)
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.12g}"


def format_grouped_int(value: float) -> str:
    """千分位整數格式，例如 12500.0 → '12,500'；.5 一律向上進位（2.5 → '3'）"""
    return f"{math.floor(float(value) + 0.5):,}"


class ScaleBuilder:
    """
    比例尺生成器

    由完整數據集與目前可見的類別計算水平與垂直比例尺。
    """

    def __init__(
        self,
        inner_width: float,
        inner_height: float,
        logger: Optional[logging.Logger] = None,
    ):
        self.inner_width = inner_width
        self.inner_height = inner_height
        self.logger = logger or logging.getLogger(__name__)

    def build_x(self) -> PointScale:
        """月份 → 水平像素位置（固定）"""
        return PointScale(MONTHS, (0, self.inner_width), padding=0.5)

    @staticmethod
    def y_max(frame: pd.DataFrame, active_keys: Sequence[str]) -> float:
        """可見類別中的最大單一值；無可見類別或全部為 0 時返回 1"""
        keys = [key for key in active_keys if key in frame.columns]
        if not keys or frame.empty:
            return 1.0
        values = frame[keys].to_numpy(dtype=float)
        maximum = float(np.nanmax(values)) if values.size else 0.0
        return maximum if maximum > 0 else 1.0

    def build_y(self, frame: pd.DataFrame, active_keys: Sequence[str]) -> LinearScale:
        """數值 → 垂直像素位置，定義域 [0, max] 取整"""
        maximum = self.y_max(frame, active_keys)
        scale = LinearScale((0, maximum), (self.inner_height, 0)).nice()
        self.logger.debug(
            f"垂直比例尺更新: 可見類別 {list(active_keys)}，max={maximum}，定義域={scale.domain}"
        )
        return scale
