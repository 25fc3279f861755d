"""
DataLoader_linechart.py

【功能說明】
------------------------------------------------------------
本模組負責讀取寬格式的每月移民數據 CSV（Month,Economic,Family Sponsorship,Refugee,Other），
將各類別欄位轉為數值、過濾無法識別的月份、按日曆順序穩定排序，
並為每個類別建立固定的 Series 供後續比例尺與繪圖使用。

【流程與數據流】
------------------------------------------------------------
- 主流程：讀取 CSV → 數值轉換 → 過濾月份 → 穩定排序 → 建立 Series

```mermaid
flowchart TD
    A[BaseLineChart] -->|調用| B[DataLoaderLineChart]
    B -->|pd.read_csv| C[原始 DataFrame]
    C -->|to_numeric, 缺失補 0| D[數值欄位]
    D -->|過濾 + 穩定排序| E[Records]
    E -->|build_series| F[Series x 4]
```

【常見易錯點】
------------------------------------------------------------
- 非數值或缺失的類別值一律視為 0，不另外發出警告
- 重複的月份會保留，並維持在檔案中的相對順序
- 讀取或解析失敗一律拋出 DataLoadFailure，由上層記錄並停止繪圖

【範例】
------------------------------------------------------------
- loader = DataLoaderLineChart("data/ontario_immigration_2024_wide.csv")
  frame = loader.load()
  series = build_series(frame)
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import pandas as pd

from .Config_linechart import CATEGORY_KEYS, MONTHS

MONTH_INDEX = {month: idx for idx, month in enumerate(MONTHS)}


class DataLoadFailure(Exception):
    """CSV 讀取或解析失敗"""


@dataclass(frozen=True)
class Point:
    """單一類別、單一月份的觀測值"""

    key: str
    month: str
    value: float

    @property
    def composite_key(self) -> str:
        return self.key + self.month


@dataclass(frozen=True)
class Series:
    """單一類別按月份排列的觀測值"""

    key: str
    points: Tuple[Point, ...]


class DataLoaderLineChart:
    """
    CSV 數據載入器

    負責讀取、轉換、過濾與排序每月移民數據。
    """

    def __init__(self, csv_path: str, logger: Optional[logging.Logger] = None):
        """
        初始化數據載入器

        Args:
            csv_path: CSV 檔案路徑（本地路徑或 URL）
            logger: 日誌記錄器，預設為 None
        """
        self.csv_path = csv_path
        self.logger = logger or logging.getLogger(__name__)
        self.dropped_rows = 0

    def load(self) -> pd.DataFrame:
        """
        載入並整理 CSV 數據

        Returns:
            pd.DataFrame: 欄位為 Month + 四個類別，已按月份排序，index 重設

        Raises:
            DataLoadFailure: 檔案不存在、為空或格式錯誤
        """
        raw = self._read_csv()
        frame = self.convert_numeric_columns(raw)
        frame = self.filter_and_sort_months(frame)
        frame = frame[["Month"] + CATEGORY_KEYS].reset_index(drop=True)

        self.logger.info(
            f"CSV 載入完成: {self.csv_path}，有效 {len(frame)} 列，捨棄 {self.dropped_rows} 列"
        )
        return frame

    def _read_csv(self) -> pd.DataFrame:
        try:
            raw = pd.read_csv(self.csv_path, skipinitialspace=True)
        except FileNotFoundError as e:
            raise DataLoadFailure(f"CSV 檔案不存在: {self.csv_path}") from e
        except pd.errors.EmptyDataError as e:
            raise DataLoadFailure(f"CSV 檔案為空: {self.csv_path}") from e
        except (pd.errors.ParserError, UnicodeDecodeError, OSError, ValueError) as e:
            raise DataLoadFailure(f"CSV 解析失敗: {e}") from e

        raw.columns = [str(col).strip() for col in raw.columns]
        if "Month" not in raw.columns:
            raise DataLoadFailure(f"CSV 缺少 Month 欄位: {list(raw.columns)}")
        return raw

    def convert_numeric_columns(self, data: pd.DataFrame) -> pd.DataFrame:
        """將類別欄位轉為數值，缺失或無法轉換的值補 0"""
        frame = data.copy()
        for key in CATEGORY_KEYS:
            if key not in frame.columns:
                self.logger.debug(f"CSV 缺少類別欄位 {key}，以 0 填充")
                frame[key] = 0.0
                continue
            frame[key] = pd.to_numeric(frame[key], errors="coerce").fillna(0).astype(float)
        return frame

    def filter_and_sort_months(self, data: pd.DataFrame) -> pd.DataFrame:
        """捨棄無法識別的月份，並以穩定排序排列為日曆順序"""
        months = data["Month"].map(lambda m: m.strip() if isinstance(m, str) else m)
        order = months.map(lambda m: MONTH_INDEX.get(m) if isinstance(m, str) else None)
        valid = order.notna()

        self.dropped_rows = int((~valid).sum())
        if self.dropped_rows:
            self.logger.debug(f"捨棄 {self.dropped_rows} 列無法識別的月份")

        frame = data.loc[valid].copy()
        frame["Month"] = months[valid].astype(str)
        frame["_order"] = order[valid].astype(int)
        frame = frame.sort_values("_order", kind="stable")
        return frame.drop(columns="_order")


def build_series(frame: pd.DataFrame) -> List[Series]:
    """為每個類別建立 Series（按類別鍵順序，點按 frame 順序）"""
    months = frame["Month"].tolist()
    return [
        Series(
            key=key,
            points=tuple(
                Point(key=key, month=month, value=float(value))
                for month, value in zip(months, frame[key].tolist())
            ),
        )
        for key in CATEGORY_KEYS
    ]
