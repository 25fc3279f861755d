"""
Config_linechart.py

【功能說明】
------------------------------------------------------------
本模組負責折線圖的配置載入，定義月份、類別、顏色等固定常量，
並從可選的 JSON 文件讀取圖表尺寸、邊距、CSV 路徑等設定，與預設值合併。

【流程與數據流】
------------------------------------------------------------
- 主流程：讀取文件 → 解析 JSON → 合併預設值 → 轉換格式 → 返回 ChartConfig
- 未提供配置文件時直接使用預設值

【常見易錯點】
------------------------------------------------------------
- JSON 解析錯誤時會回退到預設配置，並顯示警告
- colors 必須與 CATEGORY_KEYS 數量一致，否則回退到預設顏色
- 尺寸、邊距、刻度數與點半徑無法轉為正確型別時，該欄位回退到預設值並顯示警告

【範例】
------------------------------------------------------------
- config = ConfigLoader().load_config("linechart_config.json")
- config = ConfigLoader().load_config()  # 全部使用預設值
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from utils import show_warning

MONTHS = [
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
]

CATEGORY_KEYS = ["Economic", "Family Sponsorship", "Refugee", "Other"]

# blue, green, red, purple
CATEGORY_COLORS = ["#1565c0", "#2e7d32", "#c62828", "#8e24aa"]

DEFAULT_CSV_PATH = str(
    Path(__file__).resolve().parent.parent / "data" / "ontario_immigration_2024_wide.csv"
)


class ChartConfig:
    """
    圖表配置容器

    封裝配置文件的數據結構，提供標準化的配置訪問介面。
    """

    def __init__(self, config_dict: Dict[str, Any], file_path: Optional[str] = None):
        self.file_path = file_path
        self.raw_config = config_dict.copy()

        self.csv_path: str = config_dict["csv_path"]
        self.width: int = int(config_dict["width"])
        self.height: int = int(config_dict["height"])
        self.margin: Dict[str, int] = dict(config_dict["margin"])
        self.colors: List[str] = list(config_dict["colors"])
        self.year_label: str = str(config_dict["year_label"])
        self.y_ticks: int = int(config_dict["y_ticks"])
        self.point_radius: float = float(config_dict["point_radius"])

    def color_map(self) -> Dict[str, str]:
        """類別 → 顏色（頁面生命週期內固定）"""
        return dict(zip(CATEGORY_KEYS, self.colors))

    def get_summary(self) -> Dict[str, Any]:
        return {
            "配置文件": self.file_path or "（預設值）",
            "CSV 路徑": self.csv_path,
            "畫布尺寸": f"{self.width} x {self.height}",
            "年份標籤": self.year_label,
        }


class ConfigLoader:
    """
    配置文件載入器

    負責從 JSON 文件中載入配置數據，合併預設值，
    提供標準化的 ChartConfig。
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

        # 預設配置值
        self.default_config = {
            "csv_path": DEFAULT_CSV_PATH,
            "width": 900,
            "height": 480,
            "margin": {"top": 28, "right": 24, "bottom": 44, "left": 60},
            "colors": list(CATEGORY_COLORS),
            "year_label": "2024",
            "y_ticks": 6,
            "point_radius": 3.5,
        }

    def load_config(self, config_file: Optional[str] = None) -> ChartConfig:
        """
        載入配置文件

        Args:
            config_file: 配置文件路徑，None 表示使用預設值

        Returns:
            ChartConfig: 配置數據對象
        """
        config_dict: Dict[str, Any] = {}
        if config_file:
            config_dict = self._read_config_file(config_file) or {}

        merged_config = self._merge_with_defaults(config_dict)
        processed_config = self._process_config(merged_config)
        return ChartConfig(processed_config, config_file if config_dict else None)

    def _read_config_file(self, config_file: str) -> Optional[Dict[str, Any]]:
        """讀取配置文件，失敗時返回 None"""
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                config_dict = json.load(f)

            if not isinstance(config_dict, dict):
                raise ValueError("配置文件頂層必須為 JSON 物件")
            return config_dict

        except FileNotFoundError:
            self.logger.warning(f"配置文件不存在: {config_file}")
            show_warning("LINECHART", f"配置文件不存在：{Path(config_file).name}，使用預設配置")
            return None
        except (json.JSONDecodeError, ValueError) as e:
            self.logger.warning(f"配置文件格式錯誤: {e}")
            show_warning("LINECHART", f"配置文件格式錯誤：{e}，使用預設配置")
            return None

    def _merge_with_defaults(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        合併預設配置

        Args:
            config_dict: 原始配置字典

        Returns:
            Dict[str, Any]: 合併後的配置字典
        """
        merged_config = self.default_config.copy()

        for key, value in config_dict.items():
            if (
                key in merged_config
                and isinstance(merged_config[key], dict)
                and isinstance(value, dict)
            ):
                merged_config[key] = {**merged_config[key], **value}
            else:
                merged_config[key] = value

        return merged_config

    def _process_config(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """處理配置數據"""
        processed = config_dict.copy()

        colors = processed.get("colors")
        if not isinstance(colors, list) or len(colors) != len(CATEGORY_KEYS):
            self.logger.warning(f"顏色數量與類別不符，使用預設顏色: {colors}")
            processed["colors"] = list(CATEGORY_COLORS)

        for key, cast in (("width", int), ("height", int), ("y_ticks", int), ("point_radius", float)):
            processed[key] = self._cast_value(key, processed.get(key), self.default_config[key], cast)

        margin = processed.get("margin")
        if not isinstance(margin, dict):
            self._warn_invalid("margin", margin)
            margin = {}
        default_margin = self.default_config["margin"]
        processed["margin"] = {
            side: self._cast_value(f"margin.{side}", margin.get(side, value), value, int, allow_zero=True)
            for side, value in default_margin.items()
        }

        processed["csv_path"] = str(processed["csv_path"])
        processed["year_label"] = str(processed["year_label"])
        return processed

    def _cast_value(self, name: str, value: Any, default: Any, cast, allow_zero: bool = False) -> Any:
        """轉換數值欄位；型別錯誤或非正數時回退到預設值"""
        try:
            if isinstance(value, bool):
                raise ValueError(value)
            result = cast(value)
        except (TypeError, ValueError):
            self._warn_invalid(name, value)
            return default

        if result < 0 or (result == 0 and not allow_zero):
            self._warn_invalid(name, value)
            return default
        return result

    def _warn_invalid(self, name: str, value: Any) -> None:
        self.logger.warning(f"配置欄位 {name} 無效，使用預設值: {value!r}")
        show_warning("LINECHART", f"配置欄位 {name} 無效：{value!r}，使用預設值")
