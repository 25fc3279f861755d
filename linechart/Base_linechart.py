"""
Base_linechart.py

【功能說明】
------------------------------------------------------------
本檔案為 linechart 模組的主流程，協調數據載入、初始繪製、Dash 界面生成、回調設置與 SVG 匯出。
DataLoadFailure 只在此處捕捉一次：記錄日誌、顯示錯誤 Panel，之後不繪製任何圖表。

【關聯流程與數據流】
------------------------------------------------------------
```mermaid
flowchart TD
    A[BaseLineChart] -->|調用| B[DataLoaderLineChart]
    B -->|Records + Series| C[InteractionController]
    C -->|setup| D[Renderer / ChartSurface / LegendContainer]
    A -->|調用| E[DashboardGenerator]
    A -->|調用| F[CallbackHandler]
    E -->|Dash app| G[Web 界面]
    D -->|to_svg| H[SVG 檔案]
```

【常見易錯點】
------------------------------------------------------------
- 數據載入失敗時不做部分繪製、不重試、不使用備用數據
- prepare() 只會執行一次；Dash 與 SVG 匯出共用同一個控制器

【範例】
------------------------------------------------------------
- chart = BaseLineChart(ConfigLoader().load_config())
  chart.run(host="127.0.0.1", port=8050)
- chart.export_svg("output/line_chart.svg")
"""

import logging
import os
from typing import Any, Dict, Optional

import pandas as pd

from utils import show_error, show_success, show_summary

from .CallbackHandler_linechart import CallbackHandler
from .Config_linechart import CATEGORY_KEYS, ChartConfig
from .DashboardGenerator_linechart import DashboardGenerator
from .DataLoader_linechart import DataLoaderLineChart, DataLoadFailure, build_series
from .InteractionController_linechart import InteractionController
from .Surface_linechart import ChartSurface, LegendContainer


class BaseLineChart:
    """
    折線圖主流程

    負責協調數據載入、互動控制器、界面生成與回調處理。
    """

    def __init__(self, config: ChartConfig, logger: Optional[logging.Logger] = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

        self.data_loader = DataLoaderLineChart(config.csv_path, self.logger)
        self.dashboard_generator = DashboardGenerator(self.logger)
        self.callback_handler = CallbackHandler(self.logger)

        self.surface = ChartSurface(config.width, config.height, config.margin)
        self.legend = LegendContainer()
        self.data: Optional[pd.DataFrame] = None
        self.controller: Optional[InteractionController] = None
        self.app = None

    def load_data(self) -> pd.DataFrame:
        """
        載入 CSV 數據

        Raises:
            DataLoadFailure: 讀取或解析失敗
        """
        self.logger.info(f"開始載入 CSV: {self.config.csv_path}")
        self.data = self.data_loader.load()
        return self.data

    def prepare(self) -> bool:
        """
        載入數據並完成初始繪製

        Returns:
            bool: 是否成功；失敗時繪圖區與圖例保持空白
        """
        if self.controller is not None:
            return True

        try:
            frame = self.load_data()
        except DataLoadFailure as e:
            self.logger.error(f"CSV load error: {e}")
            show_error("DATALOADER", f"CSV 載入失敗：{e}", "請確認 CSV 路徑與格式（Month,Economic,Family Sponsorship,Refugee,Other）")
            return False

        self.controller = InteractionController(
            frame, build_series(frame), self.surface, self.legend, self.config, self.logger
        )
        self.controller.setup()

        show_summary("DATALOADER", "載入 CSV", self.get_data_summary())
        return True

    def generate_dashboard(self, url_base_pathname: Optional[str] = None) -> Any:
        """生成 Dash 應用界面；數據載入失敗時返回 None"""
        if not self.prepare():
            return None

        self.logger.info("開始生成 Dash 界面")
        self.app = self.dashboard_generator.create_app(self.controller, url_base_pathname)
        self.callback_handler.setup_callbacks(self.app, self.controller)
        self.logger.info("Dash 界面生成完成")
        return self.app

    def run(
        self,
        host: str = "127.0.0.1",
        port: int = 8050,
        debug: bool = False,
        url_base_pathname: Optional[str] = None,
    ) -> None:
        """
        運行折線圖頁面

        Args:
            host: 主機地址，預設為 127.0.0.1
            port: 端口號，預設為 8050
            debug: 是否開啟調試模式，預設為 False
            url_base_pathname: URL 路徑前綴
        """
        if self.app is None and self.generate_dashboard(url_base_pathname) is None:
            return

        path = url_base_pathname or "/"
        self.logger.info(f"啟動折線圖頁面於 http://{host}:{port}{path}")
        show_success(
            "LINECHART",
            f"折線圖頁面已啟動\n請在瀏覽器中開啟: http://{host}:{port}{path}\n按 Ctrl+C 停止服務",
        )
        self.app.run(host=host, port=port, debug=debug)

    def export_svg(self, output_path: str) -> Optional[str]:
        """
        將目前的繪圖表面匯出為 SVG 檔案

        Returns:
            Optional[str]: 輸出路徑；數據載入失敗時返回 None
        """
        if not self.prepare():
            return None

        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(self.surface.to_svg())

        self.logger.info(f"SVG 匯出完成: {output_path}")
        show_success("RENDERER", f"SVG 匯出完成：{output_path}")
        return output_path

    def get_data_summary(self) -> Dict[str, Any]:
        """獲取數據摘要信息"""
        if self.data is None or self.controller is None:
            return {}

        months = self.data["Month"].tolist()
        return {
            "有效列數": len(self.data),
            "捨棄列數": self.data_loader.dropped_rows,
            "月份範圍": f"{months[0]} 至 {months[-1]}" if months else "",
            "可見類別": ", ".join(self.controller.active_keys()),
            "類別數": len(CATEGORY_KEYS),
            "y 軸上界": self.controller.y.domain[1],
        }
