"""
main.py

【功能說明】
------------------------------------------------------------
本檔案為每月移民人數互動折線圖的主入口，負責初始化日誌、載入配置、提供主選單，
並依選擇啟動 Dash 折線圖頁面或匯出靜態 SVG。

【流程與數據流】
------------------------------------------------------------
```mermaid
flowchart TD
    A[main.py] -->|setup_logging| B[logs/linechart.log]
    A -->|ConfigLoader| C[ChartConfig]
    A -->|選項1: 互動頁面| D[BaseLineChart.run]
    A -->|選項2: 匯出 SVG| E[BaseLineChart.export_svg]
```

【錯誤處理】
------------------------------------------------------------
- CSV 載入失敗時由 BaseLineChart 記錄日誌並顯示錯誤 Panel，不繪製圖表
- 配置文件不存在或格式錯誤時使用預設配置

【範例】
------------------------------------------------------------
- 執行主程式：python main.py
- 選擇選項 1：啟動互動折線圖頁面（圖例切換、hover tooltip）
- 選擇選項 2：匯出靜態 SVG 至 output/line_chart.svg
"""

import logging
import os
from logging.handlers import RotatingFileHandler

# 折線圖頁面配置
PLOTTER_HOST = "localhost"  # 主機地址（可改為 "127.0.0.1" 或其他）
PLOTTER_PORT = 8050  # 端口號
PLOTTER_BASE_PATH = "/linechart/"  # URL 路徑前綴
PLOTTER_DEBUG = False  # 是否開啟調試模式

CONFIG_FILE = os.path.join(os.path.dirname(__file__), "linechart_config.json")
SVG_OUTPUT_PATH = os.path.join(os.path.dirname(__file__), "output", "line_chart.svg")

from linechart import BaseLineChart, ConfigLoader
from utils import (
    get_console,
    show_error as ui_show_error,
    show_info as ui_show_info,
    show_menu as ui_show_menu,
    show_welcome as ui_show_welcome,
)


def setup_logging() -> logging.Logger:
    """
    設置 linechart 日誌：RotatingFileHandler 寫入 logs/linechart.log
    """
    log_dir = os.path.join(os.path.dirname(__file__), "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "linechart.log")

    # 關閉HTTP請求日誌，讓控制台更簡潔
    logging.getLogger("werkzeug").setLevel(logging.ERROR)
    logging.getLogger("dash").setLevel(logging.ERROR)

    handler = RotatingFileHandler(
        log_file, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
    )
    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
    )
    handler.setFormatter(formatter)

    root_logger = logging.getLogger("linechart")
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers = []
    root_logger.addHandler(handler)

    root_logger.info("=== 程式啟動 ===")
    return root_logger


def main():
    logger = setup_logging()

    ui_show_welcome(
        "linechart",
        "[bold #dbac30]📈 linechart[/bold #dbac30]\n"
        "[white]Ontario monthly immigration by category, 2024.[/white]\n\n"
        "點擊圖例切換類別，滑鼠移到數據點查看數值。",
    )

    menu_items = [
        "[bold #dbac30]折線圖[/bold #dbac30]",
        "[bold white]1. 啟動互動折線圖頁面 (Dash)\n"
        "2. 匯出靜態 SVG[/bold white]",
    ]

    def display_main_menu():
        """顯示主選單"""
        ui_show_menu("🏁 主選單", menu_items)
        get_console().print(
            "[bold #dbac30]請選擇要執行的功能（1, 2，預設1）：[/bold #dbac30]"
        )

    display_main_menu()
    while True:
        choice = input().strip() or "1"
        if choice in ["1", "2"]:
            break
        ui_show_error("", "無效選擇，請重新輸入 1 或 2。")
        display_main_menu()

    config_file = CONFIG_FILE if os.path.exists(CONFIG_FILE) else None
    config = ConfigLoader(logger).load_config(config_file)
    ui_show_info(
        "LINECHART",
        "\n".join(f"{k}: {v}" for k, v in config.get_summary().items()),
    )
    chart = BaseLineChart(config, logger=logger)

    if choice == "1":
        logger.info("[主選單] 互動折線圖頁面")
        chart.run(
            host=PLOTTER_HOST,
            port=PLOTTER_PORT,
            debug=PLOTTER_DEBUG,
            url_base_pathname=PLOTTER_BASE_PATH,
        )
    else:
        logger.info("[主選單] 匯出 SVG")
        chart.export_svg(SVG_OUTPUT_PATH)


if __name__ == "__main__":
    main()
