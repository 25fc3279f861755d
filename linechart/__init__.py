"""
linechart 目錄

【功能說明】
------------------------------------------------------------
本目錄為每月移民人數互動折線圖的核心：讀取寬格式 CSV，計算比例尺，
在 SVG 繪圖表面上繪製座標軸、折線與數據點，並處理圖例切換與 hover tooltip。
頁面以 Dash 提供，也可匯出為靜態 SVG。

【流程與數據流】
------------------------------------------------------------
```mermaid
flowchart TD
    A[main.py] -->|調用| B[BaseLineChart]
    B -->|讀取數據| C[DataLoader_linechart]
    B -->|初始繪製| D[InteractionController_linechart]
    D -->|比例尺| E[ScaleBuilder_linechart]
    D -->|繪製| F[Renderer_linechart]
    B -->|生成界面| G[DashboardGenerator_linechart]
    B -->|處理回調| H[CallbackHandler_linechart]
    G -->|顯示圖表| I[ChartComponents_linechart]
```

【範例】
------------------------------------------------------------
- 執行折線圖頁面：python main.py（選擇選項 1）
- 匯出 SVG：python main.py（選擇選項 2）
"""

from .Base_linechart import BaseLineChart
from .CallbackHandler_linechart import CallbackHandler
from .ChartComponents_linechart import ChartComponents
from .Config_linechart import ChartConfig, ConfigLoader
from .DashboardGenerator_linechart import DashboardGenerator
from .DataLoader_linechart import DataLoaderLineChart, DataLoadFailure
from .InteractionController_linechart import InteractionController
from .Renderer_linechart import Renderer
from .ScaleBuilder_linechart import ScaleBuilder

__all__ = [
    "BaseLineChart",
    "CallbackHandler",
    "ChartComponents",
    "ChartConfig",
    "ConfigLoader",
    "DashboardGenerator",
    "DataLoaderLineChart",
    "DataLoadFailure",
    "InteractionController",
    "Renderer",
    "ScaleBuilder",
]
