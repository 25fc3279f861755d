"""
統一 UI 工具模組

提供標準化的 Rich Panel 顯示函數，確保所有模組使用一致的 CLI 美化格式。

【使用範例】
------------------------------------------------------------
from utils import show_error, show_success, show_summary

# 顯示錯誤訊息
show_error("DATALOADER", "CSV 檔案不存在")

# 顯示成功訊息
show_success("RENDERER", "SVG 匯出完成")

# 顯示小結
show_summary("DATALOADER", "載入 CSV", {"月份數": 12, "類別數": 4})
"""

from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel

# 模組標識的 Emoji 映射表
MODULE_EMOJI_MAP = {
    "DATALOADER": "📊",
    "SCALEBUILDER": "📐",
    "RENDERER": "🖌️",
    "INTERACTION": "🖱️",
    "LINECHART": "🖼️",
}

# 模組名稱映射（將模組名稱映射到顯示名稱）
MODULE_NAME_MAP = {
    "DATALOADER": "數據載入 DataLoader",
    "SCALEBUILDER": "比例尺 ScaleBuilder",
    "RENDERER": "繪圖 Renderer",
    "INTERACTION": "互動 InteractionController",
    "LINECHART": "折線圖 LineChart",
}

# 顏色常量
COLOR_PRIMARY = "#dbac30"  # 主色（金色）
COLOR_SECONDARY = "#8f1511"  # 副色（深紅色）
COLOR_BLUE = "#1e90ff"  # 藍色（用於數值）

# 模組級別的單例 Console 實例
_console_instance: Optional[Console] = None


def get_console() -> Console:
    """
    獲取 Rich Console 實例（單例模式）

    Returns:
        Console: Rich Console 實例
    """
    global _console_instance
    if _console_instance is None:
        _console_instance = Console()
    return _console_instance


def _get_module_title(module: str, use_emoji: bool = True) -> str:
    """
    獲取模組標題

    Args:
        module: 模組標識（如 "DATALOADER"）
        use_emoji: 是否使用 emoji

    Returns:
        str: 模組標題（如 "[bold #8f1511]📊 數據載入 DataLoader[/bold #8f1511]"）
    """
    emoji = MODULE_EMOJI_MAP.get(module.upper(), "")
    name = MODULE_NAME_MAP.get(module.upper(), module)

    if use_emoji and emoji:
        return f"[bold #8f1511]{emoji} {name}[/bold #8f1511]"
    else:
        return f"[bold #8f1511]{name}[/bold #8f1511]"


def _get_step_title(module: str, step_name: str) -> str:
    """獲取步驟面板標題"""
    emoji = MODULE_EMOJI_MAP.get(module.upper(), "")
    name = MODULE_NAME_MAP.get(module.upper(), module)

    if emoji:
        return f"[bold #dbac30]{emoji} {name} 步驟：{step_name}[/bold #dbac30]"
    else:
        return f"[bold #dbac30]{name} 步驟：{step_name}[/bold #dbac30]"


def show_error(module: str, message: str, suggestion: Optional[str] = None) -> None:
    """
    顯示錯誤訊息 Panel

    Args:
        module: 模組標識（如 "DATALOADER"）
        message: 錯誤訊息
        suggestion: 可選的建議解決方法

    範例:
        show_error("DATALOADER", "檔案不存在", "請確認 CSV 路徑正確")
    """
    console = get_console()
    title = _get_module_title(module)

    content = f"❌ {message}"
    if suggestion:
        content += f"\n\n[bold #dbac30]建議：[/bold #dbac30]\n{suggestion}"

    console.print(
        Panel(
            content,
            title=title,
            border_style=COLOR_SECONDARY,
        )
    )


def show_success(module: str, message: str) -> None:
    """顯示成功訊息 Panel"""
    console = get_console()
    title = _get_module_title(module)

    console.print(
        Panel(
            message,
            title=title,
            border_style=COLOR_PRIMARY,
        )
    )


def show_warning(module: str, message: str) -> None:
    """顯示警告訊息 Panel"""
    console = get_console()
    title = _get_module_title(module)

    console.print(
        Panel(
            f"⚠️ {message}",
            title=title,
            border_style=COLOR_SECONDARY,
        )
    )


def show_info(module: str, message: str) -> None:
    """顯示資訊訊息 Panel"""
    console = get_console()
    title = _get_module_title(module)

    console.print(
        Panel(
            message,
            title=title,
            border_style=COLOR_PRIMARY,
        )
    )


def show_summary(
    module: str,
    step_name: str,
    summary_items: Dict[str, Any],
) -> None:
    """
    顯示小結 Panel

    Args:
        module: 模組標識
        step_name: 步驟名稱
        summary_items: 摘要項目的字典（key-value 對）

    範例:
        show_summary(
            "DATALOADER",
            "載入 CSV",
            {
                "有效列數": 12,
                "捨棄列數": 0,
                "月份範圍": "Jan 至 Dec"
            }
        )
    """
    console = get_console()
    title = _get_step_title(module, f"{step_name} - 完成")

    content_lines = ["✅ 操作完成\n"]
    content_lines.append("[bold #dbac30]結果摘要：[/bold #dbac30]")

    for key, value in summary_items.items():
        # 數值使用藍色
        if isinstance(value, (int, float, complex)) and not isinstance(value, bool):
            value_str = f"[{COLOR_BLUE}]{value}[/{COLOR_BLUE}]"
        else:
            value_str = str(value)
        content_lines.append(f"   • {key}: {value_str}")

    content = "\n".join(content_lines)

    console.print(
        Panel(
            content,
            title=title,
            border_style=COLOR_PRIMARY,
        )
    )


def show_welcome(brand_name: str, content: str) -> None:
    """
    顯示歡迎訊息 Panel

    Args:
        brand_name: 品牌名稱（如 "linechart"）
        content: 歡迎訊息的內容
    """
    console = get_console()

    console.print(
        Panel(
            content,
            title=f"[bold {COLOR_SECONDARY}]Welcome to {brand_name}![/bold {COLOR_SECONDARY}]",
            border_style=COLOR_PRIMARY,
            padding=(1, 4),
        )
    )


def show_menu(title: str, menu_items: List[str]) -> None:
    """
    顯示主選單 Panel

    Args:
        title: 選單標題（如 "🏁 主選單"）
        menu_items: 選單項目的列表（每項為一個字符串，可包含格式化標記）
    """
    console = get_console()

    content = "\n".join(menu_items)

    console.print(
        Panel(
            content,
            title=f"[bold {COLOR_PRIMARY}]{title}[/bold {COLOR_PRIMARY}]",
            border_style=COLOR_PRIMARY,
        )
    )
