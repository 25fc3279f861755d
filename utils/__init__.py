"""
專案級別的通用工具模組

提供統一的 UI 顯示工具，確保所有模組使用一致的 CLI 美化格式。
"""

from .ui_utils import (
    get_console,
    show_error,
    show_success,
    show_warning,
    show_info,
    show_summary,
    show_welcome,
    show_menu,
    MODULE_EMOJI_MAP,
)

__all__ = [
    "get_console",
    "show_error",
    "show_success",
    "show_warning",
    "show_info",
    "show_summary",
    "show_welcome",
    "show_menu",
    "MODULE_EMOJI_MAP",
]
