"""
LineChart 工具模組包

提供 linechart 模組的共用工具和輔助功能。
"""

from .DashAppUtils_utils_linechart import create_dash_app
from .Reconciler_utils_linechart import ReconcileResult, reconcile, unique_keys

__all__ = ["ReconcileResult", "create_dash_app", "reconcile", "unique_keys"]
