"""
鍵值對照工具模組

將「目前已繪製的元素集合」與「新的目標數據」以鍵值比對，
分成新增（enter）、更新（update）、移除（exit）三個互斥集合並分別套用。
線條以類別為鍵，數據點以「類別+月份」為鍵。
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, Hashable, Iterable, List, Mapping, Tuple, TypeVar

D = TypeVar("D")
E = TypeVar("E")


@dataclass
class ReconcileResult(Generic[E]):
    """對照結果：三個互斥的鍵集合，以及按數據順序排列的新元素映射"""

    entered: List[Hashable] = field(default_factory=list)
    updated: List[Hashable] = field(default_factory=list)
    exited: List[Hashable] = field(default_factory=list)
    elements: Dict[Hashable, E] = field(default_factory=dict)


def unique_keys(data: Iterable[D], key_fn: Callable[[D], Hashable]) -> List[Tuple[Hashable, D]]:
    """
    為每筆數據計算鍵；重複的鍵依出現次數加上後綴（第一次出現保持原鍵），
    使重複數據在多次重繪之間仍對應到同一個元素
    """
    seen: Dict[Hashable, int] = {}
    keyed = []
    for datum in data:
        key = key_fn(datum)
        count = seen.get(key, 0)
        seen[key] = count + 1
        keyed.append((key if count == 0 else f"{key}#{count}", datum))
    return keyed


def reconcile(
    current: Mapping[Hashable, E],
    data: Iterable[D],
    key_fn: Callable[[D], Hashable],
    enter: Callable[[Hashable, D], E],
    update: Callable[[E, D], None],
    exit: Callable[[E], None],
) -> ReconcileResult[E]:
    """
    以鍵值對照目前元素與目標數據

    Args:
        current: 目前的鍵 → 元素映射（不會被修改）
        data: 目標數據
        key_fn: 數據 → 鍵
        enter: 為新鍵建立元素
        update: 以新數據刷新既有元素
        exit: 移除不再存在的元素

    Returns:
        ReconcileResult: entered / updated / exited 鍵與新的映射
    """
    result: ReconcileResult[E] = ReconcileResult()
    keyed = unique_keys(data, key_fn)
    target_keys = {key for key, _ in keyed}

    for key, element in current.items():
        if key not in target_keys:
            exit(element)
            result.exited.append(key)

    for key, datum in keyed:
        if key in current:
            element = current[key]
            update(element, datum)
            result.updated.append(key)
        else:
            element = enter(key, datum)
            result.entered.append(key)
        result.elements[key] = element

    return result
