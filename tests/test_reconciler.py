"""
Test suite for the keyed enter/update/exit reconciler
"""

from typing import Dict, List

import pytest

from linechart.utils.Reconciler_utils_linechart import reconcile, unique_keys


class TestReconcile:
    """Test key-based reconciliation"""

    def setup_method(self) -> None:
        """Set up a log of applied operations"""
        self.log: List[str] = []

    def _apply(self, current: Dict[str, dict], data: List[dict]):
        def enter(key, datum):
            self.log.append(f"enter {key}")
            return {"key": key, "value": datum["value"]}

        def update(element, datum):
            self.log.append(f"update {element['key']}")
            element["value"] = datum["value"]

        def exit(element):
            self.log.append(f"exit {element['key']}")

        return reconcile(current, data, lambda d: d["key"], enter, update, exit)

    def test_disjoint_sets(self) -> None:
        """Test entered, updated and exited keys are computed by key comparison"""
        current = {"a": {"key": "a", "value": 1}, "b": {"key": "b", "value": 2}}
        result = self._apply(current, [{"key": "b", "value": 20}, {"key": "c", "value": 3}])

        assert result.entered == ["c"]
        assert result.updated == ["b"]
        assert result.exited == ["a"]
        assert list(result.elements) == ["b", "c"]
        assert result.elements["b"]["value"] == 20
        assert set(self.log) == {"enter c", "update b", "exit a"}

    def test_current_mapping_not_mutated(self) -> None:
        """Test the input mapping is left untouched"""
        current = {"a": {"key": "a", "value": 1}}
        self._apply(current, [])
        assert list(current) == ["a"]

    def test_same_data_only_updates(self) -> None:
        """Test a repeated join creates and removes nothing"""
        data = [{"key": "a", "value": 1}, {"key": "b", "value": 2}]
        first = self._apply({}, data)
        second = self._apply(first.elements, data)
        assert second.entered == []
        assert second.exited == []
        assert second.updated == ["a", "b"]
        assert second.elements["a"] is first.elements["a"]


class TestUniqueKeys:
    """Test duplicate key handling"""

    def test_duplicates_get_suffix(self) -> None:
        keyed = unique_keys(["Mar", "Jan", "Mar", "Mar"], lambda m: m)
        assert [k for k, _ in keyed] == ["Mar", "Jan", "Mar#1", "Mar#2"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
