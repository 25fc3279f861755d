"""
Test suite for the renderer and the drawing surface

Covers element counts, idempotent redraws, axis rendering,
line paths and SVG serialization.
"""

from pathlib import Path
from typing import Callable, Dict, Hashable, Tuple

import pytest

from linechart.Config_linechart import CATEGORY_COLORS, CATEGORY_KEYS, MONTHS
from linechart.InteractionController_linechart import InteractionController
from linechart.Renderer_linechart import line_path
from linechart.ScaleBuilder_linechart import LinearScale, PointScale
from linechart.DataLoader_linechart import Point
from linechart.Surface_linechart import ChartSurface, LegendContainer


def snapshot(controller: InteractionController) -> Dict[Hashable, Tuple]:
    """Keys and attributes of every line and point element"""
    surface = controller.surface
    return {
        element.key: (element.tag, dict(element.attrs), tuple(element.classes))
        for element in surface.line_elements() + surface.point_elements()
    }


class TestRendererDraw:
    """Test line and point reconciliation"""

    def test_initial_render_counts(self, controller: InteractionController) -> None:
        """Test four lines and forty-eight markers for a twelve-row file"""
        assert len(controller.surface.line_elements()) == 4
        assert len(controller.surface.point_elements()) == 48

    def test_line_colors_fixed(self, controller: InteractionController) -> None:
        """Test each category is stroked in its fixed color"""
        strokes = {el.key: el.get("stroke") for el in controller.surface.line_elements()}
        assert strokes == dict(zip(CATEGORY_KEYS, CATEGORY_COLORS))

    def test_point_attributes(self, controller: InteractionController) -> None:
        """Test marker position, radius and fill"""
        marker = controller.renderer.points["RefugeeMar"]
        assert marker.get("r") == 3.5
        assert marker.get("fill") == "#c62828"
        assert marker.get("cx") == pytest.approx(controller.x("Mar"))
        assert marker.get("cy") == pytest.approx(controller.y(2480))
        assert marker.datum == Point("Refugee", "Mar", 2480.0)

    def test_draw_is_idempotent(self, controller: InteractionController) -> None:
        """Test repeated draws with unchanged input change nothing"""
        before = snapshot(controller)
        line_result, point_result = controller.renderer.draw(
            controller.active_series(), controller.x, controller.y
        )
        assert line_result.entered == [] and line_result.exited == []
        assert point_result.entered == [] and point_result.exited == []
        assert snapshot(controller) == before

    def test_redraw_with_subset_removes_elements(
        self, controller: InteractionController
    ) -> None:
        """Test series missing from the active list lose their line and markers"""
        subset = [s for s in controller.series if s.key != "Other"]
        controller.renderer.draw(subset, controller.x, controller.y)
        keys = {el.key for el in controller.surface.line_elements()}
        assert keys == {"Economic", "Family Sponsorship", "Refugee"}
        assert not any(k.startswith("Other") for k in controller.renderer.points)
        assert len(controller.surface.point_elements()) == 36

    def test_update_only_moves_points(self, controller: InteractionController) -> None:
        """Test persisting markers keep their element and get new positions"""
        marker = controller.renderer.points["EconomicJan"]
        handlers = dict(marker.handlers)
        taller = LinearScale((0, 100000), controller.y.range)
        controller.renderer.draw(controller.series, controller.x, taller)
        assert controller.renderer.points["EconomicJan"] is marker
        assert marker.get("cy") == pytest.approx(taller(9845))
        assert marker.handlers == handlers

    def test_duplicate_months_stay_stable(
        self,
        make_controller: Callable[[Path], InteractionController],
        write_csv: Callable[..., Path],
    ) -> None:
        """Test duplicate months get distinct markers that survive redraws"""
        path = write_csv(
            "Month,Economic,Family Sponsorship,Refugee,Other\n"
            "Jan,1,1,1,1\nJan,2,2,2,2\n",
            name="dupes.csv",
        )
        controller = make_controller(path)
        assert len(controller.surface.point_elements()) == 8
        assert "EconomicJan#1" in controller.renderer.points
        before = snapshot(controller)
        controller.redraw()
        assert snapshot(controller) == before


class TestLinePath:
    """Test the connected path shape"""

    def test_path_connects_points_in_order(self) -> None:
        x = PointScale(MONTHS, (0, 120))
        y = LinearScale((0, 100), (100, 0))
        points = [Point("Other", "Jan", 0), Point("Other", "Feb", 50), Point("Other", "Mar", 100)]
        assert line_path(points, x, y) == "M5,100L15,50L25,0"

    def test_empty_path(self) -> None:
        x = PointScale(MONTHS, (0, 120))
        y = LinearScale((0, 100), (100, 0))
        assert line_path([], x, y) == ""


class TestAxes:
    """Test axis tick rendering"""

    def test_x_axis_has_twelve_month_ticks(self, controller: InteractionController) -> None:
        ticks = controller.surface.x_axis.select_all("g", "tick")
        assert [t.datum[1] for t in ticks] == MONTHS
        assert ticks[0].get("transform") == "translate(34,0)"

    def test_y_axis_grouped_labels(self, controller: InteractionController) -> None:
        labels = [t.children[1].text for t in controller.surface.y_axis.select_all("g", "tick")]
        assert labels == ["0", "2,000", "4,000", "6,000", "8,000", "10,000", "12,000"]

    def test_y_axis_redrawn_on_toggle(self, controller: InteractionController) -> None:
        controller.toggle("Economic")
        labels = [t.children[1].text for t in controller.surface.y_axis.select_all("g", "tick")]
        assert labels[-1] == "5,000"
        assert len(controller.surface.y_axis.select_all("path", "domain")) == 1


class TestSurface:
    """Test the SVG element tree"""

    def test_group_structure(self) -> None:
        surface = ChartSurface(900, 480, {"top": 28, "right": 24, "bottom": 44, "left": 60})
        assert surface.inner_width == 816
        assert surface.inner_height == 408
        assert surface.plot.get("transform") == "translate(60,28)"
        assert surface.x_axis.get("transform") == "translate(0,408)"
        assert [c.classes for c in surface.plot.children] == [
            ["axis", "x"],
            ["axis", "y"],
            ["lines"],
            ["points"],
        ]

    def test_to_svg(self, controller: InteractionController) -> None:
        svg = controller.surface.to_svg()
        assert svg.startswith("<svg")
        assert 'id="line-chart"' in svg
        assert svg.count('class="line"') == 4
        assert svg.count('class="pt"') == 48

    def test_legend_lookup(self) -> None:
        legend = LegendContainer()
        item = legend.add_item("Refugee", "#c62828")
        assert legend.item("Refugee") is item
        assert item.children[0].style["background-color"] == "#c62828"
        with pytest.raises(KeyError):
            legend.item("Unknown")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
