"""Tests for the drawing surfaces."""

from smooth_snake.render import NullSurface, RecordingSurface


class TestRecordingSurface:
    def test_records_fills(self):
        surface = RecordingSurface(64, 64)
        surface.fill_rect(1, 2, 3, 4, "red")
        assert surface.operations == [
            {"op": "fill", "x": 1, "y": 2, "w": 3, "h": 4, "color": "red"},
        ]

    def test_clear_discards_earlier_operations(self):
        surface = RecordingSurface(64, 64)
        surface.fill_rect(0, 0, 1, 1, "red")
        surface.clear("green")
        assert surface.operations == [{"op": "clear", "color": "green"}]

    def test_drain(self):
        surface = RecordingSurface(64, 64)
        surface.fill_rect(0, 0, 1, 1, "red")
        ops = surface.drain()
        assert len(ops) == 1
        assert surface.operations == []
        assert surface.drain() == []


class TestNullSurface:
    def test_discards_drawing(self):
        surface = NullSurface()
        surface.fill_rect(0, 0, 1, 1, "red")
        surface.clear("green")
        assert vars(surface) == {}
