"""Unit tests for SaddleGeometryResolver."""

import pytest

from bikefit.geometry import SENTINEL, SaddlePosition

ALL_SENTINELS = {
    "effectiveSTA": SENTINEL,
    "setbackVsSTA": SENTINEL,
    "bbToRail": SENTINEL,
    "bbToSRC": SENTINEL,
    "exposedSeatpost": SENTINEL,
}


class TestSaddleMetrics:
    def test_full_frame(self, saddle_resolver):
        metrics = saddle_resolver.resolve(SaddlePosition(150, 600), 73, 500)
        assert metrics.effective_sta == 76.0
        assert metrics.setback_vs_sta == 33
        assert metrics.bb_to_rail == 627
        assert metrics.exposed_seatpost == 127
        assert metrics.bb_to_src == 618

    def test_without_seat_tube_length(self, saddle_resolver):
        metrics = saddle_resolver.resolve(SaddlePosition(150, 600), 73)
        assert metrics.bb_to_rail == 627
        assert metrics.exposed_seatpost == SENTINEL

    def test_without_seat_tube_angle(self, saddle_resolver):
        metrics = saddle_resolver.resolve(SaddlePosition(150, 600), None, 500)
        assert metrics.effective_sta == 76.0
        assert metrics.bb_to_src == 618
        assert metrics.setback_vs_sta == SENTINEL
        assert metrics.bb_to_rail == SENTINEL
        assert metrics.exposed_seatpost == SENTINEL

    def test_saddle_forward_of_seat_tube_line(self, saddle_resolver):
        metrics = saddle_resolver.resolve(SaddlePosition(220, 600), 73)
        assert metrics.setback_vs_sta == -37

    def test_idempotent(self, saddle_resolver):
        saddle = SaddlePosition(180, 700)
        assert saddle_resolver.resolve(saddle, 74, 520) == saddle_resolver.resolve(saddle, 74, 520)


class TestSaddleValidity:
    @pytest.mark.parametrize("x,y", [(100, 425), (300, 900), (100, 900), (300, 425)])
    def test_window_edges_are_valid(self, saddle_resolver, x, y):
        saddle = SaddlePosition(x, y)
        assert saddle_resolver.is_saddle_position_valid(saddle)
        assert saddle_resolver.resolve(saddle, 73).bb_to_src != SENTINEL

    @pytest.mark.parametrize("x,y", [(99, 425), (300, 901), (50, 600), (301, 600), (150, 424)])
    def test_outside_window_is_all_sentinels(self, saddle_resolver, x, y):
        metrics = saddle_resolver.resolve(SaddlePosition(x, y), 73, 500)
        assert metrics.to_dict() == ALL_SENTINELS

    def test_unset_saddle(self, saddle_resolver):
        assert saddle_resolver.resolve(SaddlePosition(), 73, 500).to_dict() == ALL_SENTINELS
