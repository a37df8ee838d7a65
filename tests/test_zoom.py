"""Tests for zoom wrapping and the cross-fade pair."""

import numpy as np
import pytest

from microworld.zoom import (
    BlendPair,
    ZoomController,
    blend_pair,
    nearest_layer,
    wrap_zoom,
)

L = 6


class TestWrapZoom:
    def test_negative_wraps_to_end(self):
        assert wrap_zoom(-0.3, L) == pytest.approx(5.7)

    def test_overflow_wraps(self):
        assert wrap_zoom(13.25, L) == pytest.approx(1.25)

    def test_always_in_range(self):
        values = np.concatenate([
            np.linspace(-1000, 1000, 2001),
            np.random.default_rng(0).normal(0, 50, 500),
            [-1e-17, -0.0, 6.0, -6.0, 5.999999999999999],
        ])
        for v in values:
            w = wrap_zoom(float(v), L)
            assert 0.0 <= w < L

    def test_idempotent(self):
        for v in np.linspace(-20, 20, 97):
            once = wrap_zoom(float(v), L)
            assert wrap_zoom(once, L) == once

    def test_tiny_negative_does_not_round_to_count(self):
        assert wrap_zoom(-1e-17, L) == 0.0


class TestBlendPair:
    def test_negative_scenario(self):
        pair = blend_pair(-0.3, L)
        assert pair.index == 5
        assert pair.next_index == 0
        assert pair.blend == pytest.approx(0.7)

    def test_last_layer_wraps_to_first(self):
        pair = blend_pair(5.5, L)
        assert pair.index == 5
        assert pair.next_index == 0

    def test_exact_integer_has_zero_blend(self):
        pair = blend_pair(3.0, L)
        assert pair == BlendPair(index=3, next_index=4, blend=0.0)
        assert pair.current_weight == 1.0
        assert pair.next_weight == 0.0

    def test_weights_sum_to_one(self):
        for v in np.linspace(-7, 7, 113):
            pair = blend_pair(float(v), L)
            assert 0 <= pair.index < L
            assert 0.0 <= pair.blend < 1.0
            assert pair.current_weight + pair.next_weight == pytest.approx(1.0)


class TestNearestLayer:
    def test_rounds_up(self):
        assert nearest_layer(1.9, L) == 2
        assert nearest_layer(1.4, L) == 1

    def test_half_rounds_up_not_to_even(self):
        assert nearest_layer(2.5, L) == 3
        assert nearest_layer(3.5, L) == 4

    def test_wraps_near_end(self):
        assert nearest_layer(5.6, L) == 0

    def test_negative_values(self):
        assert nearest_layer(-0.4, L) == 0
        assert nearest_layer(-0.6, L) == 5


class TestZoomController:
    def test_rejects_empty_stack(self):
        with pytest.raises(ValueError):
            ZoomController(0)

    def test_slider_half_way(self):
        zoom = ZoomController(L)
        zoom.jump_to_fraction(0.5)
        assert zoom.level == 3.0
        pair = zoom.pair()
        assert pair.index == 3
        assert pair.blend == 0.0

    def test_fraction_is_clamped(self):
        zoom = ZoomController(L)
        zoom.jump_to_fraction(-2.0)
        assert zoom.level == 0.0
        zoom.jump_to_fraction(4.0)
        assert zoom.level == L
        assert zoom.pair().index == 0

    def test_scroll_down_moves_backwards(self):
        zoom = ZoomController(L, wheel_sensitivity=0.0016)
        zoom.scroll(100)
        assert zoom.level == pytest.approx(-0.16)
        assert zoom.normalize() == pytest.approx(5.84)

    def test_scroll_accumulates_unbounded_until_normalized(self):
        zoom = ZoomController(L)
        for _ in range(51):
            zoom.scroll(-1000)
        assert zoom.level == pytest.approx(81.6)
        pair = zoom.pair()
        assert pair.index == 3
        assert pair.blend == pytest.approx(0.6)

    def test_jump_is_absolute(self):
        zoom = ZoomController(L)
        zoom.advance(4.2)
        zoom.jump_to_fraction(0.25)
        assert zoom.level == pytest.approx(1.5)

    def test_nearest(self):
        zoom = ZoomController(L)
        zoom.level = 1.9
        assert zoom.nearest() == 2
