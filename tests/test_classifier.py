"""
Tests for window statistics, the four heuristics and the windowed scan.
"""
import numpy as np
import pytest
from PIL import Image

from screensense.vision import classifier
from screensense.vision.classifier import (
    BRIGHT_THRESHOLD,
    BUTTON_PASS,
    DARK_THRESHOLD,
    IMAGE_VARIANCE_THRESHOLD,
    OUT_OF_BOUNDS,
    SCAN_STEP,
    UNIFORM_VARIANCE_THRESHOLD,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    WindowStats,
    classify,
    color_variance,
    detect_buttons,
    detect_images,
    detect_links,
    detect_text_fields,
    is_button_like,
    is_image_like,
    is_link_like,
    is_textfield_like,
    mean_intensity,
    scan_windows,
    window_stats,
)
from screensense.vision.geometry import Point, Size
from screensense.vision.models import BUTTON, IMAGE, LINK, TEXTFIELD, RGBAColor
from screensense.vision.preprocessing import PixelBuffer


def uniform_map(value, width=100, height=100):
    return np.full((height, width), value, dtype=np.uint8)


UNIFORM_PREDICATES = (is_button_like, is_textfield_like, is_link_like)


class TestThresholds:
    def test_bands_are_ordered(self):
        assert 0 < DARK_THRESHOLD < BRIGHT_THRESHOLD < 255

    def test_image_threshold_excludes_uniform(self):
        assert IMAGE_VARIANCE_THRESHOLD >= UNIFORM_VARIANCE_THRESHOLD

    def test_default_window(self):
        assert (WINDOW_WIDTH, WINDOW_HEIGHT, SCAN_STEP) == (20, 20, 20)


class TestWindowStatistics:
    def test_uniform_region_has_zero_variance(self):
        img = uniform_map(128)

        assert mean_intensity(img, 10, 10, 20, 20) == 128.0
        assert color_variance(img, 10, 10, 20, 20) == 0.0

    def test_varied_region_has_positive_variance(self, gradient_map):
        img = gradient_map(k=1)

        assert color_variance(img, 10, 10, 20, 20) > 0.0
        # values x+y over a 20x20 window: 2 * var(0..19) = 66.5
        assert color_variance(img, 0, 0, 20, 20) == pytest.approx(66.5)

    def test_known_mean(self):
        img = np.zeros((20, 20), dtype=np.uint8)
        img[:, 10:] = 200

        assert mean_intensity(img, 0, 0, 20, 20) == 100.0
        assert color_variance(img, 0, 0, 20, 20) == 10000.0

    @pytest.mark.parametrize(
        "x,y,w,h",
        [
            (40, 40, 20, 20),   # crosses bottom-right
            (31, 0, 20, 20),    # crosses right edge by one pixel
            (0, 31, 20, 20),    # crosses bottom edge by one pixel
            (-1, 0, 20, 20),
            (0, -5, 20, 20),
            (0, 0, 0, 20),
        ],
    )
    def test_out_of_bounds(self, x, y, w, h):
        img = uniform_map(0, width=50, height=50)

        assert mean_intensity(img, x, y, w, h) is None
        assert color_variance(img, x, y, w, h) == 0.0
        assert window_stats(img, x, y, w, h) is OUT_OF_BOUNDS

    def test_window_touching_border_is_in_bounds(self):
        img = uniform_map(0, width=50, height=50)

        stats = window_stats(img, 30, 30, 20, 20)

        assert stats.in_bounds
        assert stats.mean == 0.0


class TestHeuristics:
    @pytest.mark.parametrize("value", range(256))
    def test_uniform_region_triggers_at_most_one(self, value):
        stats = window_stats(uniform_map(value), 0, 0, 20, 20)

        assert stats.variance == 0.0
        assert sum(p(stats) for p in UNIFORM_PREDICATES) == 1
        assert not is_image_like(stats)

    @pytest.mark.parametrize(
        "value,predicate",
        [
            (0, is_button_like),
            (80, is_button_like),
            (99, is_button_like),
            (100, is_link_like),
            (150, is_link_like),
            (200, is_link_like),
            (201, is_textfield_like),
            (255, is_textfield_like),
        ],
    )
    def test_tone_bands(self, value, predicate):
        stats = window_stats(uniform_map(value), 20, 20, 20, 20)

        assert predicate(stats)

    @pytest.mark.parametrize("k", [1, 3, 5, 7])
    def test_high_variance_is_image_like(self, gradient_map, k):
        stats = window_stats(gradient_map(width=50, height=50, k=k), 15, 15, 20, 20)

        assert stats.variance > 0
        assert is_image_like(stats)
        assert not any(p(stats) for p in UNIFORM_PREDICATES)

    def test_out_of_bounds_sentinel_fails_everything(self):
        for predicate in (*UNIFORM_PREDICATES, is_image_like):
            assert not predicate(OUT_OF_BOUNDS)

    def test_variance_between_thresholds_matches_nothing(self):
        stats = WindowStats(in_bounds=True, mean=150.0, variance=30.0)

        assert not any(p(stats) for p in (*UNIFORM_PREDICATES, is_image_like))

    def test_out_of_bounds_window_on_small_image(self):
        img = uniform_map(50, width=20, height=20)

        assert not is_button_like(window_stats(img, 15, 15, 20, 20))
        assert not is_image_like(window_stats(img, 10, 10, 20, 20))


class TestScanWindows:
    def test_uniform_white_yields_textfields(self):
        elements = scan_windows(uniform_map(255), classifier.TEXTFIELD_PASS)

        assert len(elements) == 25
        first = elements[0]
        assert first.element_type == TEXTFIELD
        assert first.position == Point(0, 0)
        assert first.size == Size(20, 20)
        assert first.selector == "textfield[0,0]"
        assert first.confidence == classifier.TEXTFIELD_CONFIDENCE
        assert dict(first.attributes) == {"input": "true", "type": "text"}
        assert first.color is None

    def test_row_major_order(self):
        elements = scan_windows(uniform_map(0, width=60, height=40), BUTTON_PASS)

        assert [e.position.as_tuple() for e in elements] == [
            (0, 0), (20, 0), (40, 0),
            (0, 20), (20, 20), (40, 20),
        ]

    def test_windows_crossing_border_are_skipped(self):
        elements = scan_windows(uniform_map(0, width=110, height=95), BUTTON_PASS)

        # x origins 0..80 fit (100 does not), y origins 0..60 fit (80 does not)
        assert len(elements) == 5 * 4
        assert all(e.position.x + 20 <= 110 and e.position.y + 20 <= 95 for e in elements)

    def test_image_smaller_than_window(self):
        assert scan_windows(uniform_map(0, width=10, height=10), BUTTON_PASS) == []

    def test_custom_window_and_step(self):
        elements = scan_windows(uniform_map(0, width=40, height=40), BUTTON_PASS, window=Size(10, 10), step=10)

        assert len(elements) == 16
        assert elements[-1].size == Size(10, 10)

    def test_invalid_step(self):
        with pytest.raises(ValueError):
            scan_windows(uniform_map(0), BUTTON_PASS, step=0)

    def test_colour_sampled_from_buffer(self):
        buffer = PixelBuffer.from_image(Image.new("RGB", (40, 40), (10, 20, 30)))
        intensity = uniform_map(0, width=40, height=40)

        elements = scan_windows(intensity, BUTTON_PASS, buffer)

        assert all(e.color == RGBAColor(10, 20, 30, 255) for e in elements)


class TestDetectorPasses:
    def test_buttons(self):
        buttons = detect_buttons(uniform_map(50))

        assert len(buttons) == 25
        for btn in buttons:
            assert btn.element_type == BUTTON
            assert btn.selector.startswith("button[")
            assert btn.attributes["clickable"] == "true"

    def test_text_fields_on_dark_image(self):
        assert detect_text_fields(uniform_map(50)) == []

    def test_images_placeholder_src(self, gradient_map):
        images = detect_images(gradient_map())

        assert len(images) == 25
        first = images[0]
        assert first.element_type == IMAGE
        assert first.selector == "image[0,0]"
        assert first.attributes["src"] == "detected_image_0_0"

    def test_images_src_derived_from_source_path(self, gradient_map):
        intensity = gradient_map(width=40, height=20)
        buffer = PixelBuffer.from_image(Image.fromarray(intensity), source_path="/shots/home.png")

        images = detect_images(intensity, buffer)

        assert [img.attributes["src"] for img in images] == [
            "/shots/home.png#xywh=0,0,20,20",
            "/shots/home.png#xywh=20,0,20,20",
        ]

    def test_links(self):
        links = detect_links(uniform_map(150))

        assert len(links) == 25
        for link in links:
            assert link.element_type == LINK
            assert link.selector.startswith("link[")
            assert link.attributes["href"] == "#"
            assert link.attributes["clickable"] == "true"


class TestClassify:
    @pytest.fixture
    def mixed_map(self, gradient_map):
        img = np.zeros((40, 80), dtype=np.uint8)
        img[:, 20:40] = 255
        img[:, 40:60] = gradient_map(width=20, height=40)
        img[:, 60:80] = 150
        return img

    def test_pass_order(self, mixed_map):
        elements = classify(mixed_map)

        assert [e.element_type for e in elements] == [
            BUTTON, BUTTON,
            TEXTFIELD, TEXTFIELD,
            IMAGE, IMAGE,
            LINK, LINK,
        ]

    def test_parallel_matches_sequential(self, mixed_map):
        assert classify(mixed_map, parallel=True) == classify(mixed_map)

    def test_deterministic(self, mixed_map):
        assert classify(mixed_map) == classify(mixed_map)

    def test_no_matches_returns_empty_list(self):
        # variance between the uniform and image thresholds: alternating 0/10 columns
        img = np.zeros((40, 40), dtype=np.uint8)
        img[:, ::2] = 10

        assert classify(img) == []

    def test_subset_of_passes(self, mixed_map):
        elements = classify(mixed_map, passes=(classifier.LINK_PASS,))

        assert {e.element_type for e in elements} == {LINK}
