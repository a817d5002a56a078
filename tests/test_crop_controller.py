"""Tests for the crop interaction controller."""

from unittest.mock import MagicMock

import pytest
from PySide6.QtCore import QPointF

from photocrop.core.flip import FlipState
from photocrop.core.geometry import CropRectangle
from photocrop.gui.crop import AspectConstraint, CropInteractionController


def create_controller(width=800, height=600, scale=1.0):
    on_snapshot = MagicMock()
    controller = CropInteractionController(
        on_snapshot_changed=on_snapshot,
        view_scale_provider=lambda: scale,
    )
    if width and height:
        controller.load_image(width, height)
    return controller, on_snapshot


def assert_rect(rect, expected):
    assert (rect.x, rect.y, rect.width, rect.height) == pytest.approx(
        (expected.x, expected.y, expected.width, expected.height)
    )


def test_no_snapshot_before_load():
    controller, on_snapshot = create_controller(width=0, height=0)
    assert controller.snapshot() is None

    # Parameter changes never raise, even without an image.
    controller.set_zoom(2.0)
    controller.rotate_right()
    controller.toggle_flip_horizontal()
    controller.pan_by(10, 10)
    controller.reset()

    assert controller.snapshot() is None
    on_snapshot.assert_not_called()


def test_load_initialises_defaults():
    controller, on_snapshot = create_controller(800, 600)
    snapshot = controller.snapshot()

    on_snapshot.assert_called_once_with(snapshot)
    assert snapshot.zoom == 1.0
    assert snapshot.rotation == 0.0
    assert snapshot.flip == FlipState()
    assert snapshot.aspect.is_free
    assert_rect(snapshot.crop_rect, CropRectangle(0, 0, 800, 600))
    assert not controller.is_small_image
    assert controller.show_drag_hint


def test_small_image_starts_magnified():
    controller, _ = create_controller(200, 150)
    snapshot = controller.snapshot()

    assert controller.is_small_image
    assert not controller.show_drag_hint
    assert snapshot.zoom == 2.0
    assert_rect(snapshot.crop_rect, CropRectangle(50, 37.5, 100, 75))


def test_one_small_side_is_enough():
    controller, _ = create_controller(1200, 250)
    assert controller.is_small_image
    assert controller.snapshot().zoom == 2.0


def test_square_crop_at_zoom():
    controller, _ = create_controller(800, 600)
    controller.set_aspect(AspectConstraint.fixed(1, 1))
    controller.set_zoom(1.5)

    assert_rect(controller.snapshot().crop_rect, CropRectangle(200, 100, 400, 400))


@pytest.mark.parametrize("label, ratio", [("1:1", 1.0), ("4:3", 4 / 3), ("16:9", 16 / 9)])
def test_aspect_ratio_survives_every_event(label, ratio):
    controller, on_snapshot = create_controller(640, 480, scale=0.5)
    controller.set_aspect(AspectConstraint.parse(label))
    controller.set_zoom(2.2)
    controller.rotate_right()
    controller.set_rotation(33)
    controller.toggle_flip_vertical()
    controller.pan_by(-400, 120)
    controller.begin_drag()
    controller.drag(QPointF(17, -4))
    controller.end_drag()
    controller.zoom_by(-5)

    for call in on_snapshot.call_args_list[1:]:
        rect = call.args[0].crop_rect
        assert rect.width / rect.height == pytest.approx(ratio)
        assert rect.x >= 0 and rect.y >= 0
        assert rect.right <= 640 + 1e-6
        assert rect.bottom <= 480 + 1e-6


def test_free_aspect_tracks_natural_ratio():
    controller, _ = create_controller(300, 900)
    controller.set_aspect(AspectConstraint.fixed(16, 9))
    controller.set_aspect(AspectConstraint.parse("Original"))
    assert_rect(controller.snapshot().crop_rect, CropRectangle(0, 0, 300, 900))


def test_zoom_is_clamped():
    controller, _ = create_controller()
    controller.set_zoom(5)
    assert controller.snapshot().zoom == 3.0
    controller.set_zoom(0.2)
    assert controller.snapshot().zoom == 1.0
    controller.zoom_by(3)
    assert controller.snapshot().zoom == pytest.approx(1.3)


def test_unchanged_values_do_not_emit():
    controller, on_snapshot = create_controller()
    controller.set_zoom(1.0)
    controller.set_rotation(0)
    controller.set_flip(FlipState())
    controller.set_aspect(AspectConstraint.free())
    controller.pan_by(50, 0)  # full-frame crop cannot move
    assert on_snapshot.call_count == 1


def test_non_finite_input_is_ignored():
    controller, on_snapshot = create_controller()
    controller.set_zoom(float("nan"))
    controller.set_rotation(float("inf"))
    controller.pan_by(float("nan"), 1)
    assert on_snapshot.call_count == 1


def test_rotation_buttons_keep_raw_angle():
    controller, _ = create_controller()
    controller.rotate_left()
    assert controller.snapshot().rotation == -90.0
    controller.rotate_left()
    assert controller.snapshot().rotation == -180.0
    controller.rotate_right()
    controller.rotate_right()
    controller.rotate_right()
    assert controller.snapshot().rotation == 90.0


def test_rotation_slider_is_clamped():
    controller, _ = create_controller()
    controller.set_rotation(400)
    assert controller.snapshot().rotation == 360.0
    controller.set_rotation(-10)
    assert controller.snapshot().rotation == 0.0
    controller.set_rotation(12.5)
    assert controller.snapshot().rotation == 12.5


def test_pan_is_clamped_to_image():
    controller, _ = create_controller()
    controller.set_zoom(2.0)
    assert_rect(controller.snapshot().crop_rect, CropRectangle(200, 150, 400, 300))

    controller.pan_by(1000, 0)
    assert_rect(controller.snapshot().crop_rect, CropRectangle(400, 150, 400, 300))

    controller.pan_by(0, -1000)
    assert_rect(controller.snapshot().crop_rect, CropRectangle(400, 0, 400, 300))


def test_drag_moves_crop_against_pointer():
    controller, _ = create_controller(scale=2.0)
    controller.set_zoom(2.0)
    controller.begin_drag()
    controller.drag(QPointF(20, 0))
    controller.end_drag()

    # 20 viewport pixels at 2x scale are 10 image pixels.
    assert_rect(controller.snapshot().crop_rect, CropRectangle(190, 150, 400, 300))
    assert not controller.show_drag_hint


def test_drag_follows_rotation():
    controller, _ = create_controller()
    controller.set_zoom(2.0)
    controller.rotate_right()
    controller.begin_drag()
    controller.drag(QPointF(10, 0))
    controller.end_drag()

    assert_rect(controller.snapshot().crop_rect, CropRectangle(200, 160, 400, 300))


def test_drag_without_begin_is_ignored():
    controller, on_snapshot = create_controller()
    controller.set_zoom(2.0)
    count = on_snapshot.call_count
    controller.drag(QPointF(30, 30))
    assert on_snapshot.call_count == count


def test_flip_toggles_emit_snapshots():
    controller, on_snapshot = create_controller()
    controller.toggle_flip_horizontal()
    assert controller.snapshot().flip == FlipState(True, False)
    controller.toggle_flip_vertical()
    assert controller.snapshot().flip == FlipState(True, True)
    assert on_snapshot.call_count == 3


def test_reset_restores_defaults_atomically():
    controller, on_snapshot = create_controller(200, 150)
    controller.set_aspect(AspectConstraint.fixed(16, 9))
    controller.set_zoom(3.0)
    controller.rotate_right()
    controller.toggle_flip_vertical()
    controller.pan_by(-20, 5)
    on_snapshot.reset_mock()

    controller.reset()

    on_snapshot.assert_called_once()
    snapshot = controller.snapshot()
    assert snapshot.zoom == 2.0
    assert snapshot.rotation == 0.0
    assert snapshot.flip == FlipState()
    assert snapshot.aspect.is_free
    assert_rect(snapshot.crop_rect, CropRectangle(50, 37.5, 100, 75))


def test_revisions_increase_with_every_snapshot():
    controller, on_snapshot = create_controller()
    controller.set_zoom(1.2)
    controller.set_rotation(10)
    revisions = [call.args[0].revision for call in on_snapshot.call_args_list]
    assert revisions == [1, 2, 3]
    assert controller.revision == 3


def test_aspect_constraint_parsing():
    assert AspectConstraint.parse("16:9").ratio == pytest.approx(16 / 9)
    assert AspectConstraint.parse("original").is_free
    assert AspectConstraint.parse("3:2") == AspectConstraint.fixed(3, 2)
    with pytest.raises(ValueError):
        AspectConstraint.parse("wide")
    with pytest.raises(ValueError):
        AspectConstraint.fixed(0, 1)
