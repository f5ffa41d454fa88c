from __future__ import annotations

import io
from types import SimpleNamespace

import numpy as np
import pytest
from PIL import Image

from pixelflut.protocol import Color, Position, SetPixel, SourceFailure
from pixelflut.sources import Frame, array_to_messages
from pixelflut.sources.animation import AnimationSource
from pixelflut.sources.camera import CameraSource
from pixelflut.sources.screen import CaptureMode, ScreenCaptureSource


def _px(x, y, r, g, b, a=None):
    return SetPixel(position=Position(x=x, y=y), color=Color(r=r, g=g, b=b, a=a))


def test_array_to_messages_is_row_major():
    pixels = np.array([[[1, 2, 3], [4, 5, 6]], [[7, 8, 9], [10, 11, 12]]], dtype=np.uint8)
    assert array_to_messages(pixels) == [
        _px(0, 0, 1, 2, 3),
        _px(1, 0, 4, 5, 6),
        _px(0, 1, 7, 8, 9),
        _px(1, 1, 10, 11, 12),
    ]


def test_array_to_messages_with_alpha_mask_and_offset():
    pixels = np.zeros((2, 2, 4), dtype=np.uint8)
    pixels[1, 0] = [9, 8, 7, 6]
    mask = np.array([[False, False], [True, False]])
    assert array_to_messages(pixels, mask=mask, offset_x=100, offset_y=50) == [_px(100, 51, 9, 8, 7, 6)]


def test_array_to_messages_rejects_bad_shape():
    with pytest.raises(ValueError):
        array_to_messages(np.zeros((2, 2), dtype=np.uint8))


def test_array_to_messages_rejects_negative_offsets():
    pixels = np.zeros((1, 1, 3), dtype=np.uint8)
    with pytest.raises(ValueError):
        array_to_messages(pixels, offset_x=-5)
    with pytest.raises(ValueError):
        array_to_messages(pixels, offset_y=-1)


def test_array_to_messages_rejects_offsets_past_coordinate_range():
    pixels = np.zeros((1, 2, 3), dtype=np.uint8)
    with pytest.raises(ValueError):
        array_to_messages(pixels, offset_x=4294967295)
    assert array_to_messages(pixels[:, :1], offset_x=4294967295)[0].position.x == 4294967295


def test_frame_encodes_into_sink():
    sink = io.BytesIO()
    frame = Frame(messages=[_px(0, 0, 255, 0, 0), _px(1, 0, 0, 0, 255, 128)], delay=0.1)
    frame.encode(sink)
    assert sink.getvalue() == b"PX 0 0 ff0000\nPX 1 0 0000ff80\n"
    assert len(frame) == 2


def _write_gif(path):
    first = Image.new("RGB", (2, 2), (255, 0, 0))
    second = Image.new("RGB", (2, 2), (0, 0, 255))
    first.save(path, save_all=True, append_images=[second], duration=[50, 80], loop=0)


def test_animation_source_decodes_frames_and_delays(tmp_path):
    path = tmp_path / "anim.gif"
    _write_gif(path)
    source = AnimationSource.load(path)
    frames = list(source.frames())

    assert len(source) == 2
    assert [len(frame) for frame in frames] == [4, 4]
    assert frames[0].messages[0] == _px(0, 0, 255, 0, 0, 255)
    assert frames[1].messages[3] == _px(1, 1, 0, 0, 255, 255)
    assert frames[0].delay == pytest.approx(0.05)
    assert frames[1].delay == pytest.approx(0.08)


def test_animation_source_applies_offset(tmp_path):
    path = tmp_path / "anim.gif"
    _write_gif(path)
    source = AnimationSource.load(path, offset_x=10, offset_y=20)
    first = next(source.frames())
    assert first.messages[0].position == Position(x=10, y=20)


def test_animation_source_missing_file(tmp_path):
    with pytest.raises(SourceFailure):
        AnimationSource.load(tmp_path / "missing.gif")


class FakeGrabber:
    """Stands in for ``mss.mss()``, returning queued RGB arrays."""

    def __init__(self, shots):
        self.monitors = [{"left": 0, "top": 0, "width": 0, "height": 0}, {"left": 0, "top": 0}]
        self._shots = list(shots)

    def grab(self, monitor):
        pixels = self._shots.pop(0)
        height, width = pixels.shape[:2]
        return SimpleNamespace(rgb=pixels.tobytes(), width=width, height=height)


def test_screen_capture_diff_mode_sends_only_changes():
    first = np.zeros((2, 2, 3), dtype=np.uint8)
    second = first.copy()
    second[0, 1] = [255, 255, 255]
    source = ScreenCaptureSource(mode=CaptureMode.DIFF, grabber=FakeGrabber([first, second, second]))

    assert len(source.capture()) == 4
    assert list(source.capture().messages) == [_px(1, 0, 255, 255, 255)]
    assert len(source.capture()) == 0


def test_screen_capture_all_mode_sends_everything():
    shot = np.full((1, 3, 3), 7, dtype=np.uint8)
    source = ScreenCaptureSource(mode="all", grabber=FakeGrabber([shot, shot]))
    frames = source.frames()
    assert len(next(frames)) == 3
    assert len(next(frames)) == 3


def test_screen_capture_unknown_monitor():
    with pytest.raises(SourceFailure):
        ScreenCaptureSource(monitor=5, grabber=FakeGrabber([]))


class FakeCapture:
    """Stands in for ``cv2.VideoCapture`` yielding BGR frames."""

    def __init__(self, frames, opened=True):
        self._frames = list(frames)
        self._opened = opened
        self.released = False

    def isOpened(self):
        return self._opened

    def read(self):
        if not self._frames:
            return False, None
        return True, self._frames.pop(0)

    def release(self):
        self.released = True


def test_camera_source_converts_bgr_to_rgb():
    bgr = np.array([[[0, 0, 255], [255, 0, 0]]], dtype=np.uint8)
    capture = FakeCapture([bgr])
    source = CameraSource(capture=capture, offset_y=3)
    frame = next(source.frames())
    assert list(frame.messages) == [_px(0, 3, 255, 0, 0), _px(1, 3, 0, 0, 255)]
    source.close()
    assert capture.released


def test_camera_source_failed_read():
    source = CameraSource(capture=FakeCapture([]))
    with pytest.raises(SourceFailure):
        source.capture()


def test_camera_source_unopened_device():
    with pytest.raises(SourceFailure):
        CameraSource(capture=FakeCapture([], opened=False))
