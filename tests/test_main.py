from __future__ import annotations

import socket
import threading

import pytest
from PIL import Image

from pixelflut import config
from pixelflut.main import build_source, run_client
from pixelflut.sources.animation import AnimationSource


@pytest.fixture(autouse=True)
def _restore_config():
    saved = config.CLIENT_CONFIG.copy()
    yield
    config.CLIENT_CONFIG.clear()
    config.CLIENT_CONFIG.update(saved)


def _write_gif(path):
    frames = [Image.new("RGB", (2, 1), color) for color in ((255, 0, 0), (0, 255, 0))]
    frames[0].save(path, save_all=True, append_images=frames[1:], duration=[20, 20], loop=0)


def test_build_source_gif(tmp_path):
    path = tmp_path / "anim.gif"
    _write_gif(path)
    source = build_source({**config.DEFAULT_CONFIG, "gif_path": str(path)})
    assert isinstance(source, AnimationSource)
    assert len(source) == 2


def test_build_source_unknown():
    with pytest.raises(ValueError):
        build_source({**config.DEFAULT_CONFIG, "source": "projector"})


def test_run_client_streams_configured_gif(tmp_path, monkeypatch):
    path = tmp_path / "anim.gif"
    _write_gif(path)
    listener = socket.create_server(("127.0.0.1", 0))
    received = bytearray()

    def serve():
        conn, _ = listener.accept()
        with conn, conn.makefile("rb") as reader:
            assert reader.readline() == b"SIZE\n"
            conn.sendall(b"SIZE 2 1\n")
            received.extend(reader.read())

    server = threading.Thread(target=serve)
    server.start()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PIXELFLUT_SERVER_PORT", str(listener.getsockname()[1]))
    monkeypatch.setenv("PIXELFLUT_GIF_PATH", str(path))
    monkeypatch.setenv("PIXELFLUT_SOURCE", "gif")
    monkeypatch.setenv("PIXELFLUT_FRAME_LIMIT", "0")
    try:
        run_client()
        server.join(timeout=5)
    finally:
        listener.close()

    assert received.decode().splitlines() == [
        "PX 0 0 ff0000ff",
        "PX 1 0 ff0000ff",
        "PX 0 0 00ff00ff",
        "PX 1 0 00ff00ff",
    ]
