from __future__ import annotations

import logging
from typing import Any, Dict

from pixelflut.config import CLIENT_CONFIG, load_config
from pixelflut.core import Client, PixelSource

logger = logging.getLogger(__name__)


def build_source(config: Dict[str, Any]) -> PixelSource:
    """Create the pixel source named by ``config["source"]``."""
    offsets = {"offset_x": config["offset_x"], "offset_y": config["offset_y"]}
    kind = config["source"]
    # capture backends are imported on demand so one missing device library
    # does not break the others
    if kind == "gif":
        from pixelflut.sources.animation import AnimationSource

        return AnimationSource.load(config["gif_path"], **offsets)
    if kind == "screen":
        from pixelflut.sources.screen import ScreenCaptureSource

        return ScreenCaptureSource(monitor=config["monitor"], mode=config["capture_mode"], **offsets)
    if kind == "camera":
        from pixelflut.sources.camera import CameraSource

        return CameraSource(camera_id=config["camera_id"], **offsets)
    raise ValueError(f"Unknown source {kind!r}")


def run_client() -> None:
    load_config()
    logging.basicConfig(level=CLIENT_CONFIG["log_level"])
    source = build_source(CLIENT_CONFIG)
    timeout = CLIENT_CONFIG["connect_timeout"] or None
    frame_limit = CLIENT_CONFIG["frame_limit"] or None

    with Client.connect(
        (CLIENT_CONFIG["server_host"], CLIENT_CONFIG["server_port"]),
        timeout=timeout,
        send_buffer_size=CLIENT_CONFIG["send_buffer_size"],
    ) as client:
        size = client.get_size()
        logger.info("Canvas is %sx%s", size.x, size.y)
        sent = client.stream(source, frame_limit=frame_limit)
        logger.info("Sent %s frame(s), %s command(s)", sent, client.sent_messages)


if __name__ == "__main__":
    run_client()
