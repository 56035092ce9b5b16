"""
Digit Viewer — OpenCV Window
============================

Architecture:
    Worker thread : fallback fetch (remote, then local) → FetchReport
    Main thread   : cv2.imshow render loop, frame-locked at viewer.fps;
                    consumes finished fetches and ticks playback

Usage:  digit-viewer [--digit 5] [--config config.yaml]
Controls: 0-9 type digit, Backspace delete, Enter/g generate, q/ESC quit
"""

import argparse
import logging
import sys
from typing import List, Optional

import cv2

from digit_viewer import config as config_module
from digit_viewer.config import Settings, load_config, setup_logging
from digit_viewer.controller import ViewerController, build_controller
from digit_viewer.ui.render import compose, draw_input_panel, draw_message


logger = logging.getLogger(__name__)


_KEY_ESC = 27
_KEY_ENTER = (10, 13)
_KEY_BACKSPACE = (8, 127)
_INPUT_MAX = 3


class InputField:
    """Keyboard-edited digit input."""

    def __init__(self, text: str = "") -> None:
        self.text = text

    def handle_key(self, key: int) -> bool:
        """
        Apply an editing key.

        Returns:
            True if the key edited the field.
        """
        if key in _KEY_BACKSPACE:
            self.text = self.text[:-1]
            return True
        if (ord("0") <= key <= ord("9") or key == ord("-")) and len(self.text) < _INPUT_MAX:
            self.text += chr(key)
            return True
        return False


def render(controller: ViewerController, field: InputField, settings: Settings):
    """Compose one output image for the current controller state."""
    size = settings.viewer.canvas_size * settings.viewer.pixel_density
    canvas = compose(controller.engine.layers(), size, settings.viewer.interpolation)
    draw_input_panel(canvas, field.text, controller.trigger.enabled)
    draw_message(canvas, controller.message_box.current())
    return canvas


def run(settings: Settings, initial_digit: Optional[str] = None) -> None:
    """Open the window and run the render loop until quit."""
    controller = build_controller(settings)
    field = InputField(initial_digit or "")

    frame_interval_ms = max(1, int(1000 / settings.viewer.fps))
    window_name = settings.viewer.window_name
    cv2.namedWindow(window_name, cv2.WINDOW_AUTOSIZE)

    print("=" * 60)
    print("Digit Viewer")
    print("=" * 60)
    print(f"  Primary:   {settings.sources.primary_url}")
    print(f"  Secondary: {settings.sources.secondary_url}")
    print()
    print("  Controls:")
    print("    0-9        — type digit")
    print("    Backspace  — delete")
    print("    Enter / g  — generate")
    print("    q/ESC      — quit (waits for an in-flight request)")
    print("=" * 60)

    if initial_digit is not None:
        controller.request(field.text)

    try:
        while True:
            controller.tick()
            cv2.imshow(window_name, render(controller, field, settings))

            key = cv2.waitKey(frame_interval_ms) & 0xFF
            if key == ord("q") or key == _KEY_ESC:
                break
            elif key in _KEY_ENTER or key == ord("g"):
                controller.request(field.text)
            elif key == ord("s"):
                logger.info(f"State: {controller.metrics()}")
            else:
                field.handle_key(key)

            # Window closed with the title bar button
            if cv2.getWindowProperty(window_name, cv2.WND_PROP_VISIBLE) < 1:
                break
    finally:
        controller.shutdown()
        cv2.destroyAllWindows()
        logger.info("Viewer shut down")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Request generated digit images and play them with a crossfade"
    )
    parser.add_argument("--config", type=str, default=None, help="Path to config.yaml")
    parser.add_argument("--primary-url", type=str, default=None, help="Remote backend base URL")
    parser.add_argument("--secondary-url", type=str, default=None, help="Local backend base URL")
    parser.add_argument("--fps", type=int, default=None, help="Render loop rate")
    parser.add_argument("--digit", type=str, default=None, help="Request this digit on startup")
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Load settings and apply command line overrides."""
    settings = load_config(args.config) if args.config else config_module.settings

    updates = {}
    if args.primary_url:
        updates["primary_url"] = args.primary_url
    if args.secondary_url:
        updates["secondary_url"] = args.secondary_url
    sources = settings.sources.model_copy(update=updates)

    viewer = settings.viewer
    if args.fps:
        viewer = viewer.model_copy(update={"fps": args.fps})

    return settings.model_copy(update={"sources": sources, "viewer": viewer})


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = settings_from_args(args)
    setup_logging(settings)

    try:
        run(settings, initial_digit=args.digit)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
