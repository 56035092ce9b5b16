"""
Viewer Tests
============

Keyboard input field, command line handling and frame rendering.
No window is opened.
"""

from conftest import ImmediateExecutor, StubSource
from digit_viewer.config import Settings
from digit_viewer.controller import ViewerController
from digit_viewer.frames import ImageBuffer
from digit_viewer.models import FetchResult
from digit_viewer.playback import PlaybackEngine
from digit_viewer.sources import FallbackFetcher
from digit_viewer.viewer import InputField, parse_args, render, settings_from_args


class TestInputField:
    """Tests for keyboard editing."""

    def test_typing_and_backspace(self):
        field = InputField()
        assert field.handle_key(ord("1"))
        assert field.handle_key(ord("2"))
        assert field.text == "12"

        assert field.handle_key(8)
        assert field.text == "1"

    def test_ignores_other_keys(self):
        field = InputField("3")
        assert not field.handle_key(ord("x"))
        assert not field.handle_key(255)
        assert field.text == "3"

    def test_length_capped(self):
        field = InputField()
        for key in "12345":
            field.handle_key(ord(key))
        assert field.text == "123"


class TestCommandLine:
    """Tests for argument parsing and overrides."""

    def test_overrides(self):
        args = parse_args([
            "--primary-url", "http://a",
            "--secondary-url", "http://b",
            "--fps", "30",
            "--digit", "4",
        ])
        settings = settings_from_args(args)

        assert settings.sources.primary_url == "http://a"
        assert settings.sources.secondary_url == "http://b"
        assert settings.viewer.fps == 30
        assert args.digit == "4"

    def test_no_overrides_keeps_loaded_settings(self):
        settings = settings_from_args(parse_args([]))
        assert isinstance(settings, Settings)


class TestRender:
    """Tests for one rendered output image."""

    def test_output_size_uses_pixel_density(self, frame_factory):
        settings = Settings()
        source = StubSource("remote", FetchResult.success("remote", [frame_factory(255)]))
        controller = ViewerController(
            fetcher=FallbackFetcher([source]),
            engine=PlaybackEngine(ImageBuffer()),
            executor=ImmediateExecutor(),
        )
        controller.request("1")
        for _ in range(60):
            controller.tick()

        image = render(controller, InputField("1"), settings)

        assert image.shape == (560, 560, 3)
        # Centre of the canvas shows the fully faded-in white frame
        assert (image[280, 280] == 255).all()
