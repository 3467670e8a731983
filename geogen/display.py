"""Saving renders and showing them inline in capable terminals."""

import os
from pathlib import Path
from typing import Optional

from .models import GeneratedImage


# (env var, expected value or None for "present at all")
_INLINE_IMAGE_MARKERS = (
    ("TERM_PROGRAM", "iTerm.app"),
    ("ITERM_SESSION_ID", None),
    ("TERM", "xterm-kitty"),
    ("KITTY_WINDOW_ID", None),
    ("TERM_PROGRAM", "WezTerm"),
)


class TerminalDisplay:
    """Writes GeneratedImages to disk and draws them inline when possible."""

    def __init__(self, environ: Optional[dict] = None):
        self._can_display_images = self._detect_capabilities(os.environ if environ is None else environ)

    @staticmethod
    def _detect_capabilities(environ) -> bool:
        """iTerm2, Kitty and WezTerm can draw images inline."""
        for name, expected in _INLINE_IMAGE_MARKERS:
            if name in environ and (expected is None or environ[name] == expected):
                return True
        return False

    @property
    def can_display_images(self) -> bool:
        return self._can_display_images

    def save(self, image: GeneratedImage, output, location_name: Optional[str] = None) -> Path:
        """Save a render.

        A path without a file suffix, or with a trailing separator, is taken
        as a directory even before it exists. Directories get the default
        file name.
        """
        as_dir = str(output).endswith(("/", os.sep)) or not Path(output).suffix
        output = Path(output)
        if as_dir or output.is_dir():
            output = output / GeneratedImage.default_filename(location_name)
        return image.save(output)

    def show(self, image_path: Path, max_width: Optional[int] = None) -> bool:
        """Draw a saved render inline.

        Returns:
            True if drawn, False if the terminal can't or drawing failed.
        """
        if not self._can_display_images:
            return False

        try:
            from term_image.image import from_file

            image = from_file(str(image_path))
            if max_width:
                image.set_size(columns=max_width)
            image.draw()
            return True
        except Exception:
            # The file is already on disk, drawing is best-effort
            return False


display = TerminalDisplay()
