"""Canvas abstraction for the weather card - allows swapping image output with test backends."""
import logging
import os
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont, ImageOps

DEFAULT_FONT = "DejaVuSans.ttf"


class CardCanvas(ABC):
    """Abstract canvas interface for drawing the weather card."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Get canvas width in pixels."""
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        """Get canvas height in pixels."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear the entire canvas to the neutral background color."""
        pass

    @abstractmethod
    def fill(self, r: int, g: int, b: int) -> None:
        """Fill the entire canvas with the given RGB color."""
        pass

    @abstractmethod
    def draw_background(self, path: str, fallback: Tuple[int, int, int]) -> None:
        """
        Cover the canvas with a background image.

        Args:
            path: Asset path as served to browsers (e.g. "/backgrounds/night.jpeg")
            fallback: RGB color to fill with when the asset is unavailable
        """
        pass

    @abstractmethod
    def draw_text(self, x: int, y: int, text: str, r: int, g: int, b: int, font_size: int = 16) -> None:
        """Draw text with its top-left corner at (x, y)."""
        pass


class FakeCardCanvas(CardCanvas):
    """
    Fake canvas implementation for testing - records what was drawn.

    Useful for unit tests and development without image output.
    """

    def __init__(self, width: int = 350, height: int = 500):
        self._width = width
        self._height = height
        self.clear()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self) -> None:
        self.fill_color: Tuple[int, int, int] = (0, 0, 0)
        self.background: Optional[str] = None
        self.texts: List[Tuple[int, int, str, Tuple[int, int, int]]] = []

    def fill(self, r: int, g: int, b: int) -> None:
        self.fill_color = (r, g, b)

    def draw_background(self, path: str, fallback: Tuple[int, int, int]) -> None:
        self.background = path
        self.fill(*fallback)

    def draw_text(self, x: int, y: int, text: str, r: int, g: int, b: int, font_size: int = 16) -> None:
        self.texts.append((x, y, text, (r, g, b)))

    def text_values(self) -> List[str]:
        """Get just the strings drawn so far (for testing)."""
        return [text for _, _, text, _ in self.texts]


class PILCanvas(CardCanvas):
    """
    PIL-based canvas for rendering the card to PNG images.

    Background paths are resolved under ``assets_dir``; a missing asset
    falls back to a flat color.
    """

    def __init__(self, width: int = 350, height: int = 500, assets_dir: Optional[str] = None):
        """
        Initialize PIL canvas.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            assets_dir: Directory holding the static assets (the "public" root)
        """
        self._width = width
        self._height = height
        self.assets_dir = assets_dir
        self._fonts = {}
        self.clear()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self) -> None:
        self.fill(0, 0, 0)

    def fill(self, r: int, g: int, b: int) -> None:
        self._image = Image.new("RGB", (self._width, self._height), (r, g, b))
        self._draw = ImageDraw.Draw(self._image)

    def draw_background(self, path: str, fallback: Tuple[int, int, int]) -> None:
        asset = self._resolve_asset(path)
        if asset is None:
            logging.debug(f"Background {path} not available, using flat color {fallback}")
            self.fill(*fallback)
            return

        try:
            with Image.open(asset) as img:
                cover = ImageOps.fit(img.convert("RGB"), (self._width, self._height))
        except OSError as e:
            logging.warning(f"Could not load background {asset}: {e}")
            self.fill(*fallback)
            return
        self._image = cover
        self._draw = ImageDraw.Draw(self._image)

    def draw_text(self, x: int, y: int, text: str, r: int, g: int, b: int, font_size: int = 16) -> None:
        self._draw.text((x, y), text, fill=(r, g, b), font=self._font(font_size))

    def save(self, filename: str) -> None:
        """Save canvas to an image file (format taken from the extension)."""
        self._image.save(filename)
        logging.info(f"Card image written to {filename}")

    def get_image(self):
        """Get the PIL Image object (for advanced usage)."""
        return self._image

    def _resolve_asset(self, path: str) -> Optional[str]:
        if not self.assets_dir:
            return None
        candidate = os.path.join(self.assets_dir, path.lstrip("/"))
        return candidate if os.path.isfile(candidate) else None

    def _font(self, size: int):
        if size not in self._fonts:
            try:
                self._fonts[size] = ImageFont.truetype(DEFAULT_FONT, size)
            except OSError:
                self._fonts[size] = ImageFont.load_default()
        return self._fonts[size]
