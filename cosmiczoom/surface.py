from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from PIL import Image, ImageColor, ImageDraw, ImageFont

from cosmiczoom.errors import SurfaceError

RGB = Tuple[int, int, int]

@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    alpha: float = 1.0

    def rgba(self) -> Tuple[int, int, int, int]:
        a = min(1.0, max(0.0, self.alpha))
        return (self.r, self.g, self.b, int(round(a * 255)))

def rgb(r: float, g: float, b: float, alpha: float = 1.0) -> Color:
    return Color(int(r), int(g), int(b), float(alpha))

def hsb(h: float, s: float, b: float, alpha: float = 1.0) -> Color:
    """Hue in degrees, saturation and brightness in percent, alpha as a fraction."""
    r, g, bl = ImageColor.getrgb(f"hsb({h % 360:.3f}, {s:.3f}%, {b:.3f}%)")
    return Color(r, g, bl, float(alpha))

@dataclass
class Transform:
    dx: float = 0.0
    dy: float = 0.0
    k: float = 1.0

    def apply(self, x: float, y: float) -> Tuple[float, float]:
        return (self.dx + x * self.k, self.dy + y * self.k)

class Surface:
    """
    Immediate-mode drawing surface with a save/restore transform stack.

    Subclasses implement the primitives; coordinates given to them are already
    in device space and sizes already scaled.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.transform = Transform()
        self._stack: List[Tuple[Transform, Optional[Color], Optional[Color], float]] = []
        self.fill_color: Optional[Color] = rgb(255, 255, 255)
        self.stroke_color: Optional[Color] = rgb(0, 0, 0)
        self.stroke_weight = 1.0

    # --- state ---

    def save(self) -> None:
        t = self.transform
        self._stack.append((Transform(t.dx, t.dy, t.k), self.fill_color, self.stroke_color, self.stroke_weight))

    def restore(self) -> None:
        if not self._stack:
            raise SurfaceError("restore() called without a matching save().")
        self.transform, self.fill_color, self.stroke_color, self.stroke_weight = self._stack.pop()

    @property
    def depth(self) -> int:
        return len(self._stack)

    def translate(self, x: float, y: float) -> None:
        self.transform.dx, self.transform.dy = self.transform.apply(x, y)

    def scale(self, k: float) -> None:
        self.transform.k *= k

    def fill(self, color: Color) -> None:
        self.fill_color = color

    def no_fill(self) -> None:
        self.fill_color = None

    def stroke(self, color: Color, weight: Optional[float] = None) -> None:
        self.stroke_color = color
        if weight is not None:
            self.stroke_weight = weight

    def no_stroke(self) -> None:
        self.stroke_color = None

    # --- primitives (local coordinates) ---

    def circle(self, x: float, y: float, d: float) -> None:
        self.ellipse(x, y, d, d)

    def ellipse(self, x: float, y: float, w: float, h: float) -> None:
        cx, cy = self.transform.apply(x, y)
        self._ellipse(cx, cy, w * self.transform.k, h * self.transform.k)

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._line(self.transform.apply(x1, y1), self.transform.apply(x2, y2))

    def point(self, x: float, y: float) -> None:
        self._point(*self.transform.apply(x, y))

    def text(self, s: str, x: float, y: float, size: int) -> None:
        self._text(s, *self.transform.apply(x, y), size)

    def clear(self, color: RGB) -> None:
        raise NotImplementedError

    def _ellipse(self, cx: float, cy: float, w: float, h: float) -> None:
        raise NotImplementedError

    def _line(self, p0: Tuple[float, float], p1: Tuple[float, float]) -> None:
        raise NotImplementedError

    def _point(self, x: float, y: float) -> None:
        raise NotImplementedError

    def _text(self, s: str, x: float, y: float, size: int) -> None:
        raise NotImplementedError

class PillowSurface(Surface):
    """Surface backed by a Pillow RGB image; colours alpha-blend onto it."""

    def __init__(self, width: int, height: int, background: RGB = (0, 0, 0)) -> None:
        super().__init__(width, height)
        self.image = Image.new("RGB", (self.width, self.height), background)
        self._draw = ImageDraw.Draw(self.image, "RGBA")
        self._fonts: Dict[int, ImageFont.ImageFont] = {}

    def _pen(self) -> int:
        return max(1, int(round(self.stroke_weight * self.transform.k)))

    def clear(self, color: RGB) -> None:
        self.image.paste(color, (0, 0, self.width, self.height))

    def _ellipse(self, cx: float, cy: float, w: float, h: float) -> None:
        fill = self.fill_color.rgba() if self.fill_color else None
        outline = self.stroke_color.rgba() if self.stroke_color else None
        if fill is None and outline is None:
            return
        box = [cx - w / 2, cy - h / 2, cx + w / 2, cy + h / 2]
        self._draw.ellipse(box, fill=fill, outline=outline, width=self._pen())

    def _line(self, p0: Tuple[float, float], p1: Tuple[float, float]) -> None:
        if self.stroke_color is None:
            return
        self._draw.line([p0, p1], fill=self.stroke_color.rgba(), width=self._pen())

    def _point(self, x: float, y: float) -> None:
        if self.stroke_color is None:
            return
        self._draw.point((x, y), fill=self.stroke_color.rgba())

    def _font(self, size: int) -> ImageFont.ImageFont:
        if size not in self._fonts:
            self._fonts[size] = ImageFont.load_default(size=size)
        return self._fonts[size]

    def _text(self, s: str, x: float, y: float, size: int) -> None:
        if self.fill_color is None:
            return
        self._draw.text((x, y), s, fill=self.fill_color.rgba(), font=self._font(size), anchor="mm")
