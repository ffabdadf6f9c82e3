from collections import Counter
from typing import List, Tuple

from cosmiczoom.surface import Surface

class RecordingSurface(Surface):
    """Surface that records device-space primitives instead of drawing them."""

    def __init__(self, width: int = 800, height: int = 600) -> None:
        super().__init__(width, height)
        self.calls: List[Tuple] = []

    def counts(self) -> Counter:
        return Counter(c[0] for c in self.calls)

    def of(self, kind: str) -> List[Tuple]:
        return [c for c in self.calls if c[0] == kind]

    def clear(self, color):
        self.calls.append(("clear", color))

    def _ellipse(self, cx, cy, w, h):
        self.calls.append(("ellipse", cx, cy, w, h, self.fill_color, self.stroke_color))

    def _line(self, p0, p1):
        self.calls.append(("line", p0, p1, self.stroke_color))

    def _point(self, x, y):
        self.calls.append(("point", x, y, self.stroke_color))

    def _text(self, s, x, y, size):
        self.calls.append(("text", s, x, y, size, self.transform.k, self.depth))

class FakeTone:
    def __init__(self) -> None:
        self.events: List[Tuple] = []

    def start(self) -> None:
        self.events.append(("start",))

    def stop(self) -> None:
        self.events.append(("stop",))

    def set_frequency(self, hz: float) -> None:
        self.events.append(("freq", hz))

    def set_amplitude(self, level: float) -> None:
        self.events.append(("amp", level))

    def named(self, name: str) -> List[Tuple]:
        return [e for e in self.events if e[0] == name]

class FailingTone(FakeTone):
    def start(self) -> None:
        from cosmiczoom.errors import AudioError

        raise AudioError("no output device")
