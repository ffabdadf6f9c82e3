import unittest

from fakes import RecordingSurface

from cosmiczoom.errors import SurfaceError
from cosmiczoom.surface import PillowSurface, hsb, rgb


class TestColors(unittest.TestCase):
    def test_rgba_alpha_fraction(self) -> None:
        self.assertEqual(rgb(10, 20, 30, 0.5).rgba(), (10, 20, 30, 128))
        self.assertEqual(rgb(10, 20, 30).rgba(), (10, 20, 30, 255))
        self.assertEqual(rgb(0, 0, 0, 2.0).rgba()[3], 255)

    def test_hsb_primaries(self) -> None:
        red = hsb(0, 100, 100)
        self.assertEqual((red.r, red.g, red.b), (255, 0, 0))
        green = hsb(480, 100, 100)
        self.assertEqual((green.r, green.g, green.b), (0, 255, 0))
        self.assertEqual(hsb(200, 80, 80, 0.6).alpha, 0.6)


class TestTransformStack(unittest.TestCase):
    def test_translate_then_scale(self) -> None:
        s = RecordingSurface()
        s.translate(100, 50)
        s.scale(0.5)
        s.circle(20, -20, 10)
        _, cx, cy, w, h, _, _ = s.of("ellipse")[0]
        self.assertEqual((cx, cy, w, h), (110, 40, 5, 5))

    def test_restore_resets_transform_and_style(self) -> None:
        s = RecordingSurface()
        s.save()
        s.translate(10, 10)
        s.scale(3)
        s.no_fill()
        s.restore()
        self.assertIsNotNone(s.fill_color)
        s.point(1, 2)
        self.assertEqual(s.of("point")[0][1:3], (1, 2))

    def test_unbalanced_restore(self) -> None:
        with self.assertRaises(SurfaceError):
            RecordingSurface().restore()


class TestPillowSurface(unittest.TestCase):
    def test_clear_and_blend(self) -> None:
        s = PillowSurface(40, 30)
        s.clear((0, 0, 0))
        s.no_stroke()
        s.fill(rgb(255, 255, 255, 0.5))
        s.circle(20, 15, 10)
        r, g, b = s.image.getpixel((20, 15))
        self.assertTrue(120 <= r <= 135)
        self.assertEqual(s.image.getpixel((0, 0)), (0, 0, 0))

    def test_point_line_text_do_not_raise(self) -> None:
        s = PillowSurface(200, 100)
        s.clear((0, 0, 0))
        s.stroke(rgb(255, 0, 0))
        s.point(5, 5)
        s.line(0, 0, 50, 50)
        s.fill(rgb(255, 255, 255))
        s.text("Galaxy", 100, 70, 16)
        self.assertEqual(s.image.getpixel((5, 5)), (255, 0, 0))
        self.assertIsNotNone(s.image.getbbox())

    def test_tiny_scaled_shapes(self) -> None:
        s = PillowSurface(50, 50)
        s.translate(25, 25)
        s.scale(1 / 12)
        s.stroke(rgb(255, 255, 255, 0.4))
        s.circle(0, 0, 3)
        s.ellipse(10, 10, 20, 20)


if __name__ == "__main__":
    unittest.main()
