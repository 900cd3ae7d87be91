import io
import unittest

from shpdeck.markup import emit_dots, emit_polygon, emit_polyline, emit_shape
from shpdeck.models import EmitStatus


class TestPolygonEmitter(unittest.TestCase):
    def test_triangle(self):
        out = io.StringIO()
        status = emit_polygon(out, [0.0, 1.0, 1.0], [0.0, 0.0, 1.0], "blue:80")
        self.assertIs(status, EmitStatus.RENDERED)
        self.assertEqual(
            out.getvalue(),
            '<polygon color="blue" opacity="80" '
            'xc="0.00000 1.00000 1.00000" yc="0.00000 0.00000 1.00000"/>\n',
        )

    def test_vertices_are_not_closed_implicitly(self):
        out = io.StringIO()
        emit_polygon(out, [0.0, 2.0, 2.0, 0.0], [0.0, 0.0, 2.0, 2.0], "red")
        self.assertIn('xc="0.00000 2.00000 2.00000 0.00000"', out.getvalue())
        self.assertIn('opacity="100"', out.getvalue())

    def test_fewer_than_three_points_emits_nothing(self):
        out = io.StringIO()
        self.assertIs(emit_polygon(out, [0.0, 1.0], [0.0, 1.0], "red"), EmitStatus.SKIPPED)
        self.assertIs(emit_polygon(out, [], [], "red"), EmitStatus.SKIPPED)
        self.assertEqual(out.getvalue(), "")

    def test_mismatched_lengths_emit_nothing(self):
        out = io.StringIO()
        self.assertIs(emit_polygon(out, [0.0, 1.0, 2.0], [0.0, 1.0], "red"), EmitStatus.SKIPPED)
        self.assertEqual(out.getvalue(), "")

    def test_attribute_values_are_escaped(self):
        out = io.StringIO()
        emit_polygon(out, [0.0, 1.0, 1.0], [0.0, 0.0, 1.0], 'a"b')
        self.assertIn('color="a&quot;b"', out.getvalue())


class TestPolylineEmitter(unittest.TestCase):
    def test_open_chain_plus_closing_segment(self):
        out = io.StringIO()
        status = emit_polyline(out, [0.0, 1.0, 2.0], [0.0, 0.0, 0.0], "red", 0.5)
        self.assertIs(status, EmitStatus.RENDERED)
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 3)
        self.assertEqual(
            lines[0],
            '<line xp1="0.0000000" yp1="0.0000000" xp2="1.0000000" yp2="0.0000000" '
            'color="red" opacity="100" sp="0.500"/>',
        )
        self.assertIn('xp1="1.0000000" yp1="0.0000000" xp2="2.0000000"', lines[1])
        self.assertIn('xp1="0.0000000" yp1="0.0000000" xp2="2.0000000" yp2="0.0000000"', lines[2])

    def test_close_loop_disabled(self):
        out = io.StringIO()
        emit_polyline(out, [0.0, 1.0, 2.0], [0.0, 0.0, 0.0], "red", 0.5, close_loop=False)
        self.assertEqual(len(out.getvalue().splitlines()), 2)

    def test_single_point_connects_to_itself(self):
        out = io.StringIO()
        status = emit_polyline(out, [3.0], [4.0], "red:10", 1.0)
        self.assertIs(status, EmitStatus.RENDERED)
        self.assertEqual(
            out.getvalue(),
            '<line xp1="3.0000000" yp1="4.0000000" xp2="3.0000000" yp2="4.0000000" '
            'color="red" opacity="10" sp="1.000"/>\n',
        )

    def test_single_point_without_closing_is_skipped(self):
        out = io.StringIO()
        self.assertIs(
            emit_polyline(out, [3.0], [4.0], "red", 1.0, close_loop=False), EmitStatus.SKIPPED
        )
        self.assertEqual(out.getvalue(), "")

    def test_empty_input_is_skipped(self):
        out = io.StringIO()
        self.assertIs(emit_polyline(out, [], [], "red", 1.0), EmitStatus.SKIPPED)
        self.assertEqual(out.getvalue(), "")

    def test_mismatched_lengths_raise(self):
        with self.assertRaises(ValueError):
            emit_polyline(io.StringIO(), [0.0, 1.0], [0.0], "red", 1.0)


class TestDotEmitter(unittest.TestCase):
    def test_one_ellipse_per_coordinate_in_order(self):
        out = io.StringIO()
        status = emit_dots(out, [1.5, 2.0, 3.0], [2.25, 4.0, 6.0], "green:40", 2.0)
        self.assertIs(status, EmitStatus.RENDERED)
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 3)
        self.assertEqual(
            lines[0],
            '<ellipse xp="1.5000000" yp="2.2500000" hr="100" color="green" opacity="40" wp="2.000"/>',
        )
        self.assertIn('xp="2.0000000" yp="4.0000000"', lines[1])
        self.assertIn('xp="3.0000000" yp="6.0000000"', lines[2])

    def test_empty_input_emits_nothing(self):
        out = io.StringIO()
        self.assertIs(emit_dots(out, [], [], "green", 2.0), EmitStatus.SKIPPED)
        self.assertEqual(out.getvalue(), "")


class TestShapeDispatch(unittest.TestCase):
    xs = [10.0, 20.0, 20.0]
    ys = [10.0, 10.0, 30.0]

    def _emit(self, shape):
        out = io.StringIO()
        status = emit_shape(out, self.xs, self.ys, shape, "orange:70", 0.25)
        return status, out.getvalue()

    def test_circle_matches_dot(self):
        self.assertEqual(self._emit("circle"), self._emit("dot"))
        self.assertEqual(self._emit("d")[1].count("<ellipse"), 3)

    def test_polygon_synonyms(self):
        expected = self._emit("polygon")
        self.assertTrue(expected[1].startswith("<polygon"))
        for keyword in ("p", "poly", "region"):
            self.assertEqual(self._emit(keyword), expected)

    def test_line_synonyms(self):
        expected = self._emit("line")
        self.assertEqual(expected[1].count("<line"), 3)
        for keyword in ("l", "border"):
            self.assertEqual(self._emit(keyword), expected)

    def test_unknown_keyword_is_a_silent_skip(self):
        status, text = self._emit("hexagon")
        self.assertIs(status, EmitStatus.SKIPPED)
        self.assertEqual(text, "")

    def test_close_loop_is_forwarded(self):
        out = io.StringIO()
        emit_shape(out, self.xs, self.ys, "border", "red", 1.0, close_loop=False)
        self.assertEqual(out.getvalue().count("<line"), 2)


if __name__ == "__main__":
    unittest.main()
