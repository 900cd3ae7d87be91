import io
import unittest

from shpdeck.adapters import (
    multipoint_coords,
    point_coords,
    polygon_coords,
    polyline_coords,
    render_record,
)
from shpdeck.models import EmitStatus, GeoExtent, GeometryKind, GeometryRecord, ScreenExtent, StyleConfig
from shpdeck.projection import MapProjection


class _BrokenSink:
    def write(self, text):
        raise OSError("No space left on device")


class AdapterTestCase(unittest.TestCase):
    def setUp(self):
        self.projection = MapProjection(
            geo=GeoExtent(lon_min=0.0, lon_max=10.0, lat_min=0.0, lat_max=10.0),
            screen=ScreenExtent(x_min=0.0, x_max=100.0, y_min=0.0, y_max=100.0),
        )
        self.out = io.StringIO()

    def lines(self):
        return self.out.getvalue().splitlines()


class TestPolygonAdapter(AdapterTestCase):
    def test_parts_render_independently(self):
        record = GeometryRecord.polygon(
            [0, 3],
            [(0, 0), (10, 0), (10, 10), (1, 1), (2, 1), (2, 2), (1, 2)],
        )
        style = StyleConfig(shape="polygon", color="blue:80", size=0.1)
        result = polygon_coords(self.out, record, self.projection, style)
        self.assertEqual(result, (EmitStatus.RENDERED, EmitStatus.RENDERED))
        lines = self.lines()
        self.assertEqual(len(lines), 2)
        self.assertIn('xc="0.00000 100.00000 100.00000"', lines[0])
        self.assertIn('yc="0.00000 0.00000 100.00000"', lines[0])
        self.assertIn('xc="10.00000 20.00000 20.00000 10.00000"', lines[1])
        self.assertIn('yc="10.00000 10.00000 20.00000 20.00000"', lines[1])

    def test_short_part_is_dropped(self):
        record = GeometryRecord.polygon([0, 3], [(0, 0), (10, 0), (10, 10), (5, 5), (6, 6)])
        style = StyleConfig(shape="p", color="red", size=0.1)
        result = polygon_coords(self.out, record, self.projection, style)
        self.assertEqual(result, (EmitStatus.RENDERED, EmitStatus.SKIPPED))
        self.assertEqual(len(self.lines()), 1)

    def test_polygon_as_border_lines(self):
        record = GeometryRecord.polygon([0], [(0, 0), (10, 0), (10, 10), (0, 0)])
        style = StyleConfig(shape="border", color="black", size=0.2)
        polygon_coords(self.out, record, self.projection, style)
        self.assertEqual(len(self.lines()), 4)
        self.assertTrue(all(line.startswith("<line") for line in self.lines()))

    def test_zero_parts_is_a_no_op(self):
        record = GeometryRecord(kind=GeometryKind.POLYGON, points=())
        style = StyleConfig(shape="polygon", color="red", size=0.1)
        self.assertEqual(polygon_coords(self.out, record, self.projection, style), ())
        self.assertEqual(self.out.getvalue(), "")

    def test_parts_without_points_is_a_no_op(self):
        style = StyleConfig(shape="line", color="red", size=1.0)
        record = GeometryRecord.polyline([0], [])
        self.assertEqual(record.parts, ())
        self.assertEqual(polyline_coords(self.out, record, self.projection, style), ())
        polygon = GeometryRecord.polygon([0, 3], [])
        self.assertEqual(polygon_coords(self.out, polygon, self.projection, style), ())
        self.assertEqual(self.out.getvalue(), "")

    def test_points_without_parts_is_a_no_op(self):
        record = GeometryRecord(kind=GeometryKind.POLYGON, points=((0.0, 0.0), (1.0, 1.0), (2.0, 0.0)))
        style = StyleConfig(shape="polygon", color="red", size=0.1)
        self.assertEqual(polygon_coords(self.out, record, self.projection, style), ())
        self.assertEqual(self.out.getvalue(), "")

    def test_unknown_shape_skips_every_part(self):
        record = GeometryRecord.polygon([0], [(0, 0), (10, 0), (10, 10)])
        style = StyleConfig(shape="hexagon", color="red", size=0.1)
        self.assertEqual(
            polygon_coords(self.out, record, self.projection, style), (EmitStatus.SKIPPED,)
        )
        self.assertEqual(self.out.getvalue(), "")


class TestPolylineAdapter(AdapterTestCase):
    def test_each_part_is_a_closed_chain(self):
        record = GeometryRecord.polyline([0, 3], [(0, 0), (1, 0), (2, 0), (5, 5), (6, 6)])
        style = StyleConfig(shape="line", color="red:25", size=0.5)
        result = polyline_coords(self.out, record, self.projection, style)
        self.assertEqual(result, (EmitStatus.RENDERED, EmitStatus.RENDERED))
        # 2 + 1 closing for the first part, 1 + 1 closing for the second
        self.assertEqual(len(self.lines()), 5)
        self.assertIn('xp1="50.0000000" yp1="50.0000000" xp2="60.0000000" yp2="60.0000000"', self.lines()[3])

    def test_open_chains(self):
        record = GeometryRecord.polyline([0, 3], [(0, 0), (1, 0), (2, 0), (5, 5), (6, 6)])
        style = StyleConfig(shape="line", color="red", size=0.5, close_loop=False)
        polyline_coords(self.out, record, self.projection, style)
        self.assertEqual(len(self.lines()), 3)

    def test_part_points_do_not_leak(self):
        record = GeometryRecord.polyline([0, 2], [(0, 0), (1, 1), (9, 9), (8, 8)])
        style = StyleConfig(shape="dot", color="red", size=1.0)
        polyline_coords(self.out, record, self.projection, style)
        self.assertEqual(len(self.lines()), 4)
        self.assertIn('xp="10.0000000"', self.lines()[1])
        self.assertIn('xp="90.0000000"', self.lines()[2])


class TestPointAdapters(AdapterTestCase):
    def test_point_is_always_a_dot(self):
        record = GeometryRecord.point(5.0, 2.5)
        style = StyleConfig(shape="polygon", color="navy:30", size=1.5)
        self.assertEqual(
            point_coords(self.out, record, self.projection, style), (EmitStatus.RENDERED,)
        )
        self.assertEqual(
            self.out.getvalue(),
            '<ellipse xp="50.0000000" yp="25.0000000" hr="100" color="navy" opacity="30" wp="1.500"/>\n',
        )

    def test_point_ignores_unknown_shape(self):
        style = StyleConfig(shape="nope", color="navy", size=1.0)
        point_coords(self.out, GeometryRecord.point(1.0, 1.0), self.projection, style)
        self.assertEqual(len(self.lines()), 1)

    def test_multipoint_is_always_dots(self):
        record = GeometryRecord.multipoint([(1, 1), (2, 2), (3, 3)])
        style = StyleConfig(shape="line", color="red", size=1.0)
        self.assertEqual(
            multipoint_coords(self.out, record, self.projection, style), (EmitStatus.RENDERED,)
        )
        self.assertEqual(len(self.lines()), 3)
        self.assertTrue(all(line.startswith("<ellipse") for line in self.lines()))

    def test_empty_multipoint_is_a_no_op(self):
        record = GeometryRecord.multipoint([])
        style = StyleConfig(shape="dot", color="red", size=1.0)
        self.assertEqual(multipoint_coords(self.out, record, self.projection, style), ())
        self.assertEqual(self.out.getvalue(), "")


class TestRenderRecord(AdapterTestCase):
    def test_dispatches_on_kind(self):
        style = StyleConfig(shape="polygon", color="red", size=1.0)
        render_record(self.out, GeometryRecord.point(1.0, 1.0), self.projection, style)
        render_record(
            self.out, GeometryRecord.polygon([0], [(0, 0), (1, 0), (1, 1)]), self.projection, style
        )
        lines = self.lines()
        self.assertTrue(lines[0].startswith("<ellipse"))
        self.assertTrue(lines[1].startswith("<polygon"))

    def test_sink_failure_propagates(self):
        style = StyleConfig(shape="polygon", color="red", size=1.0)
        record = GeometryRecord.polygon([0], [(0, 0), (1, 0), (1, 1)])
        with self.assertRaises(OSError):
            render_record(_BrokenSink(), record, self.projection, style)


if __name__ == "__main__":
    unittest.main()
