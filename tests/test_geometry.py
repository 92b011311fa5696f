import math

import pytest

from hexasphere import icosahedron
from hexasphere import vec3 as v3
from hexasphere.errors import DegenerateInput, InvalidParameter
from hexasphere.face import Face
from hexasphere.point import Point, PointStore
from hexasphere.tile import build_tile


def test_point_rounds_to_three_digits():
    p = Point(1.23456, -0.0001, 2)
    assert p.key == (1.235, 0.0, 2.0)
    assert str(p) == "1.235,0.0,2.0"
    assert Point(1.2344999, 0, 0) == Point(1.234, 0, 0)


def test_segment_clamps_percent():
    origin = Point(0, 0, 0)
    target = Point(10, 0, 0)

    assert origin.segment(target, 1.0) == origin
    assert origin.segment(target, 5.0) == origin
    # Lower clamp is 0.01, not 0.
    assert origin.segment(target, 0.0).key == (9.9, 0.0, 0.0)
    assert origin.segment(target, 0.5) == Point(5, 0, 0)
    assert origin.midpoint(target) == Point(5, 0, 0)


def test_project_scales_to_radius():
    assert Point(3, 4, 0).project(10) == Point(6, 8, 0)
    assert Point(3, 4, 0).project(10, 0.5) == Point(3, 4, 0)
    assert Point(3, 4, 0).project(10, 2.0) == Point(6, 8, 0)
    assert Point(3, 4, 0).project(10, -1.0) == Point(0, 0, 0)


def test_project_keeps_full_precision():
    projected = Point(1, 1, 1).project(1.0)

    assert projected.x == pytest.approx(1 / math.sqrt(3), abs=1e-15)
    assert projected.key == (0.577, 0.577, 0.577)
    assert math.isclose(projected.magnitude, 1.0, abs_tol=1e-12)


def test_exact_points_share_rounded_keys():
    a = Point.exact(0.12345, -0.00001, 2)
    b = Point.exact(0.1234999, 0.0, 2.0004)

    assert a != b
    assert a.key == b.key == (0.123, 0.0, 2.0)
    assert str(a) == "0.123,0.0,2.0"
    store = PointStore()
    assert store.canonical(a) is a
    assert store.canonical(b) is a


def test_project_zero_point_is_degenerate():
    with pytest.raises(DegenerateInput):
        Point(0, 0, 0).project(1.0)


def test_subdivide_dedups_interior_points_only():
    seen = []

    def dedup(point):
        seen.append(point)
        return point

    start, end = Point(0, 0, 0), Point(4, 0, 0)
    points = start.subdivide(end, 4, dedup)

    assert [p.x for p in points] == [0.0, 1.0, 2.0, 3.0, 4.0]
    assert points[0] is start and points[-1] is end
    assert len(seen) == 3
    assert start.subdivide(end, 1, dedup) == [start, end]
    assert len(seen) == 3

    with pytest.raises(InvalidParameter):
        start.subdivide(end, 0, dedup)


def test_point_store_returns_canonical_instance():
    store = PointStore()
    first = store.canonical(Point(1, 2, 3))
    second = store.canonical(Point(1.0001, 2, 3))

    assert second is first
    assert len(store) == 1
    assert (1.0, 2.0, 3.0) in store
    assert store.faces_of(first) == []


def _triangle(face_id, *coords):
    return Face(face_id, tuple(Point(*c) for c in coords))


def test_face_centroid_and_queries():
    face = _triangle(0, (0, 0, 0), (3, 0, 0), (0, 3, 0))

    assert face.centroid == Point(1, 1, 0)
    assert face.other_points(Point(0.0001, 0, 0)) == [Point(3, 0, 0), Point(0, 3, 0)]
    assert face.find_third_point(Point(0, 0, 0), Point(3, 0, 0)) == Point(0, 3, 0)


def test_face_adjacency_requires_shared_edge():
    face = _triangle(0, (0, 0, 0), (3, 0, 0), (0, 3, 0))
    edge_neighbor = _triangle(1, (3, 0, 0), (0, 3, 0), (3, 3, 0))
    corner_neighbor = _triangle(2, (3, 0, 0), (6, 0, 0), (6, 3, 0))

    assert face.is_adjacent_to(edge_neighbor)
    assert edge_neighbor.is_adjacent_to(face)
    assert not face.is_adjacent_to(corner_neighbor)
    assert not face.is_adjacent_to(face)


def test_register_records_incident_faces():
    store = PointStore()
    face = _triangle(7, (0, 0, 0), (3, 0, 0), (0, 3, 0))
    store.register(face)

    assert len(store) == 3
    assert store.faces_of(Point(3, 0, 0)) == [face]


def test_icosahedron_corners_and_base_faces():
    store = PointStore()
    mesh = icosahedron.build_icosahedron(store, icosahedron.face_id_counter())

    assert len(mesh.corners) == 12
    assert len(mesh.faces) == 20
    assert len(store) == 12
    assert [f.id for f in mesh.faces] == list(range(20))

    radii = {round(c.magnitude, 2) for c in mesh.corners}
    assert len(radii) == 1

    # Base faces are templates and never registered.
    assert all(store.faces_of(c) == [] for c in mesh.corners)
    for corner in mesh.corners:
        touching = [f for f in mesh.faces if corner.key in f.keys]
        assert len(touching) == 5


@pytest.mark.parametrize("divisions", [1, 2, 3, 4, 5])
def test_subdivision_counts(divisions):
    store = PointStore()
    ids = icosahedron.face_id_counter()
    mesh = icosahedron.build_icosahedron(store, ids)
    faces = icosahedron.subdivide_faces(mesh, divisions, store, ids)

    assert len(faces) == 20 * divisions ** 2
    assert len(store) == 10 * divisions ** 2 + 2
    assert faces[0].id == 20
    assert [f.id for f in faces] == sorted(f.id for f in faces)


def test_projection_rekeys_points_and_faces():
    store = PointStore()
    ids = icosahedron.face_id_counter()
    mesh = icosahedron.build_icosahedron(store, ids)
    faces = icosahedron.subdivide_faces(mesh, 2, store, ids)

    projected, rebuilt = icosahedron.project_points(store, faces, 2.0)

    assert len(projected) == len(store)
    assert [f.id for f in rebuilt] == [f.id for f in faces]
    for point in projected:
        assert math.isclose(point.magnitude, 2.0, abs_tol=1e-12)
        assert len(projected.faces_of(point)) in (5, 6)
    for face in rebuilt:
        assert all(p.key in projected for p in face.points)


def test_projection_rejects_merged_keys():
    store = PointStore()
    ids = icosahedron.face_id_counter()
    mesh = icosahedron.build_icosahedron(store, ids)
    faces = icosahedron.subdivide_faces(mesh, 10, store, ids)

    with pytest.raises(DegenerateInput, match="share a key"):
        icosahedron.project_points(store, faces, 0.005)


class TestWinding:
    def test_signs_agree_componentwise(self):
        assert v3.signs_agree((1.0, 2.0, 3.0), (0.5, 0.1, 9.0))
        assert v3.signs_agree((-1.0, 2.0, -3.0), (-0.5, 0.1, -9.0))
        assert not v3.signs_agree((1.0, 2.0, 3.0), (0.5, -0.1, 9.0))
        # A positive dot product is not enough.
        assert not v3.signs_agree((1.0, 1.0, 1.0), (5.0, 5.0, -0.1))

    def test_zero_component_accepts_either_sign(self):
        assert v3.signs_agree((0.0, 0.0, 1.0), (-4.0, 7.0, 2.0))
        assert v3.signs_agree((0.0, 0.0, 1.0), (4.0, -7.0, 2.0))
        assert v3.signs_agree((1.0, 0.0, 1.0), (1.0, 0.0, 0.0))
        assert not v3.signs_agree((0.0, 0.0, 1.0), (4.0, 7.0, -2.0))

    def test_surface_normal_follows_right_hand_rule(self):
        assert v3.surface_normal((0, 0, 0), (1, 0, 0), (0, 1, 0)) == (0, 0, 1)
        assert v3.surface_normal((0, 0, 0), (0, 1, 0), (1, 0, 0)) == (0, 0, -1)

    def _fan(self):
        center = Point(0, 0, 10)
        ring = [
            Point(6 * math.cos(math.radians(60 * k)), 6 * math.sin(math.radians(60 * k)), 8)
            for k in range(6)
        ]
        faces = [Face(k, (center, ring[k], ring[(k + 1) % 6])) for k in range(6)]
        return center, faces

    def test_outward_fan_is_kept(self):
        center, faces = self._fan()
        tile = build_tile(center, faces)

        assert [f.id for f in tile.faces] == [0, 1, 2, 3, 4, 5]
        assert [p.key for p in tile.boundary] == [f.centroid.key for f in faces]

    def test_inward_fan_is_reversed_with_its_faces(self):
        center, faces = self._fan()
        outward = build_tile(center, faces)
        tile = build_tile(center, list(reversed(faces)))

        assert [f.id for f in tile.faces] == [0, 1, 2, 3, 4, 5]
        assert tile.boundary == outward.boundary
        for point, face in zip(tile.boundary, tile.faces):
            assert point.key == face.centroid.key
        # Neighbor ids keep the walk order.
        assert tile.neighbor_ids[0] == faces[5].points[1].key
