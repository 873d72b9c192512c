"""
test_environment.py: Unit tests for the in-memory spatial world.
"""
import pytest

from regionnav.environment import FINISH_TAG, PORTAL_TAG, TaggedVolumeWorld
from regionnav.utils.vector import Vector
from regionnav.utils.volume import Volume


class TestTaggedVolumeWorld:

    def test_level_volumes(self, two_room_world):
        tags = sorted(item.tag for item in two_room_world.volumes)
        assert tags == [FINISH_TAG, 'Ground', PORTAL_TAG]

    def test_ground_probe(self, two_room_world):
        assert two_room_world.ground_probe(Vector(0, 0, 0))
        assert not two_room_world.ground_probe(Vector(0, 0, 30))
        assert not two_room_world.ground_probe(Vector(0, 10, 0))

    def test_only_ground_tags_support(self):
        world = TaggedVolumeWorld.from_dicts([{'tag': 'Box', 'center': [0, -1, 0], 'size': [4, 1, 4]}])
        assert not world.ground_probe(Vector(0, 0, 0))

    def test_overlap(self, two_room_world):
        near_portal = two_room_world.overlap(Vector(5, 0, 1.2), 1.0)
        assert {item.tag for item in near_portal} == {'Ground', PORTAL_TAG}
        assert {item.tag for item in two_room_world.overlap(Vector(0, 0, 0), 1.0)} == {'Ground'}
        assert two_room_world.overlap(Vector(0, 5, 0), 1.0) == set()

    def test_contains(self, two_room_world):
        assert two_room_world.contains(Vector(5, 0, 0))
        assert not two_room_world.contains(Vector(0, 0, 0))

    def test_segment_cast_sorted_by_distance(self, two_room_world):
        hits = two_room_world.segment_cast(Vector(0, 0, 0), Vector(1, 0, 0), 20)
        assert [hit.tag for hit in hits] == [PORTAL_TAG, FINISH_TAG]
        assert hits[0].distance == pytest.approx(4.5)
        assert hits[0].point == Vector(4.5, 0, 0)
        assert hits[1].volume.center == Vector(12.5, 0, 0)

    def test_segment_cast_length(self, two_room_world):
        assert two_room_world.segment_cast(Vector(0, 0, 0), Vector(1, 0, 0), 4) == []

    def test_is_walkable(self, two_room_world):
        two_room_world.add('Box', Volume(Vector(0, 0.5, 3), Vector(1, 1, 1)), 'crate')
        assert two_room_world.is_walkable(Vector(0, 0, 0), 1.0, 'Box')
        assert not two_room_world.is_walkable(Vector(0, 0, 2.5), 1.0, 'Box')
        assert not two_room_world.is_walkable(Vector(0, 0, 30), 1.0, 'Box')

    def test_empty_world(self):
        world = TaggedVolumeWorld()
        assert not world.ground_probe(Vector(0, 0, 0))
        assert world.segment_cast(Vector(0, 0, 0), Vector(1, 0, 0), 10) == []
