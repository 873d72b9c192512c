"""
test_level_data.py: Validation of the level-authoring input.
"""
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from regionnav.map import LevelData, RegionGraph
from regionnav.utils.vector import Vector

from conftest import make_level

LEVELS_DIR = Path(__file__).resolve().parent.parent / 'levels'


class TestLevelData:

    def test_valid_level(self, two_room_level):
        assert len(two_room_level.boxes) == 2
        assert two_room_level.portals[0].between == (0, 1)
        assert two_room_level.platforms == []
        assert two_room_level.world[0].tag == 'Ground'

    def test_link_out_of_range(self):
        with pytest.raises(ValidationError, match='references box 5'):
            make_level(portals=[{'center': [5, 0, 0], 'size': [1, 1, 1], 'between': [0, 5]}])

    def test_link_to_itself(self):
        with pytest.raises(ValidationError, match='to itself'):
            make_level(portals=[{'center': [5, 0, 0], 'size': [1, 1, 1], 'between': [1, 1]}])

    def test_non_positive_size(self):
        with pytest.raises(ValidationError):
            make_level(boxes=[{'center': [0, 0, 0], 'size': [0, 1, 1]}])

    def test_needs_a_box(self):
        with pytest.raises(ValidationError):
            make_level(boxes=[], portals=[])

    def test_platform_anchor_defaults_to_center(self):
        level = make_level(platforms=[{
            'center': [3, 0, 4], 'size': [1, 1, 1], 'between': [1, 0], 'rotation_center': [0, 0, 0],
        }])
        platform = level.platforms[0]
        assert platform.anchor_point() == Vector(3, 0, 4)
        assert platform.rotation_speed == 1.0
        assert platform.phase_time == 0.0

    def test_negative_radius(self):
        with pytest.raises(ValidationError):
            make_level(platforms=[{
                'center': [3, 0, 4], 'size': [1, 1, 1], 'between': [1, 0],
                'rotation_center': [0, 0, 0], 'rotation_radius': -1,
            }])

    def test_from_json_file(self, tmp_path, two_room_level):
        path = tmp_path / 'level.json'
        path.write_text(json.dumps(two_room_level.model_dump()))
        assert LevelData.from_json_file(str(path)) == two_room_level

    def test_from_json_file_errors(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LevelData.from_json_file(str(tmp_path / 'missing.json'))
        broken = tmp_path / 'broken.json'
        broken.write_text('{"boxes": [')
        with pytest.raises(ValueError):
            LevelData.from_json_file(str(broken))

    def test_bundled_level(self, config):
        graph = RegionGraph.from_json_file(str(LEVELS_DIR / 'platform_crossing.json'), config)
        assert len(graph.box_regions()) == 3
        assert graph.is_platform_between(1, 2)
        assert graph.finish_point == Vector(40, 0, 0)
