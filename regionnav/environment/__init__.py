"""Environment package.

This package provides the spatial queries the planners use to sense the physical world:
walkability, obstacle overlap and segment casts, plus an in-memory world built from
tagged volumes.
"""
from regionnav.environment.spatial_query import Hit, SpatialQuery, TaggedVolume
from regionnav.environment.tagged_world import (FINISH_TAG, GROUND_TAG,
                                                PORTAL_TAG, TaggedVolumeWorld)

__all__ = ['FINISH_TAG', 'GROUND_TAG', 'Hit', 'PORTAL_TAG', 'SpatialQuery', 'TaggedVolume', 'TaggedVolumeWorld']
