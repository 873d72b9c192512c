"""Region graph: level data, regions, adjacency and platform timing."""
from regionnav.map.level_data import (BoxVolume, LevelData, PlatformVolume,
                                      PortalVolume, WorldVolume)
from regionnav.map.region import (BaseRegion, BoxRegion, PlatformRegion,
                                  PortalRegion, RegionKind)
from regionnav.map.region_graph import RegionGraph
from regionnav.map.rendezvous import Rendezvous, compute_rendezvous

__all__ = [
    'BaseRegion', 'BoxRegion', 'BoxVolume', 'LevelData', 'PlatformRegion', 'PlatformVolume',
    'PortalRegion', 'PortalVolume', 'RegionGraph', 'RegionKind', 'Rendezvous', 'WorldVolume',
    'compute_rendezvous',
]
