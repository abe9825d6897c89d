"""Road network model and persistence."""

from road_rails.network.loader import RoadNetworkLoader
from road_rails.network.models import DegenerateSegmentError, Macro, RoadNetwork, Segment
from road_rails.network.serialization import RoadNetworkParseError, dumps_network, loads_network

__all__ = [
    "DegenerateSegmentError",
    "Macro",
    "RoadNetwork",
    "RoadNetworkLoader",
    "RoadNetworkParseError",
    "Segment",
    "dumps_network",
    "loads_network",
]
