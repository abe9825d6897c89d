"""JSON text form of a :class:`RoadNetwork`."""

from __future__ import annotations

from pydantic import ValidationError

from road_rails.network.models import RoadNetwork
from road_rails.network.schemas import RoadNetworkSchema


class RoadNetworkParseError(ValueError):
    """Raised when serialized road network data is malformed."""


def dumps_network(network: RoadNetwork, indent: int | None = None) -> str:
    """Serialize *network* to the persisted JSON format."""
    return RoadNetworkSchema.from_network(network).model_dump_json(indent=indent)


def loads_network(text: str | bytes) -> RoadNetwork:
    """Parse persisted JSON into a fresh :class:`RoadNetwork`.

    Raises:
        RoadNetworkParseError: If *text* is not valid JSON or does not match
            the persisted schema.  No partial network is ever returned.
    """
    try:
        schema = RoadNetworkSchema.model_validate_json(text)
    except ValidationError as exc:
        raise RoadNetworkParseError(f"Invalid road network data: {exc}") from exc
    return schema.to_network()
