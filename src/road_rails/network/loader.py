"""RoadNetworkLoader: reads a persisted road file as one complete snapshot."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path

from road_rails.network.models import RoadNetwork
from road_rails.network.serialization import dumps_network, loads_network

_logger = logging.getLogger(__name__)


class RoadNetworkLoader:
    """Loads and saves road network files.

    The loaded network is only handed over once it has been fully parsed, so
    consumers never observe a half-built network.

    Parameters
    ----------
    path:
        Location of the JSON road file.
    on_loaded:
        Optional one-shot callback invoked with the parsed network after the
        first successful load.
    """

    def __init__(
        self,
        path: str | Path,
        on_loaded: Callable[[RoadNetwork], None] | None = None,
    ) -> None:
        self._path = Path(path)
        self._on_loaded = on_loaded

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> RoadNetwork:
        """Read and parse the road file.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        RoadNetworkParseError
            If the file content is malformed.
        """
        return self._parse(self._path.read_text(encoding="utf-8"))

    async def load_async(self) -> RoadNetwork:
        """Same as :meth:`load` but performs the file read in a worker thread."""
        return self._parse(await asyncio.to_thread(self._path.read_text, encoding="utf-8"))

    def save(self, network: RoadNetwork) -> None:
        """Write *network* to the road file, replacing any previous content."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(dumps_network(network, indent=2), encoding="utf-8")
        tmp.replace(self._path)

    def _parse(self, text: str) -> RoadNetwork:
        network = loads_network(text)
        _logger.info(
            "Loaded road network from %s (%d segments, %d macros)",
            self._path,
            len(network.road_segments),
            len(network.macros),
        )
        callback, self._on_loaded = self._on_loaded, None
        if callback is not None:
            callback(network)
        return network
