"""Rail-assisted driving: road network painting, mesh synthesis and guidance."""

__version__ = "0.1.0"
