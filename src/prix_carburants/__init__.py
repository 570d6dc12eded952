"""French fuel-station price lookup."""

__version__ = "0.1.0"
