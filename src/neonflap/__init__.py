"""NEONFLAP - gravity, pipes and one button."""

__version__ = "0.1.0"
