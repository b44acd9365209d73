"""Carbon footprint tracking backend."""

__version__ = "0.1.0"
