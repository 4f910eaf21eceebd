"""vidproxy: a caching proxy in front of a (simulated) video service."""

__version__ = "0.1.0"
