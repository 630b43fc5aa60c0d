"""m2sweep - prune stale versions and builds from a local Maven repository."""

__version__ = "0.1.0"
