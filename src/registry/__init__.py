"""Registry clients used to look up published dependency versions."""

from .maven_central import MavenCentralClient

__all__ = ["MavenCentralClient"]
