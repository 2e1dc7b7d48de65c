"""Build file processors, one per supported format."""

from .base import FormatProcessor
from .gradle import GradleProcessor
from .maven import MavenProcessor

__all__ = [
    "FormatProcessor",
    "GradleProcessor",
    "MavenProcessor",
]
