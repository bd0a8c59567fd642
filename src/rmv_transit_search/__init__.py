"""RMV Transit Search Package

A Python package for reading departure boards and connections from the
result pages of the RMV journey planner, with a CLI.
"""

__version__ = "0.1.0"

from .core.client import TransitClient
from .core.models import Connection, Departure, Line, Station

__all__ = ["Connection", "Departure", "Line", "Station", "TransitClient"]
