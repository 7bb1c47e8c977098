"""Core functionality for dnsdirect."""

from dnsdirect.core.direct_manager import DirectManager
from dnsdirect.core.types import ManagedState, OSConfig

__all__ = ["DirectManager", "ManagedState", "OSConfig"]
