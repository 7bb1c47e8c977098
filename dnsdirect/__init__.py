"""dnsdirect - direct /etc/resolv.conf management for a VPN client."""

__version__ = "0.1.0"
__author__ = "dnsdirect contributors"
__description__ = "Rewrites /etc/resolv.conf for a VPN and restores it afterwards"

from dnsdirect.core.direct_manager import DirectManager
from dnsdirect.core.types import ManagedState, OSConfig

__all__ = ["DirectManager", "ManagedState", "OSConfig", "__version__"]
