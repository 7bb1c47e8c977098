"""Core types and enums."""
import ipaddress
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Union

from dnsdirect.core.dnsname import to_fqdn
from dnsdirect.core.errors import ResolvConfFormatError

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class ManagedState(Enum):
    """Who currently holds the primary resolver file."""

    NO_PRIMARY = "no-primary"
    PRIMARY_FOREIGN = "primary-foreign"
    PRIMARY_OWNED = "primary-owned"

    def __str__(self):
        return self.value


@dataclass
class OSConfig:
    """Resolver settings to install on the host.

    A config with no nameservers and no search domains is "zero" and means
    the host default should be restored.
    """

    nameservers: List[IPAddress] = field(default_factory=list)
    # Fully-qualified, with trailing dot
    search_domains: List[str] = field(default_factory=list)

    def is_zero(self) -> bool:
        return not self.nameservers and not self.search_domains

    @classmethod
    def from_strings(cls, nameservers: Iterable[str] = (), search_domains: Iterable[str] = ()) -> "OSConfig":
        """
        Build a config from user-supplied strings.

        Raises:
            ResolvConfFormatError: If an address or domain does not parse
        """
        parsed = []
        for ns in nameservers:
            try:
                parsed.append(ipaddress.ip_address(ns.strip()))
            except ValueError as e:
                raise ResolvConfFormatError(str(e)) from e
        return cls(nameservers=parsed, search_domains=[to_fqdn(d.strip()) for d in search_domains])

    def to_dict(self) -> dict:
        return {
            "nameservers": [str(ns) for ns in self.nameservers],
            "search_domains": list(self.search_domains),
        }
