"""resolv.conf(5) codec and ownership heuristics.

Everything here is a pure function over text or bytes so it can be tested
without touching the file system.
"""
import ipaddress
from typing import Iterable, Union

from dnsdirect.core.constants import HEADER, MARKER
from dnsdirect.core.dnsname import to_fqdn, without_trailing_dot
from dnsdirect.core.errors import InvalidDomainError, ResolvConfFormatError
from dnsdirect.core.types import IPAddress, OSConfig

# Checked in this order on each leading comment line
KNOWN_OWNERS = ("systemd-resolved", "NetworkManager", "resolvconf")


def _lines(content: str):
    """Split on "\n" only, dropping a trailing "\r" from each line."""
    for line in content.split("\n"):
        yield line[:-1] if line.endswith("\r") else line


def write_resolv_conf(nameservers: Iterable[IPAddress], domains: Iterable[str]) -> str:
    """
    Render resolver settings in resolv.conf format.

    Args:
        nameservers: Nameserver addresses, written in order
        domains: Search domains; trailing dots are dropped

    Returns:
        File content including the generated-by header
    """
    parts = [HEADER]
    for ns in nameservers:
        parts.append(f"nameserver {ns}\n")

    domains = [without_trailing_dot(d) for d in domains]
    if domains:
        parts.append("search " + " ".join(domains) + "\n")
    return "".join(parts)


def _strip_keyword(line: str, keyword: str) -> str:
    rest = line[len(keyword):]
    value = rest.strip()
    if len(value) == len(rest):
        raise ResolvConfFormatError(f"missing space after {keyword!r} in {line!r}")
    return value


def read_resolv(content: Union[str, bytes]) -> OSConfig:
    """
    Parse resolv.conf content.

    Only ``nameserver`` and ``search`` lines are understood; everything else
    is ignored. A ``search`` line is read as a single domain.

    Args:
        content: File content

    Returns:
        Parsed config (zero if nothing was recognized)

    Raises:
        ResolvConfFormatError: On a malformed nameserver or search line
    """
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")

    config = OSConfig()
    for raw in _lines(content):
        line = raw.split("#", 1)[0].strip()

        if line.startswith("nameserver"):
            value = _strip_keyword(line, "nameserver")
            try:
                config.nameservers.append(ipaddress.ip_address(value))
            except ValueError as e:
                raise ResolvConfFormatError(f"parsing nameserver {line!r}: {e}") from e
            continue

        if line.startswith("search"):
            value = _strip_keyword(line, "search")
            try:
                config.search_domains.append(to_fqdn(value))
            except InvalidDomainError as e:
                raise InvalidDomainError(f"parsing search domains {line!r}: {e}") from e
            continue

    return config


def is_owned_content(content: bytes) -> bool:
    """Report whether file content carries our generated-by marker."""
    return MARKER.encode() in content


def resolv_owner(content: Union[str, bytes]) -> str:
    """
    Guess which resolver manager wrote a resolv.conf.

    Only the leading block of comments and blank lines is inspected.

    Returns:
        "systemd-resolved", "NetworkManager", "resolvconf", or "" if unknown
    """
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")

    for raw in _lines(content):
        line = raw.strip()
        if not line:
            continue
        if not line.startswith("#"):
            # Assume the owner isn't hiding further down.
            break
        for owner in KNOWN_OWNERS:
            if owner in line:
                return owner
    return ""
