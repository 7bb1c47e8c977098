"""DNS name helpers."""
from dnsdirect.core.errors import InvalidDomainError

MAX_LABEL_LENGTH = 63
# Including the trailing dot
MAX_NAME_LENGTH = 254


def _is_alnum(c: str) -> bool:
    return c.isascii() and c.isalnum()


def _is_dns_char(c: str) -> bool:
    return _is_alnum(c) or c == "-"


def validate_label(label: str) -> None:
    """
    Check a single DNS label.

    Raises:
        InvalidDomainError: If the label is empty, too long or has bad characters
    """
    if not label:
        raise InvalidDomainError("empty DNS label")
    if len(label.encode()) > MAX_LABEL_LENGTH:
        raise InvalidDomainError(f"{label!r} is too long, max length is {MAX_LABEL_LENGTH} bytes")
    if not _is_alnum(label[0]):
        raise InvalidDomainError(f"{label!r} is not a valid DNS label: must start with a letter or number")
    if not _is_alnum(label[-1]):
        raise InvalidDomainError(f"{label!r} is not a valid DNS label: must end with a letter or number")
    for c in label[1:-1]:
        if not _is_dns_char(c):
            raise InvalidDomainError(f"{label!r} is not a valid DNS label: contains invalid character {c!r}")


def to_fqdn(name: str) -> str:
    """
    Normalize a DNS name to its fully-qualified form (with trailing dot).

    Args:
        name: Domain name, with or without trailing dot

    Returns:
        The name ending in "."

    Raises:
        InvalidDomainError: If any label is invalid or the name is too long
    """
    if not name or name == ".":
        return "."
    if name.startswith("."):
        name = name[1:]
    if name.endswith("."):
        name = name[:-1]
    if len(name.encode()) + 1 > MAX_NAME_LENGTH:
        raise InvalidDomainError(f"{name!r} is too long to be a DNS name")

    for label in name.split("."):
        validate_label(label)
    return name + "."


def without_trailing_dot(fqdn: str) -> str:
    if fqdn.endswith(".") and fqdn != ".":
        return fqdn[:-1]
    return fqdn
