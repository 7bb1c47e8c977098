"""Exception types raised by dnsdirect."""


class ResolvConfFormatError(ValueError):
    """Raised when a resolv.conf line cannot be decoded."""

    pass


class InvalidDomainError(ResolvConfFormatError):
    """Raised when a search domain is not a valid DNS name."""

    pass


class RenameError(OSError):
    """Raised when the copy-based rename emulation cannot complete."""

    def __init__(self, message: str, old: str, new: str):
        super().__init__(message)
        self.filename = old
        self.filename2 = new

    def __str__(self):
        return self.args[0]
