"""Privilege checks for CLI operations."""
import sys

import typer

from dnsdirect.utils.platform_utils import Platform, PlatformUtils


def check_and_request_admin(rooted: bool) -> None:
    """
    Make sure a mutating command may touch /etc/resolv.conf.

    Args:
        rooted: True when paths are redirected into a sandbox directory

    Raises:
        typer.Exit: If root is required but not available
    """
    # Sandboxed runs only touch the sandbox
    if rooted:
        return

    if PlatformUtils.get_platform() == Platform.WINDOWS:
        typer.echo("❌ /etc/resolv.conf management is not available on Windows", err=True)
        raise typer.Exit(1)

    if PlatformUtils.is_root():
        return  # Already root, continue

    typer.echo("⚠️  Changing /etc/resolv.conf requires root privileges", err=True)
    typer.echo("💡 Please run with sudo:")
    typer.echo(f"   sudo {' '.join(sys.argv)}")
    raise typer.Exit(1)
