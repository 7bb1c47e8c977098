"""CLI interface for dnsdirect.

Operator access to the direct resolv.conf manager, mostly for diagnosing a
host or recovering it after the VPN client died without cleaning up.

Usage:
    dnsdirect status
    dnsdirect apply -n 100.100.100.100 -s corp.example
    dnsdirect revert
    dnsdirect base --format yaml
    dnsdirect close
"""

import json
from typing import List, NoReturn, Optional

import typer
import yaml
from loguru import logger

from dnsdirect import __version__
from dnsdirect.core.constants import FS_ROOT, LOG_FILE, LOG_LEVEL, RESOLV_CONF
from dnsdirect.core.direct_manager import DirectManager
from dnsdirect.core.errors import ResolvConfFormatError
from dnsdirect.core.logger import setup_logging
from dnsdirect.core.resolv_conf import resolv_owner
from dnsdirect.core.types import ManagedState, OSConfig
from dnsdirect.utils.admin_utils import check_and_request_admin
from dnsdirect.utils.file_system import DirectFS, RootedFS

app = typer.Typer(
    name="dnsdirect",
    help="Manage /etc/resolv.conf directly for the VPN client",
    add_completion=False,
)


def _init_core(root: Optional[str], verbose: bool) -> DirectManager:
    """Set up logging and build a manager, rooted under root if given."""
    setup_logging("DEBUG" if verbose else LOG_LEVEL, LOG_FILE)

    fs = RootedFS(DirectFS(), root) if root else DirectFS()
    if root:
        logger.debug(f"Using sandbox root {root}")
    return DirectManager(fs=fs)


def _get_manager(ctx: typer.Context) -> DirectManager:
    """Build the manager on first use so cheap commands skip logging setup."""
    if ctx.obj.get("manager") is None:
        ctx.obj["manager"] = _init_core(ctx.obj["root"], ctx.obj["verbose"])
    return ctx.obj["manager"]


def _fail(message: str) -> NoReturn:
    typer.echo(f"❌ Error: {message}", err=True)
    raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    root: Optional[str] = typer.Option(
        FS_ROOT or None,
        "--root",
        envvar="DNSDIRECT_ROOT",
        help="Operate on files under this directory instead of /",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """dnsdirect - direct /etc/resolv.conf management."""
    ctx.ensure_object(dict)
    ctx.obj["root"] = root
    ctx.obj["verbose"] = verbose
    ctx.obj["manager"] = None


@app.command()
def version():
    """Show version information."""
    typer.echo(f"dnsdirect v{__version__}")


@app.command()
def status(ctx: typer.Context):
    """Show who owns resolv.conf and whether a backup is held."""
    manager = _get_manager(ctx)

    try:
        state = manager.state()
        has_backup = manager.has_backup()
        owner = ""
        if state == ManagedState.PRIMARY_FOREIGN:
            owner = resolv_owner(manager.fs.read_file(RESOLV_CONF))
    except OSError as e:
        _fail(str(e))

    typer.echo(f"State: {state}")
    if state == ManagedState.PRIMARY_FOREIGN:
        typer.echo(f"  Owner: {owner or 'unknown'}")
    typer.echo(f"  Backup: {'present' if has_backup else 'none'}")
    typer.echo(f"  systemd-resolved: {'active' if manager.service_active() else 'inactive'}")


@app.command()
def apply(
    ctx: typer.Context,
    nameserver: Optional[List[str]] = typer.Option(None, "--nameserver", "-n", help="Nameserver IP (repeatable)"),
    search: Optional[List[str]] = typer.Option(None, "--search", "-s", help="Search domain (repeatable)"),
):
    """Point resolv.conf at the given nameservers."""
    try:
        config = OSConfig.from_strings(nameserver or [], search or [])
    except ResolvConfFormatError as e:
        _fail(str(e))

    if config.is_zero():
        _fail("Give at least one --nameserver or --search (use 'revert' to restore)")

    check_and_request_admin(rooted=bool(ctx.obj["root"]))
    manager = _get_manager(ctx)

    try:
        manager.set_dns(config)
    except OSError as e:
        _fail(str(e))

    typer.echo(f"✅ {RESOLV_CONF} updated")
    for ns in config.nameservers:
        typer.echo(f"  nameserver {ns}")


@app.command()
def revert(ctx: typer.Context):
    """Restore the resolv.conf that was in place before takeover."""
    check_and_request_admin(rooted=bool(ctx.obj["root"]))
    manager = _get_manager(ctx)

    had_backup = manager.has_backup()
    try:
        restored = manager.set_dns(OSConfig())
    except OSError as e:
        _fail(str(e))

    if restored:
        typer.echo("✅ Host DNS configuration restored")
    elif had_backup:
        typer.echo(f"⚠️  {RESOLV_CONF} was replaced by another manager; discarded stale backup")
    else:
        typer.echo("Nothing to restore")


@app.command()
def base(
    ctx: typer.Context,
    output_format: str = typer.Option("json", "--format", "-f", help="Output format: json or yaml"),
):
    """Print the DNS configuration from before takeover."""
    if output_format not in ("json", "yaml"):
        _fail(f"Unknown format '{output_format}'")

    manager = _get_manager(ctx)
    try:
        config = manager.get_base_config()
    except (OSError, ResolvConfFormatError) as e:
        _fail(str(e))

    data = config.to_dict()
    if output_format == "yaml":
        typer.echo(yaml.safe_dump(data, default_flow_style=False).rstrip())
    else:
        typer.echo(json.dumps(data, indent=2))


@app.command()
def close(ctx: typer.Context):
    """Tear down: restore the host config and remove legacy files."""
    check_and_request_admin(rooted=bool(ctx.obj["root"]))
    manager = _get_manager(ctx)

    try:
        manager.close()
    except OSError as e:
        _fail(str(e))

    typer.echo("✅ Cleanup complete")


if __name__ == "__main__":
    app()
