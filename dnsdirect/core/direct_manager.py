"""Direct /etc/resolv.conf management.

DirectManager replaces /etc/resolv.conf with a generated file and keeps a
backup of whatever was there before, so the host configuration can be put
back on revert or shutdown. It does not react to the tunnel going away: the
caller must call close() before exiting.
"""
import secrets
from typing import Callable, Optional

from loguru import logger

from dnsdirect.core.constants import (
    BACKUP_CONF,
    LEGACY_CONF,
    RESOLV_CONF,
    RESOLV_CONF_PERM,
)
from dnsdirect.core.errors import RenameError
from dnsdirect.core.resolv_conf import (
    is_owned_content,
    read_resolv,
    resolv_owner,
    write_resolv_conf,
)
from dnsdirect.core.types import ManagedState, OSConfig
from dnsdirect.utils.file_system import DirectFS, WholeFileFS
from dnsdirect.utils.platform_utils import PlatformUtils
from dnsdirect.utils.resolved_service import ResolvedService


def _exists(fs: WholeFileFS, name: str) -> bool:
    """stat() that maps "not found" to False and raises anything else."""
    try:
        fs.stat(name)
    except FileNotFoundError:
        return False
    return True


class DirectManager:
    """Manages /etc/resolv.conf by writing it directly."""

    def __init__(
        self,
        fs: Optional[WholeFileFS] = None,
        log=None,
        service_active: Optional[Callable[[], bool]] = None,
        service_restart: Optional[Callable[[], None]] = None,
        gui_desktop_user: Optional[Callable[[], bool]] = None,
    ):
        """
        Args:
            fs: File system to operate on (defaults to the local OS)
            log: Logger with debug/info/warning methods (defaults to loguru)
            service_active: Reports whether systemd-resolved is running
            service_restart: Restarts systemd-resolved
            gui_desktop_user: Reports whether we run as a desktop user
        """
        resolved = ResolvedService()
        self.fs = fs or DirectFS()
        self.log = log or logger
        self._service_active = service_active or resolved.is_active
        self._service_restart = service_restart or resolved.restart
        self._gui_desktop_user = gui_desktop_user or PlatformUtils.running_as_gui_desktop_user
        # Set once fs.rename to or from resolv.conf fails. Some container
        # runtimes bind-mount /etc/resolv.conf from another filesystem, so
        # rename(2) can never succeed there; we copy and truncate instead.
        self.rename_broken = False

    # --- Ownership ---

    def owned_by_us(self) -> bool:
        """
        Check whether /etc/resolv.conf is a file we generated.

        Returns:
            True if it exists, is a regular file and carries our marker
        """
        try:
            is_regular = self.fs.stat(RESOLV_CONF)
        except FileNotFoundError:
            return False
        if not is_regular:
            return False
        return is_owned_content(self.fs.read_file(RESOLV_CONF))

    def state(self) -> ManagedState:
        """Derive the current state from the files on disk."""
        if not _exists(self.fs, RESOLV_CONF):
            return ManagedState.NO_PRIMARY
        if self.owned_by_us():
            return ManagedState.PRIMARY_OWNED
        return ManagedState.PRIMARY_FOREIGN

    def has_backup(self) -> bool:
        return _exists(self.fs, BACKUP_CONF)

    def service_active(self) -> bool:
        """Ask the injected probe whether systemd-resolved is running."""
        return self._service_active()

    # --- Backup / restore ---

    def _remove_quietly(self, name: str) -> None:
        try:
            self.fs.remove(name)
        except FileNotFoundError:
            pass
        except OSError as e:
            self.log.debug(f"Could not remove {name}: {e}")

    def _backup_config(self) -> None:
        """Move a foreign resolv.conf aside before we overwrite it."""
        state = self.state()

        if state == ManagedState.NO_PRIMARY:
            # Nothing to back up. Drop any old backup so it is never restored.
            self._remove_quietly(BACKUP_CONF)
            return
        if state == ManagedState.PRIMARY_OWNED:
            return

        try:
            owner = resolv_owner(self.fs.read_file(RESOLV_CONF))
        except OSError:
            owner = ""
        self.log.info(f"Taking over {RESOLV_CONF} (owner: {owner or 'unknown'}), backing up to {BACKUP_CONF}")
        self._rename(RESOLV_CONF, BACKUP_CONF)

    def _restore_backup(self) -> bool:
        """
        Put the pre-takeover resolv.conf back.

        Returns:
            True if the backup was moved into place
        """
        if not self.has_backup():
            return False

        owned = self.owned_by_us()
        resolv_conf_exists = _exists(self.fs, RESOLV_CONF)

        if resolv_conf_exists and not owned:
            # Someone else has installed a config since; our backup is stale.
            self.log.info(f"{RESOLV_CONF} is no longer ours, discarding {BACKUP_CONF}")
            self._remove_quietly(BACKUP_CONF)
            return False

        self._rename(BACKUP_CONF, RESOLV_CONF)
        self.log.info(f"Restored {RESOLV_CONF} from {BACKUP_CONF}")
        return True

    # --- Writing ---

    def _rename(self, old: str, new: str) -> None:
        """
        Rename old to new, falling back to copy+delete once rename fails.

        When old cannot be deleted (a bind-mounted resolv.conf) it is
        truncated instead, so it never holds a duplicate of new.

        Raises:
            RenameError: If the emulated rename cannot complete
        """
        if not self.rename_broken:
            try:
                self.fs.rename(old, new)
                return
            except OSError as e:
                self.log.warning(f"rename of {old!r} to {new!r} failed ({e}), falling back to copy+delete")
                self.rename_broken = True

        try:
            data = self.fs.read_file(old)
        except OSError as e:
            raise RenameError(f"reading {old!r} to rename: {e}", old, new) from e
        try:
            self.fs.write_file(new, data, RESOLV_CONF_PERM)
        except OSError as e:
            raise RenameError(f"writing to {new!r} in rename of {old!r}: {e}", old, new) from e

        try:
            self.fs.remove(old)
        except OSError as e:
            try:
                self.fs.truncate(old)
            except OSError as e2:
                raise RenameError(f"remove of {old!r} failed ({e}) and so did truncate: {e2}", old, new) from e2

    def _atomic_write_file(self, filename: str, data: bytes, perm: int = RESOLV_CONF_PERM) -> None:
        """Write data to a temporary sibling and rename it over filename."""
        tmp_name = f"{filename}.{secrets.token_hex(12)}.tmp"
        try:
            self.fs.write_file(tmp_name, data, perm)
            self._rename(tmp_name, filename)
        finally:
            self._remove_quietly(tmp_name)

    def _restart_resolved_if_needed(self) -> None:
        # We may have taken over a config managed by systemd-resolved. A
        # restart makes it notice and start using ours. Skip it for desktop
        # users, where it triggers a PolicyKit prompt.
        try:
            if self._service_active() and not self._gui_desktop_user():
                self.log.debug("Restarting systemd-resolved")
                self._service_restart()
        except Exception as e:
            self.log.debug(f"systemd-resolved restart failed: {e}")

    # --- Public API ---

    def set_dns(self, config: OSConfig) -> bool:
        """
        Install config as the host resolver configuration.

        A zero config restores the backed-up host configuration.

        Returns:
            True if the host configuration changed; for a zero config, True
            only if the backup was actually moved back into place

        Raises:
            OSError: On file system failures
        """
        if config.is_zero():
            changed = self._restore_backup()
        else:
            self._backup_config()
            content = write_resolv_conf(config.nameservers, config.search_domains)
            self._atomic_write_file(RESOLV_CONF, content.encode())
            self.log.info(
                f"Wrote {RESOLV_CONF}: nameservers={[str(ns) for ns in config.nameservers]} "
                f"search={config.search_domains}"
            )
            changed = True

        # Only touch resolved when something changed: with an empty config
        # and a hand-written resolv.conf pointing at resolved, a restart on
        # every reset would just cause outages.
        if changed:
            self._restart_resolved_if_needed()
        return changed

    def supports_split_dns(self) -> bool:
        return False

    def get_base_config(self) -> OSConfig:
        """
        Return the host DNS configuration from before we took over.

        Returns:
            Parsed backup if we own resolv.conf, else parsed resolv.conf;
            a zero config if the file to read does not exist

        Raises:
            OSError: If the file cannot be read
            ResolvConfFormatError: If it cannot be parsed
        """
        file_to_read = BACKUP_CONF if self.owned_by_us() else RESOLV_CONF
        try:
            data = self.fs.read_file(file_to_read)
        except FileNotFoundError:
            return OSConfig()
        return read_resolv(data)

    def close(self) -> None:
        """Restore the host configuration on shutdown. Safe to call repeatedly."""
        # We used to keep our config in a separate file and symlink
        # resolv.conf to it, which broke snaps and other sandboxes.
        self._remove_quietly(LEGACY_CONF)

        if self._restore_backup():
            self._restart_resolved_if_needed()
