"""systemd-resolved detection and restart."""
import shutil
import subprocess

from loguru import logger

from dnsdirect.core.constants import RESOLVED_UNIT
from dnsdirect.utils.platform_utils import Platform, PlatformUtils


class ResolvedService:
    """Best-effort handle on the systemd-resolved unit."""

    def __init__(self, unit: str = RESOLVED_UNIT):
        self.unit = unit

    def is_active(self) -> bool:
        """
        Check whether systemd-resolved is running, even if it is not
        managing /etc/resolv.conf.

        Returns:
            True only if systemctl reports the unit active
        """
        if PlatformUtils.get_platform() != Platform.LINUX:
            return False

        # systemd-resolved is never installed without systemd.
        systemctl = shutil.which("systemctl")
        if not systemctl:
            return False

        try:
            # is-active exits with code 3 if the unit is not active.
            result = subprocess.run(
                [systemctl, "is-active", self.unit],
                capture_output=True,
                check=False,
            )
        except OSError as e:
            logger.debug(f"[ResolvedService] is-active failed: {e}")
            return False
        return result.returncode == 0

    def restart(self) -> None:
        """Ask systemd to restart the unit. Failures are logged and ignored."""
        try:
            subprocess.run(
                ["systemctl", "restart", self.unit],
                capture_output=True,
                check=False,
            )
            logger.debug(f"[ResolvedService] Restarted {self.unit}")
        except Exception as e:
            logger.debug(f"[ResolvedService] Restart of {self.unit} failed: {e}")
