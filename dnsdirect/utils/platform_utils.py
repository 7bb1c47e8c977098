"""Platform detection utilities."""
import os
import platform
from enum import Enum


class Platform(Enum):
    """Operating system platforms."""
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"


class PlatformUtils:
    """Utility class for platform detection."""

    @staticmethod
    def get_platform() -> Platform:
        """
        Detect the current operating system.

        Returns:
            Platform enum value: Platform.WINDOWS, Platform.MACOS, or Platform.LINUX
        """
        system = platform.system()
        if system == "Windows" or os.name == "nt":
            return Platform.WINDOWS
        elif system == "Darwin":
            return Platform.MACOS
        else:
            return Platform.LINUX

    @staticmethod
    def is_root() -> bool:
        """
        Check if the current process runs with UID 0.

        Returns:
            False on platforms without POSIX user IDs
        """
        geteuid = getattr(os, "geteuid", None)
        if geteuid is None:
            return False
        return geteuid() == 0

    @staticmethod
    def running_as_gui_desktop_user() -> bool:
        """
        Check if this looks like a regular user inside a graphical session.

        Restarting system services from such a process makes PolicyKit pop up
        an authentication dialog, so callers use this to skip the restart.

        Returns:
            True if the real UID is non-zero and DISPLAY is set
        """
        getuid = getattr(os, "getuid", None)
        if getuid is None:
            return False
        return getuid() != 0 and os.environ.get("DISPLAY", "") != ""
