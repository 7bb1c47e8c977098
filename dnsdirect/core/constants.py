import os

from dotenv import find_dotenv, load_dotenv

# Load .env from the working directory, if any
load_dotenv(find_dotenv(usecwd=True))

# Host resolver files
RESOLV_CONF = "/etc/resolv.conf"
BACKUP_CONF = "/etc/resolv.pre-tailscale-backup.conf"
# Older releases kept the generated config here and symlinked to it.
LEGACY_CONF = "/etc/resolv.tailscale.conf"

# Marker embedded in every file we generate
MARKER = "generated by tailscale"
HEADER = (
    f"# resolv.conf(5) file {MARKER}\n"
    "# DO NOT EDIT THIS FILE BY HAND -- CHANGES WILL BE OVERWRITTEN\n\n"
)

RESOLV_CONF_PERM = 0o644

# systemd-resolved
RESOLVED_UNIT = "systemd-resolved.service"

# Sandbox root for CLI runs (empty means the real filesystem)
FS_ROOT = os.getenv("DNSDIRECT_ROOT", "")

LOG_LEVEL = os.getenv("DNSDIRECT_LOG_LEVEL", "INFO")
TMPDIR = os.path.join(os.environ.get("TMPDIR", "/tmp"), "dnsdirect")
LOG_FILE = os.path.join(TMPDIR, "dnsdirect.log")
