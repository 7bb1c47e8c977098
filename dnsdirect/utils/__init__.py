"""Platform and file system helpers for dnsdirect."""
