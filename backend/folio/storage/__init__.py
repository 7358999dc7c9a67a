"""Filesystem substrate: codec, atomic slot writes, record cache and per-kind repositories."""
