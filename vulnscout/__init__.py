"""Dependency vulnerability scanning helpers: version comparison, lockfiles, SBOMs, grouping and config."""

__version__ = "1.3.2"