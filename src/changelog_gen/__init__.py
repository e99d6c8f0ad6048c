"""changelog-gen - incremental changelog synthesis from git history."""

__version__ = "1.0.0"
