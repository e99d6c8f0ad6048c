"""Command line interface for changelog-gen."""
