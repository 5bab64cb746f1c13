"""CLI commands for dsinit."""
