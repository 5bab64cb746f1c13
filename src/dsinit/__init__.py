"""dsinit - tiered data-science project scaffolding."""

__version__ = "0.3.0"
