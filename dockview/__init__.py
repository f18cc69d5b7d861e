"""dockview - a terminal dashboard for Docker containers."""

__version__ = "0.1.0"
