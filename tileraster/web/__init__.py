"""Web interface for tileraster."""
