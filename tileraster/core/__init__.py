"""Core tile selection."""
