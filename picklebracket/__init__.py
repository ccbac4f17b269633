"""Pickle Bracket — doubles pickleball round-robin and playoff engine."""

__version__ = "0.1.0"
