"""Dodgeball exception hierarchy.

Centralised base classes so callers can catch engine failures narrowly.
Nothing inside a simulation tick raises; these guard the public API and
match configuration.
"""


class DodgeballError(Exception):
    """Root of all dodgeball domain exceptions."""


class ConfigurationError(DodgeballError):
    """Invalid match configuration, rejected before a match starts."""


class SimulationError(DodgeballError):
    """Misuse of the simulation engine (e.g. stepping before reset)."""
