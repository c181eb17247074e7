"""Exceptions raised outside the simulation core."""


class TaxiRankError(Exception):
    """Base class for all taxirank errors."""


class ParseError(TaxiRankError):
    """The passenger feed could not be read."""


class ConfigError(TaxiRankError):
    """A scenario file holds an invalid value."""
