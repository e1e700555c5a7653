"""Unknown Pleasures: stacked oscillograph traces, generated live."""

__version__ = "0.1.0"
