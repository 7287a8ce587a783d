"""SpotDiff: line-oriented text comparison."""

__version__ = "1.0.0"
