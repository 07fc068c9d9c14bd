"""Restaurant shift scheduling and workforce coverage."""

__version__ = "1.0.0"
