"""Model Scout - search, rank and compare AI models from a provider catalog."""

__version__ = "0.1.0"
