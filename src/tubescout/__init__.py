"""TubeScout: YouTube lookup and link-generation toolkit."""

__version__ = "0.1.0"
