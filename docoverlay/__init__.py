"""Document analysis inspection backend."""

__version__ = "0.1.0"
