"""Find out how to financially support the authors of your Rust dependencies."""

__version__ = "0.2.0"

__all__ = ["__version__"]
