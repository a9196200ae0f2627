"""Agora: a small social networking backend."""

__version__ = "0.1.0"
