"""Data types, commands, init messages and code parameters of the Duet Software Framework protocol."""

__version__ = "3.0.0"