"""Command-line client for placement zones and tags on an Admiral control plane."""

__version__ = "0.1.0"
