"""Wappu Lingo: crowdsourced translation workbench for WordPress strings."""

__version__ = "0.1.0"
