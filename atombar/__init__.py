"""Networked atom warehouse, molecule supplier and drinks bar, with TCP and UDP clients."""

__version__ = "0.1.0"