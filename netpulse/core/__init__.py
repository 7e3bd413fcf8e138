"""Core functionality for netpulse."""
