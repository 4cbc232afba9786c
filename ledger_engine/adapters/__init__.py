"""Command line adapters."""
