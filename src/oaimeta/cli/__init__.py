"""Command-line interface for oaimeta."""
