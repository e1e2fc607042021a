"""Command line interface for editstream."""
