"""Command line interface for defi-trust-engine."""
