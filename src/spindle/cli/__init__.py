"""Command line host for dialogue scripts."""
