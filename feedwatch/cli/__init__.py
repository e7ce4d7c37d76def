"""Command line interface for feedwatch."""
