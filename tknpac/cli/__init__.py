"""Subcommands: describe and generate."""
