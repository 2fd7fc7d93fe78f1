"""Command line interface for cfnpurge."""
