"""Command line utilities for the fishing log service."""
