"""Command line data tools."""
