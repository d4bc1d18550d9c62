"""Command line interface for running the suite and its reports."""
