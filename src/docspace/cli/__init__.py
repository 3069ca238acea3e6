"""Command-line entry point (`docspace`)."""
