"""Command line interface for CountCraft."""
