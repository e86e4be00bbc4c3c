"""Configuration, logging and notification utilities."""
