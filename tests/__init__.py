"""
Test package marker.

Keeps `tests` from being treated as a namespace package when another
`tests/` directory is importable.
"""
