"""
CountCraft - Deterministic Document Statistics

Computes lexical statistics (word, character, line and heading counts) over
plain-text documents that may carry a leading metadata block (front matter),
and writes the configured results back into each document's properties.

Key Features:
- Front-matter-aware body extraction
- Word, character, line and heading counting (raw or rendered text)
- Configurable counters mapping counter types to named properties
- Single-document, cache-assisted and whole-collection batch calculation
- Read-only previews and debounced auto-recalculation

Package Structure:
- core/analysis: Pure text analysis and body extraction
- core/counters: Counter types, definitions and projections
- core/config: Counter validation and settings persistence
- core/pipeline: Statistics engine and auto-recalculation
- core/adapters: Host collaborators (document store, metadata index, renderer)
- cli/: Command-line interface
- utils/: Error handling helpers
"""

__version__ = "0.3.0"
