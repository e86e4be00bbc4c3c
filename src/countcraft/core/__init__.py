"""
Core modules for CountCraft.

- analysis: text counting primitives and front-matter extraction
- counters: counter catalog, configs and projections
- config: counter validation and settings persistence
- pipeline: statistics engine orchestration
- adapters: host collaborator contracts and reference implementations
- utils: configuration, logging and notifications
"""
