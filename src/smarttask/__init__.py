"""
SmartTask: personal task tracker.

Subpackages:
- tasks: classifier, task models, lifecycle manager, timer engine, retention, stats, storage
- core: ports, errors, application state, session controller
- cli: composition root, slash commands, rendering, entrypoint
- connectors: console front-end
"""
