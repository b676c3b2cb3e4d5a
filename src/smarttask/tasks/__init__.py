"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority, TaskStats, User, ...)
- classifier.py: keyword -> priority / category tags
- task_manager.py: lifecycle operations over one user's task list
- timer_engine.py: per-second time tracking for running tasks
- retention.py: rolling-window pruning at load time
- stats.py: daily / monthly summary counts
- task_store.py: SQLite key-value storage, per-user task blob, session store
"""
