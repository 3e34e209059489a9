# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKLY_APP_NAME": "App display name (default: Taskly).",
    "TASKLY_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "TASKLY_SHOW_LANDING": "Show the landing screen before the list (true/false, default: true).",
    # Storage (gitignored)
    "TASKLY_DATA_DIR": "Local data directory for the log file and JSON storage (default: .local/taskly).",
    "TASKLY_STORAGE_BACKEND": "json | sqlite | memory (default: json).",
    "TASKLY_STORAGE_KEY": "Fixed key the task list is stored under (default: taskly.tasks).",
    "TASKLY_SQLITE_PATH": "SQLite file for the sqlite backend (default: <data_dir>/storage.sqlite3).",
}
