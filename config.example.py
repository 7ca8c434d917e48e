# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Keep local data out of git: the default data directory is .local/tasklist.

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKLIST_APP_NAME": "App display name (default: tasklist).",
    "TASKLIST_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "TASKLIST_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Paths (gitignored)
    "TASKLIST_DATA_DIR": "Local data + log directory (default: .local/tasklist).",
    # Persistence
    "TASKLIST_STORAGE_BACKEND": "Key-value backend: sqlite | json | memory (default: sqlite).",
    "TASKLIST_STORAGE_PATH": (
        "Backend file (default: <data_dir>/storage.sqlite3, or <data_dir>/storage.json for json)."
    ),
    "TASKLIST_STORAGE_KEY": "Slot name holding the task list (default: todos).",
}
