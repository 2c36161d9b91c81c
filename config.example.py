# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Keep machine-specific values in .env (gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo).",
    "TODO_LOG_LEVEL": "Console logging level (default: WARNING; the log file always gets DEBUG).",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory for the database and todo.log (default: .local/todo).",
    "TODO_DB_PATH": "SQLite key/value database (default: <data_dir>/todo.sqlite3).",
    # View
    "TODO_TICK_SECONDS": "Countdown repaint period in seconds (default: 1.0).",
    "TODO_DEFAULT_THEME": "Theme used when none is stored yet: light or dark (default: light).",
    "TODO_ANIMATIONS": "Mark entering/leaving tasks for one redraw (true/false, default: true).",
    "TODO_QUIET_TICK_LOGS": "Keep countdown-tick logs off the console below WARNING (true/false, default: true).",
}
