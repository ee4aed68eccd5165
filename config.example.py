# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKTRACK_APP_NAME": "App display name (default: tasktrack).",
    "TASKTRACK_LOG_LEVEL": "Console logging level (default: WARNING).",
    "TASKTRACK_LOG_FILE": "Optional log file; receives DEBUG and above (default: unset).",
    # Storage
    "TASKTRACK_DATA_FILE": "JSON document holding all tasks (default: tasks.json).",
    # Plugins
    "TASKTRACK_PLUGINS_DIR": "Directory of user plugin *.py files (default: unset, none loaded).",
    "TASKTRACK_BUILTIN_PLUGINS": "Load the shipped stats/export plugins (true/false, default: true).",
}
