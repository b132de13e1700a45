# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TICKWORK_APP_NAME": "App display name (default: tickwork).",
    "TICKWORK_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "TICKWORK_DATA_DIR": "Local data directory, holds tickwork.log (default: .local/tickwork).",
    # Connectors
    "TICKWORK_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Heartbeat job
    "TICKWORK_HEARTBEAT_ENABLED": "Register the built-in heartbeat job (true/false, default: true).",
    "TICKWORK_HEARTBEAT_INTERVAL": (
        "Heartbeat interval: second/minute/hour/day/week or milliseconds (default: minute)."
    ),
    "TICKWORK_HEARTBEAT_MAX_EXECUTIONS": "Stop the heartbeat after N runs (default: 0 = never).",
}
