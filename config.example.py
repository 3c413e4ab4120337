# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "COOP_APP_NAME": "App display name, also the task group name (default: cooptasks).",
    "COOP_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "COOP_DATA_DIR": "Local data directory for logs (default: .local/cooptasks).",
    "COOP_LOG_FILE": "Log file name inside COOP_DATA_DIR (default: cooptasks.log).",
    # Host
    "COOP_CONSOLE_ENABLED": "Read stdin lines as events and run the console task (true/false).",
    "COOP_SIGNALS_ENABLED": "Turn SIGINT/SIGTERM into the termination event (true/false).",
    # Event tags
    "COOP_TERMINATE_TAG": "Reserved tag that terminates every running task group (default: terminate).",
    "COOP_TIMER_TAG": "Tag of timer events, payload is the timer id (default: timer).",
    "COOP_CONSOLE_TAG": "Tag of console line events, payload is the line (default: line).",
}
