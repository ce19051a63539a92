# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "INCIDENT_SYNC_APP_NAME": "App display name (default: incident-sync).",
    "INCIDENT_SYNC_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "INCIDENT_SYNC_DATA_DIR": "Local data directory holding incident_sync.log (default: .local/incident_sync).",
    # Remote service
    "INCIDENT_SYNC_BASE_URL": "Base URL of the incident service, e.g. https://reports.example.org.",
    "INCIDENT_SYNC_USER_AGENT": "User-Agent header sent with every request (default: <app name>/1.0).",
    # HTTP
    "INCIDENT_SYNC_HTTP_TIMEOUT_SECONDS": "Per-request timeout (default: 30).",
    "INCIDENT_SYNC_HTTP_CONNECT_TIMEOUT_SECONDS": "Connect timeout, capped by the request timeout (default: 5).",
}
