"""
config.py — App Configuration
=============================
Loaded with `app.config.from_object(...)`, then overridden from the
environment with `app.config.from_prefixed_env("TRACEVIZ")`, e.g.

    TRACEVIZ_LOG_LEVEL=DEBUG TRACEVIZ_MAX_NODES=12 flask --app main run
"""

import secrets


class Config:
    SECRET_KEY      = secrets.token_hex(32)
    LOG_LEVEL       = "INFO"
    DEFAULT_SPEED   = "medium"   # key into engine.SPEED_PRESETS
    MAX_NODES       = 26         # one per letter label; Warshall traces grow as V³
    DEMO_NODE_COUNT = 5
    DEMO_SEED       = None


class TestConfig(Config):
    TESTING   = True
    LOG_LEVEL = "DEBUG"
    DEMO_SEED = 7
