"""
Settings read from the environment (or a local .env, not committed).

DATABASE_URL         SQLAlchemy URL; defaults to a SQLite file next to the app
APP_ENV              "local" creates tables on startup, "test" skips it
BUSDLE_LOG_LEVEL     logging level name, default INFO
BUSDLE_CORS_ORIGINS  comma-separated origins, default "*"
"""

import os

from dotenv import load_dotenv

# dev convenience; in prod the platform injects env vars
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+pysqlite:///./busdle.db")
APP_ENV = os.getenv("APP_ENV", "local")
LOG_LEVEL = os.getenv("BUSDLE_LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("BUSDLE_CORS_ORIGINS", "*").split(",") if o.strip()]

# Key under which a player's game is saved; one record per player, fully overwritten
GAME_STATE_KEY = "busdle_game_state"

# Template key the game always plays
CURRENT_TEMPLATE_KEY = "current"
