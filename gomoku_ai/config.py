"""Environment-driven settings, read once at import."""

import os

from dotenv import load_dotenv

load_dotenv()

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:5174").split(",")
    if o.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Seconds between computer-turn ticks
TICK_INTERVAL = float(os.getenv("TICK_INTERVAL", "0.1"))

# Optional fixed seed for every match's RNG, for reproducible play
_seed = os.getenv("AI_SEED")
AI_SEED: int | None = int(_seed) if _seed else None
