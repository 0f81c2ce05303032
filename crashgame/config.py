from dotenv import load_dotenv

import os

load_dotenv()

# Round timing
BASE_TICK_INTERVAL_MS = float(os.getenv("BASE_TICK_INTERVAL_MS", 100))
MIN_TICK_INTERVAL_MS = float(os.getenv("MIN_TICK_INTERVAL_MS", 10))
TICK_STEP = float(os.getenv("TICK_STEP", 0.1))
DEFAULT_SPEED = float(os.getenv("DEFAULT_SPEED", 1))

# Round inputs
MIN_SPEED = 1.0
MAX_SPEED = 5.0
MIN_CASH_OUT_TARGET = 0.0
MAX_CASH_OUT_TARGET = 10.0
MIN_WAGER = 0.0

# Crash point range
MIN_CRASH_POINT = 1.0
MAX_CRASH_POINT = 10.0

# Participants
SYNTHETIC_PARTICIPANTS = int(os.getenv("SYNTHETIC_PARTICIPANTS", 4))
STARTING_POINTS = float(os.getenv("STARTING_POINTS", 1000))

# Fan-out
BROADCAST_URL = os.getenv("BROADCAST_URL", "memory://")
BROADCAST_CHANNEL = os.getenv("BROADCAST_CHANNEL", "crash_round")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 4000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
