# config.py
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# ---------- Game ----------
STARTING_CAPITAL = float(os.getenv("STARTING_CAPITAL", "10000"))
VOTING_WINDOW_SECONDS = int(os.getenv("VOTING_WINDOW_SECONDS", "60"))
TIP_COST = float(os.getenv("TIP_COST", "500"))

# When set, hostJoin must present this token.
HOST_TOKEN: Optional[str] = os.getenv("HOST_TOKEN") or None

# ---------- Server ----------
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
