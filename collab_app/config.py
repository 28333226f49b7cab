import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# --- Server ---
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8090))
GUI_DIR = os.getenv("GUI_DIR", "gui")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Identities ---
ROOM_ID_LENGTH = int(os.getenv("ROOM_ID_LENGTH", 6))
PARTICIPANT_ID_LENGTH = int(os.getenv("PARTICIPANT_ID_LENGTH", 20))
ROOM_ID_ATTEMPTS = int(os.getenv("ROOM_ID_ATTEMPTS", 5))

# --- Room eviction (0 disables it) ---
ROOM_TTL_SECONDS = float(os.getenv("ROOM_TTL_SECONDS", 0))
ROOM_SWEEP_INTERVAL_SECONDS = float(os.getenv("ROOM_SWEEP_INTERVAL_SECONDS", 60))
