"""
Configuration constants for the allocation tables app.
Paths and server settings can be overridden through environment variables.
"""
import os

from utils import get_env_bool

# ============================================================
# DATA FILES
# ============================================================
POSITIONS_FILE = os.getenv("POSITIONS_FILE", "data/positions.csv")
TARGETS_FILE = os.getenv("TARGETS_FILE", "data/targets.yaml")

# ============================================================
# DISPLAY
# ============================================================
CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "$")
PAGE_TITLE = "Positions by Target"

# Bucket for positions no target lists
UNALLOCATED_KEY = "unallocated"
UNALLOCATED_NAME = "Unallocated Positions"

# ============================================================
# SERVER
# ============================================================
PORT = int(os.getenv("PORT", 5000))
FLASK_DEBUG = get_env_bool("FLASK_DEBUG", default=False)

# ============================================================
# LOGGING
# ============================================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
