# src/doseengine/config.py
"""
Engine configuration.
All settings via environment variables with sensible defaults.
"""

import os

# --- Substance data service ---
API_URL = os.getenv("DOSEENGINE_API_URL", "https://api.psychonautwiki.org/")
HTTP_TIMEOUT_SEC: float = float(os.getenv("DOSEENGINE_HTTP_TIMEOUT", "10"))

# --- Logging ---
LOG_LEVEL = os.getenv("DOSEENGINE_LOG_LEVEL", "INFO").upper()
LOG_JSON: bool = os.getenv("DOSEENGINE_LOG_JSON", "false").lower() == "true"

# --- Curve sampling ---
SAMPLE_DT_H: float = float(os.getenv("DOSEENGINE_SAMPLE_DT_H", "0.05"))  # hours between samples
