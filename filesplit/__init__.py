import os
from datetime import datetime

# ---------------- Configuration Constants ----------------

DEFAULT_TIMEOUT = 5  # default HTTP timeout in seconds
DEFAULT_SIZE_MB = 20  # default size of a part in megabytes
MEGABYTE = 1024 * 1024
LOG_DIR = os.getenv("FILESPLIT_LOG_DIR")

# ---------------- Shared Logging Function ----------------

def log(message, context="SPLIT"):
    timestamp = datetime.now().strftime("[%Y-%m-%d %H:%M:%S]")
    formatted = f"[{context}] {timestamp} {message}"

    if LOG_DIR:
        os.makedirs(LOG_DIR, exist_ok=True)
        log_file = os.path.join(LOG_DIR, f"{context.lower()}.log")
        with open(log_file, "a") as f:
            f.write(formatted + "\n")

    print(formatted)

# ---------------- Public API ----------------

__all__ = ["DEFAULT_TIMEOUT", "DEFAULT_SIZE_MB", "MEGABYTE", "LOG_DIR", "log"]
