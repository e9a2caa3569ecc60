import os
from datetime import datetime

# ---------------- Configuration Constants ----------------

DEFAULT_CHUNK_SIZE = 400  # default chunk size, in DEFAULT_UNIT
DEFAULT_UNIT = "MB"
# Copy buffer in bytes; checked by the chunker when it is used
BUFFER_SIZE = os.getenv("CHUNKFILE_BUFFER_SIZE", 1024 * 1024)
LOG_DIR = os.getenv(
    "CHUNKFILE_LOG_DIR",
    os.path.join(os.path.expanduser("~"), ".chunkfile", "logs"),
)

_unwritable_log_dirs = set()

# ---------------- Shared Logging Function ----------------

def log(message, context="CHUNKFILE"):
    timestamp = datetime.now().strftime("[%Y-%m-%d %H:%M:%S]")
    formatted = f"[{context}] {timestamp} {message}"

    # An empty LOG_DIR turns file logging off
    if LOG_DIR and LOG_DIR not in _unwritable_log_dirs:
        log_file = os.path.join(LOG_DIR, f"{context.lower()}.log")
        try:
            os.makedirs(LOG_DIR, exist_ok=True)
            with open(log_file, "a") as f:
                f.write(formatted + "\n")
        except OSError as e:
            # stdout stays the primary channel; warn once per directory
            _unwritable_log_dirs.add(LOG_DIR)
            print(f"[{context}] {timestamp} Warning: log files disabled, cannot write to {LOG_DIR}: {e}")

    print(formatted)

# ---------------- Public API ----------------

__all__ = ["DEFAULT_CHUNK_SIZE", "DEFAULT_UNIT", "BUFFER_SIZE", "LOG_DIR", "log"]
