import os
import numpy as np

# ------- Tunables -------
DEFAULT_DTYPE = os.getenv("MM_DTYPE", "int32").lower()        # int32/int64
MAX_DIM       = int(os.getenv("MAX_DIM", "16"))               # testing ceiling for CLI/HTTP
A_FILE        = os.getenv("A_FILE", "a.txt")
B_FILE        = os.getenv("B_FILE", "b.txt")
LOG_LEVEL     = os.getenv("LOG_LEVEL", "WARNING").upper()
RANDOM_HIGH_A = int(os.getenv("RANDOM_HIGH_A", "100"))        # A in [0, 100)
RANDOM_HIGH_B = int(os.getenv("RANDOM_HIGH_B", "101"))        # B in [0, 101)

DTYPES = ("int32", "int64")


def dtype_of(s: str = None):
    s = (s or DEFAULT_DTYPE).lower()
    if s not in DTYPES:
        raise ValueError(f"Unsupported dtype {s!r}, expected one of {DTYPES}")
    return np.int64 if s == "int64" else np.int32
