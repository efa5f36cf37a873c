from src.shared.utils.datetime import ensure_utc, utc_now
from src.shared.utils.text import fold_case

__all__ = [
    "utc_now",
    "ensure_utc",
    "fold_case",
]
