import os

DEFAULT_PREVIEW_LINES = 100


def get_preview_lines() -> int:
    """Number of lines ``getFields`` samples, from ``TFI_PREVIEW_LINES``."""
    raw = os.getenv("TFI_PREVIEW_LINES", str(DEFAULT_PREVIEW_LINES))
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_PREVIEW_LINES
    return value if value > 0 else DEFAULT_PREVIEW_LINES


def get_api_host() -> str:
    return os.getenv("TFI_HOST", "127.0.0.1")


def get_api_port() -> int:
    return int(os.getenv("TFI_PORT", "8000"))
