"""Network configuration constants for the exam application."""

DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 8000
REQUEST_TIMEOUT_SECONDS: float = 10.0
SERVER_STARTUP_TIMEOUT_SECONDS: float = 5.0
