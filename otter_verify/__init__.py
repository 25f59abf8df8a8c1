"""Upload verified-build metadata to the OtterSec verify registry."""

__version__ = "0.1.0"
