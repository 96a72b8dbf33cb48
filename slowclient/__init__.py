"""Client for the SLOW session-based transport protocol carried over UDP."""

__version__ = "0.1.0"
__all__ = ["cli", "logger", "package", "transaction", "udp_client"]