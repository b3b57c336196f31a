"""Medical Portal - receptionist and doctor records backend."""

__version__ = "1.0.0"
