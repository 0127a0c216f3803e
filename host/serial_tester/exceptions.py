class SerialTesterError(Exception):
    """Base class for all serial tester errors."""


class ConfigError(SerialTesterError, ValueError):
    """Raised for malformed or out-of-range configuration values."""


class PortError(SerialTesterError):
    """Raised when the serial device fails to open, flush, write or read."""
