"""
Exceptions raised while polling gpsd.

Every failure is terminal for a single invocation; the command line front end
reports the message and exits with status 1.
"""


class GpssnmpError(Exception):
    """Base class for all gpssnmp failures."""


class MissingArgument(GpssnmpError):
    def __init__(self, message: str = "Missing option"):
        super().__init__(message)


class ConnectionFailure(GpssnmpError):
    """The session with gpsd could not be opened."""

    def __init__(self, host: str, port: int, reason: str):
        self.host = host
        self.port = port
        self.reason = reason
        super().__init__(f"connection failed: {host}:{port}: {reason}")


class TransportFailure(GpssnmpError):
    """The gpsd connection broke after it was established."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"read failed: {reason}")


class PollTimeout(GpssnmpError):
    """No satellite report arrived before the deadline."""

    def __init__(self, deadline: float):
        self.deadline = deadline
        super().__init__("timeout")


class UnknownIdentifier(GpssnmpError):
    """The requested OID is not one we serve."""

    def __init__(self, oid: str):
        self.oid = oid
        super().__init__(f"Unknown OID {oid}")


class InvalidArgument(GpssnmpError):
    """Bad command line option or source specification."""
