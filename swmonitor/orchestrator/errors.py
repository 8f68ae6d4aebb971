ERR_REGISTRATION = "REGISTRATION_FAILED"
ERR_UNSUPPORTED = "UNSUPPORTED_ENVIRONMENT"
ERR_HALTED = "TRACKER_HALTED"
ERR_SOURCE = "PAGE_SIGNALS_DISABLED"
ERR_UNKNOWN = "UNKNOWN"


class RegistrationError(Exception):
    """Raised by a worker adapter when registering the worker script fails."""
