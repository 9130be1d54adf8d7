"""Error taxonomy for the shipper.

``ConfigError`` is fatal to the process. The others abort a single cycle
and are turned into a ``CycleOutcome`` by the pipeline.
"""

class ShipperError(Exception):
    pass

class ConfigError(ShipperError):
    def __init__(self, message: str | None = None):
        self.message = (
            f"Invalid configuration: {message}" if message else "Invalid configuration"
        )
        super().__init__(self.message)

class PatternError(ShipperError):
    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.message = f"Bad file pattern {pattern!r}: {reason}"
        super().__init__(self.message)

class PayloadError(ShipperError):
    def __init__(self, message: str | None = None):
        self.message = (
            f"Payload serialization failed: {message}"
            if message
            else "Payload serialization failed"
        )
        super().__init__(self.message)

class RequestBuildError(ShipperError):
    def __init__(self, message: str | None = None):
        self.message = (
            f"Error creating request: {message}" if message else "Error creating request"
        )
        super().__init__(self.message)
