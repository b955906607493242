# Custom exceptions for figma-blueprint

class BlueprintError(Exception):
    """Base exception for all application-specific errors."""
    pass


class ConfigError(BlueprintError):
    """Raised for configuration-related problems (missing API key, bad values)."""
    pass


class HostError(BlueprintError):
    """Raised when the scene host cannot answer a lookup."""

    def __init__(self, operation: str, target: str, message: str):
        self.operation = operation
        self.target = target
        self.message = message
        super().__init__(f"{operation} failed for {target}: {message}")


class HostLookupError(HostError):
    """Style, main-component or font lookup failed."""
    pass


class HostTimeoutError(HostError):
    """A host call did not answer within the configured timeout."""

    def __init__(self, operation: str, target: str, timeout: float):
        self.timeout = timeout
        super().__init__(operation, target, f"no answer after {timeout:g}s")


class ExportError(HostError):
    """Rasterized/SVG export of a node failed."""
    pass
