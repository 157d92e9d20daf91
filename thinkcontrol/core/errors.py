"""
Error types for ThinkControl

The loop has no fallible I/O, so the only error raised is for configuration
or arguments outside their domain.
"""


class InvalidArgument(ValueError):
    """Raised when an injected configuration value or label is out of domain"""
