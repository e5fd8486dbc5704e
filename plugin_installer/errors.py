"""Exceptions and error formatting utilities.

This module holds the exception hierarchy raised by the installer engine and
the helpers used to turn errors into consistent user-facing messages.

Error Style Guide:
- User-facing errors use 'Error: ' prefix
- Use present tense: 'must be', 'is required'
- Avoid emojis in error messages (keep in progress displays only)
- Include actionable hints where helpful
"""


class PluginInstallerError(Exception):
    """Base class for errors raised by the installer engine."""


class CyclicDependencyError(PluginInstallerError):
    """Raised when a dependency edge would close a cycle.

    Attributes:
        culprit: The component that appears twice in the chain
        chain: Component IDs from the cycle's origin to the repeated node
    """

    def __init__(self, culprit: str, chain: list[str]):
        self.culprit = culprit
        self.chain = list(chain)
        super().__init__(
            f"cyclic relationship detected with culprit {culprit}, "
            f"in chain {format_chain(self.chain)}."
        )


def format_chain(chain: list[str]) -> str:
    """Format a dependency chain for display.

    Examples:
        >>> format_chain(["ling.a", "ling.b", "ling.a"])
        'ling.a -> ling.b -> ling.a'
    """
    return " -> ".join(chain)


def format_error(message: str) -> str:
    """Format an error message with consistent prefix.

    Args:
        message: The error message to format

    Returns:
        Formatted error message with 'Error: ' prefix

    Examples:
        >>> format_error("config file not found")
        'Error: config file not found'
    """
    return f"Error: {message}"


def format_suggestion(message: str, suggestion: str) -> str:
    """Format an error message with a helpful suggestion.

    Args:
        message: The error message
        suggestion: Helpful suggestion or hint for the user

    Returns:
        Formatted error with suggestion

    Examples:
        >>> format_suggestion("component 'ling.foo' not found", "run 'plugin-installer status'")
        "Error: component 'ling.foo' not found. Hint: run 'plugin-installer status'"
    """
    return f"{format_error(message)}. Hint: {suggestion}"


__all__ = [
    "PluginInstallerError",
    "CyclicDependencyError",
    "format_chain",
    "format_error",
    "format_suggestion",
]
