"""
Error handling utilities for consistent error message extraction.
"""


def get_error_message(error: BaseException | str | object) -> str:
    """
    Safely extract an error message from a collaborator failure.

    Strings pass through unchanged; exceptions without a message
    fall back to their class name.
    """
    if isinstance(error, str):
        return error or "Unknown error"
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    return "Unknown error"
