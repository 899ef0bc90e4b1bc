"""Shared serialization helpers for camelCase conversion.

Verdict and consent models use ``snake_to_camel`` as their
alias generator so that exported JSON matches the field
names downstream result sinks expect.
"""

from __future__ import annotations


def snake_to_camel(name: str) -> str:
    """Convert a snake_case string to camelCase.

    Args:
        name: A snake_case identifier such as
            ``"gtm_loaded_initially"``.

    Returns:
        The camelCase equivalent, e.g. ``"gtmLoadedInitially"``.
    """
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)
