"""Consent Mode decoding from GTM / GA request parameters.

Two independent reads of the request log:

* ``gcd`` carries the per-category default consent as fixed-width
  two-character chunks after a two-character version marker, e.g.
  ``13p3p3p2p5l1``.  Only the first descriptor in observation order is
  decoded.
* ``gcs`` reveals whether Consent Mode is active at all, and which
  version.
"""

from __future__ import annotations

from collections.abc import Iterable

from tagaudit.consent import constants
from tagaudit.models import consent
from tagaudit.utils import logger
from tagaudit.utils import url as url_utils

log = logger.create_logger("Consent-Decode")


def decode_descriptor(token: str) -> consent.ConsentState:
    """Decode one ``gcd`` token into a ``ConsentState``.

    Chunks map ``p3`` to granted, ``p2`` to denied, ``l1`` to not_set
    and anything else to unknown.  A token too short to cover every
    category leaves the remaining categories ``unknown``.

    Args:
        token: The raw ``gcd`` parameter value.

    Returns:
        The decoded state, with ``descriptor`` set to *token*.
    """
    body = token[constants.GCD_VERSION_PREFIX_LENGTH:]
    states: dict[str, consent.ConsentValue] = {}
    for index, category in enumerate(constants.CONSENT_CATEGORIES):
        start = index * constants.GCD_CHUNK_LENGTH
        chunk = body[start:start + constants.GCD_CHUNK_LENGTH]
        if len(chunk) < constants.GCD_CHUNK_LENGTH:
            log.warn("Consent descriptor too short to decode fully", {
                "descriptor": token,
                "decoded": len(states),
                "expected": len(constants.CONSENT_CATEGORIES),
            })
            break
        states[category] = constants.GCD_CHUNK_STATES.get(chunk, "unknown")
    return consent.ConsentState(descriptor=token, **states)


def decode_consent_state(urls: Iterable[str]) -> consent.ConsentState:
    """Decode the first ``gcd`` descriptor found in *urls*.

    Later descriptors (for example after a consent update) are ignored.

    Returns:
        The decoded state, or an all-``unknown`` state when no URL
        carries a descriptor.
    """
    for request_url in urls:
        token = url_utils.query_param(request_url, "gcd")
        if token:
            log.debug("Decoding consent descriptor", {"gcd": token})
            return decode_descriptor(token)
    return consent.ConsentState()


def detect_consent_mode(urls: Iterable[str]) -> tuple[bool, consent.ConsentModeVersion]:
    """Determine whether Consent Mode is active and which version.

    Any ``gcs=G100`` / ``gcs=G110`` means v2; otherwise any ``gcs=``
    parameter means v1.

    Returns:
        ``(detected, version)``; ``(False, "unknown")`` when no request
        carries ``gcs``.
    """
    seen_gcs = False
    for request_url in urls:
        value = url_utils.query_param(request_url, "gcs")
        if value is None:
            continue
        if value in constants.GCS_V2_VALUES:
            return True, "v2"
        seen_gcs = True
    if seen_gcs:
        return True, "v1"
    return False, "unknown"
