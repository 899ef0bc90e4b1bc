"""Tests for tagaudit.consent.decoder — gcd decoding and gcs detection."""

from __future__ import annotations

import pytest

from tagaudit.consent import constants, decoder
from tagaudit.models import consent

# Inverse of the decoder's chunk mapping; "p5" decodes to unknown.
_ENCODE = {"granted": "p3", "denied": "p2", "not_set": "l1", "unknown": "p5"}


def _encode(state: consent.ConsentState, version: str = "13") -> str:
    values = state.as_dict()
    return version + "".join(_ENCODE[values[c]] for c in constants.CONSENT_CATEGORIES)


class TestDecodeDescriptor:
    """Tests for decode_descriptor()."""

    def test_documented_example(self) -> None:
        state = decoder.decode_descriptor("13p3p3p2p5l1")
        assert state.as_dict() == {
            "ad_storage": "granted",
            "analytics_storage": "granted",
            "functionality_storage": "denied",
            "personalization_storage": "unknown",
            "security_storage": "not_set",
        }
        assert state.descriptor == "13p3p3p2p5l1"

    @pytest.mark.parametrize(
        "state",
        [
            consent.ConsentState(),
            consent.ConsentState(ad_storage="granted", analytics_storage="denied"),
            consent.ConsentState(
                ad_storage="denied",
                analytics_storage="denied",
                functionality_storage="granted",
                personalization_storage="not_set",
                security_storage="granted",
            ),
        ],
    )
    def test_encoded_state_decodes_back(self, state: consent.ConsentState) -> None:
        assert decoder.decode_descriptor(_encode(state)).as_dict() == state.as_dict()

    def test_short_token_leaves_trailing_unknown(self) -> None:
        state = decoder.decode_descriptor("13p3p2")
        assert state.ad_storage == "granted"
        assert state.analytics_storage == "denied"
        assert state.functionality_storage == "unknown"
        assert state.security_storage == "unknown"

    def test_odd_length_ignores_partial_chunk(self) -> None:
        state = decoder.decode_descriptor("13p3p")
        assert state.ad_storage == "granted"
        assert state.analytics_storage == "unknown"

    def test_version_only_token(self) -> None:
        state = decoder.decode_descriptor("13")
        assert set(state.as_dict().values()) == {"unknown"}
        assert state.found

    def test_extra_chunks_ignored(self) -> None:
        state = decoder.decode_descriptor("13p3p3p3p3p3p2p2")
        assert set(state.as_dict().values()) == {"granted"}


class TestDecodeConsentState:
    """Tests for decode_consent_state()."""

    def test_no_descriptor(self) -> None:
        state = decoder.decode_consent_state(["https://example.com/", "https://www.google-analytics.com/g/collect"])
        assert state == consent.ConsentState()
        assert not state.found

    def test_first_descriptor_wins(self) -> None:
        urls = [
            "https://www.google-analytics.com/g/collect?v=2&gcd=13p2p2p2p2p2",
            "https://www.google-analytics.com/g/collect?v=2&gcd=13p3p3p3p3p3",
        ]
        state = decoder.decode_consent_state(urls)
        assert state.descriptor == "13p2p2p2p2p2"
        assert state.ad_storage == "denied"

    def test_descriptor_with_following_params(self) -> None:
        url = "https://example.com/collect?en=page_view&gcd=13p3p3p2p5l1&npa=0"
        assert decoder.decode_consent_state([url]).descriptor == "13p3p3p2p5l1"

    def test_empty_descriptor_skipped(self) -> None:
        urls = ["https://example.com/collect?gcd=&x=1", "https://example.com/collect?gcd=13l1"]
        state = decoder.decode_consent_state(urls)
        assert state.ad_storage == "not_set"

    def test_param_name_must_match_exactly(self) -> None:
        assert not decoder.decode_consent_state(["https://example.com/?xgcd=13p3p3"]).found


class TestDetectConsentMode:
    """Tests for detect_consent_mode()."""

    @pytest.mark.parametrize("gcs", ["G100", "G110"])
    def test_v2(self, gcs: str) -> None:
        assert decoder.detect_consent_mode([f"https://www.google-analytics.com/g/collect?gcs={gcs}"]) == (True, "v2")

    def test_v1(self) -> None:
        assert decoder.detect_consent_mode(["https://www.google-analytics.com/g/collect?gcs=G111"]) == (True, "v1")

    def test_v2_anywhere_beats_earlier_v1(self) -> None:
        urls = [
            "https://www.google-analytics.com/g/collect?gcs=G111",
            "https://www.google-analytics.com/g/collect?gcs=G100",
        ]
        assert decoder.detect_consent_mode(urls) == (True, "v2")

    def test_not_detected(self) -> None:
        assert decoder.detect_consent_mode(["https://example.com/"]) == (False, "unknown")

    def test_empty(self) -> None:
        assert decoder.detect_consent_mode([]) == (False, "unknown")
