"""Tests for the JSON envelope codec."""

import json

import pytest

from isb_client.core.exceptions import JSONDecodingError
from isb_client.envelope import decode_data, encode_body, try_decode_error, try_decode_fail
from isb_client.models import GlobalConfiguration, Lease

from tests.conftest import error, fail, lease_payload, success


class TestDecodeData:
    def test_unwraps_data(self):
        body = json.dumps(success(lease_payload())).encode()
        lease = decode_data(body, Lease)
        assert lease.uuid == "lease123"
        assert lease.user_email == "user@example.com"
        assert lease.max_spend == 50.0

    def test_partial_payload_uses_zero_values(self):
        config = decode_data(b'{"status":"success","data":{"maintenanceMode":true}}', GlobalConfiguration)
        assert config.maintenance_mode is True
        assert config.terms_of_service == ""
        assert config.leases.max_leases_per_user == 0

    def test_empty_body(self):
        with pytest.raises(JSONDecodingError):
            decode_data(b"", Lease)

    def test_malformed_json(self):
        with pytest.raises(JSONDecodingError) as exc_info:
            decode_data(b"{nope", Lease)
        assert str(exc_info.value).startswith("json decoding error:")

    def test_missing_data(self):
        with pytest.raises(JSONDecodingError):
            decode_data(b'{"status":"success"}', Lease)

    def test_wrong_field_type(self):
        body = json.dumps(success(lease_payload(maxSpend="lots"))).encode()
        with pytest.raises(JSONDecodingError):
            decode_data(body, Lease)


class TestTryDecode:
    def test_fail_envelope(self):
        envelope = try_decode_fail(json.dumps(fail("a", "b")).encode())
        assert envelope is not None
        assert [e.message for e in envelope.errors] == ["a", "b"]

    def test_fail_requires_fail_status(self):
        assert try_decode_fail(json.dumps(error()).encode()) is None
        assert try_decode_fail(json.dumps(success({})).encode()) is None

    def test_error_envelope(self):
        envelope = try_decode_error(json.dumps(error("boom", 503, {"k": "v"})).encode())
        assert envelope is not None
        assert envelope.message == "boom"
        assert envelope.code == 503
        assert envelope.data == {"k": "v"}

    def test_error_requires_error_status(self):
        assert try_decode_error(json.dumps(fail("x")).encode()) is None

    @pytest.mark.parametrize("body", [b"", b"not json", b"[]"])
    def test_unusable_bodies(self, body):
        assert try_decode_fail(body) is None
        assert try_decode_error(body) is None


class TestEncodeBody:
    def test_compact(self):
        assert encode_body({"action": "Approve"}) == b'{"action":"Approve"}'

    def test_none(self):
        assert encode_body(None) is None
