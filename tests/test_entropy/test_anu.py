"""Tests for the ANU QRNG provider."""

from __future__ import annotations

import httpx
import pytest

from qcoin.entropy.anu import AnuQrngSource
from qcoin.exceptions import ProtocolError, TransportError


def make_http(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def anu_handler(data: list[int], success: bool = True):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"type": "uint8", "length": len(data), "data": data, "success": success})

    return handler


class TestAnuQrngSource:
    """Tests for the single-request JSON protocol."""

    def test_name(self) -> None:
        assert AnuQrngSource(make_http(anu_handler([]))).name == "anu"

    def test_returns_data_as_bytes(self) -> None:
        data = list(range(256)) * 4
        source = AnuQrngSource(make_http(anu_handler(data)))
        assert source.get_random_bytes(1024) == bytes(data)

    def test_query_parameters(self) -> None:
        seen: list[httpx.URL] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url)
            return httpx.Response(200, json={"data": [0] * 1024, "success": True})

        AnuQrngSource(make_http(handler)).get_random_bytes(1024)
        url = seen[0]
        assert url.host == "qrng.anu.edu.au"
        assert url.path == "/API/jsonI.php"
        assert url.params["length"] == "1024"
        assert url.params["type"] == "uint8"

    @pytest.mark.parametrize("length", [0, 10, 1024, 2048])
    def test_success_false_is_protocol_error_regardless_of_length(self, length: int) -> None:
        source = AnuQrngSource(make_http(anu_handler([7] * length, success=False)))
        with pytest.raises(ProtocolError, match="success=false") as excinfo:
            source.get_random_bytes(1024)
        assert excinfo.value.cause == "success-false"

    def test_missing_success_flag_is_protocol_error(self) -> None:
        source = AnuQrngSource(make_http(lambda request: httpx.Response(200, json={"data": [0] * 4})))
        with pytest.raises(ProtocolError):
            source.get_random_bytes(4)

    @pytest.mark.parametrize("length", [0, 1, 1023, 1025, 4096])
    def test_wrong_length_is_protocol_error(self, length: int) -> None:
        source = AnuQrngSource(make_http(anu_handler([1] * length)))
        with pytest.raises(ProtocolError, match=f"expected 1024 bytes, got {length}") as excinfo:
            source.get_random_bytes(1024)
        assert excinfo.value.cause == "length-mismatch"

    def test_out_of_range_values_are_protocol_error(self) -> None:
        source = AnuQrngSource(make_http(anu_handler([0, 256])))
        with pytest.raises(ProtocolError, match="uint8"):
            source.get_random_bytes(2)

    def test_missing_data_array(self) -> None:
        source = AnuQrngSource(make_http(lambda request: httpx.Response(200, json={"success": True})))
        with pytest.raises(ProtocolError, match="no data array"):
            source.get_random_bytes(2)

    def test_malformed_json(self) -> None:
        source = AnuQrngSource(make_http(lambda request: httpx.Response(200, content=b"{nope")))
        with pytest.raises(ProtocolError) as excinfo:
            source.get_random_bytes(2)
        assert excinfo.value.cause == "decode-failed"

    def test_bad_status(self) -> None:
        source = AnuQrngSource(make_http(lambda request: httpx.Response(500)))
        with pytest.raises(ProtocolError, match="ANU QRNG returned status 500"):
            source.get_random_bytes(2)

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("slow", request=request)

        with pytest.raises(TransportError, match="timed out"):
            AnuQrngSource(make_http(handler)).get_random_bytes(2, timeout=1.5)
