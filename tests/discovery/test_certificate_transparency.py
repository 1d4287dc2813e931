"""
Unit tests for Certificate Transparency module.
"""
import pytest
from unittest.mock import patch

from subsift.discovery.certificate_transparency import CertificateTransparencyModule
from subsift.core.exceptions import APIError, NetworkError


class TestCertificateTransparencyModule:
    """Test Certificate Transparency module."""

    def test_init(self):
        """Test module initialization."""
        module = CertificateTransparencyModule("example.com", timeout=15)

        assert module.domain == "example.com"
        assert module.timeout == 15
        assert module.http_utils.timeout == 15
        assert module.crt_sh_url == "https://crt.sh/"
        assert module.name == "crt.sh"

    def test_default_timeout(self):
        module = CertificateTransparencyModule("example.com")
        assert module.timeout == 25

    @patch('subsift.utils.http_utils.HTTPUtils.make_request')
    def test_discover_success(self, mock_request, make_response):
        """Test successful subdomain discovery."""
        mock_request.return_value = make_response([
            {"name_value": "www.example.com\napi.example.com"},
            {"name_value": "*.dev.example.com\nsecure.example.com"},
            {"name_value": "www.example.com"},
            {"name_value": "test.other.com"},
            {"id": 1},
        ])

        module = CertificateTransparencyModule("example.com")
        result = module.discover()

        assert result == [
            "api.example.com",
            "dev.example.com",
            "secure.example.com",
            "www.example.com",
        ]
        mock_request.assert_called_once_with(
            url="https://crt.sh/",
            method="GET",
            params={"q": "%.example.com", "output": "json"}
        )

    @patch('subsift.utils.http_utils.HTTPUtils.make_request')
    def test_discover_empty_response(self, mock_request, make_response):
        """Zero records is a failure, not an empty success."""
        mock_request.return_value = make_response([])

        module = CertificateTransparencyModule("example.com")
        with pytest.raises(APIError) as excinfo:
            module.discover()

        assert str(excinfo.value) == "Empty response"

    @patch('subsift.utils.http_utils.HTTPUtils.make_request')
    def test_discover_json_error(self, mock_request, make_response):
        """Test error handling for JSON parsing errors."""
        response = make_response()
        response.json.side_effect = ValueError("Expecting value")
        mock_request.return_value = response

        module = CertificateTransparencyModule("example.com")
        with pytest.raises(APIError) as excinfo:
            module.discover()

        assert "Invalid response" in str(excinfo.value)

    @patch('subsift.utils.http_utils.HTTPUtils.make_request')
    def test_discover_unexpected_shape(self, mock_request, make_response):
        mock_request.return_value = make_response({"error": "busy"})

        module = CertificateTransparencyModule("example.com")
        with pytest.raises(APIError):
            module.discover()

    @patch('subsift.utils.http_utils.HTTPUtils.make_request')
    def test_discover_network_error(self, mock_request):
        """Transport errors propagate unchanged."""
        mock_request.side_effect = NetworkError("Timeout connecting to https://crt.sh/")

        module = CertificateTransparencyModule("example.com")
        with pytest.raises(NetworkError) as excinfo:
            module.discover()

        assert "Timeout connecting to" in str(excinfo.value)

    @patch('subsift.utils.http_utils.HTTPUtils.close')
    @patch('subsift.utils.http_utils.HTTPUtils.make_request')
    def test_session_closed_on_error(self, mock_request, mock_close):
        mock_request.side_effect = NetworkError("Timeout connecting to https://crt.sh/")

        module = CertificateTransparencyModule("example.com")
        with pytest.raises(NetworkError):
            module.discover()

        mock_close.assert_called_once()
