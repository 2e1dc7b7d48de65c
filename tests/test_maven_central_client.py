"""Tests for the Maven Central search client and the shared HTTP helper."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from common.errors import RegistryError
from common.http_client import safe_get
from constants import Constants, ExitCodes
from registry.maven_central import MavenCentralClient


def _response(status_code=200, payload=None, text=None):
    res = MagicMock()
    res.status_code = status_code
    res.text = text if text is not None else json.dumps(payload)
    return res


class TestLookupVersions:
    """Test MavenCentralClient.lookup_versions."""

    @patch("registry.maven_central.http_client.safe_get")
    def test_collects_latest_versions(self, mock_safe_get):
        mock_safe_get.return_value = _response(payload={
            "response": {"numFound": 2, "docs": [
                {"g": "com.fasterxml.jackson.core", "a": "jackson-databind", "latestVersion": "2.17.1"},
                {"g": "com.fasterxml.jackson.core", "a": "jackson-databind"},
                {"latestVersion": "2.16.0"},
            ]}
        })

        versions = MavenCentralClient().lookup_versions(
            "com.fasterxml.jackson.core", "jackson-databind"
        )

        assert versions == {"2.17.1", "2.16.0"}
        _, kwargs = mock_safe_get.call_args
        assert kwargs["fatal"] is False
        assert kwargs["params"]["q"] == 'g:"com.fasterxml.jackson.core" AND a:"jackson-databind"'
        assert kwargs["params"]["rows"] == 100
        assert kwargs["params"]["wt"] == "json"
        assert "core" not in kwargs["params"]
        assert kwargs["timeout"] == Constants.REQUEST_TIMEOUT

    @patch("registry.maven_central.http_client.safe_get")
    def test_gav_core_reads_per_version_docs(self, mock_safe_get):
        mock_safe_get.return_value = _response(payload={
            "response": {"docs": [{"v": "1.2.0"}, {"v": "1.3.0"}, {"v": ""}]}
        })

        versions = MavenCentralClient(core="gav").lookup_versions("g", "a")

        assert versions == {"1.2.0", "1.3.0"}
        _, kwargs = mock_safe_get.call_args
        assert kwargs["params"]["core"] == "gav"

    @patch("registry.maven_central.http_client.safe_get")
    def test_non_200_raises(self, mock_safe_get):
        mock_safe_get.return_value = _response(status_code=503, text="unavailable")

        with pytest.raises(RegistryError):
            MavenCentralClient().lookup_versions("g", "a")

    @patch("registry.maven_central.http_client.safe_get")
    def test_invalid_json_raises(self, mock_safe_get):
        mock_safe_get.return_value = _response(text="<html>")

        with pytest.raises(RegistryError):
            MavenCentralClient().lookup_versions("g", "a")

    @patch("registry.maven_central.http_client.safe_get")
    def test_missing_docs_raises(self, mock_safe_get):
        mock_safe_get.return_value = _response(payload={"response": {"numFound": 0}})

        with pytest.raises(RegistryError):
            MavenCentralClient().lookup_versions("g", "a")

    @patch("registry.maven_central.http_client.safe_get")
    def test_empty_docs_is_empty_set(self, mock_safe_get):
        mock_safe_get.return_value = _response(payload={"response": {"numFound": 0, "docs": []}})

        assert MavenCentralClient().lookup_versions("g", "a") == set()


class TestSafeGet:
    """Test the shared GET helper."""

    @patch("common.http_client.requests.get")
    def test_passes_timeout(self, mock_get):
        mock_get.return_value = _response(payload={})

        res = safe_get("https://example.test/x", context="maven", timeout=5)

        assert res.status_code == 200
        _, kwargs = mock_get.call_args
        assert kwargs["timeout"] == 5

    @patch("common.http_client.requests.get")
    def test_default_timeout_from_constants(self, mock_get):
        Constants.REQUEST_TIMEOUT = 7
        mock_get.return_value = _response(payload={})

        safe_get("https://example.test/x", context="maven")

        _, kwargs = mock_get.call_args
        assert kwargs["timeout"] == 7

    @patch("common.http_client.requests.get", side_effect=requests.Timeout("slow"))
    def test_timeout_non_fatal_raises_registry_error(self, _mock_get):
        with pytest.raises(RegistryError):
            safe_get("https://example.test/x", context="maven", fatal=False)

    @patch("common.http_client.requests.get", side_effect=requests.ConnectionError("refused"))
    def test_connection_error_fatal_exits(self, _mock_get):
        with pytest.raises(SystemExit) as exc_info:
            safe_get("https://example.test/x", context="maven")
        assert exc_info.value.code == ExitCodes.CONNECTION_ERROR.value

    def test_uses_session_when_given(self):
        session = MagicMock()
        session.get.return_value = _response(payload={})

        safe_get("https://example.test/x", context="maven", session=session, params={"q": "x"})

        session.get.assert_called_once()
        _, kwargs = session.get.call_args
        assert kwargs["params"] == {"q": "x"}
