"""Tests for the package index client."""
import json
from unittest.mock import MagicMock, patch

import pytest
from packaging.version import InvalidVersion

from constants import SupportLevel
from common.http_client import ConnectionFailure
from distribution import InvalidName, NotFound
from registry.pypi import (
    RegistryError,
    fetch_index_version,
    fetch_package,
    fetch_package_version,
    fetch_projects,
    index_is_supported,
)


PACKAGE_JSON = {
    "info": {"name": "Flask-RESTful", "version": "0.3.10"},
    "releases": {"0.3.10": []},
}

RELEASE_JSON = {
    "info": {"name": "Flask-RESTful", "version": "0.3.10"},
    "urls": [],
}


class TestFetchPackage:
    """Project lookups normalize the name and map failures."""

    @patch("registry.pypi.client.get_json")
    def test_url_uses_normalized_name(self, mock_get_json):
        mock_get_json.return_value = (200, {}, PACKAGE_JSON)

        package = fetch_package("Flask_RESTful")

        assert package.name == "Flask-RESTful"
        assert mock_get_json.call_args[0][0] == "https://pypi.org/pypi/flask-restful/json"

    @patch("registry.pypi.client.get_json")
    def test_custom_index(self, mock_get_json):
        mock_get_json.return_value = (200, {}, PACKAGE_JSON)

        fetch_package("demo", index="https://mirror.example/")

        assert mock_get_json.call_args[0][0] == "https://mirror.example/pypi/demo/json"

    @patch("registry.pypi.client.get_json")
    def test_not_found(self, mock_get_json, caplog):
        mock_get_json.return_value = (404, {}, None)

        with pytest.raises(NotFound):
            fetch_package("missing")
        assert "not found" in caplog.text

    @patch("registry.pypi.client.get_json")
    def test_server_error(self, mock_get_json):
        mock_get_json.return_value = (503, {}, None)

        with pytest.raises(RegistryError):
            fetch_package("demo")

    @patch("registry.pypi.client.get_json")
    def test_connection_failure(self, mock_get_json):
        mock_get_json.side_effect = ConnectionFailure("https://pypi.org/pypi/demo/json", "timed out")

        with pytest.raises(RegistryError):
            fetch_package("demo")

    @patch("registry.pypi.client.get_json")
    def test_body_not_json_object(self, mock_get_json):
        mock_get_json.return_value = (200, {}, None)

        with pytest.raises(RegistryError):
            fetch_package("demo")

    @patch("registry.pypi.client.get_json")
    def test_malformed_body(self, mock_get_json):
        mock_get_json.return_value = (200, {}, {"releases": {}})

        with pytest.raises(RegistryError):
            fetch_package("demo")

    @patch("registry.pypi.client.get_json")
    def test_invalid_name_makes_no_request(self, mock_get_json):
        with pytest.raises(InvalidName):
            fetch_package("-bad")
        mock_get_json.assert_not_called()

    def test_invalid_index(self):
        with pytest.raises(RegistryError):
            fetch_package("demo", index="ftp://mirror.example")


class TestFetchPackageVersion:
    """Release lookups normalize the version."""

    @patch("registry.pypi.client.get_json")
    def test_url(self, mock_get_json):
        mock_get_json.return_value = (200, {}, RELEASE_JSON)

        version = fetch_package_version("Flask_RESTful", "0.3.10")

        assert version.version == "0.3.10"
        assert mock_get_json.call_args[0][0] == "https://pypi.org/pypi/flask-restful/0.3.10/json"

    @patch("registry.pypi.client.get_json")
    def test_version_normalized(self, mock_get_json):
        mock_get_json.return_value = (200, {}, RELEASE_JSON)

        fetch_package_version("demo", "1.0RC1")

        assert mock_get_json.call_args[0][0] == "https://pypi.org/pypi/demo/1.0rc1/json"

    @patch("registry.pypi.client.get_json")
    def test_invalid_version(self, mock_get_json):
        with pytest.raises(InvalidVersion):
            fetch_package_version("demo", "not a version")
        mock_get_json.assert_not_called()


class TestIndexMetadata:
    """PEP 691 index root."""

    @patch("registry.pypi.client.get_json")
    def test_api_version(self, mock_get_json):
        mock_get_json.return_value = (200, {}, {"meta": {"api_version": "1.1"}, "projects": []})

        assert fetch_index_version() == "1.1"
        assert mock_get_json.call_args[0][0] == "https://pypi.org/simple/"
        assert mock_get_json.call_args[1]["headers"]["Accept"] == (
            "application/vnd.pypi.simple.v1+json"
        )

    @pytest.mark.parametrize(
        "api_version,expected",
        [
            ("1.0", SupportLevel.SUPPORTED),
            ("1.3", SupportLevel.SOMEWHAT_SUPPORTED),
            ("2.0", SupportLevel.UNSUPPORTED),
        ],
    )
    @patch("registry.pypi.client.get_json")
    def test_support_level(self, mock_get_json, api_version, expected):
        mock_get_json.return_value = (200, {}, {"meta": {"api_version": api_version}})

        assert index_is_supported() is expected

    @patch("registry.pypi.client.get_json")
    def test_invalid_api_version(self, mock_get_json):
        mock_get_json.return_value = (200, {}, {"meta": {"api_version": "one"}})

        with pytest.raises(RegistryError):
            index_is_supported()

    @patch("registry.pypi.client.get_json")
    def test_missing_meta(self, mock_get_json):
        mock_get_json.return_value = (200, {}, {"projects": []})

        with pytest.raises(RegistryError):
            fetch_index_version()

    @patch("registry.pypi.client.get_json")
    def test_projects(self, mock_get_json):
        mock_get_json.return_value = (
            200,
            {},
            {"meta": {"api_version": "1.0"}, "projects": [{"name": "Demo"}, {"name": "other_pkg"}]},
        )

        assert fetch_projects() == {"Demo", "other_pkg"}


class TestThroughHttpClient:
    """End to end through common.http_client with requests mocked."""

    @patch("common.http_client.requests.get")
    def test_sends_user_agent_and_accept(self, mock_get):
        response = MagicMock()
        response.status_code = 200
        response.headers = {}
        response.text = json.dumps(PACKAGE_JSON)
        mock_get.return_value = response

        fetch_package("demo")

        headers = mock_get.call_args[1]["headers"]
        assert headers["Accept"] == "application/json"
        assert headers["User-Agent"] == "distscout"
