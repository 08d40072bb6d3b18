"""Tests for the distscout entry point and its exit codes."""
import logging
from unittest.mock import patch

import pytest

from constants import Constants, ExitCodes
from distribution import NotFound
from distscout import main
from registry.pypi import PackageVersion, RegistryError


RELEASE = PackageVersion.from_json({
    "info": {"name": "demo", "version": "1.0", "summary": "A demo project"},
    "urls": [{
        "filename": "demo-1.0-py3-none-any.whl",
        "packagetype": "bdist_wheel",
        "url": "https://files.example/demo-1.0-py3-none-any.whl",
        "upload_time_iso_8601": "2024-01-01T00:00:00.000000Z",
    }],
})


@pytest.fixture(autouse=True)
def isolate(monkeypatch):
    monkeypatch.delenv("DISTSCOUT_CONFIG", raising=False)
    monkeypatch.delenv("DISTSCOUT_LOG_LEVEL", raising=False)
    monkeypatch.setattr(Constants, "INDEX_URL", Constants.INDEX_URL)
    monkeypatch.setattr(Constants, "REQUEST_TIMEOUT", Constants.REQUEST_TIMEOUT)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def run_main(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


class TestMain:
    """Output and exit codes."""

    @patch("project.fetch_package_version")
    def test_success(self, mock_release, capsys):
        mock_release.return_value = RELEASE

        assert run_main(["demo", "1.0"]) == ExitCodes.SUCCESS.value
        assert capsys.readouterr().out == "demo@1.0\n  2024-01-01T00:00:00\n  A demo project\n"

    @patch("project.fetch_package_version")
    def test_index_passed_through(self, mock_release):
        mock_release.return_value = RELEASE

        run_main(["demo", "1.0", "--index", "https://mirror.example"])

        assert mock_release.call_args[0][2] == "https://mirror.example"

    @pytest.mark.parametrize(
        "argv",
        [
            ["--", "-bad"],
            ["demo", "not a version"],
            ["demo", "1.0", "nonsense"],
            ["demo", "1.0", "--versions"],
        ],
    )
    @patch("project.fetch_package_version")
    @patch("project.fetch_package")
    def test_invalid_input_before_network(self, mock_package, mock_release, argv):
        assert run_main(argv) == ExitCodes.INVALID_INPUT.value
        mock_package.assert_not_called()
        mock_release.assert_not_called()

    @patch("project.fetch_package_version")
    def test_not_found(self, mock_release):
        mock_release.side_effect = NotFound("release demo 9.9 not found")

        assert run_main(["demo", "9.9"]) == ExitCodes.NOT_FOUND.value

    @patch("project.fetch_package_version")
    def test_no_matching_distribution(self, mock_release):
        mock_release.return_value = RELEASE

        assert run_main(["demo", "1.0", "sdist"]) == ExitCodes.NOT_FOUND.value

    @patch("project.fetch_package_version")
    def test_connection_error(self, mock_release):
        mock_release.side_effect = RegistryError("https://pypi.org/pypi/demo/1.0/json: timed out")

        assert run_main(["demo", "1.0"]) == ExitCodes.CONNECTION_ERROR.value

    def test_missing_config_file(self, tmp_path):
        assert run_main(["demo", "-c", str(tmp_path / "missing.yml")]) == ExitCodes.FILE_ERROR.value

    @patch("project.fetch_package_version")
    def test_config_applied(self, mock_release, tmp_path):
        mock_release.return_value = RELEASE
        config = tmp_path / "distscout.yml"
        config.write_text("request_timeout: 3\n", encoding="utf-8")

        assert run_main(["demo", "1.0", "-c", str(config)]) == ExitCodes.SUCCESS.value
        assert Constants.REQUEST_TIMEOUT == 3
