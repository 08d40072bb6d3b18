"""Tests for command-line parsing."""
import pytest

from args import parse_args


class TestParseArgs:
    """Positionals, counters and flags."""

    def test_project_only(self):
        args = parse_args(["requests"])
        assert args.project == "requests"
        assert args.version is None
        assert args.dist is None
        assert args.ARTIFACTS == 0
        assert args.LOG_LEVEL is None

    def test_version_and_dist(self):
        args = parse_args(["requests", "2.32.3", "py3-none-any"])
        assert (args.version, args.dist) == ("2.32.3", "py3-none-any")

    def test_counters(self):
        args = parse_args(["requests", "-aaa", "-vv", "-q"])
        assert (args.ARTIFACTS, args.VERBOSE, args.QUIET) == (3, 2, 1)

    def test_flags(self):
        args = parse_args([
            "requests", "-p", "-e", "--versions", "--compatible",
            "--index", "https://mirror.example", "-c", "conf.yml",
            "--loglevel", "debug", "--logfile", "out.log",
        ])
        assert args.PACKAGES and args.EXECUTABLES and args.VERSIONS and args.COMPATIBLE
        assert args.INDEX == "https://mirror.example"
        assert args.CONFIG == "conf.yml"
        assert args.LOG_LEVEL == "DEBUG"
        assert args.LOG_FILE == "out.log"

    def test_project_required(self):
        with pytest.raises(SystemExit):
            parse_args([])

    def test_bad_loglevel(self):
        with pytest.raises(SystemExit):
            parse_args(["requests", "--loglevel", "chatty"])
