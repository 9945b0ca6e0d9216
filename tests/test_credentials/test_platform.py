"""Tests for platform-default helper detection."""

from unittest.mock import Mock, patch

import pytest

from registry_credentials.credentials import (
    get_default_helper_suffix,
    get_platform_default_helper_suffix,
)

MODULE = "registry_credentials.credentials.platform"


class TestPlatformDefault:
    """Test platform default helper detection."""

    @pytest.mark.parametrize(
        "platform,expected",
        [("darwin", "osxkeychain"), ("win32", "wincred"), ("freebsd14", "")],
    )
    def test_platform_suffix(self, platform, expected):
        """Test suffix per platform."""
        with patch(f"{MODULE}.sys", Mock(platform=platform)):
            assert get_platform_default_helper_suffix() == expected

    def test_linux_prefers_pass(self):
        """Test Linux uses pass when installed."""
        with (
            patch(f"{MODULE}.sys", Mock(platform="linux")),
            patch(f"{MODULE}.shutil.which", return_value="/usr/bin/pass"),
        ):
            assert get_platform_default_helper_suffix() == "pass"

    def test_linux_falls_back_to_secretservice(self):
        """Test Linux uses secretservice without pass."""
        with (
            patch(f"{MODULE}.sys", Mock(platform="linux")),
            patch(f"{MODULE}.shutil.which", return_value=None),
        ):
            assert get_platform_default_helper_suffix() == "secretservice"

    def test_default_requires_helper_on_path(self):
        """Test the default is dropped when its helper is not installed."""
        with (
            patch(f"{MODULE}.get_platform_default_helper_suffix", return_value="osxkeychain"),
            patch(f"{MODULE}.shutil.which", return_value=None) as mock_which,
        ):
            assert get_default_helper_suffix() == ""

        mock_which.assert_called_once_with("docker-credential-osxkeychain")

    def test_default_when_helper_installed(self):
        """Test the default is returned when its helper is installed."""
        with (
            patch(f"{MODULE}.get_platform_default_helper_suffix", return_value="wincred"),
            patch(f"{MODULE}.shutil.which", return_value="C:/bin/docker-credential-wincred.exe"),
        ):
            assert get_default_helper_suffix() == "wincred"

    def test_no_platform_default(self):
        """Test unsupported platforms detect nothing."""
        with patch(f"{MODULE}.get_platform_default_helper_suffix", return_value=""):
            assert get_default_helper_suffix() == ""
