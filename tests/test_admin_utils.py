from unittest.mock import patch

import pytest
import typer

from dnsdirect.utils.admin_utils import check_and_request_admin
from dnsdirect.utils.platform_utils import Platform


class TestAdminUtils:
    def test_rooted_no_admin_check(self):
        """Test that sandboxed runs don't check for root."""
        with patch("dnsdirect.utils.platform_utils.PlatformUtils.get_platform") as mock_plat:
            check_and_request_admin(rooted=True)
            mock_plat.assert_not_called()

    @patch("dnsdirect.utils.platform_utils.PlatformUtils.get_platform")
    @patch("dnsdirect.utils.platform_utils.PlatformUtils.is_root")
    def test_unix_already_root(self, mock_is_root, mock_plat):
        mock_plat.return_value = Platform.LINUX
        mock_is_root.return_value = True

        check_and_request_admin(rooted=False)
        # Should return silently

    @patch("dnsdirect.utils.platform_utils.PlatformUtils.get_platform")
    @patch("dnsdirect.utils.platform_utils.PlatformUtils.is_root")
    def test_unix_not_root(self, mock_is_root, mock_plat):
        """Test non-root - should show sudo message and exit."""
        mock_plat.return_value = Platform.LINUX
        mock_is_root.return_value = False

        with pytest.raises(typer.Exit) as exc:
            check_and_request_admin(rooted=False)
        assert exc.value.exit_code == 1

    @patch("dnsdirect.utils.platform_utils.PlatformUtils.get_platform")
    def test_windows_unsupported(self, mock_plat):
        mock_plat.return_value = Platform.WINDOWS

        with pytest.raises(typer.Exit) as exc:
            check_and_request_admin(rooted=False)
        assert exc.value.exit_code == 1
