"""
Unit tests for CLI module.

This module contains tests for command-line interface commands,
verifying argument parsing, exit codes and output formatting.
"""

import argparse
from unittest.mock import Mock, patch

import pytest

from commgr import __version__
from commgr.auth.credentials import Credentials
from commgr.cli.commands import (
    LIST_ALIASES,
    cmd_manager,
    create_parser,
    format_error,
    main,
)
from commgr.core.config import ManagerConfig
from commgr.core.models import Community
from commgr.exceptions import (
    AuthError,
    MissingCredentialError,
    NetworkError,
    ProtocolError,
    RequestCancelledError,
    WriteError,
)
from commgr.manager.cancellation import Cancellation


@pytest.fixture
def mock_client():
    """Patch client construction and return the fake client."""
    client = Mock()
    client.list_communities = Mock(
        return_value=[
            Community(id="a", clients=3, persistent=True),
            Community(id="b", clients=0, persistent=False),
        ]
    )
    with patch(
        "commgr.cli.commands.ManagerClient.from_config", return_value=client
    ) as from_config:
        client.from_config = from_config
        yield client


class TestCreateParser:
    """Tests for create_parser()."""

    def test_creates_parser(self):
        """Test that parser is created."""
        parser = create_parser()
        assert parser.prog == "commgr"

    def test_has_version_argument(self, capsys):
        """Test that --version is available."""
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["--version"])

        assert __version__ in capsys.readouterr().out

    def test_list_defaults(self):
        """Test default flag values."""
        args = create_parser().parse_args(["manager", "list"])

        assert args.command == "manager"
        assert args.manager_command == "list"
        assert args.api_username == "admin"
        assert args.api_password == ""
        assert args.raddr == "https://webrtcfd-production.up.railway.app/"
        assert args.timeout == 30
        assert args.verbose is False

    def test_defaults_from_config(self):
        """Test that flag defaults follow the supplied configuration."""
        config = ManagerConfig(
            remote_address="http://localhost:1337/", default_username="ops"
        )

        args = create_parser(config).parse_args(["manager", "list"])

        assert args.api_username == "ops"
        assert args.raddr == "http://localhost:1337/"

    def test_list_flags(self):
        """Test parsing all list flags."""
        args = create_parser().parse_args(
            [
                "-v",
                "manager",
                "list",
                "--api-username",
                "ops",
                "--api-password",
                "secret",
                "--raddr",
                "http://localhost:1337/",
                "--timeout",
                "2.5",
            ]
        )

        assert args.verbose is True
        assert args.api_username == "ops"
        assert args.api_password == "secret"
        assert args.raddr == "http://localhost:1337/"
        assert args.timeout == 2.5

    @pytest.mark.parametrize("alias", LIST_ALIASES)
    def test_list_aliases(self, alias):
        """Test that list aliases are accepted."""
        args = create_parser().parse_args(["manager", alias])

        assert args.manager_command == alias

    def test_timeout_parsed_as_float(self):
        """Test that --timeout accepts fractional seconds."""
        args = create_parser().parse_args(["manager", "list", "--timeout", "0.5"])

        assert args.timeout == 0.5

    def test_timeout_not_a_number(self):
        """Test that a non-numeric timeout is a usage error."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["manager", "list", "--timeout", "abc"])


class TestFormatError:
    """Tests for format_error()."""

    def test_missing_password_hint(self):
        """Test that the hint names the flag and env variable."""
        message = format_error(MissingCredentialError("password"))

        assert "missing API password" in message
        assert "--api-password" in message
        assert "API_PASSWORD" in message

    def test_missing_username_hint(self):
        message = format_error(MissingCredentialError("username"))

        assert "--api-username" in message
        assert "API_USERNAME" in message

    def test_auth_and_network_differ(self):
        """Test that auth and network failures get different advice."""
        auth = format_error(AuthError("rejected", status_code=401))
        network = format_error(NetworkError("refused"))

        assert "credentials" in auth
        assert "connectivity" in network
        assert "connectivity" not in auth

    def test_cancelled(self):
        """Test that cancellation is reported without connectivity advice."""
        message = format_error(RequestCancelledError())

        assert "request cancelled" in message
        assert "connectivity" not in message

    def test_protocol(self):
        assert "incompatible" in format_error(ProtocolError("bad body"))

    def test_prefix(self):
        assert format_error(WriteError("broken pipe")).startswith("Error: ")


class TestMain:
    """Tests for main()."""

    def test_no_command_prints_help(self, capsys):
        """Test that running without a command shows help."""
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_manager_without_subcommand(self, capsys):
        """Test that the manager group prints its usage."""
        assert main(["manager"]) == 0
        assert "Commands: list" in capsys.readouterr().out

    def test_unknown_manager_command(self, capsys):
        """Test that an unrecognised manager command fails."""
        args = argparse.Namespace(command="manager", manager_command="bogus")

        assert cmd_manager(args) == 1
        assert "bogus" in capsys.readouterr().err


class TestManagerList:
    """Tests for the manager list command."""

    def test_success_writes_csv(self, capsys, mock_client):
        """Test that the listing is printed as CSV."""
        result = main(["manager", "list", "--api-password", "secret"], environ={})

        captured = capsys.readouterr()
        assert result == 0
        assert captured.out == "id,clients,persistent\na,3,true\nb,0,false\n"

    @pytest.mark.parametrize("alias", LIST_ALIASES)
    def test_aliases_run_list(self, alias, capsys, mock_client):
        """Test that aliases execute the list command."""
        assert main(["manager", alias, "--api-password", "secret"], environ={}) == 0
        assert capsys.readouterr().out.startswith("id,clients,persistent\n")

    def test_empty_listing(self, capsys, mock_client):
        """Test that no communities yields the header and success."""
        mock_client.list_communities.return_value = []

        result = main(["manager", "list", "--api-password", "secret"], environ={})

        assert result == 0
        assert capsys.readouterr().out == "id,clients,persistent\n"

    def test_flag_credentials(self, mock_client):
        """Test that flag values reach the client."""
        main(
            ["manager", "list", "--api-username", "ops", "--api-password", "pw"],
            environ={},
        )

        config, credentials = mock_client.from_config.call_args[0]
        assert credentials == Credentials(username="ops", password="pw")
        assert isinstance(config, ManagerConfig)

    def test_env_overrides_flags(self, mock_client):
        """Test that environment values win over flags."""
        main(
            ["manager", "list", "--api-username", "ops", "--api-password", "pw"],
            environ={"API_USERNAME": "env-user", "API_PASSWORD": "env-pw"},
        )

        credentials = mock_client.from_config.call_args[0][1]
        assert credentials == Credentials(username="env-user", password="env-pw")

    def test_raddr_and_timeout_reach_config(self, mock_client):
        """Test that remote address and timeout are passed on."""
        main(
            [
                "manager",
                "list",
                "--api-password",
                "pw",
                "--raddr",
                "http://localhost:1337/",
                "--timeout",
                "4",
            ],
            environ={},
        )

        config = mock_client.from_config.call_args[0][0]
        assert config.remote_address == "http://localhost:1337/"
        assert config.timeout == 4.0

    @pytest.mark.parametrize("timeout", ["0", "-3"])
    def test_non_positive_timeout(self, timeout, capsys, mock_client):
        """Test that a non-positive timeout fails before any request."""
        result = main(
            ["manager", "list", "--api-password", "pw", "--timeout", timeout],
            environ={},
        )

        captured = capsys.readouterr()
        assert result == 1
        assert "Timeout must be positive" in captured.err
        assert captured.out == ""
        mock_client.from_config.assert_not_called()

    def test_configured_username_default(self, mock_client):
        """Test that the configured default username is used without a flag."""
        main(
            ["manager", "list", "--api-password", "pw"],
            environ={},
            config=ManagerConfig(default_username="ops"),
        )

        config, credentials = mock_client.from_config.call_args[0]
        assert credentials.username == "ops"
        assert config.default_username == "ops"

    def test_username_flag_keeps_configured_default(self, mock_client):
        """Test that --api-username does not replace the configured default."""
        main(
            ["manager", "list", "--api-username", "alice", "--api-password", "pw"],
            environ={},
            config=ManagerConfig(default_username="ops"),
        )

        config, credentials = mock_client.from_config.call_args[0]
        assert credentials.username == "alice"
        assert config.default_username == "ops"

    def test_missing_password(self, capsys, mock_client):
        """Test that a missing password fails before any request."""
        result = main(["manager", "list"], environ={})

        captured = capsys.readouterr()
        assert result == 1
        assert captured.out == ""
        assert "missing API password" in captured.err
        mock_client.from_config.assert_not_called()

    def test_missing_username(self, capsys, mock_client):
        """Test that a blank username is reported."""
        result = main(
            ["manager", "list", "--api-username", " ", "--api-password", "pw"],
            environ={},
        )

        assert result == 1
        assert "missing API username" in capsys.readouterr().err

    def test_network_error(self, capsys, mock_client):
        """Test that transport failures produce no CSV output."""
        mock_client.list_communities.side_effect = NetworkError(
            "Could not reach http://localhost:1/"
        )

        result = main(["manager", "list", "--api-password", "pw"], environ={})

        captured = capsys.readouterr()
        assert result == 1
        assert captured.out == ""
        assert "connectivity" in captured.err

    def test_auth_error(self, capsys, mock_client):
        """Test that rejected credentials are reported distinctly."""
        mock_client.list_communities.side_effect = AuthError(
            "Management API rejected the credentials (HTTP 401)", status_code=401
        )

        result = main(["manager", "list", "--api-password", "pw"], environ={})

        captured = capsys.readouterr()
        assert result == 1
        assert captured.out == ""
        assert "check your credentials" in captured.err

    def test_protocol_error(self, capsys, mock_client):
        """Test that undecodable responses fail."""
        mock_client.list_communities.side_effect = ProtocolError("invalid JSON")

        assert main(["manager", "list", "--api-password", "pw"], environ={}) == 1
        assert capsys.readouterr().out == ""

    def test_cancelled(self, capsys, mock_client):
        """Test that cancellation is reported."""
        mock_client.list_communities.side_effect = RequestCancelledError()

        assert main(["manager", "list", "--api-password", "pw"], environ={}) == 1
        assert "request cancelled" in capsys.readouterr().err

    def test_client_receives_cancellation(self, mock_client):
        """Test that a cancellation signal is passed to the client."""
        main(["manager", "list", "--api-password", "pw"], environ={})

        (cancellation,) = mock_client.list_communities.call_args[0]
        assert isinstance(cancellation, Cancellation)

    def test_write_error(self, capsys, mock_client):
        """Test that output failures return a non-zero exit code."""
        with patch(
            "commgr.cli.commands.render_csv",
            side_effect=WriteError("Failed to write output: broken pipe"),
        ):
            result = main(["manager", "list", "--api-password", "pw"], environ={})

        assert result == 1
        assert "broken pipe" in capsys.readouterr().err
