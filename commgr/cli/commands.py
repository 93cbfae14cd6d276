"""
Command-line interface for commgr.

This module provides CLI commands for querying the community management
API and printing the result as CSV.
"""

import argparse
import dataclasses
import logging
import sys
from typing import Optional

from commgr import __version__
from commgr.auth.credentials import PASSWORD_ENV, USERNAME_ENV, CredentialResolver
from commgr.core.config import ManagerConfig
from commgr.exceptions import (
    AuthError,
    MissingCredentialError,
    NetworkError,
    ProtocolError,
    WriteError,
)
from commgr.manager.cancellation import Cancellation, cancel_on_interrupt
from commgr.manager.client import ManagerClient
from commgr.output.renderer import render_csv

LIST_ALIASES = ["lis", "l", "ls"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def create_parser(config: Optional[ManagerConfig] = None) -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    Parameters
    ----------
    config : ManagerConfig, optional
        Supplies flag defaults (default: ManagerConfig())

    Returns
    -------
    argparse.ArgumentParser
        Configured argument parser
    """
    config = config or ManagerConfig()

    parser = argparse.ArgumentParser(
        prog="commgr",
        description="Client for the community management API",
        epilog="Example: API_PASSWORD=secret commgr manager list",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Manager command group
    manager_parser = subparsers.add_parser(
        "manager",
        help="Manage communities",
        description="Query the community management API",
    )
    manager_subparsers = manager_parser.add_subparsers(
        dest="manager_command",
        help="Manager commands",
    )

    # Manager list command
    list_parser = manager_subparsers.add_parser(
        "list",
        aliases=LIST_ALIASES,
        help="List persistent and ephemeral communities",
        description="List communities and their connected client counts as CSV",
    )
    list_parser.add_argument(
        "--api-username",
        metavar="USER",
        default=config.default_username,
        help=(
            "Username for the management API (can also be set using the "
            f"{USERNAME_ENV} env variable) (default: {config.default_username})"
        ),
    )
    list_parser.add_argument(
        "--api-password",
        metavar="PASS",
        default="",
        help=(
            "Password for the management API (can also be set using the "
            f"{PASSWORD_ENV} env variable)"
        ),
    )
    list_parser.add_argument(
        "--raddr",
        metavar="URL",
        default=config.remote_address,
        help=f"Remote address (default: {config.remote_address})",
    )
    list_parser.add_argument(
        "--timeout",
        type=float,
        metavar="SECONDS",
        default=config.timeout,
        help=f"Request timeout in seconds (default: {config.timeout})",
    )

    return parser


def configure_logging(verbose: bool = False) -> None:
    """
    Configure logging to stderr.

    Stdout is reserved for command output.

    Parameters
    ----------
    verbose : bool
        Log at INFO level instead of WARNING
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def format_error(error: Exception) -> str:
    """
    Format an error as a user-facing message with a hint.

    Parameters
    ----------
    error : Exception
        Error raised while running a command

    Returns
    -------
    str
        Message for stderr
    """
    if isinstance(error, MissingCredentialError):
        flag, env = {
            "username": ("--api-username", USERNAME_ENV),
            "password": ("--api-password", PASSWORD_ENV),
        }.get(error.field, (None, None))
        if flag:
            return f"Error: {error} (set {flag} or the {env} env variable)"
        return f"Error: {error}"

    if isinstance(error, NetworkError) and error.cancelled:
        return f"Error: {error}"

    if isinstance(error, AuthError):
        return f"Error: {error}; check your credentials"

    if isinstance(error, NetworkError):
        return f"Error: {error}; check your connectivity and --raddr"

    if isinstance(error, ProtocolError):
        return f"Error: {error}; the management API may be incompatible"

    return f"Error: {error}"


def cmd_manager_list(
    args: argparse.Namespace,
    config: Optional[ManagerConfig] = None,
    environ=None,
) -> int:
    """
    Execute the manager list command.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command-line arguments
    config : ManagerConfig, optional
        Configuration the parser was built from (default: ManagerConfig())
    environ : Mapping[str, str], optional
        Environment supplying credential overrides (default: os.environ)

    Returns
    -------
    int
        Exit code (0 for success, 1 for error)
    """
    try:
        config = dataclasses.replace(
            config or ManagerConfig(),
            remote_address=args.raddr,
            timeout=args.timeout,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        credentials = CredentialResolver(config, environ=environ).resolve(
            args.api_username,
            args.api_password,
            verbose=args.verbose,
        )
    except MissingCredentialError as e:
        print(format_error(e), file=sys.stderr)
        return 1

    client = ManagerClient.from_config(config, credentials)

    try:
        with cancel_on_interrupt(Cancellation()) as cancellation:
            communities = client.list_communities(cancellation)
    except (NetworkError, AuthError, ProtocolError) as e:
        print(format_error(e), file=sys.stderr)
        return 1

    try:
        render_csv(communities, sys.stdout)
    except WriteError as e:
        print(format_error(e), file=sys.stderr)
        return 1

    return 0


def cmd_manager(
    args: argparse.Namespace,
    config: Optional[ManagerConfig] = None,
    environ=None,
) -> int:
    """
    Execute manager commands.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command-line arguments
    config : ManagerConfig, optional
        Configuration the parser was built from
    environ : Mapping[str, str], optional
        Environment supplying credential overrides

    Returns
    -------
    int
        Exit code (0 for success, 1 for error)
    """
    if args.manager_command is None:
        print("Usage: commgr manager <command>")
        print("Commands: list (aliases: " + ", ".join(LIST_ALIASES) + ")")
        print("Run 'commgr manager <command> --help' for details")
        return 0

    if args.manager_command in ["list"] + LIST_ALIASES:
        return cmd_manager_list(args, config=config, environ=environ)

    print(f"Unknown manager command: {args.manager_command}", file=sys.stderr)
    return 1


def main(
    args: Optional[list[str]] = None,
    environ=None,
    config: Optional[ManagerConfig] = None,
) -> int:
    """
    Main entry point for the CLI.

    Parameters
    ----------
    args : list[str], optional
        Command-line arguments (defaults to sys.argv[1:])
    environ : Mapping[str, str], optional
        Environment supplying credential overrides (defaults to os.environ)
    config : ManagerConfig, optional
        Defaults for flags and credentials (defaults to ManagerConfig())

    Returns
    -------
    int
        Exit code (0 for success, non-zero for error)
    """
    config = config or ManagerConfig()
    parser = create_parser(config)
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.verbose)

    if parsed_args.command is None:
        parser.print_help()
        return 0

    if parsed_args.command == "manager":
        return cmd_manager(parsed_args, config=config, environ=environ)

    # Unknown command (shouldn't happen with argparse)
    print(f"Unknown command: {parsed_args.command}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
