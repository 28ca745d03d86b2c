"""CLI entrypoint for view-secret."""
import sys
import argparse
import logging
from pathlib import Path

from view_secret.secrets.domains.config_loader import (
    SOURCES,
    ConfigError,
    default_config_path,
    load_config,
    resolve_config_path,
)
from view_secret.secrets.domains.errors import UsageError, ViewSecretError
from view_secret.secrets.domains.preferences import clear_preference, get_preference, set_preference
from view_secret.secrets.workflows.process_secret import process_secret
from view_secret.secrets.workflows.secret_operations import fetch_secret

from .validators import validate_args, validate_secret_name

VERSION = "0.1.0"

# Configure logging to stderr; stdout carries revealed values only
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    stream=sys.stderr
)
logger = logging.getLogger(__name__)


def cmd_version(args):
    """Show version information."""
    print(f"view-secret {VERSION}")


def cmd_config_set_path(args):
    """Set config file path preference."""
    config_path = Path(args.path).resolve()

    if not config_path.exists():
        print(f"Error: Config file does not exist: {config_path}", file=sys.stderr)
        sys.exit(1)

    if not config_path.is_file():
        print(f"Error: Path is not a file: {config_path}", file=sys.stderr)
        sys.exit(1)

    set_preference("config_path", str(config_path))
    print(f"Config path set to: {config_path}")


def cmd_config_show(args):
    """Show which config file is in effect."""
    config_path, source = resolve_config_path()

    if config_path is not None:
        print(f"Config path: {config_path}")
        print(f"Source: {source}")
        return

    config_path_pref = get_preference("config_path")
    if config_path_pref:
        print(f"Config path (from preference, but file not found): {config_path_pref}")
    print(f"Config path: {default_config_path()}")
    print("Source: default (file not found, built-in defaults apply)")


def cmd_config_clear(args):
    """Clear config path preference."""
    if clear_preference("config_path"):
        print(f"Config path preference cleared. Will use default: {default_config_path()}")
    else:
        print("No config path preference set.")


def cmd_secrets_view(args):
    """Fetch a secret and reveal its decoded entries."""
    validate_args(args.args)
    secret_name = args.args[0]
    explicit_key = args.args[1] if len(args.args) > 1 else ""

    config = load_config()
    source = args.source or config["source"]
    validate_secret_name(secret_name, source)

    secret = fetch_secret(
        secret_name,
        config,
        source=source,
        namespace=args.namespace,
        context=args.context,
        kubeconfig=args.kubeconfig,
        project_id=args.project_id,
        version=args.version_id,
        file_path=args.file,
    )
    logger.info(f"Fetched secret '{secret.name}' from {secret.source} ({len(secret.data)} key(s))")

    process_secret(
        sys.stdout,
        sys.stderr,
        sys.stdin,
        secret,
        explicit_key=explicit_key,
        decode_all=args.all,
        quiet=args.quiet,
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="view-secret",
        description="Decode and view the contents of a stored secret",
        epilog="""
Exit codes:
  0 - Success (or selection cancelled)
  1 - Runtime error (secret not found, empty secret, missing key, decode failure, etc.)
  2 - Usage error (invalid arguments, invalid secret name format, etc.)

Environment variables:
  GCP_PROJECT - GCP project ID for the gcp source (overrides config file)

Configuration:
  Default location: ~/.config/view-secret/config.yml
  Custom path: Set with 'view-secret config set-path <path>'
  View current: Run 'view-secret config show'
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging on stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "version",
        help="Show version information",
        description="Display the current version of view-secret"
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
        description="Manage view-secret configuration"
    )
    config_subparsers = config_parser.add_subparsers(dest="config_command")

    config_set_path_parser = config_subparsers.add_parser(
        "set-path",
        help="Set config file path",
        description="Store the absolute path to your config file in ~/.config/view-secret/preferences.json"
    )
    config_set_path_parser.add_argument("path", help="Path to config file")

    config_subparsers.add_parser(
        "show",
        help="Show current config path",
        description="Display the configuration file path in effect and its source"
    )

    config_subparsers.add_parser(
        "clear",
        help="Clear config path preference",
        description="Remove the config path preference; ~/.config/view-secret/config.yml is used afterwards"
    )

    # secrets command
    secrets_parser = subparsers.add_parser(
        "secrets",
        help="Secret operations",
        description="Fetch secrets and reveal their decoded contents"
    )
    secrets_subparsers = secrets_parser.add_subparsers(dest="secrets_command")

    view_parser = secrets_subparsers.add_parser(
        "view",
        help="Decode and print a secret",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Fetch a secret and print its decoded entries as KEY='value' lines.

Behavior:
  1. With a key argument, only that key is printed
  2. With -a/--all, every key is printed in sorted order
  3. A secret with a single key prints it without asking
  4. Otherwise a menu asks which key to print (Enter = all, q = quit)
        """
    )
    view_parser.add_argument(
        "args",
        nargs="*",
        metavar="ARG",
        help="Secret name (or file path for the file source) and optional key"
    )
    view_parser.add_argument(
        "-a", "--all",
        action="store_true",
        help="Print all keys without prompting"
    )
    view_parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress informational messages"
    )
    view_parser.add_argument(
        "--source",
        choices=SOURCES,
        help="Where to read the secret from (default: from config, else kubectl)"
    )
    view_parser.add_argument("-n", "--namespace", help="Kubernetes namespace")
    view_parser.add_argument("--context", help="kubeconfig context to use")
    view_parser.add_argument("--kubeconfig", help="Path to the kubeconfig file")
    view_parser.add_argument(
        "--project-id",
        help="GCP project ID (auto-detected from GCP_PROJECT env var or config file if not provided)"
    )
    view_parser.add_argument(
        "--version-id",
        default="latest",
        help="GCP secret version (default: latest)"
    )
    view_parser.add_argument("--file", help="Path to a YAML/JSON secret file (file source)")

    return parser, config_parser, secrets_parser


def main(argv=None):
    """Main CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Runtime errors (secret not found, empty secret, missing key, decode failure, etc.)
        2 - Usage errors (invalid arguments, invalid secret name format, etc.)
    """
    parser, config_parser, secrets_parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif getattr(args, "quiet", False):
        logging.getLogger().setLevel(logging.ERROR)

    if not args.command:
        parser.print_help()
        sys.exit(2)

    try:
        if args.command == "version":
            cmd_version(args)
        elif args.command == "config":
            if args.config_command == "set-path":
                cmd_config_set_path(args)
            elif args.config_command == "show":
                cmd_config_show(args)
            elif args.config_command == "clear":
                cmd_config_clear(args)
            else:
                config_parser.print_help()
                sys.exit(2)
        elif args.command == "secrets":
            if args.secrets_command == "view":
                cmd_secrets_view(args)
            else:
                secrets_parser.print_help()
                sys.exit(2)
        else:
            parser.print_help()
            sys.exit(2)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (ViewSecretError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
