"""
CLI for updatecheck.

Minimal CLI using stdlib, mostly useful for trying an endpoint and for
clearing the once-a-day ledger while developing a host application.

Usage:
    updatecheck check <app> <version> [--prod] [--url URL]
    updatecheck status <app>
    updatecheck reset <app>
"""

import logging
import sys

WEEKDAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def print_help() -> None:
    """Print help message."""
    print("""updatecheck - background update notifications

Commands:
    updatecheck check <app> <version>   Check for updates and print any message
        --prod                          Use the production endpoint
        --url URL                       Use a custom endpoint
    updatecheck status <app>            Show when <app> last checked
    updatecheck reset <app>             Forget the last check for <app>

Options:
    updatecheck --help, -h              Show this help
    updatecheck --version, -v           Show version
    updatecheck --debug                 Log debug output to stderr

Set UPDATECHECK_DISABLE_UPDATE_CHECK=true to turn all checks off.""")


def print_version() -> None:
    """Print version."""
    from updatecheck import __version__
    print(f"updatecheck {__version__}")


def setup_logging(debug: bool) -> None:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.WARNING,
    )


def cmd_check(args: list[str]) -> int:
    """Run one check and wait for its result."""
    from updatecheck.coordinator import Coordinator

    prod = False
    url = None
    positional = []

    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--prod":
            prod = True
            i += 1
        elif arg == "--url" and i + 1 < len(args):
            url = args[i + 1]
            i += 2
        else:
            positional.append(arg)
            i += 1

    if len(positional) != 2:
        print("Usage: updatecheck check <app> <version> [--prod] [--url URL]", file=sys.stderr)
        return 1

    application, version = positional
    coordinator = Coordinator(emit=print)
    coordinator.check(application, version, prod, url=url)
    coordinator.print()
    return 0


def cmd_status(args: list[str]) -> int:
    """Show the ledger record for an application."""
    from updatecheck import ledger

    if not args:
        print("Usage: updatecheck status <app>", file=sys.stderr)
        return 1

    application = args[0]
    record = ledger.load(application)

    print(f"Ledger: {ledger.ledger_path(application)}")
    if record.last_check_for_updates is None:
        print("Last check: never")
    else:
        day = WEEKDAYS[record.last_check_for_updates]
        today = " (today)" if record.last_check_for_updates == ledger.current_weekday() else ""
        print(f"Last check: {day}{today}")
    return 0


def cmd_reset(args: list[str]) -> int:
    """Delete the ledger record for an application."""
    from updatecheck import ledger
    from updatecheck.errors import UpdateCheckError

    if not args:
        print("Usage: updatecheck reset <app>", file=sys.stderr)
        return 1

    application = args[0]
    try:
        removed = ledger.reset(application)
    except UpdateCheckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if removed:
        print(f"Reset: {application}")
    else:
        print(f"No ledger for {application}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = list(sys.argv[1:] if argv is None else argv)

    debug = "--debug" in args
    if debug:
        args.remove("--debug")
    setup_logging(debug)

    if not args:
        print_help()
        return 0

    first_arg = args[0]

    if first_arg in ("--help", "-h", "help"):
        print_help()
        return 0

    if first_arg in ("--version", "-v", "version"):
        print_version()
        return 0

    if first_arg == "check":
        return cmd_check(args[1:])

    if first_arg == "status":
        return cmd_status(args[1:])

    if first_arg == "reset":
        return cmd_reset(args[1:])

    print(f"Error: unknown command: {first_arg}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
