"""Interactive shell for inspecting the rows of a wide-column store."""

from __future__ import annotations

import argparse
import readline
import sys
from pathlib import Path

from btcli.completion import Completer
from btcli.config import ShellConfig, load_config
from btcli.errors import BtcliError
from btcli.executor import CommandExecutor
from btcli.log import configure_logging, get_logger
from btcli.store import RowStore

logger = get_logger(__name__)

PROMPT = "btcli> "


def connect(config: ShellConfig) -> RowStore:
    """Open the Bigtable store named by ``config``."""
    config.require_connection()

    from btcli.bigtable_store import BigtableStore

    return BigtableStore(config.project, config.instance)


def setup_readline(config: ShellConfig, store: RowStore) -> None:
    """Bind tab completion and load the command history."""
    completer = Completer(config.tables or store.list_tables)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" ")
    readline.parse_and_bind("tab: complete")
    try:
        readline.read_history_file(config.history_file)
    except FileNotFoundError:
        pass


def save_history(config: ShellConfig) -> None:
    try:
        readline.set_history_length(1000)
        readline.write_history_file(config.history_file)
    except OSError as e:
        logger.warning("could not save history", path=str(config.history_file), error=str(e))


def run_repl(executor: CommandExecutor, config: ShellConfig) -> int:
    """Run the interactive loop until ``exit``, ``quit`` or end of input."""
    setup_readline(config, executor.store)
    try:
        while True:
            try:
                line = input(PROMPT)
            except EOFError:
                print()
                break
            except KeyboardInterrupt:
                # Drop the line being typed, keep the session.
                print()
                continue

            if not executor.execute(line):
                break
    finally:
        save_history(config)

    return 0


def run_file(file_path: Path, executor: CommandExecutor, verbose: bool = False) -> int:
    """Execute one command per line from a file.

    Blank lines and lines starting with ``#`` are skipped.

    Returns:
        0 on success, 1 when the file cannot be read or a command fails
    """
    try:
        content = file_path.read_text()
    except OSError as e:
        print(f"Error reading file: {e}", file=sys.stderr)
        return 1

    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if verbose:
            executor.out.write(f"{PROMPT}{stripped}\n")

        failures = executor.failures
        keep_going = executor.execute(stripped)
        if executor.failures > failures:
            return 1
        if not keep_going:
            break

    return 0


def main(argv: list[str] | None = None, store: RowStore | None = None) -> int:
    """Main entry point.

    ``store`` replaces the Bigtable connection, for embedding and tests.
    """
    arg_parser = argparse.ArgumentParser(
        prog="btcli",
        description="Interactive shell for reading Bigtable rows",
    )
    arg_parser.add_argument("--project", help="Project ID (default: $BTCLI_PROJECT)")
    arg_parser.add_argument("--instance", help="Instance ID (default: $BTCLI_INSTANCE)")
    arg_parser.add_argument(
        "--tables",
        help="Comma separated table names offered by tab completion (default: ask the store)",
    )
    arg_parser.add_argument("--history", type=Path, help="History file (default: ~/.btcli_history)")
    arg_parser.add_argument("--log-level", help="Log level (default: WARNING)")
    arg_parser.add_argument(
        "-c", "--command",
        type=str,
        help="Execute a single command and exit",
    )
    arg_parser.add_argument(
        "-f", "--file",
        type=Path,
        help="Execute commands from a file and exit",
    )
    arg_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print each command before executing (for -f/--file)",
    )

    args = arg_parser.parse_args(argv)

    config = load_config(
        project=args.project,
        instance=args.instance,
        tables=args.tables,
        history_file=args.history,
        log_level=args.log_level,
    )
    try:
        configure_logging(config.log_level)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if store is None:
        try:
            store = connect(config)
        except BtcliError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    try:
        executor = CommandExecutor(store)

        if args.file:
            if not args.file.exists():
                print(f"Error: File not found: {args.file}", file=sys.stderr)
                return 1
            return run_file(args.file, executor, args.verbose)

        if args.command:
            executor.execute(args.command)
            return 1 if executor.failures else 0

        return run_repl(executor, config)
    finally:
        close = getattr(store, "close", None)
        if close is not None:
            close()


if __name__ == "__main__":
    sys.exit(main())
