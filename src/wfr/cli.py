from __future__ import annotations

import argparse
import logging
from functools import partial
from typing import Any, Never, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.pretty import Pretty
from rich_argparse import RawTextRichHelpFormatter
from wasm_func_runner import (
    ExecutionErrorKind,
    RunnerConfig,
    WasmLoader,
    WasmRunnerError,
    run_wasm_function,
)

_CONSOLE = Console(no_color=False)
_ERR_CONSOLE = Console(stderr=True)


class _CLIHelpFormatter(RawTextRichHelpFormatter):
    """Rich formatter with explicit high-contrast CLI styles.

    Example:
        ```python
        parser = argparse.ArgumentParser(formatter_class=_CLIHelpFormatter)
        ```
    """

    styles = {
        "argparse.args": "bold cyan",
        "argparse.groups": "bold magenta",
        "argparse.help": "white",
        "argparse.metavar": "bold yellow",
        "argparse.prog": "bold bright_blue",
        "argparse.syntax": "bold bright_white",
        "argparse.text": "bright_white",
    }


_HELP_FORMATTER = partial(
    _CLIHelpFormatter,
    max_help_position=34,
    width=120,
)


class _RichArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that renders errors via Rich.

    Example:
        ```python
        parser = _RichArgumentParser(prog="python -m wfr")
        ```
    """

    def error(self, message: str) -> Never:
        """Render parse errors with Rich and exit.

        Example:
            ```python
            # parser.error("invalid usage")
            ```
        """
        _ERR_CONSOLE.print(
            Panel.fit(f"[bold red]Error:[/bold red] {escape(message)}", border_style="red")
        )
        self.print_usage()
        raise SystemExit(2)


def _error_details(error: WasmRunnerError) -> dict[str, Any]:
    """Collect the diagnostic attributes of a runner error for display.

    Example:
        ```python
        details = _error_details(NoResultError("hello"))
        ```
    """
    details: dict[str, Any] = {"code": error.code}
    for key, value in vars(error).items():
        details[key] = value.value if isinstance(value, ExecutionErrorKind) else value
    return details


def _print_error(error: WasmRunnerError) -> None:
    """Render a runner error as a red panel on stderr.

    Example:
        ```python
        _print_error(RuntimeNotFoundError(["wasmtime"]))
        ```
    """
    _ERR_CONSOLE.print(
        Panel.fit(
            Pretty(_error_details(error)),
            title=f"[bold red]{type(error).__name__}[/bold red]: {escape(str(error))}",
            border_style="red",
        )
    )


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser for wasm-func-runner.

    Example:
        ```python
        parser = build_parser()
        ```
    """
    parser = _RichArgumentParser(
        prog="python -m wfr",
        description=(
            "wasm-func-runner CLI\n"
            "Call one exported function of a .wasm module through an installed engine\n"
            "(wasmtime or wasmer) and print its integer result."
        ),
        epilog=(
            "Quick Examples:\n"
            "  python -m wfr locate\n"
            "  python -m wfr call add.wasm add 2 3\n"
            "  python -m wfr call math.wasm neg -7 --timeout-seconds 2\n"
            "  python -m wfr --config ./wfr.toml call fib.wasm fib 30"
        ),
        formatter_class=_HELP_FORMATTER,
    )
    parser.add_argument(
        "--config",
        help=(
            "Path to a TOML config file with a [runner] table.\n"
            "Keys: timeout_seconds, runtime_candidates, windows_install_paths."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log engine discovery and process details to stderr.",
    )

    sub = parser.add_subparsers(
        dest="command",
        required=True,
        parser_class=_RichArgumentParser,
    )

    sub.add_parser(
        "locate",
        help="Print the WebAssembly engine that would be used.",
        description=(
            "Probe configured engine names on PATH (then known install paths on Windows)\n"
            "and print the first match."
        ),
        formatter_class=_HELP_FORMATTER,
    )

    call_cmd = sub.add_parser(
        "call",
        help="Call an exported function with integer arguments.",
        description=(
            "Run `<engine> run --invoke <function> <module> <args...>` and print the\n"
            "first integer the engine writes to stdout."
        ),
        epilog=(
            "Examples:\n"
            "  python -m wfr call add.wasm add 2 3\n"
            "  python -m wfr call add.wasm add -- -2 -3"
        ),
        formatter_class=_HELP_FORMATTER,
    )
    call_cmd.add_argument("module", help="Path to the compiled .wasm module.")
    call_cmd.add_argument("function", help="Exported function name.")
    call_cmd.add_argument("args", nargs="*", help="Integer literals, e.g. 42 or -7.")
    call_cmd.add_argument(
        "--timeout-seconds",
        type=float,
        default=None,
        help="Kill the engine after this many seconds (default: from config, 5).",
    )

    return parser


def build_loader(args: argparse.Namespace) -> WasmLoader:
    """Create a WasmLoader from global CLI flags.

    Example:
        ```python
        loader = build_loader(args)
        ```
    """
    if args.config:
        return WasmLoader(config=RunnerConfig.from_file(args.config))
    return WasmLoader()


def _configure_logging(verbose: bool) -> None:
    """Send library logs to stderr through Rich when verbose.

    Example:
        ```python
        _configure_logging(True)
        ```
    """
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=_ERR_CONSOLE, show_path=False)],
        force=True,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the `wfr` CLI command handler.

    Example:
        ```python
        code = main(["call", "add.wasm", "add", "1", "2"])
        ```
    """
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    _configure_logging(args.verbose)
    try:
        loader = build_loader(args)
    except ValueError as exc:
        _ERR_CONSOLE.print(
            Panel.fit(f"[bold red]Config error:[/bold red] {escape(str(exc))}", border_style="red")
        )
        return 2

    if args.command == "locate":
        located = loader.locate_runtime()
        if located.error is not None:
            _print_error(located.error)
            return 1
        _CONSOLE.print(located.unwrap().path, soft_wrap=True, markup=False, highlight=False)
        return 0
    if args.command == "call":
        if args.timeout_seconds is not None and not args.timeout_seconds > 0:
            parser.error("--timeout-seconds must be positive")
        result = run_wasm_function(
            args.module,
            args.function,
            args.args,
            loader=loader,
            timeout_seconds=args.timeout_seconds,
        )
        if result.error is not None:
            _print_error(result.error)
            return 1
        _CONSOLE.print(result.unwrap(), soft_wrap=True, markup=False, highlight=False)
        return 0

    parser.error("Unhandled command")
    return 2
