from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Mapping

from kaniko_plugin import __version__
from kaniko_plugin.common import PluginError


DEFAULT_COMMAND = "build"


def command_map() -> dict[str, Callable[[], None]]:
    """
    Map CLI command names to Python entry functions.

    Each value is a `main()` function from one plugin module.
    """
    from kaniko_plugin.docker_config import main as write_docker_config
    from kaniko_plugin.plugin import main as build
    from kaniko_plugin.registry import main as resolve_repo

    return {
        "build": build,
        "write-docker-config": write_docker_config,
        "resolve-repo": resolve_repo,
    }


def build_parser(commands: Mapping[str, Callable[[], None]]) -> argparse.ArgumentParser:
    """Build argument parser with one optional command choice."""
    parser = argparse.ArgumentParser(
        prog="kaniko-plugin",
        description="Kaniko docker plugin. Options are read from PLUGIN_* environment variables.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    # The plugin image runs without arguments, so the full build is the default.
    parser.add_argument(
        "command",
        nargs="?",
        default=DEFAULT_COMMAND,
        choices=sorted(commands.keys()),
    )
    return parser


def run_command(command: str, commands: Mapping[str, Callable[[], None]]) -> None:
    """
    Run one registered command.

    `commands` is passed in to keep this function easy to test.
    """
    commands[command]()


def main(argv: list[str] | None = None) -> None:
    commands = command_map()
    parser = build_parser(commands)
    args = parser.parse_args(argv)

    try:
        run_command(args.command, commands)
    except PluginError as exc:
        # Keep failures short and readable in pipeline logs.
        print(str(exc), file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
