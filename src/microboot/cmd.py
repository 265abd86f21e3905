"""Command shell: couples an Option Set to a click command.

A `Cmd` owns one `Options` value and one `click.Command`. The command parses
`DEFAULT_FLAGS`, runs the bootstrap step, then runs the configured action:

    from microboot import cmd, options

    components = cmd.init(options.name("greeter"), options.version("1.0.0"))

Exit behavior
- ``--help`` (or ``-h``) and ``--version`` print and exit with status 0.
  ``--version`` exists only when the options carry a version.
- Malformed flags exit with status 2 (click usage error).
- A bootstrap failure is reported on stderr and exits with status 1.

A `Cmd` is meant to be initialized once per process.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Any

import click

from microboot.bootstrap import Components, bootstrap
from microboot.flags import DEFAULT_FLAGS, FlagValues
from microboot.interfaces import BootstrapError
from microboot.messages import success, warn
from microboot.options import Option, Options, action, apply, new_options

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class Cmd:
    """A command-line application whose run starts with bootstrap.

    Args:
        *opts: Option functions applied on top of the built-in factories.
    """

    def __init__(self, *opts: Option) -> None:
        self._options = new_options(*opts)
        self._components: Components | None = None
        self._version_option = click.Option(
            ["--version"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=self._print_version,
            help="Show the version and exit.",
        )
        self._app = click.Command(
            name=None,
            callback=self._run,
            params=list(DEFAULT_FLAGS),
            context_settings=CONTEXT_SETTINGS,
        )
        self._refresh_app()

    @property
    def app(self) -> click.Command:
        """The click command within this cmd."""
        return self._app

    @property
    def options(self) -> Options:
        """Options set within this command."""
        return self._options

    def _refresh_app(self) -> None:
        self._app.name = self._options.name or None
        self._app.help = self._options.description
        self._app.short_help = self._options.description
        # without a version there is no --version flag at all
        self._app.params = list(DEFAULT_FLAGS)
        if self._options.version:
            self._app.params.append(self._version_option)

    def _print_version(
        self, ctx: click.Context, param: click.Parameter, value: bool
    ) -> None:  # pylint: disable=unused-argument
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"{ctx.info_name} version {self._options.version}")
        ctx.exit()

    def _run(self, **params: Any) -> None:
        ctx = click.get_current_context()
        flags = FlagValues.from_params(params)
        try:
            self._components = bootstrap(
                flags, self._options, color=ctx.color is not False
            )
        except BootstrapError as e:
            logger.error("Bootstrap failed: %s", e)
            raise click.ClickException(str(e)) from e
        self._options.action(self._components)

    def init(self, *opts: Option, args: Sequence[str] | None = None) -> Components:
        """Add options, parse flags, bootstrap and run the action.

        Args:
            *opts: Extra option functions applied to the existing options.
            args: Arguments to parse; ``sys.argv[1:]`` when ``None``.

        Returns:
            Components: What bootstrap built, once the action has returned.

        Exits the process on ``--help``/``--version`` (status 0), on flag
        errors (status 2) and on bootstrap failure (status 1).
        """
        apply(self._options, *opts)
        self._refresh_app()
        try:
            result = self._app.main(
                args=list(args) if args is not None else None,
                prog_name=self._options.name or None,
                standalone_mode=False,
            )
        except click.ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except click.Abort:
            click.echo("Aborted!", err=True)
            sys.exit(1)
        if self._components is None:
            # help or version was printed; no bootstrap ran
            sys.exit(result if isinstance(result, int) else 0)
        return self._components


def new_cmd(*opts: Option) -> Cmd:
    """Build a new command."""
    return Cmd(*opts)


DEFAULT_CMD = new_cmd()


def init(*opts: Option, args: Sequence[str] | None = None) -> Components:
    """Initialize `DEFAULT_CMD`."""
    return DEFAULT_CMD.init(*opts, args=args)


def _report(components: Components) -> None:
    for component, kind in components.unresolved:
        warn(f"No {component} registered as {kind!r}; {component} left unset")
    server = components.server
    success(
        f"Bootstrapped {server.name or '<unnamed>'} ({server.id}) on {server.address}"
    )


def main() -> None:
    """Entry point of the ``microboot`` console script."""
    init(action(_report))
