"""Flag Surface: every flag the command recognizes.

Each service flag has an environment-variable fallback named by
`config.envvar` (``--server_name`` reads ``MICRO_SERVER_NAME``). The logging
flags at the end are forwarded to `microboot.logging` during bootstrap.

After parsing, every flag is available by name in ``ctx.params`` and as an
attribute of `FlagValues`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields
from typing import Any

import click

from microboot import config


class CommaListType(click.types.StringParamType):
    """Text whose environment-variable form is a comma-separated list.

    ``MICRO_SERVER_METADATA="version=1.0.0, env=prod"`` gives two items. Each
    item is stripped of surrounding whitespace; empty items are kept.
    """

    envvar_list_splitter = ","

    def split_envvar_value(self, rv: str) -> Sequence[str]:
        return [item.strip() for item in (rv or "").split(self.envvar_list_splitter)]


COMMA_LIST = CommaListType()


def _service_flag(flag_name: str, help_text: str, **kwargs: Any) -> click.Option:
    return click.Option(
        [f"--{flag_name}"],
        envvar=config.envvar(flag_name),
        show_envvar=True,
        help=help_text,
        **kwargs,
    )


SERVICE_FLAGS: list[click.Option] = [
    _service_flag("server_name", "Name of the server. go.micro.srv.example"),
    _service_flag("server_version", "Version of the server. 1.1.0"),
    _service_flag(
        "server_id", "Id of the server. Auto-generated if not specified"
    ),
    _service_flag(
        "server_address",
        "Bind address for the server. 127.0.0.1:8080",
        default=config.DEFAULT_SERVER_ADDRESS,
        show_default=True,
    ),
    _service_flag(
        "server_advertise",
        "Used instead of the server_address when registering with discovery. "
        "127.0.0.1:8080",
    ),
    _service_flag(
        "server_metadata",
        "A list of key-value pairs defining metadata. version=1.0.0 "
        "Repeatable; the env var takes a comma-separated list.",
        type=COMMA_LIST,
        multiple=True,
    ),
    _service_flag(
        "broker",
        "Broker for pub/sub. http, nats, rabbitmq",
        default=config.DEFAULT_BROKER,
        show_default=True,
    ),
    _service_flag("broker_address", "Comma-separated list of broker addresses"),
    _service_flag(
        "registry",
        "Registry for discovery. memory, consul, etcd, kubernetes",
        default=config.DEFAULT_REGISTRY,
        show_default=True,
    ),
    _service_flag("registry_address", "Comma-separated list of registry addresses"),
    _service_flag(
        "selector",
        "Selector used to pick nodes for querying. random, roundrobin, blacklist",
        default=config.DEFAULT_SELECTOR,
        show_default=True,
    ),
    _service_flag(
        "transport",
        "Transport mechanism used; http, rabbitmq, nats",
        default=config.DEFAULT_TRANSPORT,
        show_default=True,
    ),
    _service_flag(
        "transport_address", "Comma-separated list of transport addresses"
    ),
]

LOGGING_FLAGS: list[click.Option] = [
    click.Option(
        ["--logtostderr"],
        is_flag=True,
        default=False,
        help="log to standard error instead of files",
    ),
    click.Option(
        ["--alsologtostderr"],
        is_flag=True,
        default=False,
        help="log to standard error as well as files",
    ),
    click.Option(
        ["--log_dir"],
        help=(
            "log files will be written to this directory instead of the "
            "default temporary directory"
        ),
    ),
    click.Option(
        ["--stderrthreshold"],
        help="logs at or above this threshold go to stderr",
    ),
    click.Option(["--v"], help="log level for V logs"),
    click.Option(
        ["--vmodule"],
        help="comma-separated list of pattern=N settings for file-filtered logging",
    ),
    click.Option(
        ["--log_backtrace_at"],
        help="when logging hits line file:N, emit a stack trace",
    ),
]

DEFAULT_FLAGS: list[click.Option] = SERVICE_FLAGS + LOGGING_FLAGS


@dataclass(frozen=True)
class FlagValues:  # pylint: disable=too-many-instance-attributes
    """Parsed values of `DEFAULT_FLAGS`."""

    server_name: str = ""
    server_version: str = ""
    server_id: str = ""
    server_address: str = config.DEFAULT_SERVER_ADDRESS
    server_advertise: str = ""
    server_metadata: tuple[str, ...] = ()
    broker: str = config.DEFAULT_BROKER
    broker_address: str = ""
    registry: str = config.DEFAULT_REGISTRY
    registry_address: str = ""
    selector: str = config.DEFAULT_SELECTOR
    transport: str = config.DEFAULT_TRANSPORT
    transport_address: str = ""
    logtostderr: bool = False
    alsologtostderr: bool = False
    log_dir: str = ""
    stderrthreshold: str = ""
    v: str = ""
    vmodule: str = ""
    log_backtrace_at: str = ""

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> FlagValues:
        """Build from a click parameter mapping.

        Unknown keys are ignored and ``None`` (flag not given, no default)
        becomes the field default.
        """
        values: dict[str, Any] = {}
        for f in fields(cls):
            value = params.get(f.name)
            if value is None:
                continue
            values[f.name] = tuple(value) if f.name == "server_metadata" else value
        return cls(**values)
