"""Process-wide default components.

One slot per component kind, each holding at most one live instance. The
bootstrap step is the only writer and finishes writing before the
application's action runs; everything else only reads. No locking is done:
concurrent bootstraps are not supported.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from microboot.interfaces import (
        Broker,
        Client,
        Registry,
        Selector,
        Server,
        Transport,
    )

logger = logging.getLogger(__name__)

KINDS = ("broker", "registry", "selector", "transport", "server", "client")


class ProcessDefaults:
    """The active instance of each component kind.

    Attributes are ``None`` until `publish` sets them.
    """

    broker: Broker | None
    registry: Registry | None
    selector: Selector | None
    transport: Transport | None
    server: Server | None
    client: Client | None

    def __init__(self) -> None:
        self.reset()

    def publish(self, kind: str, instance: Any) -> None:
        """Make ``instance`` the default for ``kind``, replacing any previous one.

        Raises:
            KeyError: If ``kind`` is not one of `KINDS`.
        """
        if kind not in KINDS:
            raise KeyError(kind)
        previous = getattr(self, kind)
        setattr(self, kind, instance)
        logger.debug(
            "Published default %s: %r (replaced %r)", kind, instance, previous
        )

    def get(self, kind: str) -> Any:
        """Return the default for ``kind`` (``None`` when unset)."""
        if kind not in KINDS:
            raise KeyError(kind)
        return getattr(self, kind)

    def snapshot(self) -> dict[str, Any]:
        """Return a copy of every slot keyed by kind."""
        return {kind: getattr(self, kind) for kind in KINDS}

    def reset(self) -> None:
        """Clear every slot."""
        for kind in KINDS:
            setattr(self, kind, None)


DEFAULTS = ProcessDefaults()


def get_default(kind: str) -> Any:
    """Return the process-wide default for ``kind``."""
    return DEFAULTS.get(kind)
