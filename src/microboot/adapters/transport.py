"""HTTP transport."""

from microboot.interfaces import Transport


class HttpTransport(Transport):
    """Point-to-point transport over HTTP; holds its configured addresses."""

    def __init__(self, addresses: list[str] | None = None) -> None:
        self._addresses = list(addresses or [])

    def __repr__(self) -> str:
        return f"HttpTransport(addresses={self._addresses!r})"

    @property
    def addresses(self) -> list[str]:
        return list(self._addresses)


def new_transport(addresses: list[str]) -> HttpTransport:
    """Factory registered under the ``http`` transport kind."""
    return HttpTransport(addresses)
