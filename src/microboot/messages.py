"""Terminal status lines for the ``microboot`` command.

Lines go to stderr so stdout stays free for the application. Emoji markers
fall back to ASCII on streams that cannot encode them.
"""

import click

SUCCESS = ("✅", "[OK]")  # pragma: no mutate
CAUTION = ("⚠️", "[!]")  # pragma: no mutate


def glyph(marker: tuple[str, str]) -> str:
    """Return the emoji of ``marker`` if stderr can encode it, else its fallback."""
    emoji, fallback = marker
    encoding = getattr(click.get_text_stream("stderr"), "encoding", None) or "ascii"
    try:
        emoji.encode(encoding)
    except UnicodeEncodeError:
        return fallback
    return emoji


def success(msg: str) -> None:
    """Emit a green, bold line with a success marker."""
    click.secho(f"{glyph(SUCCESS)}  {msg}", fg="green", bold=True, err=True)


def warn(msg: str) -> None:
    """Emit a yellow, bold line with a caution marker."""
    click.secho(f"{glyph(CAUTION)}  {msg}", fg="yellow", bold=True, err=True)
