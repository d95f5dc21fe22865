"""Terminal message helpers for the trellis-cassandra CLI.

Messages go to stderr so stdout stays machine-readable, and fall back from
emoji to ASCII markers on terminals that cannot encode them.
"""

import click

_GLYPHS = {
    "warn": ("⚠️", "[!]"),  # pragma: no mutate
    "success": ("✅", "[OK]"),  # pragma: no mutate
    "error": ("❌", "[X]"),  # pragma: no mutate
}


def _supports_character(character: str) -> bool:
    """Return True if *character* can be encoded on Click's stderr stream.

    The stream is looked up on every call, so a redirected or re-encoded
    stderr is honoured.

    Args:
        character: The glyph to try, e.g. "✅".

    Returns:
        bool: False when encoding raises `UnicodeEncodeError`.
    """
    encoding = getattr(click.get_text_stream("stderr"), "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(kind: str) -> str:
    """Return the marker for *kind*.

    Args:
        kind: One of "warn", "success" or "error".

    Returns:
        str: The emoji when stderr can encode it, else the ASCII fallback.
    """
    emoji, fallback = _GLYPHS[kind]
    return emoji if _supports_character(emoji) else fallback


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to **stderr**.

    Args:
        msg: The message to display.
    """
    click.secho(f"{glyph('warn')}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green, bold success line to **stderr**.

    Args:
        msg: The message to display.
    """
    click.secho(f"{glyph('success')}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold error line to **stderr**.

    Args:
        msg: The message to display.

    Note:
        Used right before a `ClickException` is raised, so the styled line
        precedes Click's plain "Error:" message.
    """
    click.secho(f"{glyph('error')}  {msg}", fg="red", bold=True, err=True)
