"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

from typing import Callable

name = "lib_log_telegram"
title = "Rate-limited Telegram sink for Python logging"
version = "0.1.0"
homepage = "https://github.com/bitranox/lib_log_telegram"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "lib_log_telegram"


def print_info(writer: Callable[[str], None] = print) -> None:
    """Emit the metadata banner line by line through ``writer``.

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for lib_log_telegram:\\n'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    writer(f"Info for {name}:\n")
    writer("\n")
    for label, value in fields:
        writer(f"    {label:<{pad}} = {value}\n")


__all__ = ["name", "print_info", "shell_command", "title", "version"]
