"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

from typing import Callable

name = "lib_log_hub"
title = "Pluggable asynchronous logging core with hot-swappable backends"
version = "0.1.0"
author = "lib_log_hub developers"
shell_command = "lib_log_hub"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Write the metadata banner line by line through ``writer`` (default: ``print``).

    Examples
    --------
    >>> print_info()  # doctest: +ELLIPSIS
    Info for lib_log_hub:
    <BLANKLINE>
        name          = lib_log_hub
    ...
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:\n", "\n"]
    lines.extend(f"    {label.ljust(pad)} = {value}\n" for label, value in fields)
    emit = writer if writer is not None else (lambda text: print(text, end=""))
    for line in lines:
        emit(line)


__all__ = ["author", "name", "print_info", "shell_command", "title", "version"]
