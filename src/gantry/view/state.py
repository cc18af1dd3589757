"""Per-invocation report options, set once from config and global CLI flags."""

# SPDX-License-Identifier: MIT

from contextvars import ContextVar

_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)
_no_wrap_var: ContextVar[bool] = ContextVar("no_wrap", default=False)


def set_show_header(value: bool) -> None:
    _show_header_var.set(value)


def get_show_header() -> bool:
    return _show_header_var.get()


def set_no_wrap(value: bool) -> None:
    """Truncate long titles in report tables instead of wrapping them."""
    _no_wrap_var.set(value)


def get_no_wrap() -> bool:
    return _no_wrap_var.get()
