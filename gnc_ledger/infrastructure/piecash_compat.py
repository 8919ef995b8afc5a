"""Helpers to import piecash and open books with it."""

from __future__ import annotations

import inspect
import warnings
from pathlib import Path
from urllib.parse import urlparse

from sqlalchemy.exc import SAWarning

_PIECASH = None


def _patch_declarative_registry() -> None:
    """Drop the ``constructor`` keyword piecash passes to newer SQLAlchemy."""
    try:
        from sqlalchemy.orm import decl_api
    except ImportError:
        return

    generate_base = decl_api.registry.generate_base
    if "constructor" in inspect.signature(generate_base).parameters:
        return
    if getattr(generate_base, "_ledger_patched", False):
        return

    def _generate_base(self, *args, **kwargs):
        kwargs.pop("constructor", None)
        return generate_base(self, *args, **kwargs)

    _generate_base._ledger_patched = True  # type: ignore[attr-defined]
    decl_api.registry.generate_base = _generate_base


def load_piecash():
    """Import piecash once, silencing its SQLAlchemy warnings.

    Returns:
        module: The imported piecash module.

    Raises:
        ImportError: If piecash is not installed.
    """
    global _PIECASH
    if _PIECASH is None:
        _patch_declarative_registry()
        warnings.filterwarnings("ignore", category=SAWarning)
        import piecash

        _PIECASH = piecash
    return _PIECASH


def split_book_location(book_path: Path | str) -> tuple[str | None, str | None]:
    """Return ``(sqlite_file, uri)`` for a path or database URI.

    Args:
        book_path: Filesystem path, ``file://`` URI or database URI.

    Returns:
        tuple[str | None, str | None]: Exactly one of the two is set.
    """
    if isinstance(book_path, Path):
        return str(book_path), None
    parsed = urlparse(book_path)
    if parsed.scheme and parsed.scheme != "file":
        return None, book_path
    raw = parsed.path if parsed.scheme == "file" else book_path
    return str(Path(raw).expanduser().resolve()), None


def open_piecash_book(
    piecash,
    book_path: Path | str,
    *,
    readonly: bool = True,
    open_if_lock: bool = True,
    check_exists: bool = False,
):
    """Open a piecash book read-only from a filesystem path or URI."""
    sqlite_file, uri = split_book_location(book_path)
    return piecash.open_book(
        sqlite_file=sqlite_file,
        uri_conn=uri,
        readonly=readonly,
        open_if_lock=open_if_lock,
        check_exists=check_exists,
    )


__all__ = ["load_piecash", "open_piecash_book", "split_book_location"]
