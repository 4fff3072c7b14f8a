"""Translate core failures into CLI errors."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import click

from stockflow.domain.exceptions import DomainException, PersistenceError


@contextmanager
def cli_errors() -> Iterator[None]:
    """Business and not-found errors become a one-line message, exit status 1."""
    try:
        yield
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc
    except PersistenceError as exc:
        raise click.ClickException(f"Storage failure: {exc}") from exc
