"""Translation of SQLAlchemy exceptions into registry storage errors."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from guardianbee.domain.errors import DuplicateCase, RegistryWriteError, StorageUnavailable

if TYPE_CHECKING:
    from collections.abc import Iterator


@contextmanager
def translate_storage_errors(*, dedup_key: str | None = None) -> Iterator[None]:
    """Raise domain storage errors for SQLAlchemy failures inside the block.

    An integrity error becomes :class:`DuplicateCase` when ``dedup_key`` names
    the row being written, otherwise a :class:`RegistryWriteError`.
    """

    try:
        yield
    except IntegrityError as exc:
        if dedup_key is not None:
            raise DuplicateCase(dedup_key) from exc
        raise RegistryWriteError(str(exc.orig)) from exc
    except OperationalError as exc:
        raise StorageUnavailable(str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        raise RegistryWriteError(str(exc)) from exc
