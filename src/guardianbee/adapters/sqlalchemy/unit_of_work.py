"""SQLAlchemy-backed unit of work for the case registry."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from guardianbee.adapters.sqlalchemy.errors import translate_storage_errors
from guardianbee.adapters.sqlalchemy.mappings import start_mappers
from guardianbee.adapters.sqlalchemy.migrations import upgrade_head
from guardianbee.adapters.sqlalchemy.repositories import (
    SqlAlchemyCaseRepository,
    SqlAlchemyReportRepository,
    SqlAlchemySearchLogRepository,
    SqlAlchemySyncLogRepository,
)
from guardianbee.common.storage import get_database_uri
from guardianbee.domain.ports.unit_of_work import RegistryRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)

_NOT_STARTED = (
    "Registry storage is not initialised; call "
    "guardianbee.adapters.sqlalchemy.unit_of_work.startup() first."
)


class StartupError(RuntimeError):
    """Raised when the registry store is used before :func:`startup` (or twice)."""


class _RegistryStore:
    """Process-wide engine and the session factory bound to it."""

    def __init__(self) -> None:
        self.engine: Engine | None = None
        self._sessions: sessionmaker[Session] | None = None

    def bind(self, engine: Engine | None) -> None:
        self.engine = engine
        self._sessions = (
            sessionmaker(bind=engine, expire_on_commit=False) if engine is not None else None
        )

    def open_session(self) -> Session:
        if self._sessions is None:
            raise StartupError(_NOT_STARTED)
        return self._sessions()


_STORE = _RegistryStore()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Create (or adopt) the engine, migrate the schema and prepare sessions."""

    if _STORE.engine is not None and not force:
        raise StartupError("Registry storage already initialised; pass force=True to rebind.")

    resolved = engine or create_engine(database_uri or get_database_uri(), future=True)
    start_mappers()
    with translate_storage_errors():
        upgrade_head(engine=resolved)
    _STORE.bind(resolved)
    log.debug("Registry storage ready at %s", resolved.url)


def is_started() -> bool:
    return _STORE.engine is not None


def shutdown() -> None:
    """Dispose the engine; later units of work fail until the next :func:`startup`."""

    if _STORE.engine is not None:
        _STORE.engine.dispose()
    _STORE.bind(None)


class SqlAlchemyRegistryUnitOfWork:
    """One session over every registry repository; rolled back when the block raises."""

    def __init__(self) -> None:
        if not is_started():
            raise StartupError(_NOT_STARTED)
        self._session: Session | None = None
        self._repositories: RegistryRepositories | None = None

    def __enter__(self) -> SqlAlchemyRegistryUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work is already open")
        self._session = _STORE.open_session()
        self._repositories = RegistryRepositories(
            cases=SqlAlchemyCaseRepository(self._session),
            reports=SqlAlchemyReportRepository(self._session),
            sync_logs=SqlAlchemySyncLogRepository(self._session),
            search_logs=SqlAlchemySearchLogRepository(self._session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        if exc_type is not None:
            session.rollback()
        session.close()
        self._session = None
        self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work used outside its with-block")
        return self._session

    @property
    def repositories(self) -> RegistryRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work used outside its with-block")
        return self._repositories

    def commit(self) -> None:
        with translate_storage_errors():
            self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from guardianbee.domain.ports.unit_of_work import RegistryUnitOfWork

    _uow_check: RegistryUnitOfWork = SqlAlchemyRegistryUnitOfWork()
