import logging
from concurrent.futures import ThreadPoolExecutor, wait
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from catalog.core.errors import StoreError

logger = logging.getLogger(__name__)

StoreCall = Callable[[Session], Any]


class CatalogStore:
    """Explicit handle on the record store.

    Wraps a session factory, the per-request deadline and the worker pool
    used to run independent read queries side by side. Every service takes
    one of these instead of reaching for a module-level session.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        *,
        timeout_seconds: Optional[float] = None,
        max_workers: int = 4,
    ):
        self._session_factory = session_factory
        self.timeout_seconds = timeout_seconds
        self._executor = ThreadPoolExecutor(
            max_workers=max(2, max_workers),
            thread_name_prefix="catalog-store",
        )

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def run(self, call: StoreCall) -> Any:
        try:
            with self.session() as db:
                return call(db)
        except (SQLAlchemyError, OverflowError) as exc:
            raise StoreError(str(exc)) from exc

    def gather(self, *calls: StoreCall) -> list[Any]:
        """Run read-only calls concurrently, one session each.

        Results come back in call order and a failing call re-raises its
        ``StoreError``. A deadline overrun raises ``StoreError`` without
        waiting for stragglers.
        """
        futures = [self._executor.submit(self.run, call) for call in calls]
        _done, pending = wait(futures, timeout=self.timeout_seconds)
        if pending:
            for future in pending:
                future.cancel()
            raise StoreError(
                "store calls exceeded {}s deadline".format(self.timeout_seconds)
            )
        return [future.result() for future in futures]

    def ping(self) -> bool:
        try:
            self.run(lambda db: db.execute(text("SELECT 1")).scalar())
        except StoreError as exc:
            logger.warning("Store ping failed: %s", exc.detail)
            return False
        return True

    def close(self) -> None:
        self._executor.shutdown(wait=False)


__all__ = ["CatalogStore", "StoreCall"]
