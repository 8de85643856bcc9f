import asyncio
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional, TypeVar

import aiohttp
import requests

from networkable_sdk.config import MAX_WORKERS
from networkable_sdk.utils.logging import get_logger

logger = get_logger("http.session")

R = TypeVar("R")


class SessionManager:
    """Owns the shared `requests` session and the thread pool sending requests on it.

    Both are created on first use. `invalidate_and_cancel()` drops them and the
    next use creates new ones.
    """

    def __init__(self, max_workers: int = MAX_WORKERS):
        self.__max_workers = max_workers
        self.__lock = threading.Lock()
        self.__session: Optional[requests.Session] = None
        self.__executor: Optional[ThreadPoolExecutor] = None
        self.__generation = 0

    @property
    def session(self) -> requests.Session:
        with self.__lock:
            return self.__ensure_session()

    def submit(self, task: Callable[[requests.Session, int], R]) -> "Future[R]":
        """Run `task(session, generation)` in the thread pool.

        `generation` counts the invalidations seen so far. A task can pass it to
        `is_current()` to find out whether it was cancelled while running.

        Args:
            task: Callable receiving the current session and generation.

        Returns:
            Future resolving to the task result.
        """
        with self.__lock:
            session = self.__ensure_session()
            if self.__executor is None:
                self.__executor = ThreadPoolExecutor(
                    max_workers=self.__max_workers,
                    thread_name_prefix="networkable",
                )
            return self.__executor.submit(task, session, self.__generation)

    def is_current(self, generation: int) -> bool:
        with self.__lock:
            return generation == self.__generation

    def invalidate_and_cancel(self) -> None:
        """Close the session and cancel every request submitted so far.

        Requests that have not started are dropped from the pool. Requests
        already running see a stale generation once their response arrives.
        """
        with self.__lock:
            session, executor = self.__session, self.__executor
            self.__session, self.__executor = None, None
            self.__generation += 1
        if executor is not None:
            executor.shutdown(wait=False, cancel_futures=True)
        if session is not None:
            session.close()
            logger.debug("HTTP session invalidated.")

    def __ensure_session(self) -> requests.Session:
        if self.__session is None:
            self.__session = requests.Session()
            logger.debug("Created HTTP session.")
        return self.__session


class AsyncSessionManager:
    """Owns the shared `aiohttp` session.

    The session is bound to the event loop it was created in; using the manager
    from another loop creates a new session.
    """

    def __init__(self):
        self.__session: Optional[aiohttp.ClientSession] = None
        self.__loop: Optional[asyncio.AbstractEventLoop] = None

    def get_session(self) -> aiohttp.ClientSession:
        """Return the current session, creating it if needed.

        Must be called from a running event loop. A session still open in
        another event loop is closed there when that loop is running, and
        dropped otherwise.
        """
        loop = asyncio.get_running_loop()
        if self.__session is None or self.__session.closed or self.__loop is not loop:
            if self.__session is not None and not self.__session.closed:
                self.__release_foreign_session()
            self.__session = aiohttp.ClientSession()
            self.__loop = loop
            logger.debug("Created async HTTP session.")
        return self.__session

    def __release_foreign_session(self) -> None:
        session, session_loop = self.__session, self.__loop
        if session_loop is not None and session_loop.is_running():
            asyncio.run_coroutine_threadsafe(session.close(), session_loop)
            logger.debug("Closing async HTTP session of another event loop.")
            return None
        logger.debug(
            "Dropping async HTTP session of an event loop which is no longer running."
        )

    async def invalidate_and_cancel(self) -> None:
        """Close the session, failing every request still in flight on it."""
        session, self.__session, self.__loop = self.__session, None, None
        if session is not None and not session.closed:
            await session.close()
            logger.debug("Async HTTP session invalidated.")


DEFAULT_SESSION_MANAGER = SessionManager()
DEFAULT_ASYNC_SESSION_MANAGER = AsyncSessionManager()
