# leetlog/state_manager.py
import asyncio
from contextlib import asynccontextmanager
from typing import Dict, List, Optional, Union

from leetlog.exceptions import ActivityLogError
from leetlog.models.log import ActivityLog, LogEntry
from leetlog.models.stats import (
    ChartPoint,
    DayStats,
    DifficultyBreakdown,
    LeaderboardRow,
    ProfileSummary,
    WindowStats,
)
from leetlog.models.problem import Problem
from leetlog.services import activity_log
from leetlog.services.catalog_service import CatalogService, catalog_service
from leetlog.services.leaderboard import compute_leaderboard
from leetlog.services.user_store import UserStore
from leetlog.utils.dates import today_key
from leetlog.utils.logger import logger


class ActivityService:
    """
    Binds the engine to a user store and the catalog. Appends run as
    load -> append -> save under a lock per user, so two logs for the same
    user cannot overwrite each other. Reads take no lock.

    A user's lock only lives while some call holds or awaits it, so the
    table stays as large as the number of users logging at that moment.
    """

    def __init__(self, catalog: CatalogService, store: Optional[UserStore] = None):
        self.catalog = catalog
        self._store = store
        self._locks: Dict[str, asyncio.Lock] = {}
        self._lock_holders: Dict[str, int] = {}
        logger.info("ActivityService initialized (store assignment deferred).")

    @property
    def store(self) -> UserStore:
        if self._store is None:
            raise RuntimeError("ActivityService has no user store; call use_store() at startup.")
        return self._store

    def use_store(self, store: UserStore):
        self._store = store

    @asynccontextmanager
    async def _user_lock(self, user_id: str):
        lock = self._locks.setdefault(user_id, asyncio.Lock())
        self._lock_holders[user_id] = self._lock_holders.get(user_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_holders[user_id] -= 1
            if self._lock_holders[user_id] == 0:
                del self._lock_holders[user_id]
                del self._locks[user_id]

    async def get_log(self, user_id: str) -> ActivityLog:
        return await self.store.load(user_id)

    async def log_problem(
        self,
        user_id: str,
        problem_id: Union[str, int],
        time_taken: Union[str, int, float],
        looked_up: bool,
        date: Optional[str] = None,
    ) -> LogEntry:
        """Logs a solved problem for `user_id` on `date` (today by default)."""
        date = date or today_key()
        async with self._user_lock(user_id):
            log = await self.store.load(user_id)
            try:
                updated, entry = activity_log.append_entry(
                    log, date, problem_id, time_taken, looked_up, self.catalog.get_problem_by_id
                )
            except ActivityLogError as e:
                logger.info(f"Rejected log for user '{user_id}' problem {problem_id!r}: {e}")
                raise
            await self.store.save(user_id, updated)
        logger.info(f"User '{user_id}' logged problem #{entry.problem_id} on {date} ({entry.time_taken:g} min).")
        return entry

    async def streak(self, user_id: str, reference_date: Optional[str] = None) -> int:
        log = await self.store.load(user_id)
        return activity_log.compute_streak(log, reference_date or today_key())

    async def window_stats(self, user_id: str, window_days: int, reference_date: Optional[str] = None) -> WindowStats:
        log = await self.store.load(user_id)
        return activity_log.compute_window_stats(log, reference_date or today_key(), window_days)

    async def day_stats(self, user_id: str, date: Optional[str] = None) -> Optional[DayStats]:
        log = await self.store.load(user_id)
        return activity_log.compute_day_stats(log, date or today_key())

    async def difficulty_breakdown(self, user_id: str) -> DifficultyBreakdown:
        log = await self.store.load(user_id)
        return activity_log.compute_difficulty_breakdown(log, self.catalog.get_problem_by_id)

    async def chart_series(self, user_id: str, window_days: int, reference_date: Optional[str] = None) -> List[ChartPoint]:
        log = await self.store.load(user_id)
        return activity_log.compute_chart_series(log, reference_date or today_key(), window_days)

    async def profile(self, user_id: str, today: Optional[str] = None) -> ProfileSummary:
        log = await self.store.load(user_id)
        return activity_log.compute_profile_summary(log, today or today_key())

    async def random_unsolved(self, user_id: Optional[str], difficulty: Optional[str] = None) -> Optional[Problem]:
        solved = activity_log.solved_problem_ids(await self.store.load(user_id)) if user_id else set()
        return self.catalog.pick_random_problem(difficulty=difficulty, exclude_ids=solved)

    async def leaderboard(self, reference_date: Optional[str] = None) -> List[LeaderboardRow]:
        return await compute_leaderboard(self.store, reference_date or today_key())


# Instantiate the service globally; main.py assigns the store at startup
activity_service = ActivityService(catalog_service)


def get_activity_service() -> ActivityService:
    """Dependency hook so tests can swap in their own service."""
    return activity_service
