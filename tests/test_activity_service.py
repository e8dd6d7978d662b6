# tests/test_activity_service.py
import asyncio
import pytest

from leetlog.exceptions import DuplicateEntry, ProblemNotFound
from leetlog.services.user_store import FileUserStore
from leetlog.state_manager import ActivityService

TODAY = "2024-03-10"

@pytest.fixture
def service(catalog, tmp_path):
    return ActivityService(catalog, FileUserStore(tmp_path))

@pytest.mark.engine
class TestActivityService:
    def test_log_problem_persists(self, service):
        entry = asyncio.run(service.log_problem("u1", "1", 10, False, date=TODAY))
        assert entry.title == "Two Sum"
        assert asyncio.run(service.get_log("u1")) == {TODAY: [entry]}

    def test_duplicate_leaves_stored_log_unchanged(self, service):
        asyncio.run(service.log_problem("u1", "1", 10, False, date=TODAY))
        before = asyncio.run(service.get_log("u1"))
        with pytest.raises(DuplicateEntry):
            asyncio.run(service.log_problem("u1", 1, 30, True, date=TODAY))
        assert asyncio.run(service.get_log("u1")) == before

    def test_unknown_problem_writes_nothing(self, service, tmp_path):
        with pytest.raises(ProblemNotFound):
            asyncio.run(service.log_problem("u1", "31337", 10, False, date=TODAY))
        assert list(tmp_path.iterdir()) == []

    def test_concurrent_logs_for_one_user_are_not_lost(self, service):
        async def scenario():
            results = await asyncio.gather(
                *(service.log_problem("u1", pid, 5, False, date=TODAY) for pid in ("1", "2", "3", "4", "20")),
            )
            return results, await service.get_log("u1")
        results, log = asyncio.run(scenario())
        assert len(results) == 5
        assert sorted(e.problem_id for e in log[TODAY]) == ["1", "2", "20", "3", "4"]

    def test_concurrent_duplicate_is_logged_once(self, service):
        async def scenario():
            return await asyncio.gather(
                service.log_problem("u1", "1", 5, False, date=TODAY),
                service.log_problem("u1", "1", 5, False, date=TODAY),
                return_exceptions=True,
            )
        outcomes = asyncio.run(scenario())
        assert sum(isinstance(o, DuplicateEntry) for o in outcomes) == 1
        assert len(asyncio.run(service.get_log("u1"))[TODAY]) == 1

    def test_random_unsolved_skips_logged_problems(self, service):
        asyncio.run(service.log_problem("u1", "4", 30, False, date=TODAY))
        for _ in range(10):
            assert asyncio.run(service.random_unsolved("u1", "hard")).id == 42

    def test_reads_use_reference_dates(self, service):
        asyncio.run(service.log_problem("u1", "1", 10, False, date="2024-03-09"))
        asyncio.run(service.log_problem("u1", "2", 20, False, date=TODAY))
        assert asyncio.run(service.streak("u1", TODAY)) == 2
        assert asyncio.run(service.window_stats("u1", 7, TODAY)).total_time == 30
        assert len(asyncio.run(service.chart_series("u1", 7, TODAY))) == 7
        assert asyncio.run(service.profile("u1", TODAY)).first_logged_date == "2024-03-09"
        assert asyncio.run(service.difficulty_breakdown("u1")) == {"Easy": 1, "Medium": 1, "Hard": 0}
        assert [r.identity for r in asyncio.run(service.leaderboard(TODAY))] == ["u1"]

    def test_user_locks_are_released_after_logging(self, service):
        async def scenario():
            await asyncio.gather(
                service.log_problem("u1", "1", 5, False, date=TODAY),
                service.log_problem("u1", "1", 5, False, date=TODAY),
                service.log_problem("u2", "2", 5, False, date=TODAY),
                return_exceptions=True,
            )
        asyncio.run(scenario())
        assert service._locks == {}
        assert service._lock_holders == {}
