# tests/test_leaderboard.py
import asyncio
import pytest

from leetlog.exceptions import InvalidInput
from leetlog.services.leaderboard import compute_leaderboard
from leetlog.services.user_store import FileUserStore

TODAY = "2024-03-10"

def _day(make_entry, count, start=1):
    return [make_entry(str(pid)) for pid in range(start, start + count)]

@pytest.fixture
def store(tmp_path):
    return FileUserStore(tmp_path)

@pytest.mark.store
class TestLeaderboard:
    def test_ranks_by_count_and_drops_idle_users(self, store, make_entry):
        asyncio.run(store.save("A", {TODAY: _day(make_entry, 3)}))
        asyncio.run(store.save("B", {TODAY: _day(make_entry, 5)}))
        asyncio.run(store.save("C", {"2024-03-09": _day(make_entry, 4)}))
        rows = asyncio.run(compute_leaderboard(store, TODAY))
        assert [(r.identity, r.count_today) for r in rows] == [("B", 5), ("A", 3)]

    def test_ties_are_broken_by_identity(self, store, make_entry):
        for identity in ("zed", "amy", "kim"):
            asyncio.run(store.save(identity, {TODAY: _day(make_entry, 2)}))
        asyncio.run(store.save("top", {TODAY: _day(make_entry, 4)}))
        rows = asyncio.run(compute_leaderboard(store, TODAY))
        assert [r.identity for r in rows] == ["top", "amy", "kim", "zed"]

    def test_empty_board_is_not_an_error(self, store):
        assert asyncio.run(compute_leaderboard(store, TODAY)) == []

    def test_corrupt_record_is_skipped(self, store, make_entry, tmp_path):
        asyncio.run(store.save("good", {TODAY: _day(make_entry, 1)}))
        (tmp_path / "bad.json").write_text("{{{", encoding="utf-8")
        rows = asyncio.run(compute_leaderboard(store, TODAY))
        assert [r.identity for r in rows] == ["good"]

    @pytest.mark.parametrize("bad_date", ["garbage", "2024-W10-7", "2024-02-30"])
    def test_malformed_reference_date_is_rejected(self, store, make_entry, bad_date):
        asyncio.run(store.save("A", {TODAY: _day(make_entry, 1)}))
        with pytest.raises(InvalidInput):
            asyncio.run(compute_leaderboard(store, bad_date))
