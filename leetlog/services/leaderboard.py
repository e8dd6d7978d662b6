# leetlog/services/leaderboard.py
from typing import List

from leetlog.exceptions import StorageCorruption
from leetlog.models.stats import LeaderboardRow
from leetlog.services.activity_log import require_date
from leetlog.services.user_store import UserStore
from leetlog.utils.logger import logger


async def compute_leaderboard(store: UserStore, reference_date: str) -> List[LeaderboardRow]:
    """
    Ranks users by the number of problems logged on `reference_date`.

    Users with nothing logged that day are left out. Equal counts are ordered
    by identity so the board is stable between calls. A corrupt record is
    logged and skipped rather than failing the whole board. A malformed
    `reference_date` raises InvalidInput.
    """
    require_date(reference_date)
    rows = []
    for identity in await store.list_identities():
        try:
            log = await store.load(identity)
        except StorageCorruption as e:
            logger.error(f"Skipping '{identity}' on leaderboard: {e.message}")
            continue
        count = len(log.get(reference_date, []))
        if count > 0:
            rows.append(LeaderboardRow(identity=identity, count_today=count))

    rows.sort(key=lambda row: (-row.count_today, row.identity))
    logger.debug(f"Leaderboard for {reference_date}: {len(rows)} ranked users")
    return rows
