# leetlog/services/featured_problem.py
import random
from datetime import datetime, timedelta, timezone
from typing import Optional

from leetlog.models.stats import FeaturedProblem
from leetlog.services.catalog_service import CatalogService, catalog_service
from leetlog.utils.config import settings
from leetlog.utils.logger import logger


class FeaturedProblemService:
    """
    Holds the problem currently advertised as "competing". The pick is
    re-rolled lazily on read once it is older than `refresh_interval`.
    """

    def __init__(self, catalog: CatalogService, refresh_interval: timedelta | None = None,
                 rng: random.Random | None = None):
        self.catalog = catalog
        self.refresh_interval = refresh_interval or timedelta(minutes=settings.FEATURED_REFRESH_MINUTES)
        self.rng = rng or random.Random()
        self._featured: Optional[FeaturedProblem] = None

    def refresh(self, now: datetime | None = None) -> Optional[FeaturedProblem]:
        now = now or datetime.now(timezone.utc)
        problem = self.catalog.pick_random_problem(rng=self.rng)
        if problem is None:
            logger.warning("No free problems in the catalog; nothing to feature.")
            self._featured = None
            return None
        self._featured = FeaturedProblem(problem=problem, selected_at=now)
        logger.info(f"Featured problem is now #{problem.id} ({problem.title}).")
        return self._featured

    def current(self, now: datetime | None = None) -> Optional[FeaturedProblem]:
        now = now or datetime.now(timezone.utc)
        if self._featured is None or now - self._featured.selected_at >= self.refresh_interval:
            return self.refresh(now)
        return self._featured


# Instantiate the service globally, sharing the catalog index
featured_problem_service = FeaturedProblemService(catalog_service)
