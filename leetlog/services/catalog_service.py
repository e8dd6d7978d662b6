# leetlog/services/catalog_service.py
import json
import random
from typing import Dict, Iterable, List, Optional, Union
from pydantic import ValidationError

from leetlog.exceptions import InvalidInput
from leetlog.models.enums import DifficultyLevel
from leetlog.models.problem import Problem
from leetlog.utils.logger import logger
from leetlog.utils.config import settings

PROBLEM_URL_TEMPLATE = "https://leetcode.com/problems/{slug}/"


def normalize_problem_id(problem_id: Union[str, int]) -> str:
    """Ids arrive as strings or ints; compare them in one canonical form."""
    return str(problem_id).strip()


def problem_url(slug: str) -> str:
    return PROBLEM_URL_TEMPLATE.format(slug=slug)


def _parse_row(row: dict) -> Problem:
    # LeetCode dump layout: {"stat": {...}, "difficulty": {"level": n}, "paid_only": bool}
    if "stat" in row:
        stat = row["stat"]
        return Problem(
            id=int(stat["frontend_question_id"]),
            title=stat["question__title"].strip(),
            slug=stat["question__title_slug"].strip(),
            difficulty_level=row["difficulty"]["level"],
            paid_only=bool(row.get("paid_only", False)),
        )
    return Problem(
        id=int(row["id"]),
        title=row["title"].strip(),
        slug=row["slug"].strip(),
        difficulty_level=row["difficultyLevel"],
        paid_only=bool(row.get("paidOnly", False)),
    )


class CatalogService:
    def __init__(self):
        self.problems: List[Problem] = []
        self.problems_by_id: Dict[str, Problem] = {}
        logger.info("CatalogService initialized (data loading deferred).")

    def load_problems(self, json_path: Optional[str] = None):
        """Loads the problem catalog from the specified JSON path."""
        json_path = json_path if json_path is not None else settings.CATALOG_FILE_PATH
        try:
            with open(json_path, mode="r", encoding="utf-8") as catalog_file:
                payload = json.load(catalog_file)
        except FileNotFoundError:
            logger.error(f"Problem catalog file not found at: {json_path}")
            self.set_problems([])
            return
        except json.JSONDecodeError as e:
            logger.error(f"Problem catalog at {json_path} is not valid JSON: {e}")
            self.set_problems([])
            return

        rows = payload.get("stat_status_pairs", []) if isinstance(payload, dict) else payload
        problems = []
        for row in rows:
            try:
                problems.append(_parse_row(row))
            except (KeyError, TypeError, ValueError, ValidationError) as e:
                logger.error(f"Skipping catalog row {row!r}: {e}")
        self.set_problems(problems)

        logger.info(f"Loaded {len(self.problems)} problems from {json_path}.")
        if not self.problems:
            logger.warning(f"No problems loaded from {json_path}. Check the file format and content.")

    def set_problems(self, problems: Iterable[Problem]):
        """Replaces the index. Later duplicates of an id are ignored."""
        self.problems = []
        self.problems_by_id = {}
        for problem in problems:
            key = normalize_problem_id(problem.id)
            if key in self.problems_by_id:
                logger.warning(f"Duplicate catalog id {key}; keeping the first occurrence.")
                continue
            self.problems.append(problem)
            self.problems_by_id[key] = problem

    def get_all_problems(self) -> List[Problem]:
        return self.problems

    def get_problem_by_id(self, problem_id: Union[str, int]) -> Optional[Problem]:
        return self.problems_by_id.get(normalize_problem_id(problem_id))

    def pick_random_problem(
        self,
        difficulty: Optional[str] = None,
        exclude_ids: Iterable[str] = (),
        rng: Optional[random.Random] = None,
    ) -> Optional[Problem]:
        """
        Picks a free (non paid-only) problem uniformly at random, optionally
        restricted to a difficulty label and skipping ids in `exclude_ids`.
        Returns None when nothing is left to pick.
        """
        excluded = {normalize_problem_id(pid) for pid in exclude_ids}
        try:
            level = DifficultyLevel.from_label(difficulty) if difficulty else None
        except ValueError as e:
            raise InvalidInput(str(e))
        pool = [
            p for p in self.problems
            if not p.paid_only
            and normalize_problem_id(p.id) not in excluded
            and (level is None or p.difficulty_level == level)
        ]
        if not pool:
            return None
        return (rng or random).choice(pool)


# Instantiate the service globally; main.py loads it at startup
catalog_service = CatalogService()
