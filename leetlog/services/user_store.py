"""
User Store

Durable per-user persistence of activity logs. A log is always read and
written whole; there is no partial update.

Backends:
- SqlUserStore: one `activity_logs` row per user holding the JSON document,
  overwritten inside a single transaction.
- FileUserStore: one `<user_id>.json` file per user, replaced atomically by
  writing a temp file in the same directory and renaming it over the target.

Both share the record codec below, which is also the only place legacy
representations (string times, "yes"/"no" flags, integer ids) are accepted.

Usage:
    from leetlog.services.user_store import build_user_store

    store = build_user_store()
    log = await store.load("1234")
    await store.save("1234", log)
"""
import asyncio
import json
import math
import os
import tempfile
from pathlib import Path
from typing import Any, List, Protocol
from urllib.parse import quote, unquote

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.orm import sessionmaker

from leetlog.exceptions import StorageCorruption
from leetlog.models.log import ActivityLog, LogEntry
from leetlog.models.user import ActivityRecord, Base
from leetlog.utils.config import settings
from leetlog.utils.dates import parse_date_key
from leetlog.utils.db import build_engine, build_session_factory
from leetlog.utils.logger import logger

RECORD_SUFFIX = ".json"


# =============================================================================
# Record codec
# =============================================================================


def encode_log(log: ActivityLog) -> dict:
    """Canonical persisted form: numeric `timeTaken`, boolean `lookedUp`."""
    return {
        day: [entry.model_dump(by_alias=True) for entry in entries]
        for day, entries in log.items()
    }


def _normalize_time(identity: str, raw: Any) -> float:
    if isinstance(raw, bool):
        raise ValueError(f"timeTaken must be numeric, got {raw!r}")
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            value = math.nan
        if math.isfinite(value):
            return value
        logger.warning(f"Non-numeric timeTaken {raw!r} in record for '{identity}'; counting it as 0.")
        return 0.0
    raise ValueError(f"timeTaken must be numeric, got {raw!r}")


def _normalize_flag(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.strip().lower() in ("yes", "no"):
        return raw.strip().lower() == "yes"
    raise ValueError(f"lookedUp must be a boolean or 'yes'/'no', got {raw!r}")


def _decode_entry(identity: str, raw: Any) -> LogEntry:
    if not isinstance(raw, dict):
        raise ValueError(f"entry must be an object, got {type(raw).__name__}")
    problem_id = raw["problemId"]
    if isinstance(problem_id, bool) or not isinstance(problem_id, (str, int)):
        raise ValueError(f"problemId must be a string or integer, got {problem_id!r}")
    return LogEntry.model_validate({
        "problemId": str(problem_id).strip(),
        "title": raw["title"],
        "slug": raw["slug"],
        "timeTaken": _normalize_time(identity, raw["timeTaken"]),
        "lookedUp": _normalize_flag(raw["lookedUp"]),
    })


def decode_log(identity: str, payload: Any) -> ActivityLog:
    """Validates a parsed record into an ActivityLog or raises StorageCorruption."""
    if not isinstance(payload, dict):
        raise StorageCorruption(
            f"Stored activity log for '{identity}' is not a mapping.",
            details={"identity": identity},
        )
    log: ActivityLog = {}
    try:
        for day, entries in payload.items():
            parse_date_key(day)
            if not isinstance(entries, list):
                raise ValueError(f"bucket {day} is not a list")
            log[day] = [_decode_entry(identity, raw) for raw in entries]
    except (KeyError, TypeError, ValueError, ValidationError) as e:
        raise StorageCorruption(
            f"Stored activity log for '{identity}' is corrupted: {e}",
            details={"identity": identity},
        ) from e
    return log


def parse_record(identity: str, text: str) -> ActivityLog:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise StorageCorruption(
            f"Stored activity log for '{identity}' is not valid JSON: {e}",
            details={"identity": identity},
        ) from e
    return decode_log(identity, payload)


def dump_record(log: ActivityLog) -> str:
    return json.dumps(encode_log(log), indent=2, ensure_ascii=False)


# =============================================================================
# Backends
# =============================================================================


class UserStore(Protocol):
    async def load(self, identity: str) -> ActivityLog: ...

    async def save(self, identity: str, log: ActivityLog) -> None: ...

    async def list_identities(self) -> List[str]: ...

    async def close(self) -> None: ...


class SqlUserStore:
    """Activity logs stored as JSON documents in the `activity_logs` table."""

    def __init__(self, session_factory: sessionmaker, engine: AsyncEngine | None = None):
        self.session_factory = session_factory
        self.engine = engine

    @classmethod
    def from_url(cls, database_url: str) -> "SqlUserStore":
        engine = build_engine(database_url)
        return cls(build_session_factory(engine), engine=engine)

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()

    async def create_schema(self) -> None:
        async with self.session_factory() as session:
            conn = await session.connection()
            await conn.run_sync(Base.metadata.create_all)
            await session.commit()

    async def load(self, identity: str) -> ActivityLog:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ActivityRecord.document).filter_by(user_id=identity)
            )
            document = result.scalars().first()
        if document is None:
            return {}
        return parse_record(identity, document)

    async def save(self, identity: str, log: ActivityLog) -> None:
        document = dump_record(log)
        async with self.session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    select(ActivityRecord).filter_by(user_id=identity)
                )
                record = result.scalars().first()
                if record is None:
                    logger.info(f"Creating activity record for user '{identity}'.")
                    session.add(ActivityRecord(user_id=identity, document=document, version=1))
                else:
                    record.document = document
                    record.version = (record.version or 0) + 1

    async def list_identities(self) -> List[str]:
        async with self.session_factory() as session:
            result = await session.execute(select(ActivityRecord.user_id))
            return list(result.scalars().all())


class FileUserStore:
    """
    One JSON file per user under `directory`. Identities are percent-encoded
    into file names so any opaque handle maps to a single safe path.
    """

    def __init__(self, directory: str | os.PathLike):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path_for(self, identity: str) -> Path:
        return self.directory / f"{quote(identity, safe='')}{RECORD_SUFFIX}"

    def _read(self, identity: str) -> ActivityLog:
        path = self._path_for(identity)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        return parse_record(identity, text)

    def _write(self, identity: str, log: ActivityLog) -> None:
        target = self._path_for(identity)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=".tmp-", suffix=RECORD_SUFFIX)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                tmp_file.write(dump_record(log))
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _list(self) -> List[str]:
        return [
            unquote(path.name[: -len(RECORD_SUFFIX)])
            for path in self.directory.glob(f"*{RECORD_SUFFIX}")
            if not path.name.startswith(".tmp-")
        ]

    async def load(self, identity: str) -> ActivityLog:
        return await asyncio.to_thread(self._read, identity)

    async def save(self, identity: str, log: ActivityLog) -> None:
        await asyncio.to_thread(self._write, identity, log)

    async def list_identities(self) -> List[str]:
        return await asyncio.to_thread(self._list)

    async def close(self) -> None:
        pass


def build_user_store() -> UserStore:
    """Creates the store selected by `settings.STORE_BACKEND`."""
    if settings.STORE_BACKEND == "files":
        logger.info(f"Using file user store at {settings.USER_DATA_DIR}")
        return FileUserStore(settings.USER_DATA_DIR)
    logger.info(f"Using SQL user store at {settings.database_url}")
    return SqlUserStore.from_url(settings.database_url)
