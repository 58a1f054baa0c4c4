"""
Version ledger for updatecheck.

One small JSON file per application records the weekday of the last
successful check. It is a best-effort cache: reads never raise, and a
missing or corrupt file simply means "never checked".
"""

import json
import logging
import os
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from updatecheck.config import ensure_config_dir, get_config_dir
from updatecheck.errors import LedgerReadError, LedgerWriteError, UpdateCheckError

logger = logging.getLogger(__name__)

# Owner read/write only
FILE_MODE = 0o600


class LedgerRecord(BaseModel):
    """Last check weekday, 0 = Sunday. None means never checked."""

    model_config = ConfigDict(populate_by_name=True)

    last_check_for_updates: int | None = Field(
        default=None, alias="lastCheckForUpdates", ge=0, le=6
    )


def current_weekday(now: datetime | None = None) -> int:
    """Today's weekday with Sunday as 0, matching the on-disk format."""
    now = now or datetime.now()
    return now.isoweekday() % 7


def ledger_path(application: str) -> Path:
    """Get the ledger file for an application."""
    return get_config_dir() / f"{application}-update"


def _read_record(path: Path) -> LedgerRecord:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return LedgerRecord.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise LedgerReadError(f"cannot read {path}: {e}") from e


def load(application: str) -> LedgerRecord:
    """
    Load the ledger record for an application.

    Any failure (config dir unavailable, missing file, bad JSON) is logged
    at debug level and yields an empty record.
    """
    try:
        ensure_config_dir()
        path = ledger_path(application)
        if not path.exists():
            logger.debug(f"version config file does not exist: {path}")
            return LedgerRecord()
        return _read_record(path)
    except (UpdateCheckError, OSError) as e:
        logger.debug(f"error loading version config: {e}")
        return LedgerRecord()


def save(application: str, record: LedgerRecord) -> None:
    """Write the ledger record, readable by the owning user only."""
    ensure_config_dir()
    path = ledger_path(application)
    data = record.model_dump_json(by_alias=True)

    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        # O_CREAT mode is ignored for files that already exist
        os.chmod(path, FILE_MODE)
    except OSError as e:
        raise LedgerWriteError(f"cannot write {path}: {e}") from e


def reset(application: str) -> bool:
    """Remove the ledger record. Returns True if a file was deleted."""
    path = ledger_path(application)
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        raise LedgerWriteError(f"cannot remove {path}: {e}") from e
    return True
