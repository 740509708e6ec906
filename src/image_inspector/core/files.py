# ABOUTME: Seed list loading and broken-id report writing
# ABOUTME: Seeds are a JSON array of strings; the report is newline-joined ids

from collections.abc import Iterable
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

_SEED_LIST = TypeAdapter(list[str])


class SeedFileError(Exception):
    """Raised when the seed file is missing or is not a JSON array of strings."""


def load_seed_ids(path: Path | str) -> list[str]:
    """Load seed content ids from a JSON array file."""
    path = Path(path)
    try:
        return _SEED_LIST.validate_json(path.read_bytes())
    except OSError as e:
        raise SeedFileError(f"cannot read seed file {path}: {e}") from e
    except ValidationError as e:
        raise SeedFileError(f"{path} must hold a JSON array of strings: {e}") from e


def write_broken_report(path: Path | str, ids: Iterable[str]) -> Path:
    """Write failing ids one per line, without a trailing newline."""
    path = Path(path)
    path.write_text("\n".join(ids), encoding="utf-8")
    return path
