from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from estimator.exceptions import PersistenceError, WallNotFoundError
from estimator.models import DrawingElement, EstimateLine, EstimateRecord, WallSurface
from estimator.storage.memory import records_from_lines


def _write_json_atomic(path: Path, payload: Any) -> None:
    """Write to a sibling temp file, then rename over the target."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}-", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fp:
            json.dump(payload, fp, ensure_ascii=False)
        os.replace(tmp_name, path)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise PersistenceError(f"Could not write {path}", {"path": str(path)}) from exc


def _safe_name(wall_id: str) -> str:
    if not wall_id or wall_id in {".", ".."} or "/" in wall_id or "\\" in wall_id:
        raise WallNotFoundError(f"Wall '{wall_id}' not found", {"wall_id": wall_id})
    return wall_id


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise PersistenceError(f"Could not read {path}", {"path": str(path)}) from exc


class FileWallRepository:
    """One JSON document per wall under `<root>/walls/`."""

    def __init__(self, root: Path) -> None:
        self.root = root / "walls"
        self.root.mkdir(parents=True, exist_ok=True)

    def _wall_path(self, wall_id: str) -> Path:
        return self.root / f"{_safe_name(wall_id)}.json"

    def add_wall(self, wall: WallSurface) -> None:
        _write_json_atomic(self._wall_path(wall.id), wall.model_dump(mode="json"))

    def has_wall(self, wall_id: str) -> bool:
        return self._wall_path(wall_id).exists()

    def _load(self, wall_id: str) -> WallSurface:
        path = self._wall_path(wall_id)
        if not path.exists():
            raise WallNotFoundError(f"Wall '{wall_id}' not found", {"wall_id": wall_id})
        data = _read_json(path)
        try:
            return WallSurface.model_validate(data)
        except PydanticValidationError as exc:
            raise PersistenceError(
                f"Stored wall '{wall_id}' is malformed", {"wall_id": wall_id},
            ) from exc

    async def load_wall(self, wall_id: str) -> WallSurface:
        return self._load(wall_id)

    async def save_wall_dimensions(self, wall_id: str, length_m: float, height_m: float) -> WallSurface:
        wall = self._load(wall_id).model_copy(update={"length_m": length_m, "height_m": height_m})
        self.add_wall(wall)
        logger.info("Wall {} resized to {} x {} m", wall_id, length_m, height_m)
        return wall

    async def save_canvas_data(self, wall_id: str, elements: Sequence[DrawingElement]) -> None:
        wall = self._load(wall_id).model_copy(update={"canvas_data": list(elements)})
        self.add_wall(wall)
        logger.info("Saved {} element(s) for wall {}", len(elements), wall_id)


class FileEstimateRepository:
    """All estimate rows of a wall live in one JSON file, replaced atomically."""

    def __init__(self, root: Path) -> None:
        self.root = root / "estimates"
        self.root.mkdir(parents=True, exist_ok=True)

    def _rows_path(self, wall_id: str) -> Path:
        return self.root / f"{_safe_name(wall_id)}.json"

    async def replace_estimates(
        self, wall_id: str, lines: Sequence[EstimateLine], notes: str = "",
    ) -> list[EstimateRecord]:
        records = records_from_lines(wall_id, lines, notes)
        _write_json_atomic(
            self._rows_path(wall_id),
            [r.model_dump(mode="json") for r in records],
        )
        logger.info("Stored {} estimate row(s) for wall {}", len(records), wall_id)
        return records

    async def list_estimates(self, wall_id: str) -> list[EstimateRecord]:
        path = self._rows_path(wall_id)
        if not path.exists():
            return []
        data = _read_json(path)
        try:
            return [EstimateRecord.model_validate(row) for row in data]
        except PydanticValidationError as exc:
            raise PersistenceError(
                f"Stored estimates for wall '{wall_id}' are malformed", {"wall_id": wall_id},
            ) from exc


__all__ = ["FileWallRepository", "FileEstimateRepository"]
