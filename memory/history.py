from __future__ import annotations
import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

# sizes and counts are unsigned 64-bit in the recorded files
MAX_INT = 2**64 - 1


@dataclass(frozen=True)
class Block:
    address: str
    size: int
    is_free: bool


@dataclass(frozen=True)
class Step:
    index: int
    algorithm_name: str
    operation_label: str
    highlighted_address: str
    blocks: Tuple[Block, ...]


@dataclass(frozen=True)
class BenchmarkRecord:
    name: str
    elapsed_seconds: float
    total_block_count: int


class HistoryLoadError(ValueError):
    """Raised when the step history cannot be read or a line fails to parse."""

    def __init__(self, path: str, reason: str, line_no: Optional[int] = None):
        self.path = path
        self.line_no = line_no
        where = f"{path}:{line_no}" if line_no is not None else path
        super().__init__(f"{where}: {reason}")


def _non_negative_int(v: Any, field: str) -> int:
    # bool is an int subclass; a JSON true/false is not a size
    if isinstance(v, bool) or not isinstance(v, int):
        raise TypeError(f"'{field}' must be an integer, got {type(v).__name__}")
    if v < 0:
        raise ValueError(f"'{field}' must be non-negative, got {v}")
    if v > MAX_INT:
        raise ValueError(f"'{field}' does not fit in 64 bits, got {v}")
    return v


def _string(v: Any, field: str) -> str:
    if not isinstance(v, str):
        raise TypeError(f"'{field}' must be a string, got {type(v).__name__}")
    return v


def parse_block(d: Dict[str, Any]) -> Block:
    is_free = d['is_free']
    if not isinstance(is_free, bool):
        raise TypeError(f"'is_free' must be a boolean, got {type(is_free).__name__}")
    return Block(_string(d['addr'], 'addr'), _non_negative_int(d['size'], 'size'), is_free)


def parse_step(d: Dict[str, Any]) -> Step:
    if not isinstance(d, dict):
        raise TypeError(f"step record must be an object, got {type(d).__name__}")
    blocks = d['blocks']
    if not isinstance(blocks, list):
        raise TypeError(f"'blocks' must be a list, got {type(blocks).__name__}")
    return Step(
        index=_non_negative_int(d['step'], 'step'),
        algorithm_name=_string(d['algo'], 'algo'),
        operation_label=_string(d['op'], 'op'),
        highlighted_address=_string(d['highlight'], 'highlight'),
        blocks=tuple(parse_block(b) for b in blocks),
    )


def iter_history(path: str) -> Iterator[Step]:
    """Yield one Step per non-blank JSONL line.

    Any unreadable file or unparseable line raises HistoryLoadError.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            lines = f.read().splitlines()
    except OSError as exc:
        raise HistoryLoadError(path, f"cannot read history: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise HistoryLoadError(path, f"not UTF-8 text: {exc}") from exc
    for line_no, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            yield parse_step(json.loads(line))
        except KeyError as exc:
            raise HistoryLoadError(path, f"missing field {exc}", line_no) from exc
        except (TypeError, ValueError) as exc:
            # JSONDecodeError is a ValueError
            raise HistoryLoadError(path, str(exc), line_no) from exc


def load_history(path: str) -> Tuple[Step, ...]:
    steps = tuple(iter_history(path))
    logger.debug("Loaded %d steps from %s", len(steps), path)
    return steps


def parse_record(d: Dict[str, Any]) -> BenchmarkRecord:
    t = d['time']
    if isinstance(t, bool) or not isinstance(t, (int, float)):
        raise TypeError(f"'time' must be a number, got {type(t).__name__}")
    try:
        seconds = float(t)
    except OverflowError as exc:
        raise ValueError(f"'time' out of range, got {t}") from exc
    # the statistics view shows whole milliseconds
    if not math.isfinite(seconds * 1000.0):
        raise ValueError(f"'time' must be finite in milliseconds, got {t}")
    if seconds < 0:
        raise ValueError(f"'time' must be non-negative, got {t}")
    return BenchmarkRecord(
        _string(d['name'], 'name'),
        seconds,
        _non_negative_int(d['total_blocks'], 'total_blocks'),
    )


def load_results(path: Optional[str]) -> List[BenchmarkRecord]:
    """Load the benchmark summary; any failure yields an empty list."""
    if not path:
        return []
    try:
        data = json.loads(Path(path).read_text(encoding='utf-8'))
        if not isinstance(data, list):
            raise TypeError(f"expected a JSON array, got {type(data).__name__}")
        records = [parse_record(d) for d in data]
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
        logger.debug("Using empty result set, %s not usable: %s", path, exc)
        return []
    logger.debug("Loaded %d benchmark records from %s", len(records), path)
    return records
