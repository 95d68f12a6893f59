import json
import logging

import pytest


def step_record(index, blocks, algo="first_fit", op="malloc", highlight="0x1000"):
    return {"step": index, "algo": algo, "op": op, "highlight": highlight, "blocks": blocks}


@pytest.fixture
def history_file(tmp_path):
    records = [
        step_record(0, [{"addr": "0x1000", "size": 4096, "is_free": True}], op="init"),
        step_record(1, [
            {"addr": "0x1000", "size": 100, "is_free": False},
            {"addr": "0x1064", "size": 3996, "is_free": True},
        ]),
        step_record(2, [
            {"addr": "0x1000", "size": 100, "is_free": False},
            {"addr": "0x1064", "size": 500, "is_free": False},
            {"addr": "0x1258", "size": 3496, "is_free": True},
        ], highlight="0x1064"),
    ]
    path = tmp_path / "history.jsonl"
    path.write_text("\n".join(json.dumps(r) for r in records) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def results_file(tmp_path):
    path = tmp_path / "results.json"
    path.write_text(json.dumps([
        {"name": "first_fit", "time": 0.0123, "total_blocks": 42},
        {"name": "best_fit", "time": 0.5, "total_blocks": 17},
        {"name": "worst_fit", "time": 1.25, "total_blocks": 60},
    ]), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    from heapviz_logging import PACKAGES
    for name in PACKAGES:
        logging.getLogger(name).handlers.clear()
        logging.getLogger(name).setLevel(logging.NOTSET)
