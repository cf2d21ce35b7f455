import logging

import pytest
from loguru import logger

from ytmate.core import logging as logging_module
from ytmate.core.logging import InterceptHandler, setup_logging


@pytest.fixture
def captured(monkeypatch):
    monkeypatch.setattr(logging_module.settings, "LOG_FILE", None)
    setup_logging()
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(sink_id)


def test_setup_logging_intercepts_stdlib(captured):
    assert all(isinstance(h, InterceptHandler) for h in logging.root.handlers)

    logging.getLogger("uvicorn.error").warning("server started")

    record = next(r for r in captured if r["message"] == "server started")
    assert record["level"].name == "WARNING"
    assert record["extra"]["request_id"] == "N/A"


def test_setup_logging_keeps_request_id_from_context(captured):
    with logger.contextualize(request_id="req-1"):
        logger.info("inside request")

    record = next(r for r in captured if r["message"] == "inside request")
    assert record["extra"]["request_id"] == "req-1"


def test_setup_logging_writes_file_sink(monkeypatch, tmp_path):
    log_file = tmp_path / "ytmate.log"
    monkeypatch.setattr(logging_module.settings, "LOG_FILE", str(log_file))

    setup_logging()
    logger.info("to file")
    logger.complete()
    logger.remove()

    assert "to file" in log_file.read_text()
