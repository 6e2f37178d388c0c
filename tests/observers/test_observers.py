import json
import logging

from fabricctl.logging.log import init_logging
from fabricctl.observers.dispatcher import EventBus
from fabricctl.observers.events import InletCreated, InletFailed, NodeDeleted, new_ctx
from fabricctl.observers.jsonfile import JsonFileObserver
from fabricctl.observers.logger import LoggerObserver


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


def test_new_ctx_reuses_run_id():
    ctx = new_ctx("node delete", run_id="r-1")
    assert ctx["run_id"] == "r-1"
    assert ctx["command"] == "node delete"
    assert ctx["ts"].endswith("Z")


def test_json_file_observer_appends_lines(tmp_path):
    path = tmp_path / "events" / "r-1.jsonl"
    ob = JsonFileObserver(path)
    ctx = new_ctx("tcp-inlet create", run_id="r-1")
    ob.notify(InletCreated(**ctx, node="n1", bind_addr="127.0.0.1:5000", attempts=2))
    ob.notify(InletFailed(**ctx, node="n1", error="boom"))

    lines = [json.loads(l) for l in path.read_text().splitlines()]
    assert [l["type"] for l in lines] == ["InletCreated", "InletFailed"]
    assert lines[0]["attempts"] == 2
    assert lines[1]["run_id"] == "r-1"


def test_logger_observer_levels():
    logger = logging.getLogger("fabricctl.test-observer")
    logger.setLevel(logging.DEBUG)
    handler = ListHandler()
    logger.addHandler(handler)
    try:
        ob = LoggerObserver(logger)
        ctx = new_ctx("node delete")
        ob.notify(NodeDeleted(**ctx, name="n1", force=False))
        ob.notify(InletFailed(**ctx, node="n1", error="boom"))
    finally:
        logger.removeHandler(handler)

    levels = [r.levelno for r in handler.records]
    assert levels == [logging.DEBUG, logging.INFO]
    assert "name=n1" in handler.records[0].getMessage()
    assert "run_id" not in handler.records[0].getMessage()


def test_bus_isolates_failing_observer(capture):
    class Broken:
        def notify(self, ev):
            raise RuntimeError("observer down")

    bus = EventBus([Broken(), capture])
    ev = NodeDeleted(**new_ctx("node delete"), name="n1", force=True)
    bus.emit(ev)
    assert capture.events == [ev]


def test_init_logging_writes_run_file(tmp_path):
    logger, run_id, log_path = init_logging(base_dir=tmp_path, name="fabricctl-test")
    logger.debug("hello from the test")
    for h in logger.handlers:
        h.flush()

    assert log_path.parent == tmp_path
    assert run_id in log_path.name
    assert "hello from the test" in log_path.read_text()

    # re-initialising replaces the handlers instead of stacking them
    logger2, _, _ = init_logging(base_dir=tmp_path, name="fabricctl-test")
    assert logger2 is logger
    assert len(logger.handlers) == 2
    for h in list(logger.handlers):
        h.close()
    logger.handlers.clear()
