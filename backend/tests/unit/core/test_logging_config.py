import json
import logging

from sweet_shop.core.logging_config import ConsoleFormatter, JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="sweet_shop.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg="Stock low",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_context():
    output = json.loads(JSONFormatter().format(_record(context={"sweet_id": 3})))

    assert output["level"] == "WARNING"
    assert output["message"] == "Stock low"
    assert output["context"] == {"sweet_id": 3}


def test_console_formatter_leaves_record_untouched():
    record = _record(context={"sweet_id": 3})

    line = ConsoleFormatter("%(levelname)s | %(message)s").format(record)

    assert "Stock low" in line
    assert '"sweet_id": 3' in line
    assert record.levelname == "WARNING"


def test_setup_logging_writes_rotating_files(tmp_path):
    root = logging.getLogger()
    previous_handlers = root.handlers[:]
    previous_level = root.level
    try:
        setup_logging(log_level="INFO", log_to_file=True, log_dir=tmp_path)
        logging.getLogger("sweet_shop.test").error("Storage failure")
        for handler in root.handlers:
            handler.flush()

        assert (tmp_path / "app.log").exists()
        errors = (tmp_path / "sweet_shop_errors.log").read_text(encoding="utf-8")
        assert "Storage failure" in errors
    finally:
        for handler in root.handlers[:]:
            handler.close()
            root.removeHandler(handler)
        for handler in previous_handlers:
            root.addHandler(handler)
        root.setLevel(previous_level)
