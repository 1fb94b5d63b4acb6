import utils.logger as app_logging
from utils.logger import add_file_handler, setup_logger


def test_file_handler_reaches_existing_and_later_loggers(tmp_path):
    log_path = tmp_path / "app.log"
    existing = setup_logger("LOGGER_TEST_EXISTING")
    handler = add_file_handler(str(log_path))
    later = setup_logger("LOGGER_TEST_LATER")
    try:
        existing.info("first message")
        later.info("second message")
        handler.flush()

        lines = log_path.read_text().splitlines()
        assert len(lines) == 2
        assert "[LOGGER_TEST_EXISTING]: first message" in lines[0]
        assert "[LOGGER_TEST_LATER]: second message" in lines[1]
        assert existing.propagate is False
        assert later.propagate is False
    finally:
        for logger in app_logging._loggers:
            logger.removeHandler(handler)
        app_logging._file_handlers.remove(handler)
        handler.close()
