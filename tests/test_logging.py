"""Tests for the swarm logging setup."""
import logging

from swarm import setup_logging


class TestSetupLogging:

    def teardown_method(self):
        logger = logging.getLogger("swarm")
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_console_handler(self):
        logger = setup_logging(logging.DEBUG)
        assert logger.name == "swarm"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_repeat_setup_does_not_duplicate(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        path = tmp_path / "swarm.log"
        logger = setup_logging(logging.INFO, log_file=str(path))
        logging.getLogger("swarm.swarm").info("flock ready")
        for handler in logger.handlers:
            handler.flush()
        assert "flock ready" in path.read_text(encoding="utf-8")
