"""
Tests for logging configuration.
"""
import logging


class TestLoggingConfiguration:
    """Test logging setup and configuration."""

    def test_setup_logging_default_level(self, monkeypatch):
        """Test that setup_logging defaults to INFO level."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        from giftcard_bot.logging_config import setup_logging
        setup_logging()

        logger = logging.getLogger("giftcard_bot")
        assert logger.level == logging.INFO

    def test_setup_logging_respects_env_var(self, monkeypatch):
        """Test that LOG_LEVEL env var is respected."""
        monkeypatch.setenv("LOG_LEVEL", "warning")

        from giftcard_bot.logging_config import setup_logging
        setup_logging()

        logger = logging.getLogger("giftcard_bot")
        assert logger.level == logging.WARNING
        setup_logging(level="INFO")

    def test_setup_logging_explicit_level(self):
        """Test that explicit level parameter works."""
        from giftcard_bot.logging_config import setup_logging
        setup_logging(level="ERROR")

        logger = logging.getLogger("giftcard_bot")
        assert logger.level == logging.ERROR
        setup_logging(level="INFO")

    def test_setup_logging_invalid_level_defaults_to_info(self):
        """Test that invalid level falls back to INFO."""
        from giftcard_bot.logging_config import setup_logging
        setup_logging(level="INVALID_LEVEL")

        logger = logging.getLogger("giftcard_bot")
        assert logger.level == logging.INFO

    def test_third_party_loggers_quieted_outside_debug(self):
        from giftcard_bot.logging_config import setup_logging
        setup_logging(level="INFO")

        assert logging.getLogger("uvicorn.access").level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


class TestNoSensitiveDataInLogs:
    """Test that customer contact details are not logged at INFO level or higher."""

    def test_completed_order_logs_no_contact_details(self, caplog, converse, session):
        from giftcard_bot.logging_config import setup_logging
        setup_logging(level="INFO")

        with caplog.at_level(logging.INFO):
            converse(
                session,
                "hi", "1", "birthday", "template:t1", "1000",
                "priya@gmail.com", "Love you!", "confirm",
            )

        info_records = [r for r in caplog.records if r.levelno >= logging.INFO]
        assert info_records
        for record in info_records:
            message = record.getMessage()
            assert "priya@gmail.com" not in message
            assert "Love you!" not in message
            assert "mock.amazon/gift" not in message

    def test_business_lead_logs_no_contact_details(self, caplog, converse, session):
        with caplog.at_level(logging.INFO):
            converse(session, "hi", "2", {
                "kind": "lead",
                "name": "Priya Sharma",
                "company": "Acme Traders",
                "email": "priya@acmetraders.in",
                "phone": "9876543210",
            })

        for record in caplog.records:
            if record.levelno >= logging.INFO:
                message = record.getMessage()
                assert "9876543210" not in message
                assert "priya@acmetraders.in" not in message
