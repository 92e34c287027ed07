"""
Tests for logging configuration.
"""
import logging

from prep_kitchen.logging_config import RequestIDFilter, request_id_var, resolve_level, setup_logging


class TestLoggingConfiguration:
    """Test logging setup and configuration."""

    def test_setup_logging_default_level(self, monkeypatch):
        """setup_logging defaults to INFO."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        setup_logging()
        assert logging.getLogger("prep_kitchen").level == logging.INFO

    def test_setup_logging_respects_env_var(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        setup_logging()
        assert logging.getLogger("prep_kitchen").level == logging.WARNING

    def test_setup_logging_explicit_level(self):
        setup_logging(level="ERROR")
        assert logging.getLogger("prep_kitchen").level == logging.ERROR

    def test_invalid_level_falls_back_to_info(self):
        setup_logging(level="INVALID_LEVEL")
        assert logging.getLogger("prep_kitchen").level == logging.INFO

    def test_third_party_loggers_quieted(self):
        setup_logging(level="INFO")
        assert logging.getLogger("openai").level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_debug_logs_not_shown_at_info_level(self, caplog):
        setup_logging(level="INFO")

        with caplog.at_level(logging.INFO):
            logger = logging.getLogger("prep_kitchen.test")
            logger.debug("This should not appear")
            logger.info("This should appear")

        messages = [r.message for r in caplog.records]
        assert "This should not appear" not in messages
        assert "This should appear" in messages

    def test_returns_applied_level(self):
        assert setup_logging(level=" debug ") == "DEBUG"
        assert setup_logging(level="loud") == "INFO"

    def test_root_handlers_carry_request_id_filter(self):
        setup_logging(level="INFO")
        setup_logging(level="INFO")
        for handler in logging.getLogger().handlers:
            filters = [f for f in handler.filters if isinstance(f, RequestIDFilter)]
            assert len(filters) == 1


class TestResolveLevel:

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "error")
        assert resolve_level() == "ERROR"

    def test_unknown_falls_back_to_info(self):
        assert resolve_level("TRACE") == "INFO"


class TestRequestIDFilter:
    """Log records are stamped with the request that produced them."""

    def _record(self):
        return logging.LogRecord("prep_kitchen.test", logging.INFO, __file__, 1, "msg", None, None)

    def test_outside_request(self):
        record = self._record()
        assert RequestIDFilter().filter(record) is True
        assert record.request_id == "-"

    def test_inside_request(self):
        token = request_id_var.set("req-42")
        try:
            record = self._record()
            RequestIDFilter().filter(record)
        finally:
            request_id_var.reset(token)
        assert record.request_id == "req-42"

    def test_route_logs_carry_request_id(self, client, admin_auth, caplog):
        caplog.handler.addFilter(RequestIDFilter())
        with caplog.at_level(logging.INFO, logger="prep_kitchen"):
            response = client.post(
                "/api/v1/admin/menu-items",
                json={"name": "Smash Burger", "station": "grill"},
                headers={"X-Request-ID": "import-7"},
                auth=admin_auth,
            )
        assert response.status_code == 201
        created = [r for r in caplog.records if r.getMessage().startswith("Created menu item")]
        assert [r.request_id for r in created] == ["import-7"]
        assert request_id_var.get() == "-"
