"""
Tests for the common module and store configuration.
"""

import json
import logging
import threading

import pytest


class TestExceptions:
    """Tests for exception hierarchy."""

    def test_store_error_basic(self):
        from common.exceptions import StoreError

        error = StoreError("Something failed")
        assert str(error) == "[StoreError] Something failed"
        assert error.recoverable is True

    def test_store_error_with_details(self):
        from common.exceptions import StoreError

        error = StoreError(
            "Operation failed",
            code="OP_FAILED",
            details={"field": "value"},
            recoverable=False,
        )

        assert error.code == "OP_FAILED"
        assert error.details == {"field": "value"}
        assert error.recoverable is False
        assert "details:" in str(error)

    def test_store_error_to_dict(self):
        from common.exceptions import StoreError

        d = StoreError("Test", code="TEST", details={"key": 1}).to_dict()

        assert d["error"] == "TEST"
        assert d["message"] == "Test"
        assert d["details"]["key"] == 1

    def test_fetch_error_keeps_cause(self):
        from common.exceptions import CatalogFetchError, CatalogError

        cause = OSError("unreachable")
        error = CatalogFetchError("https://example.com", "unreachable", cause=cause)

        assert isinstance(error, CatalogError)
        assert error.code == "CATALOG_FETCH_FAILED"
        assert error.cause is cause
        assert "caused by" in str(error)

    def test_invalid_package_not_recoverable(self):
        from common.exceptions import InvalidPackageError, InstallError

        error = InvalidPackageError(4, "apk_url is empty")
        assert isinstance(error, InstallError)
        assert error.recoverable is False
        assert error.details["app_id"] == 4


class _Collect(logging.Handler):
    """Handler keeping records, with the context filter installed."""

    def __init__(self):
        from common.logging_config import ContextFilter

        super().__init__()
        self.records = []
        self.addFilter(ContextFilter())

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def collected():
    logger = logging.getLogger("storefront.context-test")
    handler = _Collect()
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    yield logger, handler.records
    logger.removeHandler(handler)


class TestLogging:
    """Tests for logging configuration."""

    def test_setup_logging_json_file(self, tmp_path):
        from common.logging_config import setup_logging, LogContext

        log_file = tmp_path / "logs" / "store.log"
        setup_logging(level=logging.INFO, log_file=log_file, json_logs=True)
        try:
            with LogContext(app_id=5):
                logging.getLogger("storefront.test").info("hello")
            for handler in logging.getLogger().handlers:
                handler.flush()

            record = json.loads(log_file.read_text().strip().splitlines()[-1])
            assert record["message"] == "hello"
            assert record["level"] == "INFO"
            assert record["context"] == {"app_id": 5}
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            for handler in logging.getLogger().handlers:
                handler.close()
            logging.getLogger().handlers.clear()

    def test_log_context_attaches_data(self, collected):
        from common.logging_config import LogContext

        logger, records = collected
        with LogContext(app_id=3):
            logger.info("inside")
        logger.info("outside")

        assert records[0].extra_data == {"app_id": 3}
        assert not hasattr(records[1], "extra_data")

    def test_nested_contexts_merge(self, collected):
        from common.logging_config import LogContext, current_context

        logger, records = collected
        with LogContext(app_id=3, uri="a"):
            with LogContext(uri="b"):
                logger.info("inner")
            assert current_context() == {"app_id": 3, "uri": "a"}

        assert records[0].extra_data == {"app_id": 3, "uri": "b"}
        assert current_context() == {}

    def test_context_does_not_leak_into_other_threads(self, collected):
        from common.logging_config import LogContext

        logger, records = collected
        entered = threading.Event()
        logged = threading.Event()

        def worker():
            entered.wait(timeout=5)
            logger.info("from worker")
            logged.set()

        thread = threading.Thread(target=worker)
        thread.start()
        with LogContext(app_id=9, uri="https://example.com/app.apk"):
            entered.set()
            logged.wait(timeout=5)
            logger.info("from main")
        thread.join(timeout=5)

        by_message = {r.getMessage(): r for r in records}
        assert not hasattr(by_message["from worker"], "extra_data")
        assert by_message["from main"].extra_data["app_id"] == 9

    def test_console_color_only_on_terminal(self):
        from common.logging_config import ConsoleFormatter

        record = logging.LogRecord("storefront.x", logging.ERROR, __file__, 1, "bad", None, None)

        assert "\033[" not in ConsoleFormatter(color=False).format(record)
        assert "\033[31mERROR\033[0m" in ConsoleFormatter(color=True).format(record)



class TestStoreConfig:
    """Tests for StoreConfig."""

    def test_defaults(self):
        from storefront.config import StoreConfig, DEFAULT_CATALOG_URL

        config = StoreConfig()
        assert config.catalog_url == DEFAULT_CATALOG_URL
        assert config.display_delay == 0.8
        assert config.user_agent.startswith("storefront/")

    def test_from_dict(self):
        from storefront.config import StoreConfig

        config = StoreConfig.from_dict({"display_delay": 0, "request_timeout": 5})
        assert config.display_delay == 0
        assert config.to_dict()["request_timeout"] == 5

    def test_unknown_key_rejected(self):
        from common.exceptions import InvalidConfigError
        from storefront.config import StoreConfig

        with pytest.raises(InvalidConfigError):
            StoreConfig.from_dict({"retries": 3})

    @pytest.mark.parametrize("kwargs, error", [
        ({"catalog_url": ""}, "MissingConfigError"),
        ({"catalog_url": "ftp://example.com"}, "InvalidConfigError"),
        ({"display_delay": -1}, "InvalidConfigError"),
        ({"request_timeout": 0}, "InvalidConfigError"),
    ])
    def test_invalid_values(self, kwargs, error):
        import common.exceptions as exceptions
        from storefront.config import StoreConfig

        with pytest.raises(getattr(exceptions, error)):
            StoreConfig(**kwargs)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
