"""Tests for shared structured logging."""

import structlog
from structlog.testing import capture_logs

from shared import ComponentLogger, configure_logging, log_context


class TestComponentLogger:
    """Test suite for ComponentLogger."""

    def test_component_stamped(self):
        """Test every event carries the component name and context."""
        logger = ComponentLogger("ORACLE-DETECTOR")

        with capture_logs() as logs:
            logger.info("Scan completed", opportunities=2)

        assert logs == [{
            "event": "Scan completed",
            "log_level": "info",
            "component": "ORACLE-DETECTOR",
            "opportunities": 2,
        }]

    def test_bind(self):
        """Test bound context is added to later events."""
        with capture_logs() as logs:
            ComponentLogger("TRAINMAN").bind(adapter="dexscreener").warning("Slow")

        assert logs[0]["adapter"] == "dexscreener"
        assert logs[0]["component"] == "TRAINMAN"

    def test_log_context(self):
        """Test block-scoped context is visible only inside the block."""
        with log_context(cycle=7):
            assert structlog.contextvars.get_contextvars()["cycle"] == 7

        assert "cycle" not in structlog.contextvars.get_contextvars()

    def test_configure_json(self):
        """Test reconfiguring for production output."""
        configure_logging(level="debug", json_format=True)
        try:
            with capture_logs() as logs:
                ComponentLogger("SATI-COST").debug("Estimate", cost_usd=27.0)
            assert logs[0]["cost_usd"] == 27.0
        finally:
            configure_logging()
