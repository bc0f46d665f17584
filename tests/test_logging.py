"""
Unit tests for logging setup.
"""

import logging
import logging.handlers
import pytest

from zcash_client.models.config import ClientConfig
from zcash_client.utils.logging import REDACTED, redact_secrets, setup_logging


class TestRedactSecrets:
    """Tests for the credential masking processor."""

    def test_masks_credentials(self):
        event = {"event": "connect", "password": "hunter2", "Authorization": "Basic abc"}

        result = redact_secrets(None, "info", event)

        assert result["password"] == REDACTED
        assert result["Authorization"] == REDACTED
        assert result["event"] == "connect"

    def test_leaves_other_keys(self):
        event = {"event": "RPC request", "method": "getblockcount", "params": []}
        assert redact_secrets(None, "debug", dict(event)) == event


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "client.log"
        config = ClientConfig(_env_file=None, log_level="INFO", log_file=str(log_file))
        root = logging.getLogger()
        before = list(root.handlers)

        try:
            setup_logging(config)

            added = [h for h in root.handlers if h not in before]
            assert log_file.parent.is_dir()
            assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in added)
        finally:
            for handler in root.handlers[:]:
                if handler not in before:
                    root.removeHandler(handler)
                    handler.close()

    def test_urllib3_quiet_above_debug(self):
        setup_logging(ClientConfig(_env_file=None, log_level="WARNING"))
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            setup_logging(ClientConfig(_env_file=None, log_level="LOUD"))
