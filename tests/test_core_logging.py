from __future__ import annotations

import json
import logging

from petconnect.core.logging import JsonLogFormatter, set_correlation_id


def _record(**extra: object) -> logging.LogRecord:
    logger = logging.getLogger("petconnect.test")
    return logger.makeRecord(
        "petconnect.test", logging.INFO, __file__, 1, "application_submitted", (), None, extra=extra
    )


def test_formatter_keeps_whitelisted_extras_only() -> None:
    set_correlation_id("req-7")
    line = JsonLogFormatter().format(
        _record(application_id=3, pet_id=1, password="secret", to_status="")
    )

    payload = json.loads(line)
    assert payload["message"] == "application_submitted"
    assert payload["correlation_id"] == "req-7"
    assert payload["application_id"] == 3
    assert payload["pet_id"] == 1
    assert "password" not in payload
    assert "to_status" not in payload


def test_formatter_accepts_custom_extra_keys() -> None:
    line = JsonLogFormatter(extra_keys=("path",)).format(_record(path="/api/pets", user_id=9))

    payload = json.loads(line)
    assert payload["path"] == "/api/pets"
    assert "user_id" not in payload
