import io
import json
import logging

import numpy as np
import pytest

from propvest.adapters.logging_utils import JsonLogFormatter, get_logger
from propvest.services.property_analysis import calculate_property_analysis
from propvest.services.validation import parse_analysis_input


@pytest.fixture
def capture_events():
    """Attach an in-memory JSON handler to a logger and return the decoded events."""
    attached = []
    stream = io.StringIO()

    def _attach(name: str):
        logger = logging.getLogger(name)
        handler = logging.StreamHandler(stream)
        handler.setFormatter(JsonLogFormatter())
        attached.append((logger, handler, logger.level))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        return lambda: [json.loads(line) for line in stream.getvalue().splitlines()]

    yield _attach

    for logger, handler, level in attached:
        logger.removeHandler(handler)
        logger.setLevel(level)


def _record(msg, context=None):
    record = logging.LogRecord("propvest.test", logging.INFO, __file__, 1, msg, None, None)
    if context is not None:
        record.context = context
    return record


def test_formatter_merges_context_without_clobbering_envelope():
    line = JsonLogFormatter().format(
        _record("vacancy_rate_defaulted", {"raw_vacancy_rate": "abc", "level": "spoofed", "years": np.int64(5)})
    )
    payload = json.loads(line)

    assert payload["event"] == "vacancy_rate_defaulted"
    assert payload["app"] == "propvest"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "propvest.test"
    assert payload["raw_vacancy_rate"] == "abc"
    assert payload["years"] == 5
    assert payload["ts"].endswith("+00:00")


def test_get_logger_configures_once():
    logger = get_logger("propvest.tests.level_override", level="warning")
    again = get_logger("propvest.tests.level_override")

    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
    assert logger.propagate is False


def test_analysis_emits_completion_event(base_input, capture_events):
    events = capture_events("propvest.services.property_analysis")
    res = calculate_property_analysis(base_input, projection_years=30)

    done = [e for e in events() if e["event"] == "property_analysis_complete"]
    assert len(done) == 1
    assert done[0]["address"] == base_input.address
    assert done[0]["years"] == 30
    assert done[0]["recommendation"] == res.recommendation
    assert done[0]["score"] == res.recommendation_score


def test_defaulted_vacancy_is_logged(base_payload, capture_events):
    events = capture_events("propvest.services.validation")

    parse_analysis_input(dict(base_payload, vacancyRate="abc"))
    parse_analysis_input(dict(base_payload, vacancyRate=None))

    warned = [e for e in events() if e["event"] == "vacancy_rate_defaulted"]
    assert len(warned) == 1
    assert warned[0]["level"] == "WARNING"
    assert warned[0]["raw_vacancy_rate"] == "abc"
    assert warned[0]["vacancy_rate"] == pytest.approx(0.05)
