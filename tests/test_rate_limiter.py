import pytest
import requests
from unittest.mock import patch, MagicMock

from luxury_shopper.agent import build_search_graph
from luxury_shopper.constants import FETCH_ERROR_MESSAGE
from luxury_shopper.errors import FetchError, RateLimitExceeded
from luxury_shopper.models import Session
from luxury_shopper.search_gateway import EbaySearchGateway
from luxury_shopper.slot_filling import SlotFillingEngine
from luxury_shopper.utils.config import Config
from luxury_shopper.utils.rate_limiter import RateLimiter

@patch("luxury_shopper.utils.rate_limiter.time")
def test_full_window_raises_instead_of_sleeping(mock_time):
    mock_time.time.return_value = 100.0
    limiter = RateLimiter(max_requests_per_minute=2)

    limiter.wait(max_wait=2)
    limiter.wait(max_wait=2)

    with pytest.raises(RateLimitExceeded):
        limiter.wait(max_wait=2)
    mock_time.sleep.assert_not_called()
    assert issubclass(RateLimitExceeded, FetchError)

@patch("luxury_shopper.utils.rate_limiter.time")
def test_short_wait_within_budget_sleeps(mock_time):
    limiter = RateLimiter(max_requests_per_minute=1)
    mock_time.time.return_value = 100.0
    limiter.wait(max_wait=5)

    mock_time.time.return_value = 158.0
    limiter.wait(max_wait=5)

    mock_time.sleep.assert_called_once_with(2.0)

@patch("luxury_shopper.utils.rate_limiter.time")
def test_reserved_slot_counts_against_the_window(mock_time):
    limiter = RateLimiter(max_requests_per_minute=1)
    mock_time.time.return_value = 100.0
    limiter.wait(max_wait=5)
    mock_time.time.return_value = 158.0
    limiter.wait(max_wait=5)

    # The second request was booked for t=160, so at t=161 the window is still full
    mock_time.time.return_value = 161.0
    with pytest.raises(RateLimitExceeded):
        limiter.wait(max_wait=5)

@patch("luxury_shopper.utils.rate_limiter.time")
def test_rate_limiter_forgets_requests_older_than_a_minute(mock_time):
    limiter = RateLimiter(max_requests_per_minute=1)
    mock_time.time.return_value = 100.0
    limiter.wait()

    mock_time.time.return_value = 161.0
    limiter.wait()
    mock_time.sleep.assert_not_called()

@patch("luxury_shopper.utils.rate_limiter.time")
def test_rate_limiter_reset(mock_time):
    mock_time.time.return_value = 100.0
    limiter = RateLimiter(max_requests_per_minute=1)
    limiter.wait()
    limiter.reset()
    limiter.wait()
    mock_time.sleep.assert_not_called()

@patch("luxury_shopper.utils.rate_limiter.time")
def test_spent_budget_fails_the_turn_with_502(mock_time, monkeypatch, zero_payload):
    mock_time.time.return_value = 100.0
    monkeypatch.setenv("EBAY_APP_ID", "TestApp-PRD-123")
    monkeypatch.setenv("REQUEST_TIMEOUT", "2")
    http_session = MagicMock(spec=requests.Session)
    http_session.get.return_value.json.return_value = zero_payload
    gateway = EbaySearchGateway(config=Config(), rate_limiter=RateLimiter(max_requests_per_minute=1),
                                http_session=http_session)
    engine = SlotFillingEngine(graph_app=build_search_graph(), gateway=gateway)

    first, second = Session(), Session()
    first_results = [engine.step(first, m) for m in ["bag", "none", "none", "none"]]
    second_results = [engine.step(second, m) for m in ["bag", "none", "none", "none"]]

    assert first_results[-1].status_code == 200
    assert second_results[-1].status_code == 502
    assert second_results[-1].message == FETCH_ERROR_MESSAGE
    assert second.is_empty()
    http_session.get.assert_called_once()
    mock_time.sleep.assert_not_called()
