from unittest.mock import MagicMock

from limiter import get_rate_limit_key, rate_limit_handler


def make_request(headers):
    request = MagicMock()
    request.headers = headers
    request.client.host = "203.0.113.7"
    return request


class TestRateLimitKey:
    def test_keyed_by_api_key(self):
        assert get_rate_limit_key(make_request({"X-API-Key": "abc"})) == "abc"

    def test_falls_back_to_remote_address(self):
        assert get_rate_limit_key(make_request({})) == "203.0.113.7"

    def test_handler_returns_429(self):
        response = rate_limit_handler(make_request({}), MagicMock())
        assert response.status_code == 429
