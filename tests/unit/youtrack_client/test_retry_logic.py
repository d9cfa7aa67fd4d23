"""Unit tests for youtrack_client.retry_logic module."""

import pytest
from unittest.mock import patch, MagicMock

from kb_sync.youtrack_client.retry_logic import retry_on_rate_limit, _is_rate_limit_error
from kb_sync.youtrack_client.errors import APIAccessError, ServiceError


class TestIsRateLimitError:
    """Test cases for _is_rate_limit_error function."""

    def test_detects_service_error_429(self):
        assert _is_rate_limit_error(ServiceError(429, "Too Many Requests")) is True

    def test_detects_response_status_code_attribute(self):
        """_is_rate_limit_error should detect response.status_code=429 attribute."""
        error = Exception("API error")
        error.response = MagicMock()
        error.response.status_code = 429
        assert _is_rate_limit_error(error) is True

    def test_returns_false_for_other_status_codes(self):
        assert _is_rate_limit_error(ServiceError(500, "boom")) is False

    def test_returns_false_for_plain_exception(self):
        """Message text alone does not count as a rate limit."""
        assert _is_rate_limit_error(Exception("HTTP 429 Too Many Requests")) is False


class TestRetryOnRateLimit:
    """Test cases for retry_on_rate_limit function."""

    def test_success_on_first_attempt(self):
        """retry_on_rate_limit should return result on first successful attempt."""
        mock_func = MagicMock(return_value="success")
        result = retry_on_rate_limit(mock_func, "arg1", kwarg1="value1")

        assert result == "success"
        mock_func.assert_called_once_with("arg1", kwarg1="value1")

    @patch('time.sleep')
    def test_retries_with_exponential_backoff(self, mock_sleep):
        """Two rate limits then success waits 1s then 2s."""
        rate_limited = ServiceError(429, "slow down")
        mock_func = MagicMock(side_effect=[rate_limited, rate_limited, "success"])

        result = retry_on_rate_limit(mock_func)

        assert result == "success"
        assert mock_func.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1, 2]

    @patch('time.sleep')
    def test_raises_api_access_error_after_three_retries(self, mock_sleep):
        mock_func = MagicMock(side_effect=ServiceError(429, "slow down"))

        with pytest.raises(APIAccessError) as exc_info:
            retry_on_rate_limit(mock_func)

        assert mock_func.call_count == 4
        assert isinstance(exc_info.value.__cause__, ServiceError)

    @patch('time.sleep')
    def test_other_errors_are_not_retried(self, mock_sleep):
        mock_func = MagicMock(side_effect=ServiceError(500, "boom"))

        with pytest.raises(ServiceError):
            retry_on_rate_limit(mock_func)

        mock_func.assert_called_once()
        mock_sleep.assert_not_called()
