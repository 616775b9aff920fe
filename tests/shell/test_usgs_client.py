"""Tests for the USGS client.

Uses the `responses` library to mock HTTP requests.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests
import responses

from src.core.config import DecodeMode
from src.core.errors import ErrorKind
from src.core.request import DEFAULT_REQUEST_URL, build_request
from src.shell.usgs_client import FetchResult, USGSClient


BODY = '{"features":[{"properties":{"title":"M 7.1 - Test","time":1387221600000,"tsunami":1}}]}'


@pytest.fixture
def target():
    """Request target for the default USGS URL."""
    built = build_request(DEFAULT_REQUEST_URL)
    assert built.target is not None
    return built.target


class TestUSGSClientInit:
    """Tests for USGSClient initialization."""

    def test_default_timeouts(self):
        client = USGSClient()

        assert client.connect_timeout == 15.0
        assert client.read_timeout == 10.0
        assert client.timeout == (15.0, 10.0)

    def test_timeouts_are_independent(self):
        client = USGSClient(connect_timeout=3, read_timeout=7)

        assert client.timeout == (3, 7)

    def test_does_not_close_injected_session(self):
        session = MagicMock()

        with USGSClient(session=session):
            pass

        session.close.assert_not_called()

    def test_closes_own_session(self):
        client = USGSClient()

        with patch.object(client.session, "close") as mock_close:
            client.close()

        mock_close.assert_called_once()


class TestUSGSClientFetch:
    """Tests for USGSClient.fetch()."""

    @responses.activate
    def test_returns_body_on_200(self, target):
        responses.add(responses.GET, DEFAULT_REQUEST_URL, body=BODY, status=200)

        result = USGSClient().fetch(target)

        assert result.success is True
        assert result.status_code == 200
        assert result.body == BODY
        assert result.error is None

    @responses.activate
    def test_sends_get_with_fixed_query(self, target):
        responses.add(responses.GET, DEFAULT_REQUEST_URL, body=BODY, status=200)

        USGSClient().fetch(target)

        assert len(responses.calls) == 1
        request = responses.calls[0].request
        assert request.method == "GET"
        assert request.body is None
        assert "minmagnitude=7" in request.url
        assert "format=geojson" in request.url

    @responses.activate
    def test_joins_lines_by_default(self, target):
        responses.add(responses.GET, DEFAULT_REQUEST_URL, body="{\n\"a\": 1\n}\n", status=200)

        result = USGSClient().fetch(target)

        assert result.body == '{"a": 1}'

    @responses.activate
    def test_full_block_mode_keeps_line_breaks(self, target):
        responses.add(responses.GET, DEFAULT_REQUEST_URL, body="{\n\"a\": 1\n}\n", status=200)

        result = USGSClient(decode_mode=DecodeMode.FULL_BLOCK).fetch(target)

        assert result.body == '{\n"a": 1\n}\n'

    @responses.activate
    @pytest.mark.parametrize("status", [204, 301, 404, 500, 503])
    def test_non_200_yields_empty_body(self, target, status):
        """Non-200 is reported, and the body is never read."""
        responses.add(
            responses.GET,
            DEFAULT_REQUEST_URL,
            body="<html>garbage</html>",
            status=status,
        )

        result = USGSClient().fetch(target)

        assert result.success is False
        assert result.status_code == status
        assert result.body == ""
        assert result.error == ErrorKind.NON_SUCCESS_STATUS

    @responses.activate
    def test_connection_error_yields_empty_body(self, target):
        responses.add(
            responses.GET,
            DEFAULT_REQUEST_URL,
            body=requests.ConnectionError("Connection refused"),
        )

        result = USGSClient().fetch(target)

        assert result.success is False
        assert result.status_code == 0
        assert result.body == ""
        assert result.error == ErrorKind.NETWORK_FAILURE
        assert "Connection refused" in result.detail

    @responses.activate
    def test_timeout_yields_empty_body(self, target):
        responses.add(
            responses.GET,
            DEFAULT_REQUEST_URL,
            body=requests.Timeout("read timed out"),
        )

        result = USGSClient().fetch(target)

        assert result.error == ErrorKind.NETWORK_FAILURE
        assert result.detail == "Request timed out"
        assert result.body == ""

    def test_passes_timeouts_and_streams(self, target):
        session = MagicMock()
        response = session.get.return_value.__enter__.return_value
        response.status_code = 200
        response.iter_content.return_value = [b"{}"]

        result = USGSClient(connect_timeout=2, read_timeout=4, session=session).fetch(target)

        session.get.assert_called_once_with(
            DEFAULT_REQUEST_URL,
            timeout=(2, 4),
            stream=True,
        )
        assert result.body == "{}"

    def test_response_released_on_success(self, target):
        session = MagicMock()
        context = session.get.return_value
        context.__enter__.return_value.status_code = 200
        context.__enter__.return_value.iter_content.return_value = [b"{}"]

        USGSClient(session=session).fetch(target)

        context.__exit__.assert_called_once()

    def test_response_released_on_non_200(self, target):
        session = MagicMock()
        context = session.get.return_value
        context.__enter__.return_value.status_code = 404

        USGSClient(session=session).fetch(target)

        context.__exit__.assert_called_once()
        context.__enter__.return_value.iter_content.assert_not_called()

    def test_response_released_on_stream_error(self, target):
        """A fault while reading the body is caught after release."""
        session = MagicMock()
        context = session.get.return_value
        context.__exit__.return_value = False
        response = context.__enter__.return_value
        response.status_code = 200
        response.iter_content.side_effect = requests.exceptions.ChunkedEncodingError("broken")

        result = USGSClient(session=session).fetch(target)

        context.__exit__.assert_called_once()
        assert result.error == ErrorKind.NETWORK_FAILURE
        assert result.body == ""


class TestFetchResult:
    """Tests for FetchResult."""

    def test_success_without_error(self):
        assert FetchResult(status_code=200, body="{}").success is True

    def test_failure_with_error(self):
        result = FetchResult(status_code=0, error=ErrorKind.NETWORK_FAILURE)

        assert result.success is False
        assert result.body == ""
