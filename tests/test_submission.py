"""Tests for the result submission collaborators."""

import httpx
import pytest

from clinicalscore.core.config import Settings
from clinicalscore.core.errors import SubmissionFailure
from clinicalscore.services.submission import HttpSubmitter, NullSubmitter, build_submitter

URL = "http://results.test/log"


class TestHttpSubmitter:
    """Test the httpx-backed submitter."""

    @pytest.mark.asyncio
    async def test_posts_json(self) -> None:
        """Test the payload is posted as JSON."""
        received = []

        def handler(request: httpx.Request) -> httpx.Response:
            received.append(request)
            return httpx.Response(200, json={"ok": True})

        submitter = HttpSubmitter(URL, retry_delay=0, transport=httpx.MockTransport(handler))
        await submitter.submit({"name": "Test", "scores": {"score": 3}})

        assert len(received) == 1
        assert received[0].method == "POST"
        assert str(received[0].url) == URL
        assert b'"score":3' in received[0].content.replace(b" ", b"")

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self) -> None:
        """Test transient failures are retried."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503 if len(calls) < 3 else 200)

        submitter = HttpSubmitter(URL, max_retries=3, retry_delay=0, transport=httpx.MockTransport(handler))
        await submitter.submit({})

        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self) -> None:
        """Test SubmissionFailure after the last attempt."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500)

        submitter = HttpSubmitter(URL, max_retries=2, retry_delay=0, transport=httpx.MockTransport(handler))
        with pytest.raises(SubmissionFailure) as exc_info:
            await submitter.submit({})

        assert len(calls) == 3
        assert exc_info.value.attempts == 3
        assert isinstance(exc_info.value.cause, httpx.HTTPStatusError)

    @pytest.mark.asyncio
    async def test_connection_errors_are_retried(self) -> None:
        """Test transport errors count as failed attempts."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        submitter = HttpSubmitter(URL, max_retries=1, retry_delay=0, transport=httpx.MockTransport(handler))
        with pytest.raises(SubmissionFailure) as exc_info:
            await submitter.submit({})
        assert exc_info.value.attempts == 2


class TestBuildSubmitter:
    """Test submitter selection from settings."""

    def test_empty_url_disables_submission(self) -> None:
        """Test no URL gives the null submitter."""
        submitter = build_submitter(Settings(submission_url=""))
        assert isinstance(submitter, NullSubmitter)
        assert submitter.enabled is False

    def test_url_gives_http_submitter(self) -> None:
        """Test settings flow into the HTTP submitter."""
        submitter = build_submitter(
            Settings(submission_url=URL, submission_max_retries=5, submission_retry_delay=0.5)
        )
        assert isinstance(submitter, HttpSubmitter)
        assert submitter.url == URL
        assert submitter.max_retries == 5
        assert submitter.retry_delay == 0.5

    @pytest.mark.asyncio
    async def test_null_submitter_accepts_anything(self) -> None:
        """Test the null submitter does nothing."""
        await NullSubmitter().submit({"anything": 1})
