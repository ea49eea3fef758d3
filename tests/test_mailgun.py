"""Tests for Mailgun notifications."""

import base64
import time
from urllib.parse import parse_qs

import httpx
import pytest
import respx
from httpx import Response

from k8scan.modules.notify import MailgunNotifier, NotificationError, build_body, build_subject

MESSAGES_URL = "https://api.mailgun.net/v3/mg.example.com/messages"


@pytest.fixture
def notifier() -> MailgunNotifier:
    return MailgunNotifier("mg.example.com", "key-secret", "ops@example.com", timeout=1.0)


def test_subject(sample_finding):
    assert build_subject(sample_finding) == "[k8scan]: found dashboard http://10.0.0.5:8001"


def test_body(sample_finding):
    body = build_body(sample_finding, now=0)

    assert body.startswith("Time: ")
    assert "IP: 10.0.0.5:8001\n" in body
    assert "URL: http://10.0.0.5:8001\n" in body
    assert "ARIN: EXAMPLE-1\n" in body
    assert "Example Networks" in body
    assert "https://whois.arin.net/rest/org/EXAMPLE-1" in body


def test_sender(notifier):
    assert notifier.sender == "k8scan <k8scan@mg.example.com>"


class TestSend:
    @respx.mock
    async def test_send(self, notifier, sample_finding):
        route = respx.post(MESSAGES_URL).mock(
            return_value=Response(200, json={"id": "<1@mg>", "message": "Queued"})
        )

        await notifier.send(sample_finding)

        request = route.calls.last.request
        form = parse_qs(request.content.decode())
        assert form["to"] == ["ops@example.com"]
        assert form["from"] == ["k8scan <k8scan@mg.example.com>"]
        assert form["subject"] == ["[k8scan]: found dashboard http://10.0.0.5:8001"]
        assert "IP: 10.0.0.5:8001" in form["text"][0]
        expected_auth = base64.b64encode(b"api:key-secret").decode()
        assert request.headers["authorization"] == f"Basic {expected_auth}"

    @respx.mock
    async def test_rejected(self, notifier, sample_finding):
        respx.post(MESSAGES_URL).mock(return_value=Response(401, text="Forbidden"))

        with pytest.raises(NotificationError, match="HTTP 401"):
            await notifier.send(sample_finding)

    @respx.mock
    async def test_transport_error(self, notifier, sample_finding):
        respx.post(MESSAGES_URL).mock(side_effect=httpx.ConnectError("down"))

        with pytest.raises(NotificationError):
            await notifier.send(sample_finding)

    async def test_slow_api_times_out(self, sample_finding, slow_body_port: int):
        notifier = MailgunNotifier(
            "mg.example.com",
            "key-secret",
            "ops@example.com",
            timeout=0.5,
            api_base=f"http://127.0.0.1:{slow_body_port}/v3",
        )

        started = time.monotonic()
        with pytest.raises(NotificationError):
            await notifier.send(sample_finding)

        assert time.monotonic() - started < 1.5
