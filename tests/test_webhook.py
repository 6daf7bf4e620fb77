import json
import logging
from datetime import datetime, timezone

import httpx

from app.core.task_queue import BackgroundQueue, enqueue_note_notification
from app.modules.integrations.webhook import WebhookClient, build_note_created_payload


def recording_transport(calls, status_code=200):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(status_code, text="nope" if status_code >= 400 else "ok")

    return httpx.MockTransport(handler)


def test_payload_shape():
    now = datetime(2025, 5, 1, 12, 30, tzinfo=timezone.utc)
    assert build_note_created_payload(note_id=3, content="hi", user_id=9, now=now) == {
        "noteId": 3,
        "content": "hi",
        "userId": 9,
        "timestamp": "2025-05-01T12:30:00+00:00",
        "action": "note_created",
    }


async def test_notify_posts_json_with_bearer_token():
    calls = []
    client = WebhookClient(
        url="https://hooks.example.com/notes",
        api_token="secret",
        transport=recording_transport(calls),
    )
    assert await client.notify_note_created(note_id=1, content="text", user_id=2)

    (request,) = calls
    assert request.method == "POST"
    assert str(request.url) == "https://hooks.example.com/notes"
    assert request.headers["Authorization"] == "Bearer secret"
    body = json.loads(request.content)
    assert body["noteId"] == 1
    assert body["userId"] == 2
    assert body["action"] == "note_created"


async def test_non_2xx_is_logged_not_raised(caplog):
    calls = []
    client = WebhookClient(
        url="https://hooks.example.com/notes",
        api_token="secret",
        transport=recording_transport(calls, status_code=502),
    )
    with caplog.at_level(logging.ERROR, logger="app.modules.integrations.webhook"):
        ok = await client.notify_note_created(note_id=1, content="text", user_id=2)

    assert ok is False
    assert "502" in caplog.text


async def test_transport_error_is_logged_not_raised(caplog):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = WebhookClient(
        url="https://hooks.example.com/notes",
        api_token="",
        transport=httpx.MockTransport(handler),
    )
    with caplog.at_level(logging.ERROR, logger="app.modules.integrations.webhook"):
        ok = await client.notify_note_created(note_id=1, content="text", user_id=2)

    assert ok is False
    assert "connection refused" in caplog.text


async def test_unconfigured_webhook_is_skipped():
    calls = []
    client = WebhookClient(url="", transport=recording_transport(calls))
    assert await client.notify_note_created(note_id=1, content="x", user_id=1) is False
    assert calls == []


async def test_queue_runs_jobs_and_survives_failures():
    q = BackgroundQueue(concurrency=1)
    ran = []

    async def boom():
        raise RuntimeError("job exploded")

    async def ok():
        ran.append("ok")

    q.start()
    q.enqueue(boom)
    q.enqueue(ok)
    await q.stop()

    assert ran == ["ok"]
    assert not q.started


async def test_enqueue_note_notification_delivers_on_queue():
    calls = []
    client = WebhookClient(
        url="https://hooks.example.com/notes",
        api_token="t",
        transport=recording_transport(calls),
    )
    q = BackgroundQueue(concurrency=1)
    q.start()
    enqueue_note_notification(
        note_id=4, content="queued", user_id=8, client=client, target=q
    )
    await q.stop()

    assert len(calls) == 1
    assert json.loads(calls[0].content)["content"] == "queued"
