"""Tests for the REST adapters against ``httpx.MockTransport``."""

import json

import httpx
import pytest

from xeoos.adapters.captcha.turnstile import TurnstileVerifier
from xeoos.adapters.email.base import DisabledEmailSender, EmailMessage
from xeoos.adapters.email.resend_client import ResendEmailSender
from xeoos.adapters.realtime.ably_client import AblyRealtime
from xeoos.adapters.realtime.base import DisabledRealtime
from xeoos.adapters.search.base import DisabledSearchIndex
from xeoos.adapters.search.meili_client import MeiliSearchIndex
from xeoos.adapters.translate.webhook_client import WebhookTranslateDispatcher
from xeoos.core.errors import ExternalServiceAppError, ValidationAppError


def _recorder(responder):
    """Wrap ``responder`` so every request is kept for assertions."""

    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return responder(request)

    return httpx.MockTransport(handler), seen


class TestAbly:
    async def test_publish_posts_message(self):
        transport, seen = _recorder(lambda request: httpx.Response(201, json=[]))
        realtime = AblyRealtime("app.key:secret", transport=transport)

        await realtime.publish("user-7", "new-message", {"message": {"title": "Hi"}})

        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/channels/user-7/messages"
        assert json.loads(request.content) == {"name": "new-message", "data": {"message": {"title": "Hi"}}}
        assert request.headers["Authorization"].startswith("Basic ")

    async def test_presence_returns_client_ids(self):
        members = [{"clientId": "7", "action": "present"}, {"action": "present"}]
        transport, _ = _recorder(lambda request: httpx.Response(200, json=members))
        realtime = AblyRealtime("app.key:secret", transport=transport)

        assert await realtime.presence("user-7") == ["7"]

    async def test_request_token_sends_capability(self):
        transport, seen = _recorder(lambda request: httpx.Response(200, json={"token": "t", "expires": 1}))
        realtime = AblyRealtime("app.key:secret", transport=transport)

        details = await realtime.request_token(
            "7", ttl_ms=7_200_000, capability={"broadcast": ["subscribe"], "user-7": ["subscribe"]}
        )

        assert details["token"] == "t"
        body = json.loads(seen[0].content)
        assert seen[0].url.path == "/keys/app.key/requestToken"
        assert body["clientId"] == "7"
        assert body["ttl"] == 7_200_000
        assert json.loads(body["capability"]) == {"broadcast": ["subscribe"], "user-7": ["subscribe"]}

    async def test_http_error_maps_to_external_error(self):
        transport, _ = _recorder(lambda request: httpx.Response(500))
        realtime = AblyRealtime("app.key:secret", transport=transport)

        with pytest.raises(ExternalServiceAppError) as exc_info:
            await realtime.publish("broadcast", "new-message", {})
        assert exc_info.value.code == "realtime_unavailable"
        assert exc_info.value.details["http_status"] == 500

    def test_rejects_malformed_key(self):
        with pytest.raises(ValueError):
            AblyRealtime("no-secret")

    async def test_disabled_realtime(self):
        realtime = DisabledRealtime()

        assert await realtime.presence("user-1") == []
        await realtime.publish("user-1", "new-message", {})
        with pytest.raises(ExternalServiceAppError):
            await realtime.request_token("1", ttl_ms=1, capability={})


class TestResend:
    async def test_send_returns_message_id(self):
        transport, seen = _recorder(lambda request: httpx.Response(200, json={"id": "email-1"}))
        sender = ResendEmailSender("re_key", from_address="XEO OS <noreply@xeoos.net>", transport=transport)

        message_id = await sender.send(EmailMessage(to="a@example.com", subject="S", html="<p>H</p>", text="T"))

        assert message_id == "email-1"
        assert seen[0].headers["Authorization"] == "Bearer re_key"
        body = json.loads(seen[0].content)
        assert body["from"] == "XEO OS <noreply@xeoos.net>"
        assert body["to"] == "a@example.com"

    async def test_network_failure_maps_to_delivery_error(self):
        def fail(request):
            raise httpx.ConnectError("refused", request=request)

        sender = ResendEmailSender("re_key", from_address="x@xeoos.net", transport=httpx.MockTransport(fail))

        with pytest.raises(ExternalServiceAppError) as exc_info:
            await sender.send(EmailMessage(to="a@example.com", subject="S", html="", text=""))
        assert exc_info.value.code == "email_delivery_failed"

    async def test_disabled_sender_always_fails(self):
        with pytest.raises(ExternalServiceAppError):
            await DisabledEmailSender().send(EmailMessage(to="a@example.com", subject="S", html="", text=""))


class TestMeilisearch:
    async def test_search_maps_response(self):
        payload = {
            "hits": [{"id": 1, "title": "Hello"}],
            "query": "hello",
            "limit": 20,
            "offset": 0,
            "estimatedTotalHits": 1,
            "processingTimeMs": 3,
        }
        transport, seen = _recorder(lambda request: httpx.Response(200, json=payload))
        index = MeiliSearchIndex("http://meili:7700", api_key="mk", transport=transport)

        page = await index.search("hello", limit=20, offset=0, filter="originLang = 'en-US'")

        assert page.hits == [{"id": 1, "title": "Hello"}]
        assert page.estimated_total_hits == 1
        assert seen[0].url.path == "/indexes/posts/search"
        assert json.loads(seen[0].content)["filter"] == "originLang = 'en-US'"
        assert seen[0].headers["Authorization"] == "Bearer mk"

    async def test_upsert_and_delete(self):
        transport, seen = _recorder(lambda request: httpx.Response(202, json={"taskUid": 1}))
        index = MeiliSearchIndex("http://meili:7700", transport=transport)

        await index.upsert([{"id": 5}])
        await index.upsert([])
        await index.delete(5)

        assert len(seen) == 2
        assert seen[0].url.params["primaryKey"] == "id"
        assert seen[1].method == "DELETE"
        assert seen[1].url.path == "/indexes/posts/documents/5"

    async def test_disabled_index_refuses_queries(self):
        index = DisabledSearchIndex()

        await index.upsert([{"id": 1}])
        with pytest.raises(ExternalServiceAppError) as exc_info:
            await index.search("x", limit=1, offset=0)
        assert exc_info.value.code == "search_unavailable"


class TestTranslateWebhook:
    async def test_dispatch_sends_password_and_task(self):
        transport, seen = _recorder(lambda request: httpx.Response(200))
        dispatcher = WebhookTranslateDispatcher("http://worker/translate", "worker-secret", transport=transport)

        await dispatcher.dispatch("task-1")

        assert json.loads(seen[0].content) == {"password": "worker-secret", "task": "task-1"}

    async def test_missing_url_fails(self):
        dispatcher = WebhookTranslateDispatcher(None, "worker-secret")

        with pytest.raises(ExternalServiceAppError):
            await dispatcher.dispatch("task-1")


class TestTurnstile:
    async def test_disabled_skips_check(self):
        await TurnstileVerifier("secret", enabled=False).verify(None)

    async def test_missing_token(self):
        with pytest.raises(ValidationAppError) as exc_info:
            await TurnstileVerifier("secret").verify(None)
        assert exc_info.value.code == "turnstile_required"

    async def test_success(self):
        transport, seen = _recorder(lambda request: httpx.Response(200, json={"success": True}))

        await TurnstileVerifier("secret", transport=transport).verify("tok", "1.2.3.4")

        form = dict(httpx.QueryParams(seen[0].content.decode()))
        assert form == {"secret": "secret", "response": "tok", "remoteip": "1.2.3.4"}

    async def test_rejected_token(self):
        transport, _ = _recorder(
            lambda request: httpx.Response(200, json={"success": False, "error-codes": ["invalid-input-response"]})
        )

        with pytest.raises(ValidationAppError) as exc_info:
            await TurnstileVerifier("secret", transport=transport).verify("tok")
        assert exc_info.value.code == "turnstile_failed"

    async def test_service_error(self):
        transport, _ = _recorder(lambda request: httpx.Response(503))

        with pytest.raises(ExternalServiceAppError) as exc_info:
            await TurnstileVerifier("secret", transport=transport).verify("tok")
        assert exc_info.value.code == "verification_service_error"
