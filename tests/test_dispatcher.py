import json
import sys
import unittest
from pathlib import Path

import httpx

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from blogai.ai import dispatcher  # noqa: E402
from blogai.ai.types import API_KEY_MASK, AISummaryConfig  # noqa: E402


class FakeRuntime:
    def __init__(self, result=None, exc=None):
        self.result = result
        self.exc = exc
        self.calls = []

    async def run(self, model, inputs):
        self.calls.append((model, inputs))
        if self.exc is not None:
            raise self.exc
        return self.result


class CountingTransport:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self.payload = payload or {}
        self.calls = 0

    def __call__(self, request):
        self.calls += 1
        return httpx.Response(self.status_code, json=self.payload)

    def client(self):
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


class BuildTestConfigTests(unittest.TestCase):
    def setUp(self):
        self.stored = AISummaryConfig(
            enabled=True,
            provider="openai",
            model="gpt-4o-mini",
            api_key="sk-stored",
            api_url="https://stored.example.com/v1",
        )

    def test_missing_overrides_keep_stored_values(self):
        config = dispatcher.build_test_config(self.stored, {})
        self.assertEqual(config, self.stored)

    def test_supplied_values_win_field_by_field(self):
        config = dispatcher.build_test_config(self.stored, {"model": "gpt-4o", "api_key": "sk-new", "api_url": None})
        self.assertEqual(config.provider, "openai")
        self.assertEqual(config.model, "gpt-4o")
        self.assertEqual(config.api_key, "sk-new")
        self.assertEqual(config.api_url, "https://stored.example.com/v1")

    def test_empty_key_override_is_respected(self):
        config = dispatcher.build_test_config(self.stored, {"api_key": "", "provider": ""})
        self.assertEqual(config.api_key, "")
        self.assertEqual(config.provider, "openai")

    def test_masked_key_override_uses_stored_key(self):
        config = dispatcher.build_test_config(self.stored, {"api_key": API_KEY_MASK, "model": "gpt-4o"})
        self.assertEqual(config.api_key, "sk-stored")
        self.assertEqual(config.model, "gpt-4o")


class TestInvocationTests(unittest.IsolatedAsyncioTestCase):
    async def test_worker_ai_resolves_alias(self):
        runtime = FakeRuntime({"response": "Hello!"})
        config = AISummaryConfig(provider="worker-ai", model="llama-3-8b")

        result = await dispatcher.test_ai_model(config, "ping", runtime=runtime)

        self.assertEqual(result, {"success": True, "response": "Hello!"})
        self.assertEqual(runtime.calls[0][0], "@cf/meta/llama-3-8b-instruct")

    async def test_worker_ai_passes_unknown_model_through(self):
        runtime = FakeRuntime("raw text")
        config = AISummaryConfig(provider="worker-ai", model="@cf/custom/model")
        result = await dispatcher.test_ai_model(config, "ping", runtime=runtime)
        self.assertTrue(result["success"])
        self.assertEqual(runtime.calls[0][0], "@cf/custom/model")

    async def test_empty_result_is_reported(self):
        runtime = FakeRuntime(None)
        config = AISummaryConfig(provider="worker-ai", model="llama-3-8b")
        result = await dispatcher.test_ai_model(config, "ping", runtime=runtime)
        self.assertEqual(result, {"success": False, "error": "Empty response from AI"})

    async def test_missing_key_is_a_configuration_error_without_network(self):
        transport = CountingTransport()
        config = AISummaryConfig(provider="openai", model="gpt-4o-mini", api_key="")
        async with transport.client() as http_client:
            with self.assertLogs("blogai.ai.classifier", level="WARNING"):
                result = await dispatcher.test_ai_model(config, "ping", http_client=http_client)

        self.assertFalse(result["success"])
        self.assertEqual(result["error"], "API key not configured")
        self.assertEqual(transport.calls, 0)

    async def test_unauthorized_response_is_classified(self):
        transport = CountingTransport(status_code=401, payload={"error": {"message": "bad key"}})
        config = AISummaryConfig(provider="openai", model="gpt-4o-mini", api_key="sk-wrong")
        async with transport.client() as http_client:
            with self.assertLogs("blogai.ai.classifier", level="WARNING"):
                result = await dispatcher.test_ai_model(config, "ping", http_client=http_client)

        self.assertEqual(result["error"], "Authentication failed: Invalid API key")
        self.assertEqual(transport.calls, 1)

    async def test_http_provider_receives_model_verbatim(self):
        payload = {
            "id": "1",
            "object": "chat.completion",
            "created": 0,
            "model": "deepseek-chat",
            "choices": [{"index": 0, "finish_reason": "stop", "message": {"role": "assistant", "content": "hey"}}],
        }
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=payload)

        config = AISummaryConfig(provider="deepseek", model="llama-3-8b", api_key="sk-ds")
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            result = await dispatcher.test_ai_model(config, "ping", http_client=http_client)

        self.assertEqual(result, {"success": True, "response": "hey"})
        self.assertEqual(str(seen[0].url), "https://api.deepseek.com/v1/chat/completions")
        self.assertEqual(json.loads(seen[0].content)["model"], "llama-3-8b")

    async def test_html_page_is_reported_instead_of_empty_response(self):
        def handler(request):
            return httpx.Response(200, html="<html><body>Welcome</body></html>")

        config = AISummaryConfig(provider="custom", model="m", api_key="sk", api_url="https://example.com")
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            with self.assertLogs("blogai.ai.classifier", level="WARNING"):
                result = await dispatcher.test_ai_model(config, "ping", http_client=http_client)

        self.assertFalse(result["success"])
        self.assertNotEqual(result["error"], "Empty response from AI")
        self.assertIn("Invalid JSON response", result["error"])
        self.assertIn("Welcome", result["error"])


class SummaryGenerationTests(unittest.IsolatedAsyncioTestCase):
    async def test_disabled_returns_none_without_calls(self):
        runtime = FakeRuntime({"response": "summary"})
        transport = CountingTransport()
        for provider in ("worker-ai", "openai"):
            config = AISummaryConfig(enabled=False, provider=provider, api_key="sk-test")
            async with transport.client() as http_client:
                result = await dispatcher.generate_ai_summary(
                    config, "content", runtime=runtime, http_client=http_client
                )
            self.assertIsNone(result)
        self.assertEqual(runtime.calls, [])
        self.assertEqual(transport.calls, 0)

    async def test_failures_are_logged_and_swallowed(self):
        runtime = FakeRuntime(exc=RuntimeError("runtime exploded"))
        config = AISummaryConfig(enabled=True, provider="worker-ai", model="llama-3-8b")

        with self.assertLogs("blogai.ai.dispatcher", level="ERROR") as logs:
            result = await dispatcher.generate_ai_summary(config, "content", runtime=runtime)

        self.assertIsNone(result)
        self.assertTrue(any("ai_summary_failed" in line for line in logs.output))

    async def test_configuration_errors_are_swallowed_too(self):
        config = AISummaryConfig(enabled=True, provider="openai", api_key="")
        with self.assertLogs("blogai.ai.dispatcher", level="ERROR"):
            self.assertIsNone(await dispatcher.generate_ai_summary(config, "content"))

    async def test_long_content_is_truncated_into_the_prompt(self):
        runtime = FakeRuntime({"response": "short summary"})
        config = AISummaryConfig(enabled=True, provider="worker-ai", model="llama-3-8b")
        content = "a" * 8000 + "b" * 500

        result = await dispatcher.generate_ai_summary(config, content, runtime=runtime)

        self.assertEqual(result, "short summary")
        prompt = runtime.calls[0][1]["messages"][0]["content"]
        self.assertTrue(prompt.startswith("请用简洁的中文总结以下内容"))
        self.assertTrue(prompt.endswith("a" * 10 + "..."))
        self.assertNotIn("b", prompt)

    def test_short_content_is_untouched(self):
        self.assertEqual(dispatcher.truncate_content("hello"), "hello")
        self.assertEqual(dispatcher.truncate_content("x" * 8000), "x" * 8000)
        self.assertEqual(len(dispatcher.truncate_content("x" * 8001)), 8003)


if __name__ == "__main__":
    unittest.main()
