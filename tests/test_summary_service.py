import os
import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from blogai.services.summary_service import summarize_article  # noqa: E402
from blogai.storage.ai_config_store import AIConfigStore  # noqa: E402
from blogai.storage.database import ConfigDatabase  # noqa: E402


class FakeRuntime:
    def __init__(self, result):
        self.result = result
        self.calls = []

    async def run(self, model, inputs):
        self.calls.append((model, inputs))
        return self.result


class SummaryServiceTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.db = ConfigDatabase(os.path.join(self.tmp.name, "config.db"))

    def tearDown(self):
        self.db.close()
        self.tmp.cleanup()

    async def test_disabled_by_default(self):
        runtime = FakeRuntime({"response": "unused"})
        self.assertIsNone(await summarize_article("Article body", db=self.db, runtime=runtime))
        self.assertEqual(runtime.calls, [])

    async def test_uses_stored_settings(self):
        AIConfigStore(self.db).update({"enabled": True, "provider": "worker-ai", "model": "qwen-7b"})
        runtime = FakeRuntime({"response": "一段摘要"})

        summary = await summarize_article("Article body", db=self.db, runtime=runtime)

        self.assertEqual(summary, "一段摘要")
        model, inputs = runtime.calls[0]
        self.assertEqual(model, "@cf/qwen/qwen1.5-7b-chat-awq")
        self.assertTrue(inputs["messages"][0]["content"].endswith("Article body"))


if __name__ == "__main__":
    unittest.main()
