import json
import os
import sys
import tempfile
import unittest
from unittest.mock import patch

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
import cli
from llm_errors import NoOfflineEquivalent


class CliRunTest(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.settings = os.path.join(self.tmp.name, "settings.yaml")
        self.env = patch.dict(os.environ, {"ANTHROPIC_API_KEY": "", "OPENAI_API_KEY": ""})
        self.env.start()

    def tearDown(self) -> None:
        self.env.stop()
        self.tmp.cleanup()

    def write_context(self, data: dict) -> str:
        path = os.path.join(self.tmp.name, "context.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f)
        return path

    def test_plan_offline(self) -> None:
        path = self.write_context(
            {"template": {"name": "Push", "exercises": [{"name": "Bench Press"}]}}
        )
        output = cli.run("plan", path, self.settings)
        self.assertEqual(output["source"], "offline")
        self.assertIsNone(output["advisory"])
        exercise = output["result"]["exercises"][0]
        self.assertEqual(exercise["exerciseName"], "Bench Press")
        self.assertEqual(exercise["topSet"]["weight"], 20.0)
        self.assertEqual(output["result"]["estimatedDuration"], 9)

    def test_insight_offline(self) -> None:
        path = self.write_context({"templateName": "Legs"})
        output = cli.run("insight", path, self.settings)
        self.assertEqual(output["result"]["insight"], "Solid workout completed")

    def test_custom_needs_remote(self) -> None:
        path = self.write_context({"userPrompt": "arms in 30 minutes"})
        with self.assertRaises(NoOfflineEquivalent):
            cli.run("custom", path, self.settings)

    def test_bad_context(self) -> None:
        path = self.write_context({"workoutCount": -1})
        with self.assertRaises(ValueError):
            cli.run("review", path, self.settings)


if __name__ == "__main__":
    unittest.main()
