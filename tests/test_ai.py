import unittest

from backend.ai import PROMPT_CANDLES, build_analysis_prompt, build_analyst, parse_ai_json
from backend.config import Settings
from tests.helpers import trending_candles


class ParseAiJsonTests(unittest.TestCase):
    def test_plain_json(self):
        self.assertEqual(parse_ai_json('{"bias": "Bullish"}'), {"bias": "Bullish"})

    def test_fenced_json_with_preamble(self):
        text = 'Here is the analysis:\n```json\n{"bias": "Bearish", "recommended": {"entry": 2300.5}}\n```'
        self.assertEqual(
            parse_ai_json(text),
            {"bias": "Bearish", "recommended": {"entry": 2300.5}},
        )

    def test_prose_returns_none(self):
        self.assertIsNone(parse_ai_json("Gold looks bullish above the 2300 handle."))

    def test_broken_json_returns_none(self):
        self.assertIsNone(parse_ai_json('{"bias": "Bullish",'))
        self.assertIsNone(parse_ai_json("{not json}"))

    def test_empty_reply_returns_none(self):
        self.assertIsNone(parse_ai_json(""))


class PromptTests(unittest.TestCase):
    def test_includes_pair_and_recent_closes_only(self):
        candles = trending_candles(40, newest=200.0, step=1.0)
        prompt = build_analysis_prompt("XAU/USD", candles)

        self.assertIn("analyst for XAU/USD", prompt)
        self.assertIn("Candles (most recent first): 200.0, 199.0, 198.0", prompt)
        self.assertIn(str(200.0 - (PROMPT_CANDLES - 1)), prompt)
        self.assertNotIn(str(200.0 - PROMPT_CANDLES), prompt)
        self.assertIn("Return ONLY valid JSON.", prompt)


class BuildAnalystTests(unittest.TestCase):
    def test_no_key_means_no_analyst(self):
        self.assertIsNone(build_analyst(Settings(gemini_api_key="")))


if __name__ == "__main__":
    unittest.main()
