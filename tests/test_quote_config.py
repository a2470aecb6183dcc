import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from app.config.settings import Settings


class TestQuoteSettings(unittest.TestCase):
    def test_defaults_without_env(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.QUOTES_BASE_URL, "https://economia.awesomeapi.com.br/last")
        self.assertEqual(settings.QUOTES_TIMEOUT_SEC, 5.0)
        self.assertEqual(
            settings.DASHBOARD_QUOTES,
            ["USD-BRL", "EUR-BRL", "BTC-BRL", "GBP-BRL", "JPY-BRL"],
        )

    def test_env_overrides(self):
        env = {
            "FLORTUNE_QUOTES_BASE_URL": "https://quotes.example.test/last",
            "FLORTUNE_QUOTES_TIMEOUT_SEC": "2.5",
            "FLORTUNE_DASHBOARD_QUOTES": " USD-BRL, BTC-BRL ",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.QUOTES_BASE_URL, "https://quotes.example.test/last")
        self.assertEqual(settings.QUOTES_TIMEOUT_SEC, 2.5)
        self.assertEqual(settings.DASHBOARD_QUOTES, ["USD-BRL", "BTC-BRL"])

    def test_cache_ttl_and_user_agent_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.QUOTES_CACHE_TTL_SEC, 600)
        self.assertTrue(settings.QUOTES_USER_AGENT.startswith("Mozilla/5.0"))

    def test_cache_ttl_and_user_agent_from_env(self):
        env = {"FLORTUNE_QUOTES_CACHE_TTL_SEC": "60", "FLORTUNE_QUOTES_USER_AGENT": "flortune/1.0"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.QUOTES_CACHE_TTL_SEC, 60)
        self.assertEqual(settings.QUOTES_USER_AGENT, "flortune/1.0")

    def test_negative_cache_ttl_fails_validation(self):
        with patch.dict(os.environ, {"FLORTUNE_QUOTES_CACHE_TTL_SEC": "-1"}, clear=True):
            with self.assertRaises(ValidationError):
                Settings.from_env()

    def test_empty_dashboard_slots_are_dropped(self):
        with patch.dict(os.environ, {"FLORTUNE_DASHBOARD_QUOTES": "USD-BRL,none,none"}, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.DASHBOARD_QUOTES, ["USD-BRL"])

    def test_five_codes_plus_empty_slots_is_valid(self):
        env = {"FLORTUNE_DASHBOARD_QUOTES": "A-B,none,C-D,E-F,G-H,I-J,NONE"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.DASHBOARD_QUOTES, ["A-B", "C-D", "E-F", "G-H", "I-J"])

    def test_non_positive_timeout_fails_validation(self):
        with patch.dict(os.environ, {"FLORTUNE_QUOTES_TIMEOUT_SEC": "0"}, clear=True):
            with self.assertRaises(ValidationError):
                Settings.from_env()

    def test_more_than_five_dashboard_quotes_fails_validation(self):
        env = {"FLORTUNE_DASHBOARD_QUOTES": "A-B,C-D,E-F,G-H,I-J,K-L"}
        with patch.dict(os.environ, env, clear=True):
            with self.assertRaises(ValidationError):
                Settings.from_env()


if __name__ == "__main__":
    unittest.main()
