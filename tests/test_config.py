"""
Tests for the configuration module.
"""

import os
import tempfile
import unittest
from unittest.mock import patch

from email_finder.config import DEFAULT_USER_AGENT, Config, ConfigurationError, config


class TestConfig(unittest.TestCase):

    def test_config_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            cfg = Config()
        self.assertEqual(cfg.user_agent, DEFAULT_USER_AGENT)
        self.assertFalse(cfg.insecure_ssl)
        self.assertEqual(cfg.max_redirects, 5)
        self.assertEqual(cfg.log_level, "INFO")
        self.assertFalse(cfg.debug)
        self.assertEqual(cfg.validate(), [])

    def test_env_overrides_and_clamping(self):
        env = {
            "USER_AGENT": "Probe/2.0",
            "ALLOW_INSECURE_SSL": "yes",
            "MAX_REDIRECTS": "100",
            "MAX_BODY_BYTES": "12",
            "LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            cfg = Config()
        self.assertEqual(cfg.user_agent, "Probe/2.0")
        self.assertTrue(cfg.insecure_ssl)
        self.assertEqual(cfg.max_redirects, 30)
        self.assertEqual(cfg.max_body_bytes, 10_000)
        self.assertEqual(cfg.log_level, "DEBUG")

    def test_invalid_number_uses_default(self):
        with patch.dict(os.environ, {"MAX_REDIRECTS": "many"}, clear=True):
            self.assertEqual(Config().max_redirects, 5)

    def test_config_validation(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "loud", "USER_AGENT": " "}, clear=True):
            cfg = Config()
        errors = cfg.validate()
        self.assertIn("USER_AGENT must not be empty", errors)
        self.assertEqual(len(errors), 2)
        with self.assertRaises(ConfigurationError):
            cfg.validate_or_raise()

    def test_env_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "custom.env")
            with open(path, "w", encoding="utf-8") as fh:
                fh.write("USER_AGENT=FromFile/1.0\n")
            with patch.dict(os.environ, {}, clear=True):
                self.assertEqual(Config(path).user_agent, "FromFile/1.0")

    def test_update_from_dict(self):
        original = config.as_dict()
        try:
            config.update_from_dict({"debug": True, "not_a_setting": 1})
            self.assertTrue(config.debug)
            self.assertFalse(hasattr(config, "not_a_setting"))
        finally:
            config.update_from_dict(original)


if __name__ == "__main__":
    unittest.main()
