import unittest
from datetime import timedelta
from unittest.mock import patch

from racquetrivals.config import DEFAULT_SITE_URL, Settings
from racquetrivals.exceptions import ConfigurationError


class SettingsTests(unittest.TestCase):
    def test_defaults_from_empty_environment(self):
        settings = Settings.from_env({})
        self.assertEqual(settings.site_url, DEFAULT_SITE_URL)
        self.assertEqual(settings.prediction_window, timedelta(hours=12))
        self.assertEqual(settings.sender_name, "Racquet Rivals")
        self.assertIsNone(settings.smtp_host)
        self.assertTrue(settings.smtp_starttls)

    def test_values_from_environment(self):
        settings = Settings.from_env(
            {
                "MAIL_SENDER_ADDRESS": "picks@example.com",
                "MAIL_SENDER_NAME": "Picks",
                "SITE_URL": "https://example.test/",
                "PREDICTION_WINDOW_HOURS": "6",
                "SMTP_HOST": "smtp.example.com",
                "SMTP_PORT": "2525",
                "SMTP_USERNAME": "bot",
                "SMTP_PASSWORD": "secret",
                "SMTP_STARTTLS": "off",
            }
        )
        self.assertEqual(settings.sender_address, "picks@example.com")
        self.assertEqual(settings.sender_name, "Picks")
        self.assertEqual(settings.site_url, "https://example.test")
        self.assertEqual(settings.prediction_window, timedelta(hours=6))
        self.assertEqual(settings.smtp_host, "smtp.example.com")
        self.assertEqual(settings.smtp_port, 2525)
        self.assertEqual(settings.smtp_username, "bot")
        self.assertEqual(settings.smtp_password, "secret")
        self.assertFalse(settings.smtp_starttls)

    def test_invalid_integers_raise(self):
        with self.assertRaises(ConfigurationError):
            Settings.from_env({"SMTP_PORT": "smtp"})
        with self.assertRaises(ConfigurationError):
            Settings.from_env({"PREDICTION_WINDOW_HOURS": "0"})

    def test_reads_process_environment(self):
        with patch("racquetrivals.config.load_dotenv") as load_dotenv, patch.dict(
            "os.environ", {"SITE_URL": "https://env.test"}, clear=False
        ):
            settings = Settings.from_env()
        load_dotenv.assert_called_once()
        self.assertEqual(settings.site_url, "https://env.test")


if __name__ == "__main__":
    unittest.main()
