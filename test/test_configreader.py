import os
import unittest

from mock import MagicMock, Mock

from cloudsign.modules.configuration.configreader import ConfigReader


class ConfigReaderTest(unittest.TestCase):
    CONFIG_DIR = os.path.join(os.path.dirname(__file__), "config_files") + os.sep
    VALID_CONFIG_FULL = CONFIG_DIR + "valid_config_full"
    VALID_CONFIG_FULL_QUOTED = CONFIG_DIR + "valid_config_full_quoted"
    VALID_CONFIG_WITH_STATIC_CREDS = CONFIG_DIR + "valid_config_with_static_creds"
    VALID_CONFIG_WITH_DEBUG_ENABLED = CONFIG_DIR + "valid_config_with_debug_enabled"
    VALID_CONFIG_WITH_DEBUG_DISABLED = CONFIG_DIR + "valid_config_with_debug_disabled"
    INVALID_CONFIG_WITH_DEBUG = CONFIG_DIR + "invalid_config_with_debug"
    INVALID_CONFIG_WITH_TIMEOUTS = CONFIG_DIR + "invalid_config_with_timeouts"
    INVALID_CONFIG_WITH_SYNTAX_ERROR = CONFIG_DIR + "invalid_config_with_syntax_error"
    MISSING_CONFIG = CONFIG_DIR + "no_config"
    VALID_REGION_STRING = "valid_region"
    VALID_PROXY_SERVER_NAME = "server_name"
    VALID_PROXY_SERVER_PORT = "server_port"

    def setUp(self):
        self.config_reader = None
        self.logger = MagicMock()
        self.logger.warning = Mock()
        ConfigReader._LOGGER = self.logger

    def test_get_all_values_from_full_config(self):
        self.config_reader = ConfigReader(self.VALID_CONFIG_FULL)
        self.assertEqual("./test/config_files/valid_credentials_file", self.config_reader.credentials_path)
        self.assertEqual(self.VALID_REGION_STRING, self.config_reader.region)
        self.assertEqual("logs", self.config_reader.service)
        self.assertEqual("http://localhost:57575/", self.config_reader.endpoint)
        self.assertEqual("valid_profile", self.config_reader.profile)
        self.assertEqual(self.VALID_PROXY_SERVER_NAME, self.config_reader.proxy_server_name)
        self.assertEqual(self.VALID_PROXY_SERVER_PORT, self.config_reader.proxy_server_port)
        self.assertEqual(2.0, self.config_reader.connection_timeout)
        self.assertEqual(5.0, self.config_reader.response_timeout)
        self.assertFalse(self.config_reader.debug)

    def test_get_values_from_quoted_config(self):
        self.config_reader = ConfigReader(self.VALID_CONFIG_FULL_QUOTED)
        self.assertEqual(self.VALID_REGION_STRING, self.config_reader.region)
        self.assertEqual("logs", self.config_reader.service)
        self.assertEqual("valid_profile", self.config_reader.profile)

    def test_static_credentials(self):
        self.config_reader = ConfigReader(self.VALID_CONFIG_WITH_STATIC_CREDS)
        self.assertEqual("static_access_key", self.config_reader.access_key)
        self.assertEqual("static_secret_key", self.config_reader.secret_key)

    def test_default_values(self):
        self.config_reader = ConfigReader(self.VALID_CONFIG_WITH_STATIC_CREDS)
        self.assertEqual("", self.config_reader.endpoint)
        self.assertEqual("", self.config_reader.profile)
        self.assertEqual(ConfigReader._CONNECTION_TIMEOUT_DEFAULT_VALUE, self.config_reader.connection_timeout)
        self.assertEqual(ConfigReader._RESPONSE_TIMEOUT_DEFAULT_VALUE, self.config_reader.response_timeout)
        self.assertEqual(ConfigReader._DEBUG_DEFAULT_VALUE, self.config_reader.debug)

    def test_debug_flag(self):
        self.assertTrue(ConfigReader(self.VALID_CONFIG_WITH_DEBUG_ENABLED).debug)
        self.assertFalse(ConfigReader(self.VALID_CONFIG_WITH_DEBUG_DISABLED).debug)

    def test_invalid_debug_value_defaults_to_false(self):
        self.assertFalse(ConfigReader(self.INVALID_CONFIG_WITH_DEBUG).debug)

    def test_invalid_timeouts_use_defaults(self):
        self.config_reader = ConfigReader(self.INVALID_CONFIG_WITH_TIMEOUTS)
        self.assertEqual(ConfigReader._CONNECTION_TIMEOUT_DEFAULT_VALUE, self.config_reader.connection_timeout)
        self.assertEqual(ConfigReader._RESPONSE_TIMEOUT_DEFAULT_VALUE, self.config_reader.response_timeout)

    def test_config_with_syntax_error(self):
        with self.assertRaises(ValueError):
            self.config_reader = ConfigReader(self.INVALID_CONFIG_WITH_SYNTAX_ERROR)
        self.assertTrue(self.logger.warning.called)

    def test_config_file_is_missing(self):
        with self.assertRaises(IOError):
            self.config_reader = ConfigReader(self.MISSING_CONFIG)
        self.assertTrue(self.logger.warning.called)

    def test_config_reader_without_path(self):
        with self.assertRaises(TypeError):
            self.config_reader = ConfigReader()
