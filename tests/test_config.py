"""
Tests for the configuration module.
"""

import os
import tempfile
import unittest
from pathlib import Path

import yaml

from catalog_mcp.config import Config
from catalog_mcp.errors import ConfigurationError


class TestConfig(unittest.TestCase):
    """Test case for the Config class."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_file = Path(self.temp_dir.name) / "catalog-mcp.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        self.temp_dir.cleanup()

    def write_config(self, data):
        with open(self.config_file, "w") as f:
            yaml.dump(data, f)

    def test_defaults(self):
        config = Config(self.config_file, environ={})

        self.assertIsNone(config.base_url)
        self.assertEqual(config.strategy, "direct")
        self.assertEqual(config.discovery, "static")
        self.assertEqual(config.error_format, "standard")
        self.assertEqual(config.cache_ttl, 300.0)
        self.assertIsNone(config.cache_max_entries)
        self.assertEqual(config.batch_flush_delay, 0.0)
        self.assertIsNone(config.tools_dir)
        self.assertFalse(config.require_auth)
        self.assertEqual(config.log_level, "INFO")

    def test_yaml_file(self):
        self.write_config({"base_url": "http://backstage", "strategy": "cached", "cache_ttl": 60, "bogus": 1})

        with self.assertLogs("catalog_mcp.config", level="WARNING"):
            config = Config(self.config_file, environ={})

        self.assertEqual(config.base_url, "http://backstage")
        self.assertEqual(config.strategy, "cached")
        self.assertEqual(config.cache_ttl, 60.0)
        self.assertIsNone(config.get_setting("bogus"))

    def test_environment_overrides_file(self):
        """Environment variables take precedence over the YAML file."""
        self.write_config({"base_url": "http://file", "strategy": "cached"})
        environ = {
            "BACKSTAGE_BASE_URL": "http://env",
            "BACKSTAGE_TOKEN": "t",
            "CATALOG_MCP_STRATEGY": "Batched",
            "CATALOG_MCP_BATCH_FLUSH_DELAY": "0.5",
            "CATALOG_MCP_CACHE_MAX_ENTRIES": "100",
            "CATALOG_MCP_REQUIRE_AUTH": "true",
            "CATALOG_MCP_TOOLS_DIR": "/opt/tools",
            "LOG_LEVEL": "debug",
        }

        config = Config(self.config_file, environ=environ)

        self.assertEqual(config.base_url, "http://env")
        self.assertEqual(config.token, "t")
        self.assertEqual(config.strategy, "batched")
        self.assertEqual(config.batch_flush_delay, 0.5)
        self.assertEqual(config.cache_max_entries, 100)
        self.assertTrue(config.require_auth)
        self.assertEqual(config.tools_dir, Path("/opt/tools"))
        self.assertEqual(config.log_level, "DEBUG")

    def test_empty_env_values_ignored(self):
        config = Config(self.config_file, environ={"BACKSTAGE_BASE_URL": ""})
        self.assertIsNone(config.base_url)

    def test_invalid_yaml_is_ignored(self):
        """Invalid YAML is logged and the defaults are used."""
        with open(self.config_file, "w") as f:
            f.write("base_url: [unclosed\n")

        with self.assertLogs("catalog_mcp.config", level="ERROR"):
            config = Config(self.config_file, environ={})

        self.assertIsNone(config.base_url)

    def test_non_mapping_yaml_is_ignored(self):
        with open(self.config_file, "w") as f:
            f.write("- a\n- b\n")
        with self.assertLogs("catalog_mcp.config", level="ERROR"):
            self.assertEqual(Config(self.config_file, environ={}).strategy, "direct")

    def test_require_base_url(self):
        with self.assertRaises(ConfigurationError):
            Config(self.config_file, environ={}).require_base_url()

        config = Config(self.config_file, environ={"BACKSTAGE_BASE_URL": "http://b"})
        self.assertEqual(config.require_base_url(), "http://b")

    def test_invalid_values(self):
        config = Config(
            self.config_file, environ={"CATALOG_MCP_STRATEGY": "eager", "CATALOG_MCP_CACHE_TTL": "soon"}
        )
        with self.assertRaises(ConfigurationError):
            config.strategy
        with self.assertRaises(ConfigurationError):
            config.cache_ttl

    def test_default_file_name(self):
        cwd = os.getcwd()
        os.chdir(self.temp_dir.name)
        try:
            self.write_config({"error_format": "simple"})
            self.assertEqual(Config(environ={}).error_format, "simple")
        finally:
            os.chdir(cwd)


if __name__ == "__main__":
    unittest.main()
