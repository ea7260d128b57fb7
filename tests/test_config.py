"""Tests for configuration manager."""
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import yaml

from ynabctl.config import ConfigManager, Config, mask_token
from ynabctl.utils.exceptions import ConfigError

CLEAN_ENV = {"YNAB_TOKEN": "", "YNAB_DEFAULT_BUDGET": "", "YNAB_FORMAT": ""}


class TestConfigManager(unittest.TestCase):
    """Test ConfigManager functionality."""
    
    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        self.config_manager = ConfigManager(config_dir=self.test_dir / "ynabctl")
        self.env = patch.dict(os.environ, CLEAN_ENV)
        self.env.start()
    
    def tearDown(self):
        """Clean up test fixtures."""
        self.env.stop()
        shutil.rmtree(self.test_dir, ignore_errors=True)
    
    def test_missing_file_gives_defaults(self):
        """Test loading when nothing has been saved."""
        config = self.config_manager.load_config()
        
        self.assertIsNone(config.token)
        self.assertIsNone(config.default_budget)
        self.assertEqual(config.format, "json")
    
    def test_save_and_load_config(self):
        """Test saving and loading configuration."""
        config = Config(token="test_token", default_budget="budget123", format="table")
        
        self.config_manager.save_config(config)
        loaded_config = self.config_manager.load_config()
        
        self.assertEqual(loaded_config, config)
        self.assertTrue(self.config_manager.config_file.exists())
    
    def test_environment_overrides_file(self):
        """Test that environment variables take precedence over the file."""
        self.config_manager.save_config(Config(token="file_token", default_budget="file_budget"))
        
        with patch.dict(os.environ, {"YNAB_TOKEN": "env_token", "YNAB_FORMAT": "table"}):
            config = self.config_manager.load_config()
        
        self.assertEqual(config.token, "env_token")
        self.assertEqual(config.default_budget, "file_budget")
        self.assertEqual(config.format, "table")
    
    def test_update_keeps_other_fields(self):
        """Test that a partial update leaves the rest of the file alone."""
        self.config_manager.save_config(Config(token="tok", default_budget="b1"))
        
        self.config_manager.update(format="table")
        config = self.config_manager.load_config()
        
        self.assertEqual(config.token, "tok")
        self.assertEqual(config.default_budget, "b1")
        self.assertEqual(config.format, "table")
    
    def test_update_does_not_persist_environment(self):
        """Test that env-only values are never written to the file."""
        with patch.dict(os.environ, {"YNAB_TOKEN": "env_token"}):
            self.config_manager.update(default_budget="b1")
        
        with open(self.config_manager.config_file, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        
        self.assertEqual(data, {"default_budget": "b1", "format": "json"})
    
    def test_update_rejects_invalid_format(self):
        """Test validation on update."""
        with self.assertRaises(ConfigError):
            self.config_manager.update(format="xml")
        self.assertFalse(self.config_manager.config_file.exists())
    
    def test_malformed_file(self):
        """Test that a non-mapping YAML file is a configuration error."""
        self.config_manager.config_dir.mkdir(parents=True)
        self.config_manager.config_file.write_text("- just\n- a list\n", encoding="utf-8")
        
        with self.assertRaises(ConfigError):
            self.config_manager.load_config()
    
    def test_invalid_yaml(self):
        """Test that unparseable YAML is a configuration error."""
        self.config_manager.config_dir.mkdir(parents=True)
        self.config_manager.config_file.write_text("token: [unclosed\n", encoding="utf-8")
        
        with self.assertRaises(ConfigError):
            self.config_manager.load_config()
    
    def test_validate_config(self):
        """Test format validation."""
        is_valid, _ = self.config_manager.validate_config(Config(format="table"))
        self.assertTrue(is_valid)
        
        is_valid, message = self.config_manager.validate_config(Config(format="csv"))
        self.assertFalse(is_valid)
        self.assertIn("csv", message)


class TestMaskToken(unittest.TestCase):
    """Test token masking for display."""
    
    def test_mask_token(self):
        self.assertEqual(mask_token(None), "(not set)")
        self.assertEqual(mask_token(""), "(not set)")
        self.assertEqual(mask_token("short"), "****")
        self.assertEqual(mask_token("abcd1234efgh5678"), "abcd...5678")


if __name__ == "__main__":
    unittest.main()
