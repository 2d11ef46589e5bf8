#!/usr/bin/env python3
"""
Tests for settings and target file loading
"""

import json
import os
import tempfile
import unittest

from netpulse.core.config import ConfigError, Settings, load_settings, load_targets, parse_targets
from netpulse.models import Target


class TestParseTargets(unittest.TestCase):
    """Test target list filtering"""

    def test_valid_entries(self):
        """Complete entries become targets, probe_type defaults to tcp"""
        targets = parse_targets([
            {"id": "1", "name": "Cloudflare", "host": "1.1.1.1", "port": 443},
            {"id": "2", "name": "Google Ping", "host": "google.com", "port": 0, "probe_type": "ping"},
        ])

        self.assertEqual(targets, [
            Target(id="1", name="Cloudflare", host="1.1.1.1", port=443, probe_type="tcp"),
            Target(id="2", name="Google Ping", host="google.com", port=0, probe_type="ping"),
        ])

    def test_malformed_entries_are_skipped(self):
        """Entries without string id/name/host or integer port are dropped"""
        with self.assertLogs("netpulse.core.config", level="WARNING"):
            targets = parse_targets([
                {"id": "ok", "name": "ok", "host": "h", "port": 1},
                {"name": "no id", "host": "h", "port": 1},
                {"id": "p", "name": "port as text", "host": "h", "port": "443"},
                {"id": "b", "name": "bool port", "host": "h", "port": True},
                "not a mapping",
            ])

        self.assertEqual([t.id for t in targets], ["ok"])

    def test_mapping_with_targets_key(self):
        targets = parse_targets({"targets": [{"id": "1", "name": "n", "host": "h", "port": 22}]})
        self.assertEqual(len(targets), 1)

    def test_non_list(self):
        with self.assertRaises(ConfigError):
            parse_targets("targets")
        with self.assertRaises(ConfigError):
            parse_targets({"hosts": []})


class TestLoadTargets(unittest.TestCase):
    """Test reading target files"""

    def setUp(self):
        """Set up test fixtures"""
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, name, content):
        path = os.path.join(self.tmpdir.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_json_file(self):
        path = self._write("targets.json", json.dumps([
            {"id": "a", "name": "A", "host": "1.1.1.1", "port": 443, "probe_type": "tcp"},
        ]))

        self.assertEqual(load_targets(path)[0].host, "1.1.1.1")

    def test_yaml_file(self):
        path = self._write("targets.yaml", (
            "targets:\n"
            "  - id: a\n"
            "    name: Cloudflare\n"
            "    host: 1.1.1.1\n"
            "    port: 443\n"
            "  - id: b\n"
            "    name: Ping\n"
            "    host: 8.8.8.8\n"
            "    port: 0\n"
            "    probe_type: ping\n"
        ))

        targets = load_targets(path)

        self.assertEqual([t.id for t in targets], ["a", "b"])
        self.assertEqual(targets[1].probe_type, "ping")

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            load_targets(os.path.join(self.tmpdir.name, "missing.yaml"))

    def test_unparseable_file(self):
        path = self._write("broken.yaml", "targets: [unclosed\n")
        with self.assertRaises(ConfigError):
            load_targets(path)


class TestLoadSettings(unittest.TestCase):
    """Test settings file and environment overrides"""

    def setUp(self):
        """Set up test fixtures"""
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, content):
        path = os.path.join(self.tmpdir.name, "settings.yaml")
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_defaults(self):
        self.assertEqual(load_settings(environ={}), Settings())

    def test_settings_file(self):
        """Values under a settings: mapping are applied"""
        path = self._write("settings:\n  interval_seconds: 10\n  max_workers: 4\n  webhook_url: http://x/y\n")

        settings = load_settings(path, environ={})

        self.assertEqual(settings.interval_seconds, 10.0)
        self.assertEqual(settings.max_workers, 4)
        self.assertEqual(settings.webhook_url, "http://x/y")
        self.assertEqual(settings.timeout_ms, 2000)

    def test_unknown_key_warns(self):
        path = self._write("retries: 3\n")
        with self.assertLogs("netpulse.core.config", level="WARNING"):
            settings = load_settings(path, environ={})
        self.assertEqual(settings, Settings())

    def test_environment_overrides_file(self):
        path = self._write("interval_seconds: 10\n")

        settings = load_settings(path, environ={"NETPULSE_INTERVAL": "2.5", "NETPULSE_TIMEOUT_MS": "750"})

        self.assertEqual(settings.interval_seconds, 2.5)
        self.assertEqual(settings.timeout_ms, 750)

    def test_invalid_values(self):
        with self.assertRaises(ConfigError):
            load_settings(environ={"NETPULSE_MAX_WORKERS": "many"})
        with self.assertRaises(ConfigError):
            load_settings(environ={"NETPULSE_INTERVAL": "0"})
        with self.assertRaises(ConfigError):
            load_settings(self._write("- just\n- a list\n"), environ={})


if __name__ == "__main__":
    unittest.main()
