# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Tests for settings and the certificate configuration file.
"""

import pytest

from hipcert.config import ConfigError, Settings, read_conf_section


HIP_CERT_CONF = """\
# HIP certificate configuration
dir = /etc/hip

[hip_spki]
issuerhit = hit
days = 365

[hip_x509v3]
issuerhit = hit  # inline comment
days = 30

[hip_x509v3_name]
issuerhit = 2001:10::1
"""


@pytest.fixture
def conf_file(tmp_path):
    path = tmp_path / "hip_cert.cnf"
    path.write_text(HIP_CERT_CONF)
    return path


class TestReadConfSection:
    """Test reading sections of the certificate configuration."""

    def test_read_section(self, conf_file):
        values = read_conf_section("hip_x509v3", conf_file)

        assert values["issuerhit"] == "hit"
        assert values["days"] == "30"

    def test_section_holds_only_its_own_keys(self, conf_file):
        """Test that keys before the first section stay out of named sections."""
        values = read_conf_section("hip_x509v3_name", conf_file)

        assert values == {"issuerhit": "2001:10::1"}

    def test_top_level_keys_in_default_section(self, conf_file):
        assert read_conf_section("default", conf_file) == {"dir": "/etc/hip"}

    def test_missing_section(self, conf_file):
        with pytest.raises(ConfigError, match="hip_missing"):
            read_conf_section("hip_missing", conf_file)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Failed to load"):
            read_conf_section("hip_spki", tmp_path / "absent.cnf")

    def test_default_path_from_settings(self, conf_file, monkeypatch):
        from hipcert import config

        monkeypatch.setattr(config.settings, "cert_conf_path", str(conf_file))

        assert read_conf_section("hip_x509v3")["days"] == "30"


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("HIPCERT_MAX_CERTIFICATE_SIZE", raising=False)

        settings = Settings(_env_file=None)

        assert settings.max_certificate_size == 4096
        assert settings.default_identity_type == "hit"
        assert settings.default_validity_seconds == 3600

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("HIPCERT_MAX_CERTIFICATE_SIZE", "8192")
        monkeypatch.setenv("HIPCERT_DAEMON_ENDPOINT", "http://[::1]:9000")

        settings = Settings(_env_file=None)

        assert settings.max_certificate_size == 8192
        assert settings.daemon_endpoint == "http://[::1]:9000"
