# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""Configuration management for hipcert."""

import configparser
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Certificate configuration file or section could not be read."""


class Settings(BaseSettings):
    """Settings loaded from HIPCERT_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="HIPCERT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Certificate daemon
    daemon_endpoint: str = "http://127.0.0.1:8093"
    request_timeout: float = 5.0

    # Codec limits (HIP maximum packet size)
    max_certificate_size: int = 4096

    # Certificate configuration file (OpenSSL-style INI)
    cert_conf_path: str = "/etc/hip/hip_cert.cnf"

    # Builder defaults
    default_identity_type: str = "hit"
    default_validity_seconds: int = 3600

    # Logging
    log_level: str = "INFO"


# Global settings instance
settings = Settings()


def read_conf_section(
    section_name: str,
    path: Optional[Union[str, Path]] = None,
) -> dict[str, str]:
    """
    Read one section of the certificate configuration file.

    Args:
        section_name: Section to retrieve (e.g. "hip_spki")
        path: Configuration file (defaults to settings.cert_conf_path)

    Returns:
        Mapping of option name to value for the section

    Raises:
        ConfigError: If the file cannot be loaded or lacks the section
    """
    conf_path = Path(path or settings.cert_conf_path)

    # OpenSSL config allows "#" and ";" comments and keys outside any section.
    # Top-level keys land in their own "default" section, not in every section.
    parser = configparser.ConfigParser(
        interpolation=None,
        inline_comment_prefixes=("#", ";"),
        strict=False,
    )
    try:
        with open(conf_path, "r", encoding="utf-8") as f:
            parser.read_string("[default]\n" + f.read(), source=str(conf_path))
    except (OSError, configparser.Error) as e:
        logger.error(f"Error opening the configuration file {conf_path}: {e}")
        raise ConfigError(f"Failed to load {conf_path}: {e}") from e

    if not parser.has_section(section_name):
        logger.error(f"Section {section_name} was not in the configuration ({conf_path})")
        raise ConfigError(f"Section {section_name} not found in {conf_path}")

    return {key: parser.get(section_name, key) for key in parser.options(section_name)}
