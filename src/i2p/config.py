"""
Settings for the extractor, read from the environment and .env files.
"""
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

ENV_PREFIX = "I2P_"


class ExtractorSettings(BaseModel):
    """
    Runtime settings.

    Environment variables (prefixed with I2P_): DOCKER_HOST, DOCKER_TIMEOUT,
    EXTRACT_TIMEOUT, EXTRACTORS (comma separated, tried in order).
    """
    docker_host: Optional[str] = None
    docker_timeout: int = 60
    extract_timeout: Optional[float] = None
    extractors: List[str] = ["file", "cmd"]

    @field_validator("extractors", mode="before")
    @classmethod
    def _split_extractors(cls, value):
        if isinstance(value, str):
            return [name.strip() for name in value.split(",") if name.strip()]
        return value

    @field_validator("docker_host", "extract_timeout", mode="before")
    @classmethod
    def _empty_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


def load_settings(env_file: Optional[str] = None) -> ExtractorSettings:
    """
    Loads settings from the process environment.

    :param env_file: Optional .env file; its values never override variables
        already set in the environment.
    :return: The parsed settings.
    """
    if env_file:
        load_dotenv(env_file, override=False)
    else:
        load_dotenv(override=False)

    values = {}
    for field in ExtractorSettings.model_fields:
        key = ENV_PREFIX + field.upper()
        if key in os.environ:
            values[field] = os.environ[key]
    return ExtractorSettings(**values)
