# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Settings management for the implements command line tool."""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

import jsonschema
from jsonschema.exceptions import ValidationError as SchemaValidationError
import yaml

from ..exceptions import ConfigurationError, InvocationError
from ..models.json_schema_loader import load_schema
from ..utils.logging_utils import configure_cli_logging
from .match_options import MatchOptions

logger = logging.getLogger(__name__)

ENV_PREFIX = "IMPLEMENTS_"


@dataclass
class ImplementsSettings:
    """Settings for logging and default match options."""
    log_level: str = "WARNING"
    print_level: str = "ERROR"
    default_options: str = ""

    def __post_init__(self):
        try:
            MatchOptions.parse(self.default_options)
        except InvocationError as e:
            raise ConfigurationError(f"Invalid default_options: {e}") from e

    @classmethod
    def from_env(cls) -> 'ImplementsSettings':
        """Create settings from environment variables."""
        return cls(
            log_level=os.getenv(f'{ENV_PREFIX}LOG_LEVEL', 'WARNING'),
            print_level=os.getenv(f'{ENV_PREFIX}PRINT_LEVEL', 'ERROR'),
            default_options=os.getenv(f'{ENV_PREFIX}DEFAULT_OPTIONS', ''),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str = "<dict>") -> 'ImplementsSettings':
        """Create settings from a mapping, checked against the settings schema."""
        schema = load_schema("settings")
        try:
            jsonschema.validate(instance=data, schema=schema)
        except SchemaValidationError as e:
            path = "/" + "/".join(str(p) for p in e.absolute_path) if e.absolute_path else "/"
            raise ConfigurationError(f"Invalid settings in {source} at {path}: {e.message}") from e
        return cls(**data)

    @classmethod
    def from_yaml(cls, file_path: Union[str, Path]) -> 'ImplementsSettings':
        """Load settings from a YAML file."""
        path = Path(file_path)
        if not path.is_file():
            raise ConfigurationError(f"Settings file not found: {path}")

        logger.debug(f"Loading settings file: {path}")
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse settings file {path}: {e}") from e

        if data is None:
            data = {}
        return cls.from_dict(data, source=str(path))

    def match_options(self) -> MatchOptions:
        return MatchOptions.parse(self.default_options)

    def set_logging(self) -> logging.Logger:
        """Setup logging based on settings."""
        return configure_cli_logging(self.log_level, self.print_level)
