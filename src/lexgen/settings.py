"""Style policy and generation settings.

The style policy is a single immutable constant, ``STYLE_POLICY``; every
emitted file is rendered and formatted with it. Generation settings
(``CodegenSettings``) cover what may legitimately vary between projects:
target paths, output directory and where generated modules import their
registry class from. They can be loaded from a YAML file with environment
variable substitution:

```yaml
output_dir: ${LEXGEN_OUTPUT_DIR:-src/myapp/lexicons}
registry_module: myapp.lexicon
registry_class: Lexicons
```
"""

import dataclasses
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from lexgen.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StylePolicy:
    """Fixed formatting rules for generated source.

    Attributes:
        line_length: Maximum line length handed to the formatter
        indent_width: Spaces per indentation level in rendered literals
        quote_char: Quote used for string literals
        trailing_commas: Whether multi-line collections end each element with a comma
        statement_terminator: Text ending each top-level statement
        target_version: Oldest Python version the generated code must parse on
    """

    line_length: int = 88
    indent_width: int = 4
    quote_char: str = '"'
    trailing_commas: bool = True
    statement_terminator: str = "\n"
    target_version: str = "py310"


STYLE_POLICY = StylePolicy()


@dataclass(frozen=True)
class CodegenSettings:
    """Settings for one generation run.

    Attributes:
        output_dir: Directory generated files are written under
        lexicons_path: Target path of the primary (registry) module
        util_path: Target path of the static helper module
        registry_module: Module the generated code imports the registry class from
        registry_class: Name of the registry class built from the document list
    """

    output_dir: str = "generated"
    lexicons_path: str = "/lexicons.py"
    util_path: str = "/util.py"
    registry_module: str = "lexgen.registry"
    registry_class: str = "Lexicons"


DEFAULT_SETTINGS = CodegenSettings()


class VariableSubstitution:
    """Handles environment variable substitution in settings values.

    Supports patterns:
    - ${VAR} - Replace with environment variable VAR, error if not found
    - ${VAR:default} - Replace with VAR or use default if not found
    - ${VAR:-default} - Same as above (bash-style)
    """

    VAR_PATTERN = re.compile(r'\$\{([^}:]+)(?::(-)?([^}]*))?\}')

    def substitute(self, value: Any) -> Any:
        """Recursively substitute environment variables in a value.

        Raises:
            ConfigurationError: If a required environment variable is not found
        """
        if isinstance(value, str):
            return self._substitute_string(value)
        elif isinstance(value, dict):
            return {key: self.substitute(item) for key, item in value.items()}
        elif isinstance(value, list):
            return [self.substitute(item) for item in value]
        else:
            return value

    def _substitute_string(self, text: str) -> str:
        def replacer(match: re.Match) -> str:
            var_name = match.group(1)
            has_default = match.group(2) is not None or match.group(3) is not None

            if var_name in os.environ:
                return os.environ[var_name]
            elif has_default:
                return match.group(3) or ""
            else:
                raise ConfigurationError(
                    f"Environment variable '{var_name}' not found",
                    context={"variable": var_name, "value": text},
                )

        return self.VAR_PATTERN.sub(replacer, text)


def _field_names() -> List[str]:
    return [f.name for f in dataclasses.fields(CodegenSettings)]


def build_settings(values: Dict[str, Any]) -> CodegenSettings:
    """Build settings from a dictionary, rejecting unknown keys.

    Raises:
        ConfigurationError: If a key is unknown or a value is not a string
    """
    known = _field_names()
    for key, value in values.items():
        if key not in known:
            raise ConfigurationError(
                f"Unknown settings key '{key}'",
                context={"key": key, "available_keys": known},
            )
        if not isinstance(value, str) or not value:
            raise ConfigurationError(
                f"Setting '{key}' must be a non-empty string",
                context={"key": key, "value": value},
            )
    return dataclasses.replace(DEFAULT_SETTINGS, **values)


def load_settings(
    path: Union[str, Path, None] = None,
    overrides: Dict[str, Any] | None = None,
) -> CodegenSettings:
    """Load generation settings from an optional YAML file.

    Values from ``overrides`` take precedence over the file; anything left
    unset keeps its default.

    Args:
        path: YAML file containing a mapping of settings
        overrides: Explicit values, e.g. from command-line options

    Returns:
        The resolved settings

    Raises:
        ConfigurationError: If the file is missing, unparsable, not a mapping,
            or contains unknown keys
    """
    values: Dict[str, Any] = {}
    if path is not None:
        settings_path = Path(path)
        try:
            with open(settings_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read settings file: {settings_path}",
                context={"path": str(settings_path), "error": str(e)},
            ) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in settings file: {settings_path}",
                context={"path": str(settings_path), "error": str(e)},
            ) from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Settings file must contain a mapping, got {type(loaded).__name__}",
                context={"path": str(settings_path)},
            )
        values.update(VariableSubstitution().substitute(loaded))
        logger.debug("Loaded settings from %s: %s", settings_path, sorted(values))

    if overrides:
        values.update({k: v for k, v in overrides.items() if v is not None})

    return build_settings(values)


__all__ = [
    "StylePolicy",
    "STYLE_POLICY",
    "CodegenSettings",
    "DEFAULT_SETTINGS",
    "VariableSubstitution",
    "build_settings",
    "load_settings",
]
