"""Configuration loading and validation."""

import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from plugin_installer.messages import DEBUG, DEFAULT_OUTPUT_LEVELS, MESSAGE_LEVELS


class ConfigError(Exception):
    """Raised when config loading or parsing fails.

    Provides detailed error messages including field paths for validation
    errors and line/column positions for YAML syntax errors.
    """
    pass


MARKER_INSTALLER = "marker"

# group.component, e.g. "ling.light_database"
COMPONENT_ID_PATTERN = re.compile(r"^[A-Za-z_][\w-]*\.[A-Za-z_][\w-]*$")


def is_component_id(value: str) -> bool:
    """Check whether value is a two-part dotted component name."""
    return isinstance(value, str) and COMPONENT_ID_PATTERN.match(value) is not None


@dataclass
class ComponentConfig:
    """Registration entry for a single component."""
    component_id: str
    installer: str
    dependencies: list[str] = field(default_factory=list)

    def __post_init__(self):
        if not is_component_id(self.component_id):
            raise ValueError(
                f"'{self.component_id}' is not a valid component id "
                "(expected 'group.component')"
            )
        if not self.installer or not isinstance(self.installer, str):
            raise ValueError("installer must be a non-empty string")
        if self.installer != MARKER_INSTALLER and ":" not in self.installer:
            raise ValueError(
                f"installer must be '{MARKER_INSTALLER}' or a 'module:attribute' "
                f"import path, got '{self.installer}'"
            )
        if self.dependencies and self.installer != MARKER_INSTALLER:
            raise ValueError(
                f"dependencies are only accepted for the '{MARKER_INSTALLER}' "
                "installer; custom installers declare their own"
            )
        for dep in self.dependencies:
            if not is_component_id(dep):
                raise ValueError(f"dependency '{dep}' is not a valid component id")

    @property
    def is_marker(self) -> bool:
        return self.installer == MARKER_INSTALLER


@dataclass
class Config:
    """Root configuration."""
    application_dir: Path
    components: list[ComponentConfig] = field(default_factory=list)
    universe_dir: Path | None = None
    output_levels: list[str] = field(
        default_factory=lambda: sorted(DEFAULT_OUTPUT_LEVELS)
    )
    use_debug: bool = False

    def __post_init__(self):
        for level in self.output_levels:
            if level not in MESSAGE_LEVELS:
                raise ValueError(
                    f"output level '{level}' must be one of: "
                    f"{', '.join(MESSAGE_LEVELS)}"
                )
        seen = set()
        for component in self.components:
            if component.component_id in seen:
                raise ValueError(
                    f"component '{component.component_id}' is declared twice"
                )
            seen.add(component.component_id)

    @property
    def enabled_levels(self) -> set[str]:
        levels = set(self.output_levels)
        if self.use_debug:
            levels.add(DEBUG)
        return levels

    def get_component(self, component_id: str) -> ComponentConfig | None:
        return next(
            (c for c in self.components if c.component_id == component_id), None
        )


def _resolve_dir(value: object, field_name: str, base_dir: Path) -> Path:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{field_name} must be a non-empty string")
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path


def _validate_component(component_id: object, data: object) -> ComponentConfig:
    if not isinstance(component_id, str):
        raise ConfigError(
            f"components keys must be strings, got {type(component_id).__name__}"
        )
    entity = f"components.{component_id}"

    if data is None:
        data = {}
    if isinstance(data, str):
        data = {"installer": data}
    if not isinstance(data, dict):
        raise ConfigError(
            f"{entity} must be a mapping or an installer string, "
            f"got {type(data).__name__}"
        )

    installer = data.get("installer", MARKER_INSTALLER)
    if not isinstance(installer, str):
        raise ConfigError(
            f"{entity}.installer must be a string, got {type(installer).__name__}"
        )

    dependencies = data.get("dependencies") or []
    if not isinstance(dependencies, list) or not all(
        isinstance(d, str) for d in dependencies
    ):
        raise ConfigError(f"{entity}.dependencies must be a list of strings")

    unknown = set(data) - {"installer", "dependencies"}
    if unknown:
        raise ConfigError(f"{entity} has unknown fields: {', '.join(sorted(unknown))}")

    try:
        return ComponentConfig(
            component_id=component_id,
            installer=installer,
            dependencies=list(dependencies),
        )
    except ValueError as e:
        raise ConfigError(f"{entity}: {e}")


def validate_config(data: object, base_dir: Path) -> Config:
    """Validate and convert raw dict to Config dataclass.

    Args:
        data: Raw data from yaml.safe_load()
        base_dir: Directory relative paths are resolved against (normally the
            config file's directory)

    Returns:
        Config object with validated ComponentConfig instances

    Raises:
        ConfigError: If validation fails with clear field path errors
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")

    application_dir = base_dir
    if data.get("application_dir") is not None:
        application_dir = _resolve_dir(
            data["application_dir"], "application_dir", base_dir
        )

    universe_dir = None
    if data.get("universe_dir") is not None:
        universe_dir = _resolve_dir(data["universe_dir"], "universe_dir", application_dir)

    output_levels = data.get("output_levels")
    if output_levels is None:
        output_levels = sorted(DEFAULT_OUTPUT_LEVELS)
    if not isinstance(output_levels, list) or not all(
        isinstance(level, str) for level in output_levels
    ):
        raise ConfigError("output_levels must be a list of strings")

    use_debug = data.get("use_debug")
    if use_debug is None:
        use_debug = False
    if not isinstance(use_debug, bool):
        raise ConfigError(
            f"use_debug must be a boolean, got {type(use_debug).__name__}"
        )

    components_data = data.get("components") or {}
    if not isinstance(components_data, dict):
        raise ConfigError(
            f"components must be a mapping, got {type(components_data).__name__}"
        )
    components = [
        _validate_component(component_id, component_data)
        for component_id, component_data in components_data.items()
    ]

    try:
        return Config(
            application_dir=application_dir,
            components=components,
            universe_dir=universe_dir,
            output_levels=list(output_levels),
            use_debug=use_debug,
        )
    except ValueError as e:
        raise ConfigError(str(e))


def _format_syntax_error(original_text: str, error: yaml.MarkedYAMLError) -> str:
    """Format a YAML syntax error with line, caret, and context."""
    mark = error.problem_mark
    if mark is None:
        return f"Config syntax error: {error.problem or error}"

    line_num = mark.line + 1
    col_num = mark.column + 1
    msg_parts = [
        f"Config syntax error at line {line_num}, col {col_num}: {error.problem}"
    ]

    lines = original_text.split("\n")
    if 1 <= line_num <= len(lines):
        msg_parts.append(lines[line_num - 1])
        msg_parts.append(" " * mark.column + "^")

    return "\n".join(msg_parts)


def load_config(path: Path) -> Config:
    """Load, parse and validate a YAML config file.

    Raises:
        ConfigError: If the file cannot be read, contains syntax errors, or
            fails validation.
    """
    try:
        original_text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}")
    except PermissionError:
        raise ConfigError(f"Permission denied reading config file: {path}")
    except UnicodeDecodeError:
        raise ConfigError(f"Config file is not valid UTF-8: {path}")
    except IOError as e:
        raise ConfigError(f"Error reading config file {path}: {e}")

    try:
        data = yaml.safe_load(original_text)
    except yaml.MarkedYAMLError as e:
        raise ConfigError(_format_syntax_error(original_text, e)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Config syntax error: {e}") from e

    return validate_config(data, path.resolve().parent)


__all__ = [
    "ConfigError",
    "ComponentConfig",
    "Config",
    "MARKER_INSTALLER",
    "is_component_id",
    "validate_config",
    "load_config",
]
