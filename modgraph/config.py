"""modgraph configuration: modgraph.toml or [tool.modgraph] in pyproject.toml.

Example modgraph.toml, next to Package.swift:

    excluded_suffixes = ["Mock", "Snapshots"]

    [tests]
    base_branch = "develop"

    [lint]
    strict = true
    expected_warnings_count = 2
    rules = ["liveModuleLiveDependency", "unusedDependencies"]

    [lint.rule_options.unusedDependencies]
    excluded_dependencies = ["Logging"]
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from modgraph.errors import ConfigError
from modgraph.graph import DEFAULT_CLASSIFIER, ModuleClassifier
from modgraph.lint.engine import Rule
from modgraph.lint.rules import DEFAULT_RULE_IDS, RULE_FACTORIES, build_rules
from modgraph.logging import get_logger

CONFIG_FILE_NAME = "modgraph.toml"

_log = get_logger("config")


@dataclass(frozen=True)
class LintConfig:
    is_strict: bool = False
    expected_warnings_count: int = 0
    rules: tuple[str, ...] = DEFAULT_RULE_IDS
    rule_options: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    def build_rules(self, classifier: ModuleClassifier = DEFAULT_CLASSIFIER) -> List[Rule]:
        return build_rules(self.rules, self.rule_options, classifier)


@dataclass(frozen=True)
class ModGraphConfig:
    excluded_suffixes: tuple[str, ...] = ()
    base_branch: str = "main"
    lint: LintConfig = field(default_factory=LintConfig)

    def with_overrides(
        self,
        *,
        excluded_suffixes: Sequence[str] = (),
        base_branch: Optional[str] = None,
        is_strict: bool = False,
        expected_warnings_count: int = 0,
    ) -> "ModGraphConfig":
        """Apply CLI values; they win whenever they are set."""
        lint = replace(
            self.lint,
            is_strict=is_strict or self.lint.is_strict,
            expected_warnings_count=(
                expected_warnings_count if expected_warnings_count > 0 else self.lint.expected_warnings_count
            ),
        )
        return replace(
            self,
            excluded_suffixes=tuple(excluded_suffixes) if excluded_suffixes else self.excluded_suffixes,
            base_branch=base_branch or self.base_branch,
            lint=lint,
        )


DEFAULT_CONFIG = ModGraphConfig()


def _string_list(value: Any, key: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of strings")
    return tuple(value)


def _lint_from_dict(data: Mapping[str, Any]) -> LintConfig:
    strict = data.get("strict", False)
    if not isinstance(strict, bool):
        raise ConfigError("lint.strict must be a boolean")
    count = data.get("expected_warnings_count", 0)
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise ConfigError("lint.expected_warnings_count must be a non-negative integer")
    rules = _string_list(data["rules"], "lint.rules") if "rules" in data else DEFAULT_RULE_IDS
    options = data.get("rule_options", {})
    if not isinstance(options, dict) or not all(isinstance(v, dict) for v in options.values()):
        raise ConfigError("lint.rule_options must map rule ids to tables")
    unknown = sorted(set(options) - set(RULE_FACTORIES))
    if unknown:
        raise ConfigError(f"lint.rule_options names unknown rules: {', '.join(unknown)}")
    lint = LintConfig(is_strict=strict, expected_warnings_count=count, rules=rules, rule_options=options)
    # Fail on unknown rule ids/options at load time, not in the middle of a run.
    lint.build_rules()
    return lint


def config_from_dict(data: Mapping[str, Any]) -> ModGraphConfig:
    if not isinstance(data, dict):
        raise ConfigError("modgraph configuration must be a table")
    suffixes = _string_list(data.get("excluded_suffixes", []), "excluded_suffixes")
    tests = data.get("tests", {})
    if not isinstance(tests, dict):
        raise ConfigError("[tests] must be a table")
    base_branch = tests.get("base_branch", "main")
    if not isinstance(base_branch, str) or not base_branch.strip():
        raise ConfigError("tests.base_branch must be a non-empty string")
    lint = data.get("lint", {})
    if not isinstance(lint, dict):
        raise ConfigError("[lint] must be a table")
    return ModGraphConfig(
        excluded_suffixes=suffixes,
        base_branch=base_branch.strip(),
        lint=_lint_from_dict(lint),
    )


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc


def find_config_file(package_dir: Path) -> Optional[Path]:
    candidate = package_dir / CONFIG_FILE_NAME
    if candidate.is_file():
        return candidate
    pyproject = package_dir / "pyproject.toml"
    if pyproject.is_file():
        return pyproject
    return None


def load_config(package_dir: Path, config_file: Optional[Path] = None) -> ModGraphConfig:
    """Load configuration for a package; no file means the default config."""
    path = config_file or find_config_file(Path(package_dir))
    if path is None:
        _log.debug("modgraph: no %s in %s, using defaults", CONFIG_FILE_NAME, package_dir)
        return DEFAULT_CONFIG
    if config_file is not None and not path.is_file():
        raise ConfigError(f"config file not found: {path}")
    data = _read_toml(path)
    if path.name == "pyproject.toml":
        tool = data.get("tool", {})
        if not isinstance(tool, dict):
            raise ConfigError(f"[tool] in {path} must be a table")
        data = tool.get("modgraph")
        if data is None:
            return DEFAULT_CONFIG
        if not isinstance(data, dict):
            raise ConfigError(f"[tool.modgraph] in {path} must be a table")
    _log.debug("modgraph: loaded configuration from %s", path)
    return config_from_dict(data)
