"""Runtime configuration: per-audit ignore rules."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "actionlint-core.yml"

_POSITIVE_INT = re.compile(r"\+?[0-9]+")


class ConfigError(ValueError):
    """Raised when a configuration or rule cannot be loaded."""


def _positive(component: str, what: str) -> int:
    if not _POSITIVE_INT.fullmatch(component) or int(component) == 0:
        raise ConfigError(f"invalid {what} number component (must be 1-based)")
    return int(component)


@dataclass(frozen=True)
class WorkflowRule:
    """An ignore rule: a workflow filename with optional 1-based line and column."""

    filename: str
    line: int | None = None
    column: int | None = None

    @classmethod
    def parse(cls, text: str) -> WorkflowRule:
        """Parse ``name.yml[:line[:column]]``."""
        filename, *rest = text.rsplit(":", 2)
        if not filename.endswith((".yml", ".yaml")):
            raise ConfigError(f"invalid workflow filename: {filename}")
        line = _positive(rest[0], "line") if rest else None
        column = _positive(rest[1], "column") if len(rest) > 1 else None
        return cls(filename, line, column)

    def matches(self, filename: str, line: int, column: int) -> bool:
        """Return True if this rule covers the given 1-based position."""
        if self.filename != filename:
            return False
        if self.line is None:
            return True
        return self.line == line and (self.column is None or self.column == column)


@dataclass(frozen=True)
class AuditRuleConfig:
    """Configuration for a single audit."""

    ignore: tuple[WorkflowRule, ...] = ()


@dataclass(frozen=True)
class Config:
    """Configuration loaded from a YAML file."""

    rules: Mapping[str, AuditRuleConfig] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, text: str) -> Config:
        """Build a configuration from YAML text."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid configuration YAML: {exc}") from exc
        if not isinstance(data, dict) or "rules" not in data:
            raise ConfigError("configuration must be a mapping with a `rules` key")
        rules_data = data["rules"]
        if not isinstance(rules_data, dict):
            raise ConfigError("`rules` must be a mapping")

        rules: dict[str, AuditRuleConfig] = {}
        for ident, body in rules_data.items():
            if not isinstance(body, dict) or "ignore" not in body:
                raise ConfigError(f"rule {ident!r} must be a mapping with an `ignore` key")
            ignore = body["ignore"]
            if not isinstance(ignore, list) or not all(isinstance(i, str) for i in ignore):
                raise ConfigError(f"`ignore` for rule {ident!r} must be a list of strings")
            rules[str(ident)] = AuditRuleConfig(tuple(WorkflowRule.parse(i) for i in ignore))
        return cls(rules)

    @classmethod
    def _read(cls, path: Path) -> Config:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"couldn't read configuration {path}: {exc}") from exc
        return cls.from_yaml(text)

    @classmethod
    def discover(cls, cwd: str | Path) -> Config:
        """Look for ``.github/<name>`` then ``<name>`` under ``cwd``."""
        base = Path(cwd)
        for candidate in (base / ".github" / CONFIG_FILENAME, base / CONFIG_FILENAME):
            if candidate.is_file():
                return cls._read(candidate)
        logger.debug("no config discovered; loading default")
        return cls()

    @classmethod
    def load(cls, path: str | Path | None = None, no_config: bool = False) -> Config:
        """Load from ``path``, or discover relative to the working directory."""
        if no_config:
            return cls()
        config = cls._read(Path(path)) if path is not None else cls.discover(Path.cwd())
        logger.debug("loaded config: %r", config)
        return config

    def ignores(self, ident: str, locations: Iterable[tuple[str, int, int]]) -> bool:
        """Return True if any location of a finding matches an ignore rule.

        Each location is ``(filename, line, column)``, 1-based.
        """
        rule_config = self.rules.get(ident)
        if rule_config is None:
            return False
        return any(
            rule.matches(filename, line, column)
            for filename, line, column in locations
            for rule in rule_config.ignore
        )