"""Rules document: which directory groups and users map to which Grafana roles.

Example document::

    mode: sync
    rules:
      groups:
        - name: engineering
          email: eng@example.com
          organization: Main Org.
          role: Editor
      users:
        - name: on-call lead
          email: lead@example.com
          organization: Main Org.
          role: Admin
"""

from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from infrastructure.configuration.base import ConfigurationError


class Rule(BaseModel):
    """Associates a directory group or user with a Grafana role."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    email: str = Field(min_length=1)
    organization: str
    role: str

    @property
    def label(self) -> str:
        return self.name or self.email


class RuleConfigs(BaseModel):
    """Rules per category."""

    groups: List[Rule] = Field(default_factory=list)
    users: List[Rule] = Field(default_factory=list)


class RulesDocument(BaseModel):
    """Top-level rules document."""

    model_config = ConfigDict(extra="ignore")

    rules: RuleConfigs = Field(default_factory=RuleConfigs)
    mode: str = ""

    @property
    def rule_count(self) -> int:
        return len(self.rules.groups) + len(self.rules.users)


def parse_rules(text: str, source: str = "<string>") -> RulesDocument:
    """Parse a YAML rules document.

    Raises:
        ConfigurationError: If the YAML is malformed or does not match the schema
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML file {source}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Rules document {source} must be a mapping, got {type(data).__name__}"
        )

    try:
        return RulesDocument.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid rules document {source}: {e}") from e


def load_rules(path: str) -> RulesDocument:
    """Read and parse the rules document at ``path``.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Error reading YAML file {path}: {e}") from e
    return parse_rules(text, source=path)
