"""Annotated scenario catalogue: YAML loading, validation and execution."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from baby_rattle.baby import Baby
from baby_rattle.capabilities import (
    CapabilityError,
    MissingCapabilityError,
    ReservedCapabilityError,
    UndeclaredCapabilityError,
)
from baby_rattle.doubles import double, instance_double
from baby_rattle.rattle import Rattle

logger = logging.getLogger(__name__)

SCENARIOS_ENV_VAR = "BABY_RATTLE_SCENARIOS"
DEFAULT_SCENARIOS_PATH = Path(__file__).parent / "data" / "scenarios.yaml"

_ERROR_KINDS: dict[str, type[CapabilityError]] = {
    "MissingCapabilityError": MissingCapabilityError,
    "UndeclaredCapabilityError": UndeclaredCapabilityError,
    "ReservedCapabilityError": ReservedCapabilityError,
}


class ScenarioError(RuntimeError):
    """Raised for scenario catalogue loading errors."""


# ---------------------------------------------------------------------------
# Catalogue models
# ---------------------------------------------------------------------------

class SubstituteDeclaration(BaseModel):
    """How to build a substitute collaborator for a scenario."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["unchecked", "checked"]
    name: str | None = None
    stubs: dict[str, Any] = Field(default_factory=dict)

    def build(self) -> Any:
        """Create the substitute. Checked substitutes are verified against ``Rattle``."""
        if self.kind == "checked":
            return instance_double(Rattle, self.name, **self.stubs)
        return double(self.name, **self.stubs)


class ScenarioExpectation(BaseModel):
    """Exactly one of ``returns``, ``raises`` or ``collects``."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    returns: Any = None
    raises: Literal[
        "MissingCapabilityError", "UndeclaredCapabilityError", "ReservedCapabilityError"
    ] | None = None
    collects: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _exactly_one(self) -> ScenarioExpectation:
        chosen = self.model_fields_set & {"returns", "raises", "collects"}
        if len(chosen) != 1:
            raise ValueError(
                "expect must set exactly one of 'returns', 'raises', 'collects', "
                f"got {sorted(chosen) or 'none'}"
            )
        return self

    @property
    def kind(self) -> str:
        return next(iter(self.model_fields_set & {"returns", "raises", "collects"}))


class Scenario(BaseModel):
    """One Baby, one collaborator, one operation and what it should produce."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    note: str = ""
    collaborator: Literal["default", "real"] | SubstituteDeclaration = "default"
    operation: Literal["shake_rattle", "throw_rattle", "collect_rattle"]
    repeat: int = Field(default=1, ge=1)
    expect: ScenarioExpectation

    @model_validator(mode="after")
    def _collects_only_when_collecting(self) -> Scenario:
        if self.expect.kind == "collects" and self.operation != "collect_rattle":
            raise ValueError(
                f"expect.collects requires operation 'collect_rattle', got '{self.operation}'"
            )
        return self


class ScenarioCatalogue(BaseModel):
    """Top-level shape of a scenario YAML file."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    scenarios: list[Scenario] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_ids(self) -> ScenarioCatalogue:
        seen: set[str] = set()
        for scenario in self.scenarios:
            if scenario.id in seen:
                raise ValueError(f"Duplicate scenario id: {scenario.id}")
            seen.add(scenario.id)
        return self


class ScenarioOutcome(BaseModel):
    """Result of running one scenario against a freshly built Baby."""
    model_config = ConfigDict(frozen=True)

    scenario_id: str
    passed: bool
    observed: str
    error: str | None = None


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def default_scenarios_path() -> Path:
    """Return the catalogue path, honouring ``BABY_RATTLE_SCENARIOS``."""
    override = os.environ.get(SCENARIOS_ENV_VAR, "").strip()
    if override:
        return Path(override)
    return DEFAULT_SCENARIOS_PATH


def load_scenarios(path: Path | str | None = None) -> list[Scenario]:
    """Load and validate a scenario catalogue from YAML.

    Raises ScenarioError when the file is missing, is not a mapping, or
    fails schema validation.
    """
    path = Path(path) if path is not None else default_scenarios_path()
    if not path.exists():
        raise ScenarioError(f"Scenario catalogue not found: {path}")

    with open(path, "r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}

    if not isinstance(raw, dict):
        raise ScenarioError(f"Scenario catalogue must be a mapping: {path}")

    try:
        catalogue = ScenarioCatalogue.model_validate(raw)
    except ValidationError as exc:
        raise ScenarioError(f"Invalid scenario catalogue {path}: {exc}") from exc

    logger.debug("Loaded %d scenarios from %s", len(catalogue.scenarios), path)
    return list(catalogue.scenarios)


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------

def _build_baby(scenario: Scenario) -> Baby:
    if scenario.collaborator == "default":
        return Baby()
    if scenario.collaborator == "real":
        return Baby(Rattle())
    return Baby(scenario.collaborator.build())


def run_scenario(scenario: Scenario) -> ScenarioOutcome:
    """Run a single scenario. Capability errors become outcomes, not exceptions."""
    expect = scenario.expect
    logger.debug("Running scenario %s (%s)", scenario.id, scenario.operation)

    try:
        baby = _build_baby(scenario)
        operation = getattr(baby, scenario.operation)
        for _ in range(scenario.repeat):
            result = operation()
    except CapabilityError as exc:
        observed = type(exc).__name__
        if expect.kind == "raises":
            expected_type = _ERROR_KINDS[expect.raises]
            passed = isinstance(exc, expected_type)
        else:
            passed = False
        return ScenarioOutcome(
            scenario_id=scenario.id, passed=passed, observed=observed, error=str(exc)
        )

    if expect.kind == "returns":
        passed = result == expect.returns
    elif expect.kind == "collects":
        passed = (
            len(result) == expect.collects
            and all(toy is baby.rattle for toy in result)
        )
    else:
        passed = False
    return ScenarioOutcome(scenario_id=scenario.id, passed=passed, observed=repr(result))


def run_scenarios(scenarios: list[Scenario]) -> list[ScenarioOutcome]:
    return [run_scenario(scenario) for scenario in scenarios]
