"""Public API for baby-rattle."""

from baby_rattle.baby import Baby
from baby_rattle.capabilities import (
    CapabilityError,
    MissingCapabilityError,
    RattleLike,
    ReservedCapabilityError,
    UndeclaredCapabilityError,
    declared_capabilities,
)
from baby_rattle.doubles import double, instance_double
from baby_rattle.rattle import SHAKE_SOUND, Rattle
from baby_rattle.scenarios import (
    Scenario,
    ScenarioError,
    ScenarioExpectation,
    ScenarioOutcome,
    SubstituteDeclaration,
    load_scenarios,
    run_scenario,
    run_scenarios,
)

__all__ = [
    # Collaborators
    "Baby",
    "Rattle",
    "RattleLike",
    "SHAKE_SOUND",
    # Capabilities and errors
    "CapabilityError",
    "MissingCapabilityError",
    "ReservedCapabilityError",
    "UndeclaredCapabilityError",
    "declared_capabilities",
    # Substitutes
    "double",
    "instance_double",
    # Scenario catalogue
    "Scenario",
    "ScenarioError",
    "ScenarioExpectation",
    "ScenarioOutcome",
    "SubstituteDeclaration",
    "load_scenarios",
    "run_scenario",
    "run_scenarios",
]
