"""Named weight presets for lead scoring."""

from typing import Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from leadscore.models import DIMENSIONS, ScoringCriteria
from leadscore.models.criteria import LEGACY_NAMES


class ScoringPreset(BaseModel):
    """A reusable set of criterion weights."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    description: str = ""
    weights: dict[str, float] = Field(
        default_factory=dict,
        description="Dimension name -> weight",
    )
    created_by: str = "System"

    @field_validator("weights")
    @classmethod
    def _check_weights(cls, weights: dict[str, float]) -> dict[str, float]:
        for dimension, weight in weights.items():
            if dimension not in DIMENSIONS:
                raise ValueError(f"Unknown scoring dimension: {dimension}")
            if weight < 0:
                raise ValueError(f"Weight for {dimension} must not be negative")
        return weights

    @property
    def total_weight(self) -> float:
        return sum(self.weights.values())

    def build_criteria(
        self,
        values: Mapping[str, Optional[str]],
        minimum_score: float = 0.0,
    ) -> ScoringCriteria:
        """Combine this preset's weights with the values to match.

        Values may be keyed by snake_case or camelCase dimension name, or by
        ``verificationStatus`` for the contact status. A dimension with no
        value, or no weight in the preset, stays inactive.
        """
        data: dict[str, object] = {"minimum_score": minimum_score}
        for dimension, weight in self.weights.items():
            names = (dimension, to_camel(dimension)) + LEGACY_NAMES.get(dimension, ())
            value = next((values[name] for name in names if values.get(name)), None)
            if value and weight:
                data[dimension] = {"value": value, "weight": weight}
        return ScoringCriteria.model_validate(data)


DEFAULT_PRESETS = [
    ScoringPreset(
        id="1",
        name="Logistics Focus",
        description="Optimized for logistics companies in Bangkok area",
        weights={
            "industrial": 35,
            "province": 25,
            "company_size": 10,
            "contact_status": 10,
        },
        created_by="Admin",
    ),
    ScoringPreset(
        id="2",
        name="Manufacturing B2B",
        description="Focused on large manufacturing companies",
        weights={
            "industrial": 35,
            "province": 15,
            "company_size": 20,
            "contact_status": 10,
        },
        created_by="Sales Manager",
    ),
]


def get_preset(name_or_id: str) -> ScoringPreset:
    """Look up a preset by id or case-insensitive name."""
    for preset in DEFAULT_PRESETS:
        if preset.id == name_or_id or preset.name.lower() == name_or_id.lower():
            return preset
    raise KeyError(f"Unknown scoring preset: {name_or_id}")
