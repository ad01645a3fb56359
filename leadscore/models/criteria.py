"""Weighted scoring criteria schema."""

import math
from typing import Any, Iterator, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# Scoring order of the five dimensions
DIMENSIONS = ("keyword", "industrial", "province", "company_size", "contact_status")

# Alternate flat input names for a dimension
LEGACY_NAMES = {
    "contact_status": ("verificationStatus", "verification_status"),
}


class WeightedCriterion(BaseModel):
    """One active criterion: a value to match and the weight it awards."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(min_length=1, description="Value to match against the record")
    weight: float = Field(
        gt=0,
        allow_inf_nan=False,
        description="Points awarded when the value matches",
    )


class ScoringCriteria(BaseModel):
    """Sparse weighted criteria for lead scoring.

    A dimension is either absent or a ``WeightedCriterion``; there is no way to
    hold a value without a weight or the reverse. Both the flat form
    (``{"industrial": "Manufacturing", "industrialWeight": 20}``) and the nested
    form (``{"industrial": {"value": "Manufacturing", "weight": 20}}``) are
    accepted on input.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    keyword: Optional[WeightedCriterion] = None
    industrial: Optional[WeightedCriterion] = None
    province: Optional[WeightedCriterion] = None
    company_size: Optional[WeightedCriterion] = None
    contact_status: Optional[WeightedCriterion] = None

    minimum_score: float = Field(
        default=0.0,
        ge=0.0,
        le=100.0,
        description="Drop results whose normalized score is below this threshold",
    )

    @model_validator(mode="before")
    @classmethod
    def _fold_flat_criteria(cls, data: Any) -> Any:
        """Fold flat ``<name>`` / ``<name>Weight`` pairs into nested criteria."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        for name in ("minimumScore", "minimum_score"):
            if name in data and data[name] is None:
                del data[name]

        for dimension in DIMENSIONS:
            camel = to_camel(dimension)
            names = (camel, dimension) + LEGACY_NAMES.get(dimension, ())

            value = None
            weight = None
            flat = False
            for name in names:
                raw = data.pop(name, None)
                if isinstance(raw, WeightedCriterion):
                    data[dimension] = raw
                    break
                if isinstance(raw, dict):
                    # Nested form: a zero weight or empty value is inactive, like the flat form
                    nested_weight = raw.get("weight")
                    if isinstance(nested_weight, (int, float)) and nested_weight < 0:
                        raise ValueError(f"{camel} weight must not be negative")
                    if raw.get("value") and nested_weight:
                        data[dimension] = raw
                    break
                if raw is not None:
                    value = raw
                    flat = True
                for weight_name in (f"{name}Weight", f"{name}_weight"):
                    raw_weight = data.pop(weight_name, None)
                    if raw_weight is not None:
                        weight = raw_weight
                        flat = True
            else:
                if not flat:
                    continue
                if weight is not None and float(weight) < 0:
                    raise ValueError(f"{camel}Weight must not be negative")
                if value and weight:
                    data[dimension] = {"value": value, "weight": weight}

        return data

    @model_validator(mode="after")
    def _check_finite_total(self) -> "ScoringCriteria":
        if not math.isfinite(self.max_possible_score):
            raise ValueError("Sum of criterion weights must be finite")
        return self

    def active_criteria(self) -> Iterator[tuple[str, WeightedCriterion]]:
        """Yield (dimension, criterion) for each active criterion in scoring order."""
        for dimension in DIMENSIONS:
            criterion = getattr(self, dimension)
            if criterion is not None:
                yield dimension, criterion

    @property
    def max_possible_score(self) -> float:
        """Sum of weights of all active criteria."""
        return sum(criterion.weight for _, criterion in self.active_criteria())
