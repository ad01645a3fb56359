"""Company record models consumed by the scoring engine."""

from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContactPerson(BaseModel):
    """A named contact at a company."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Contact name")
    phone: Optional[str] = None
    email: Optional[str] = None


class CompanyRecord(BaseModel):
    """A flat, read-only company record as returned by search or list retrieval."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(description="Unique company identifier")
    company_name_en: str = Field(default="", description="Display name")
    registered_no: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("registeredNo", "registrationId", "registered_no"),
        serialization_alias="registeredNo",
        description="Registration identifier",
    )
    industrial_name: str = Field(default="", description="Industry classification label")
    province: str = Field(default="", description="Location label")
    company_size: Optional[str] = Field(default=None, description="Size label, e.g. S/M/L")
    verification_status: Optional[str] = Field(
        default=None,
        description="Verification label, e.g. Active, Needs Verification, Invalid",
    )
    data_completeness: Optional[int] = Field(
        default=None,
        ge=0,
        le=100,
        description="Precomputed data-quality percentage",
    )
    contact_persons: tuple[ContactPerson, ...] = Field(default_factory=tuple)
