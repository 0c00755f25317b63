from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

RequirementType = Literal[
    "citizenship",
    "security_clearance",
    "background_check",
    "sponsorship",
    "language",
    "location",
    "relocation",
    "drug_test",
]
RequirementStatus = Literal["met", "risk", "unknown"]
ClearanceLevel = Literal["none", "public_trust", "secret", "top_secret", "ts_sci"]


class RequirementProfile(BaseModel):
    """What the candidate has told us about eligibility; unset fields mean unknown."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    work_authorization: Literal["citizen", "permanent_resident", "visa", "other"] | None = None
    requires_sponsorship: bool | None = None
    security_clearance: ClearanceLevel | None = None
    can_pass_background_check: bool | None = None
    can_pass_drug_test: bool | None = None
    languages: list[str] = Field(default_factory=list)
    city: str | None = None
    state: str | None = None
    willing_to_relocate: bool | None = None
    remote_preference: Literal["remote", "hybrid", "onsite", "flexible"] | None = None


class RequirementGap(BaseModel):
    type: RequirementType
    label: str
    jd_requirement: str
    user_status: RequirementStatus
    user_value: str | None = None
