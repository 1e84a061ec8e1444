"""Pydantic schemas for the customer analysis and message drafting workflows."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


MessageType = Literal["first_contact", "proposal_response", "thank_you", "follow_up"]

_LOCALIZED_TYPES = {
    "soğuk": "cold",
    "soguk": "cold",
    "ılık": "warm",
    "ilik": "warm",
    "sıcak": "hot",
    "sicak": "hot",
}


class CustomerAnalysisResult(BaseModel):
    """Classification returned by the model, with the defaults used when a key is missing."""

    customer_type: Literal["cold", "warm", "hot"] = "cold"
    interested_services: str = ""
    potential_budget: float = 0
    sales_difficulty_score: int = 5
    detailed_analysis: str = ""
    recommendations: str = ""
    next_actions: str = ""

    @field_validator("customer_type", mode="before")
    @classmethod
    def _lower_type(cls, value: Optional[str]) -> str:
        if not value:
            return "cold"
        normalized = str(value).strip().lower()
        return _LOCALIZED_TYPES.get(normalized, normalized)

    @field_validator("sales_difficulty_score", mode="before")
    @classmethod
    def _clamp_score(cls, value: object) -> int:
        try:
            score = int(float(value))  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 5
        return max(1, min(10, score))

    @field_validator("potential_budget", mode="before")
    @classmethod
    def _budget(cls, value: object) -> float:
        try:
            return float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 0

    @field_validator(
        "interested_services",
        "detailed_analysis",
        "recommendations",
        "next_actions",
        mode="before",
    )
    @classmethod
    def _text(cls, value: object) -> str:
        if value is None:
            return ""
        if isinstance(value, list):
            return ", ".join(str(item) for item in value)
        return str(value)


class DraftMessageRequest(BaseModel):
    customer_id: int
    message_type: str = "first_contact"


class DraftMessageResponse(BaseModel):
    message: str = Field(..., description="Generated message text.")


class TranscriptionResponse(BaseModel):
    text: str
