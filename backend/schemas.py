"""Pydantic schemas for API request/response."""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _validate_email(value: str) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError("Email is required")
    if not EMAIL_PATTERN.match(normalized):
        raise ValueError("Invalid email format")
    return normalized


class AnalysisReportResponse(BaseModel):
    """Report returned by GET /api/full and GET /api/friendly (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    score: int = Field(ge=20, le=100)
    whats_working: list[str]
    needs_attention: list[str]
    engine_insights: list[str]
    meta: dict[str, Any] = Field(default_factory=dict)


class AnalyzerStatusResponse(BaseModel):
    """Capability check for the analysis endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ok: bool
    has_api_key: bool
    has_page_speed_key: bool
    model: str


class ReportRequest(BaseModel):
    """Request body for POST /api/send-report-request."""

    name: str
    email: str
    phone: str

    @field_validator("name", "phone", mode="before")
    @classmethod
    def require_text(cls, value: object) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("All fields are required.")
        return text

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, value: object) -> str:
        return _validate_email(str(value or ""))


class ReportRequestResponse(BaseModel):
    message: str


class SendLinkRequest(BaseModel):
    """Request body for POST /api/send-link."""

    name: str
    email: str
    url: str
    phone: str = ""
    company: str = ""
    message: str = ""

    @field_validator("name", "url", mode="before")
    @classmethod
    def require_text(cls, value: object) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("Missing required fields")
        return text

    @field_validator("phone", "company", "message", mode="before")
    @classmethod
    def normalize_text_fields(cls, value: object) -> str:
        return str(value or "").strip()

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, value: object) -> str:
        return _validate_email(str(value or ""))


class SendLinkResponse(BaseModel):
    success: bool
