from datetime import date
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, field_validator


class _Row(BaseModel):
    """Base for records read straight from a table row.

    Unknown columns (ids, timestamps) are dropped, NULLs become empty
    strings, and numeric or DATE columns such as a graduation year become
    text.
    """

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float, Decimal, date)) and not isinstance(value, bool):
            return str(value)
        return value

    class Config:
        extra = "ignore"


class Profile(_Row):
    name: str = ""
    title: str = ""
    summary: str = ""
    location: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    github: str = ""
    education_degree: str = ""
    education_uni: str = ""
    education_year: str = ""


class SkillCategory(_Row):
    category: str = ""
    skill_list: str = ""  # comma-delimited


class Service(_Row):
    title: str = ""
    icon_class: str = ""
    description: str = ""


class Project(_Row):
    title: str = ""
    icon_class: str = ""
    short_desc: str = ""
    full_desc: str = ""  # pipe-delimited bullets
    tech_stack: str = ""  # comma-delimited
    github_link: str = ""


class PortfolioData(BaseModel):
    profile: Optional[Profile] = None
    skills: List[SkillCategory] = []
    projects: List[Project] = []
    services: Optional[List[Service]] = None

    def to_response(self) -> dict:
        # services is only part of the payload when it was provisioned
        return self.model_dump(exclude_none=True)


class ErrorResponse(BaseModel):
    error: str
