"""
Builds the portfolio page from the combined record.

The record is first turned into a view-model (plain pydantic models, one
per card) and then rendered with Jinja2. Autoescaping is on, so database
text never reaches the page as raw markup.
"""

from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader
from pydantic import BaseModel

from portfolio.constants import ICON_DEFAULT, ICON_FRAMEWORK, ICON_TOOL, REVEAL_STEP_MS
from portfolio.models import PortfolioData, Profile, Project, Service, SkillCategory
from portfolio.utils import first_sentence, split_list

_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
env = Environment(
    loader=FileSystemLoader(_TEMPLATES_DIR),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)

REGIONS = ("profile", "skills", "services", "projects")


class ProfileView(BaseModel):
    name: str
    title: str
    summary_short: str
    summary: str
    location: str
    email: str
    phone: str
    linkedin: str
    linkedin_url: str
    github: str
    github_url: str
    education_degree: str
    education_uni: str
    education_year: str


class SkillCardView(BaseModel):
    category: str
    icon: str
    skills: List[str]
    delay_ms: int


class ServiceCardView(BaseModel):
    title: str
    icon: str
    description: str
    delay_ms: int


class ProjectCardView(BaseModel):
    title: str
    icon: str
    link: str
    short_desc: str
    tags: List[str]


class PageView(BaseModel):
    # The header name slot is filled even when nothing else is
    name: str
    profile: Optional[ProfileView] = None
    skills: Optional[List[SkillCardView]] = None
    services: Optional[List[ServiceCardView]] = None
    projects: Optional[List[ProjectCardView]] = None


def skill_icon(category: str) -> str:
    icon = ICON_DEFAULT
    if "Framework" in category:
        icon = ICON_FRAMEWORK
    if "Tool" in category:
        icon = ICON_TOOL
    return icon


def reveal_delay(index: int) -> int:
    """Staggered reveal delay for the card at 0-based ``index``."""
    return (index + 1) * REVEAL_STEP_MS


def external_url(value: str) -> str:
    # Profiles store bare hosts such as "github.com/name"
    if not value or "://" in value:
        return value
    return f"https://{value}"


def build_profile_view(profile: Profile) -> ProfileView:
    return ProfileView(
        name=profile.name,
        title=profile.title,
        summary_short=first_sentence(profile.summary) if profile.summary else "",
        summary=profile.summary,
        location=profile.location,
        email=profile.email,
        phone=profile.phone,
        linkedin=profile.linkedin,
        linkedin_url=external_url(profile.linkedin),
        github=profile.github,
        github_url=external_url(profile.github),
        education_degree=profile.education_degree,
        education_uni=profile.education_uni,
        education_year=profile.education_year,
    )


def build_skill_cards(skills: List[SkillCategory]) -> List[SkillCardView]:
    return [
        SkillCardView(
            category=cat.category,
            icon=skill_icon(cat.category),
            skills=split_list(cat.skill_list),
            delay_ms=reveal_delay(index),
        )
        for index, cat in enumerate(skills)
    ]


def build_service_cards(services: List[Service]) -> List[ServiceCardView]:
    return [
        ServiceCardView(
            title=service.title,
            icon=service.icon_class,
            description=service.description,
            delay_ms=reveal_delay(index),
        )
        for index, service in enumerate(services)
    ]


def build_project_cards(projects: List[Project]) -> List[ProjectCardView]:
    return [
        ProjectCardView(
            title=proj.title,
            icon=proj.icon_class,
            link=proj.github_link,
            short_desc=proj.short_desc,
            tags=split_list(proj.tech_stack),
        )
        for proj in projects
    ]


def build_page_view(data: PortfolioData) -> PageView:
    profile = build_profile_view(data.profile) if data.profile else None
    return PageView(
        name=profile.name if profile else "",
        profile=profile,
        skills=build_skill_cards(data.skills),
        services=(
            build_service_cards(data.services) if data.services is not None else None
        ),
        projects=build_project_cards(data.projects),
    )


def build_fallback_view(fallback_name: str) -> PageView:
    """View used when the fetch fails: only the name slot is populated."""
    return PageView(name=fallback_name)


def render_region(region: str, view: PageView) -> str:
    if region not in REGIONS:
        raise ValueError(f"Unknown region: {region}")
    return env.get_template(f"regions/{region}.html").render(view=view)


def render_page(view: PageView) -> str:
    # index.html includes every region template, so each render rebuilds them
    return env.get_template("index.html").render(view=view)
