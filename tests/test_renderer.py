import re

from portfolio.models import PortfolioData, Profile, SkillCategory
from portfolio.services.renderer import (
    build_fallback_view,
    build_page_view,
    render_page,
    render_region,
    skill_icon,
)


def test_icon_selection_by_category_keyword():
    assert skill_icon("Frameworks & Libraries") == "fa-layer-group"
    assert skill_icon("Tools & Platforms") == "fa-screwdriver-wrench"
    assert skill_icon("Languages") == "fa-code"
    # "Tool" is checked last and wins
    assert skill_icon("Framework Tooling") == "fa-screwdriver-wrench"


def test_skill_cards_split_trim_and_stagger(sample_data):
    view = build_page_view(sample_data)

    assert view.skills[0].skills == ["Python", "Go", "SQL"]
    assert [card.delay_ms for card in view.skills] == [100, 200, 300]
    assert [card.icon for card in view.skills] == [
        "fa-code",
        "fa-layer-group",
        "fa-screwdriver-wrench",
    ]


def test_profile_view_short_summary(sample_data):
    view = build_page_view(sample_data)

    assert view.name == "Rizwan Ahmed"
    assert view.profile.summary_short == "Engineer who ships reliable services."


def test_rendering_is_idempotent(sample_data):
    first = render_page(build_page_view(sample_data))
    second = render_page(build_page_view(sample_data))

    assert first == second
    assert first.count('class="col-md-4 reveal-on-scroll"') == 3


def test_project_card_contents(sample_data):
    html = render_region("projects", build_page_view(sample_data))

    assert 'href="https://github.com/rizwan/price-tracker" target="_blank"' in html
    assert "<li>Python</li><li>SQLite</li>" in html
    assert "fa-chart-line" in html


def test_empty_skills_region(sample_data):
    data = sample_data.model_copy(update={"skills": []})
    view = build_page_view(data)

    assert render_region("skills", view).strip() == ""
    assert re.search(r'id="skills-container"[^>]*>\s*</div>', render_page(view))


def test_services_absent_leaves_region_empty(sample_data):
    data = sample_data.model_copy(update={"services": None})
    view = build_page_view(data)

    assert view.services is None
    assert render_region("services", view).strip() == ""
    assert "service-card" not in render_page(view)


def test_services_rendered_when_present(sample_data):
    html = render_region("services", build_page_view(sample_data))

    assert html.count("service-card") == 2
    assert "API Design" in html
    assert "transition-delay: 200ms" in html


def test_text_is_escaped():
    data = PortfolioData(
        profile=Profile(name="<b>Eve</b>", summary="Hi."),
        skills=[SkillCategory(category="Languages", skill_list="<script>alert(1)</script>")],
    )
    html = render_page(build_page_view(data))

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "&lt;b&gt;Eve&lt;/b&gt;" in html


def test_fallback_view_only_fills_name():
    view = build_fallback_view("Rizwan Ahmed")
    html = render_page(view)

    assert '<h1 id="p-name">Rizwan Ahmed</h1>' in html
    for region in ("profile", "skills", "services", "projects"):
        assert render_region(region, view).strip() == ""


def test_profile_region_renders_contact_links(sample_data):
    html = render_region("profile", build_page_view(sample_data))

    assert 'href="mailto:rizwan@example.com"' in html
    assert "+92 300 0000000" in html
    assert 'href="https://linkedin.com/in/rizwan"' in html
    assert 'href="https://github.com/rizwan"' in html


def test_missing_profile_leaves_name_empty(sample_data):
    data = sample_data.model_copy(update={"profile": None})
    view = build_page_view(data)

    assert view.name == ""
    assert '<h1 id="p-name"></h1>' in render_page(view)
    assert render_region("profile", view).strip() == ""
