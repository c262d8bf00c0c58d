import pymysql
import pytest
from fastapi.testclient import TestClient

from portfolio.config import Settings, get_settings
from portfolio.dependencies import get_cv_exporter, get_data_provider, get_portfolio_store
from portfolio.models import PortfolioData, Profile, Project, Service, SkillCategory
from portfolio.services.cv_exporter import CVExporter
from portfolio.services.data_provider import PortfolioDataProvider
from portfolio.services.store import PortfolioStore


PROFILE_ROW = {
    "id": 1,
    "name": "Rizwan Ahmed",
    "title": "Backend Engineer",
    "summary": "Engineer who ships reliable services. Enjoys data pipelines and clean APIs.",
    "location": "Lahore, Pakistan",
    "email": "rizwan@example.com",
    "phone": "+92 300 0000000",
    "linkedin": "linkedin.com/in/rizwan",
    "github": "github.com/rizwan",
    "education_degree": "BSc Computer Science",
    "education_uni": "FAST NUCES",
    "education_year": 2020,
}

SKILL_ROWS = [
    {"id": 1, "category": "Languages", "skill_list": "Python, Go ,SQL"},
    {"id": 2, "category": "Frameworks & Libraries", "skill_list": "FastAPI, Django"},
    {"id": 3, "category": "Tools & Platforms", "skill_list": "Docker, Git"},
]

PROJECT_ROWS = [
    {
        "id": 1,
        "title": "Price Tracker",
        "icon_class": "fa-chart-line",
        "short_desc": "Tracks prices across shops.",
        "full_desc": "Built X|Improved Y|Shipped Z",
        "tech_stack": "Python, SQLite",
        "github_link": "https://github.com/rizwan/price-tracker",
    },
]

SERVICE_ROWS = [
    {"id": 1, "title": "API Design", "icon_class": "fa-plug", "description": "REST and async APIs."},
    {"id": 2, "title": "Data Engineering", "icon_class": "fa-database", "description": "ETL pipelines."},
]


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self._rows = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, query):
        self.conn.executed.append(query)
        table = query.split(" FROM ")[1].split()[0]
        if table not in self.conn.tables:
            raise pymysql.err.ProgrammingError(1146, f"Table 'portfolio.{table}' doesn't exist")
        self._rows = list(self.conn.tables[table])

    def fetchall(self):
        return self._rows

    def fetchone(self):
        return self._rows[0] if self._rows else None


class FakeConnection:
    def __init__(self, tables):
        self.tables = tables
        self.executed = []
        self.closed = False

    def cursor(self):
        return FakeCursor(self)

    def close(self):
        self.closed = True


@pytest.fixture
def tables():
    return {
        "profile": [dict(PROFILE_ROW)],
        "skills": [dict(r) for r in SKILL_ROWS],
        "projects": [dict(r) for r in PROJECT_ROWS],
        "services": [dict(r) for r in SERVICE_ROWS],
    }


@pytest.fixture
def fake_db(monkeypatch, tables):
    """Replace pymysql.connect; returns the list of opened connections and the kwargs used."""
    state = {"connections": [], "kwargs": []}

    def connect(**kwargs):
        state["kwargs"].append(kwargs)
        conn = FakeConnection(tables)
        state["connections"].append(conn)
        return conn

    monkeypatch.setattr(pymysql, "connect", connect)
    return state


@pytest.fixture
def refused_db(monkeypatch):
    def connect(**kwargs):
        raise pymysql.err.OperationalError(
            2003, "Can't connect to MySQL server on 'db.test' (Connection refused)"
        )

    monkeypatch.setattr(pymysql, "connect", connect)


@pytest.fixture
def settings():
    return Settings(
        db_host="db.test",
        db_user="reader",
        db_password="secret",
        db_name="portfolio",
        services_enabled=False,
    )


@pytest.fixture
def sample_data():
    return PortfolioData(
        profile=Profile(**PROFILE_ROW),
        skills=[SkillCategory(**r) for r in SKILL_ROWS],
        projects=[Project(**r) for r in PROJECT_ROWS],
        services=[Service(**r) for r in SERVICE_ROWS],
    )


@pytest.fixture
def store():
    return PortfolioStore()


@pytest.fixture
def client(settings, store):
    from portfolio.main import app

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_data_provider] = lambda: PortfolioDataProvider(settings)
    app.dependency_overrides[get_portfolio_store] = lambda: store
    app.dependency_overrides[get_cv_exporter] = lambda: CVExporter()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
