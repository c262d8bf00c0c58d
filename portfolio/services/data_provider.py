"""Reads the combined portfolio record from the MySQL-protocol store."""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import pymysql
import pymysql.cursors
from pydantic import ValidationError

from portfolio.config import Settings
from portfolio.models import PortfolioData, Profile, Project, Service, SkillCategory

logger = logging.getLogger(__name__)

PROFILE_QUERY = "SELECT * FROM profile LIMIT 1"
SKILLS_QUERY = "SELECT * FROM skills"
PROJECTS_QUERY = "SELECT * FROM projects"
SERVICES_QUERY = "SELECT * FROM services"


class DataProviderError(Exception):
    """Raised when the store cannot be reached or a query fails."""


class PortfolioDataProvider:
    def __init__(self, settings: Settings):
        self.settings = settings

    @contextmanager
    def connection(self) -> Iterator[pymysql.connections.Connection]:
        """Open one TLS connection and close it on every exit path."""
        conn = pymysql.connect(
            host=self.settings.db_host,
            user=self.settings.db_user,
            password=self.settings.db_password,
            database=self.settings.db_name,
            port=self.settings.db_port,
            ssl_ca=self.settings.db_ssl_ca,
            ssl_verify_cert=True,
            ssl_verify_identity=True,
            connect_timeout=self.settings.db_connect_timeout,
            cursorclass=pymysql.cursors.DictCursor,
        )
        try:
            yield conn
        finally:
            conn.close()

    def _fetch_all(self, conn, query: str) -> List[Dict[str, Any]]:
        with conn.cursor() as cursor:
            cursor.execute(query)
            return list(cursor.fetchall())

    def _fetch_one(self, conn, query: str) -> Optional[Dict[str, Any]]:
        with conn.cursor() as cursor:
            cursor.execute(query)
            return cursor.fetchone()

    def fetch(self) -> PortfolioData:
        """
        Run the profile, skills and projects queries (plus services when
        enabled) over a single connection. No retry, no partial result.
        """
        try:
            with self.connection() as conn:
                profile_row = self._fetch_one(conn, PROFILE_QUERY)
                skill_rows = self._fetch_all(conn, SKILLS_QUERY)
                project_rows = self._fetch_all(conn, PROJECTS_QUERY)
                service_rows = (
                    self._fetch_all(conn, SERVICES_QUERY)
                    if self.settings.services_enabled
                    else None
                )
        except pymysql.MySQLError as e:
            logger.error(f"Portfolio store query failed: {e}")
            raise DataProviderError(str(e) or e.__class__.__name__) from e

        try:
            data = PortfolioData(
                profile=Profile(**profile_row) if profile_row else None,
                skills=[SkillCategory(**row) for row in skill_rows],
                projects=[Project(**row) for row in project_rows],
                services=(
                    [Service(**row) for row in service_rows]
                    if service_rows is not None
                    else None
                ),
            )
        except ValidationError as e:
            logger.error(f"Portfolio store returned malformed rows: {e}")
            raise DataProviderError(f"Malformed portfolio data: {e}") from e

        logger.info(
            f"Fetched portfolio: profile={'yes' if data.profile else 'no'}, "
            f"skills={len(data.skills)}, projects={len(data.projects)}, "
            f"services={len(data.services) if data.services is not None else 'n/a'}"
        )
        return data
