"""Shared fixtures: an isolated in-memory database per test and API client helpers."""

import unittest
from collections.abc import Generator
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core import get_db, settings
from app.main import app
from app.models import Base, Impact, ImpactSdg, Profile, Project, ProjectCollaborator, User
from app.services.sdgs import seed_sdgs

API = settings.API_V1_PREFIX
DEFAULT_PASSWORD = "correct-horse-battery"


class DatabaseTestCase(unittest.TestCase):
    """Fresh in-memory SQLite schema (with SDGs seeded) for every test."""

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        # Cleanups run last-in-first-out: sessions close before the engine goes.
        self.addCleanup(self.engine.dispose)
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )
        # Cheapest bcrypt cost keeps the suite fast; hashing behaviour is unchanged.
        rounds = patch("app.core.security.BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)
        with self.SessionLocal() as db:
            seed_sdgs(db)

    def session(self) -> Session:
        db = self.SessionLocal()
        self.addCleanup(db.close)
        return db

    # Direct row builders for service-level tests.

    def make_user(self, db: Session, email: str, role: str = "User", name: str = "") -> Profile:
        user = User(email=email, password_hash="not-a-real-hash", role=role)
        db.add(user)
        db.flush()
        profile = Profile(user_id=user.id, name=name or email.split("@")[0])
        db.add(profile)
        db.commit()
        return profile

    def make_project(self, db: Session, owner: Profile, title: str = "Canvas") -> Project:
        project = Project(profile_id=owner.id, title=title)
        db.add(project)
        db.commit()
        return project

    def add_member(self, db: Session, project: Project, profile: Profile, role: str = "Editor") -> ProjectCollaborator:
        row = ProjectCollaborator(project_id=project.id, profile_id=profile.id, role=role)
        db.add(row)
        db.commit()
        return row

    def make_impact(
        self,
        db: Session,
        project: Project,
        sdg_ids: list[int] = (),
        relation: str = "Direct",
        dimension: str = "Environmental",
    ) -> Impact:
        impact = Impact(
            project_id=project.id,
            type="KS",
            score=5,
            dimension=dimension,
            relation=relation,
            title="Impact",
            description="",
        )
        db.add(impact)
        db.flush()
        db.add_all(ImpactSdg(impact_id=impact.id, sdg_id=s) for s in sdg_ids)
        db.commit()
        return impact


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient wired to the per-test database."""

    def setUp(self) -> None:
        super().setUp()

        def override_get_db() -> Generator[Session, None, None]:
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.addCleanup(app.dependency_overrides.clear)
        self.client = TestClient(app)

    @staticmethod
    def auth(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def register(
        self,
        email: str,
        name: str = "",
        password: str = DEFAULT_PASSWORD,
        code: str | None = None,
    ) -> dict:
        resp = self.client.post(
            f"{API}/auth/register",
            json={
                "email": email,
                "password": password,
                "name": name or email.split("@")[0],
                "registrationCode": code or settings.DEFAULT_REGISTRATION_CODE,
            },
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def create_admin(self, email: str = "admin@example.org") -> dict:
        resp = self.client.post(
            f"{API}/users/admin/create",
            json={
                "email": email,
                "password": DEFAULT_PASSWORD,
                "name": "Admin",
                "masterPassword": settings.DEFAULT_MASTER_PASSWORD.get_secret_value(),
            },
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def create_project(self, token: str, title: str = "Canvas") -> dict:
        resp = self.client.post(
            f"{API}/projects",
            json={"title": title, "description": "A project"},
            headers=self.auth(token),
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()
