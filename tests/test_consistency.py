"""Tests for app.services.consistency: cascades, ownership transfer and atomicity."""

import unittest
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from app.core.errors import ConflictError, NotFoundError, StoreError
from app.models import Impact, ImpactSdg, Profile, Project, ProjectCollaborator, User
from app.models.enums import CollaboratorRole
from app.services import consistency
from app.services.consistency import RemovalKind
from tests.support import DatabaseTestCase


class ConsistencyTestCase(DatabaseTestCase):
    def count(self, model, *criteria) -> int:
        with self.SessionLocal() as db:
            return db.query(model).filter(*criteria).count()

    def owner_of(self, project_id: int) -> int | None:
        with self.SessionLocal() as db:
            project = db.get(Project, project_id)
            return project.profile_id if project is not None else None


class TestDeletion(ConsistencyTestCase):
    def test_delete_impact_removes_links(self) -> None:
        db = self.session()
        owner = self.make_user(db, "owner@example.org")
        project = self.make_project(db, owner)
        impact = self.make_impact(db, project, [1, 4])
        kept = self.make_impact(db, project, [4])
        impact_id, kept_id = impact.id, kept.id

        consistency.delete_impact(db, impact)

        self.assertEqual(self.count(Impact, Impact.id == impact_id), 0)
        self.assertEqual(self.count(ImpactSdg, ImpactSdg.impact_id == impact_id), 0)
        self.assertEqual(self.count(ImpactSdg, ImpactSdg.impact_id == kept_id), 1)

    def test_delete_project_cascades(self) -> None:
        db = self.session()
        owner = self.make_user(db, "owner@example.org")
        member = self.make_user(db, "member@example.org")
        project = self.make_project(db, owner)
        other = self.make_project(db, owner, "Other")
        self.add_member(db, project, member)
        self.make_impact(db, project, [1, 2])
        self.make_impact(db, other, [3])
        project_id = project.id

        consistency.delete_project(db, project)

        self.assertEqual(self.count(Project, Project.id == project_id), 0)
        self.assertEqual(self.count(Impact, Impact.project_id == project_id), 0)
        self.assertEqual(self.count(ProjectCollaborator), 0)
        self.assertEqual(self.count(ImpactSdg), 1)
        self.assertEqual(self.count(Profile), 2)


class TestAddCollaborator(ConsistencyTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.db = self.session()
        self.owner = self.make_user(self.db, "owner@example.org")
        self.guest = self.make_user(self.db, "guest@example.org")
        self.project = self.make_project(self.db, self.owner)

    def test_adds_with_role(self) -> None:
        row = consistency.add_collaborator(
            self.db, self.project, "guest@example.org", CollaboratorRole.VIEWER
        )
        self.assertEqual(row.profile_id, self.guest.id)
        self.assertEqual(row.role, "Viewer")

    def test_second_add_conflicts_and_keeps_count(self) -> None:
        consistency.add_collaborator(self.db, self.project, "guest@example.org")
        with self.assertRaises(ConflictError):
            consistency.add_collaborator(self.db, self.project, "guest@example.org")
        self.assertEqual(
            self.count(ProjectCollaborator, ProjectCollaborator.project_id == self.project.id), 1
        )

    def test_owner_cannot_be_added(self) -> None:
        with self.assertRaises(ConflictError):
            consistency.add_collaborator(self.db, self.project, "owner@example.org")
        self.assertEqual(self.count(ProjectCollaborator), 0)

    def test_unknown_email(self) -> None:
        with self.assertRaises(NotFoundError):
            consistency.add_collaborator(self.db, self.project, "nobody@example.org")

    def test_email_match_is_case_sensitive(self) -> None:
        with self.assertRaises(NotFoundError):
            consistency.add_collaborator(self.db, self.project, "Guest@example.org")


class TestRemoveCollaborator(ConsistencyTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.db = self.session()
        self.owner = self.make_user(self.db, "owner@example.org")
        self.first = self.make_user(self.db, "first@example.org")
        self.second = self.make_user(self.db, "second@example.org")
        self.project = self.make_project(self.db, self.owner)

    def test_non_owner_row_removed(self) -> None:
        self.add_member(self.db, self.project, self.first)
        outcome = consistency.remove_collaborator(self.db, self.project, self.first.id)
        self.assertIs(outcome.kind, RemovalKind.REMOVED)
        self.assertEqual(self.count(ProjectCollaborator), 0)
        self.assertEqual(self.owner_of(self.project.id), self.owner.id)

    def test_unknown_collaborator(self) -> None:
        with self.assertRaises(NotFoundError):
            consistency.remove_collaborator(self.db, self.project, self.second.id)

    def test_sole_owner_removal_deletes_project(self) -> None:
        self.make_impact(self.db, self.project, [6, 7])
        project_id = self.project.id

        outcome = consistency.remove_collaborator(self.db, self.project, self.owner.id)

        self.assertIs(outcome.kind, RemovalKind.PROJECT_DELETED)
        self.assertIsNone(outcome.new_owner_profile_id)
        self.assertEqual(self.count(Project, Project.id == project_id), 0)
        self.assertEqual(self.count(Impact), 0)
        self.assertEqual(self.count(ImpactSdg), 0)

    def test_owner_removal_transfers_to_earliest_collaborator(self) -> None:
        self.add_member(self.db, self.project, self.second)
        self.add_member(self.db, self.project, self.first)
        self.make_impact(self.db, self.project, [2])
        project_id = self.project.id

        outcome = consistency.remove_collaborator(self.db, self.project, self.owner.id)

        self.assertIs(outcome.kind, RemovalKind.OWNERSHIP_TRANSFERRED)
        self.assertEqual(outcome.new_owner_profile_id, self.second.id)
        self.assertEqual(self.owner_of(project_id), self.second.id)
        self.assertEqual(
            self.count(ProjectCollaborator, ProjectCollaborator.profile_id == self.second.id), 0
        )
        self.assertEqual(
            self.count(ProjectCollaborator, ProjectCollaborator.profile_id == self.first.id), 1
        )
        self.assertEqual(self.count(Impact, Impact.project_id == project_id), 1)


class TestUserDeletion(ConsistencyTestCase):
    def test_delete_user_cascades(self) -> None:
        db = self.session()
        leaving = self.make_user(db, "leaving@example.org")
        staying = self.make_user(db, "staying@example.org")
        solo = self.make_project(db, leaving, "Solo")
        shared = self.make_project(db, leaving, "Shared")
        elsewhere = self.make_project(db, staying, "Elsewhere")
        self.add_member(db, shared, staying)
        self.add_member(db, elsewhere, leaving)
        self.make_impact(db, solo, [1])
        self.make_impact(db, shared, [2])
        solo_id, shared_id, elsewhere_id = solo.id, shared.id, elsewhere.id
        user_id, profile_id = leaving.user_id, leaving.id

        summary = consistency.delete_user(db, db.get(User, user_id))

        self.assertEqual(summary.projects_deleted, [solo_id])
        self.assertEqual(summary.projects_transferred, {shared_id: staying.id})
        self.assertEqual(summary.collaborations_deleted, 1)
        self.assertEqual(self.count(User, User.id == user_id), 0)
        self.assertEqual(self.count(Profile, Profile.id == profile_id), 0)
        self.assertEqual(self.count(Project, Project.id == solo_id), 0)
        self.assertEqual(self.owner_of(shared_id), staying.id)
        self.assertEqual(self.owner_of(elsewhere_id), staying.id)
        self.assertEqual(self.count(ProjectCollaborator), 0)
        self.assertEqual(self.count(Impact), 1)

    def test_delete_all_non_admin_users(self) -> None:
        db = self.session()
        admin = self.make_user(db, "admin@example.org", role="Admin")
        alice = self.make_user(db, "alice@example.org")
        bob = self.make_user(db, "bob@example.org")
        carol = self.make_user(db, "carol@example.org")
        handed_over = self.make_project(db, alice, "Handed over")
        dropped = self.make_project(db, bob, "Dropped")
        admins_own = self.make_project(db, admin, "Admin's own")
        self.add_member(db, handed_over, carol)
        self.add_member(db, handed_over, admin)
        self.add_member(db, dropped, carol)
        self.add_member(db, admins_own, carol)
        handed_over_id, dropped_id = handed_over.id, dropped.id

        deleted, summary = consistency.delete_all_non_admin_users(db)

        self.assertEqual(deleted, 3)
        self.assertEqual(summary.projects_deleted, [dropped_id])
        self.assertEqual(summary.projects_transferred, {handed_over_id: admin.id})
        self.assertEqual(self.count(User), 1)
        self.assertEqual(self.count(Profile), 1)
        self.assertEqual(self.owner_of(handed_over_id), admin.id)
        self.assertEqual(self.count(Project), 2)
        self.assertEqual(self.count(ProjectCollaborator), 0)

    def test_delete_all_without_non_admins(self) -> None:
        db = self.session()
        self.make_user(db, "admin@example.org", role="Admin")
        deleted, summary = consistency.delete_all_non_admin_users(db)
        self.assertEqual(deleted, 0)
        self.assertEqual(summary.projects_deleted, [])

    def test_profile_owning_projects_cannot_be_deleted_directly(self) -> None:
        db = self.session()
        owner = self.make_user(db, "owner@example.org")
        self.make_project(db, owner)
        with self.assertRaises(ConflictError):
            consistency._stage_profile_deletion(db, owner.id)

    def test_failure_leaves_state_unchanged(self) -> None:
        db = self.session()
        leaving = self.make_user(db, "leaving@example.org")
        staying = self.make_user(db, "staying@example.org")
        shared = self.make_project(db, leaving)
        solo = self.make_project(db, leaving, "Solo")
        self.add_member(db, shared, staying)
        self.make_impact(db, solo, [9])
        shared_id, user_id = shared.id, leaving.user_id

        failure = OperationalError("DELETE", {}, Exception("disk full"))
        with patch.object(consistency, "_stage_profile_deletion", side_effect=failure):
            with self.assertRaises(StoreError):
                consistency.delete_user(db, db.get(User, user_id))

        self.assertEqual(self.count(User, User.id == user_id), 1)
        self.assertEqual(self.owner_of(shared_id), leaving.id)
        self.assertEqual(self.count(ProjectCollaborator), 1)
        self.assertEqual(self.count(Project), 2)
        self.assertEqual(self.count(ImpactSdg), 1)


if __name__ == "__main__":
    unittest.main()
