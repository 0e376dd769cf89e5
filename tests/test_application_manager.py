"""Tests for the application lifecycle and project cascade."""

import pytest
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from models.application import ApplicationModel
from utils.application_manager import ApplicationManager
from utils.project_manager import ProjectManager


@pytest.fixture
def setup(db, make_user):
    admin = make_user("admin", name="Ada")
    student = make_user("student", name="Sam", skills=["react", "python"])
    project = ProjectManager(db).create_project(
        admin, "Hack", "Build it", ["React", "Node"]
    )
    return admin, student, project


def test_apply_creates_pending(db, setup):
    _, student, project = setup
    application = ApplicationManager(db).apply(student.user_id, project.project_id)
    assert application.status == "pending"
    assert application.student_id == student.user_id


def test_apply_twice_conflicts_and_keeps_one(db, setup):
    _, student, project = setup
    manager = ApplicationManager(db)
    manager.apply(student.user_id, project.project_id)
    with pytest.raises(ConflictError):
        manager.apply(student.user_id, project.project_id)
    count = (
        db.query(ApplicationModel)
        .filter(ApplicationModel.project_id == project.project_id)
        .count()
    )
    assert count == 1


def test_apply_conflicts_even_after_decision(db, setup):
    admin, student, project = setup
    manager = ApplicationManager(db)
    application = manager.apply(student.user_id, project.project_id)
    manager.decide(application.application_id, admin.user_id, "rejected")
    with pytest.raises(ConflictError):
        manager.apply(student.user_id, project.project_id)


def test_apply_to_missing_project(db, setup):
    _, student, _ = setup
    with pytest.raises(NotFoundError):
        ApplicationManager(db).apply(student.user_id, "nope")


def test_storage_rejects_duplicate_pair(db, setup):
    _, student, project = setup
    ApplicationManager(db).apply(student.user_id, project.project_id)
    db.add(
        ApplicationModel(
            application_id="dup",
            student_id=student.user_id,
            project_id=project.project_id,
            status="pending",
            created_at="2026-01-01T00:00:00+00:00",
            updated_at="2026-01-01T00:00:00+00:00",
        )
    )
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_decide_overwrites_terminal_status(db, setup):
    admin, student, project = setup
    manager = ApplicationManager(db)
    application = manager.apply(student.user_id, project.project_id)

    accepted = manager.decide(application.application_id, admin.user_id, "accepted")
    assert accepted.status == "accepted"

    # Documented behaviour: the owner may flip a decided application
    rejected = manager.decide(application.application_id, admin.user_id, "rejected")
    assert rejected.status == "rejected"


def test_decide_by_other_admin_forbidden(db, make_user, setup):
    _, student, project = setup
    other_admin = make_user("admin", name="Eve")
    manager = ApplicationManager(db)
    application = manager.apply(student.user_id, project.project_id)
    with pytest.raises(ForbiddenError):
        manager.decide(application.application_id, other_admin.user_id, "accepted")


def test_decide_missing_application(db, setup):
    admin, _, _ = setup
    with pytest.raises(NotFoundError):
        ApplicationManager(db).decide("missing", admin.user_id, "accepted")


def test_decide_rejects_unknown_outcome(db, setup):
    admin, student, project = setup
    manager = ApplicationManager(db)
    application = manager.apply(student.user_id, project.project_id)
    with pytest.raises(InvalidInputError):
        manager.decide(application.application_id, admin.user_id, "pending")


def test_list_for_project_scores_applicants(db, setup):
    admin, student, project = setup
    manager = ApplicationManager(db)
    manager.apply(student.user_id, project.project_id)

    listed = manager.list_for_project(project.project_id, admin.user_id)
    assert len(listed) == 1
    assert listed[0].student.user_id == student.user_id
    assert listed[0].match_percentage == 50
    assert listed[0].matched_skills == ["React"]


def test_list_for_project_uses_current_skills(db, setup):
    admin, student, project = setup
    from utils.user_manager import UserManager

    manager = ApplicationManager(db)
    manager.apply(student.user_id, project.project_id)
    UserManager(db).update_profile(student.user_id, skills=["React", "node"])

    listed = manager.list_for_project(project.project_id, admin.user_id)
    assert listed[0].match_percentage == 100


def test_list_for_project_requires_owner(db, make_user, setup):
    _, _, project = setup
    other_admin = make_user("admin")
    with pytest.raises(ForbiddenError):
        ApplicationManager(db).list_for_project(project.project_id, other_admin.user_id)


def test_list_for_student_newest_first(db, setup):
    admin, student, first = setup
    second = ProjectManager(db).create_project(admin, "Second", "Another", ["Go"])
    manager = ApplicationManager(db)
    manager.apply(student.user_id, first.project_id)
    manager.apply(student.user_id, second.project_id)

    listed = manager.list_for_student(student.user_id)
    assert [a.title for a in listed] == ["Second", "Hack"]
    assert listed[1].required_skills == ["React", "Node"]


def test_delete_project_cascades(db, make_user, setup):
    admin, student, project = setup
    other = make_user("student")
    manager = ApplicationManager(db)
    manager.apply(student.user_id, project.project_id)
    manager.apply(other.user_id, project.project_id)

    ProjectManager(db).delete_project(project.project_id, admin.user_id)

    assert db.query(ApplicationModel).count() == 0
    assert manager.list_for_student(student.user_id) == []
    with pytest.raises(NotFoundError):
        ProjectManager(db).get_project(project.project_id)


def test_delete_project_by_non_owner_changes_nothing(db, make_user, setup):
    _, student, project = setup
    other_admin = make_user("admin")
    ApplicationManager(db).apply(student.user_id, project.project_id)

    with pytest.raises(ForbiddenError):
        ProjectManager(db).delete_project(project.project_id, other_admin.user_id)

    assert db.query(ApplicationModel).count() == 1
    assert ProjectManager(db).get_project(project.project_id) is not None


def test_orphaned_application_hidden_from_student(db, setup):
    _, student, project = setup
    manager = ApplicationManager(db)
    manager.apply(student.user_id, project.project_id)
    # Remove the project behind the manager's back
    db.delete(ProjectManager(db).get_project(project.project_id))
    db.commit()

    assert manager.list_for_student(student.user_id) == []
