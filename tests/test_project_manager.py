"""Tests for project creation and listing."""

import pytest

from core.exceptions import ForbiddenError, InvalidInputError
from utils.application_manager import ApplicationManager
from utils.project_manager import ProjectManager


def test_only_admin_creates(db, make_user):
    student = make_user("student")
    with pytest.raises(ForbiddenError):
        ProjectManager(db).create_project(student, "T", "D", [])


@pytest.mark.parametrize("title, description", [("", "D"), ("T", "  ")])
def test_title_and_description_required(db, make_user, title, description):
    admin = make_user("admin")
    with pytest.raises(InvalidInputError):
        ProjectManager(db).create_project(admin, title, description, [])


def test_required_skills_normalised(db, make_user):
    admin = make_user("admin")
    project = ProjectManager(db).create_project(
        admin, "T", "D", [" React", "react", "Node ", ""]
    )
    assert project.required_skills == ["React", "Node"]
    assert project.creator_name == admin.name


def test_student_listing_is_annotated(db, make_user):
    admin = make_user("admin", name="Ada")
    student = make_user("student", skills=["react", "python"])
    manager = ProjectManager(db)
    manager.create_project(admin, "Web", "D", ["React", "Node"])

    listed = manager.list_projects(student)
    assert listed[0].match_percentage == 50
    assert listed[0].matched_skills == ["React"]
    assert listed[0].creator_name == "Ada"

    admin_view = manager.list_projects(admin)
    assert admin_view[0].match_percentage is None


def test_search_and_skill_filters(db, make_user):
    admin = make_user("admin")
    manager = ProjectManager(db)
    manager.create_project(admin, "Climate Dashboard", "D", ["React", "D3"])
    manager.create_project(admin, "Chat Bot", "D", ["Python", "LangChain"])

    assert [p.title for p in manager.list_projects(admin, search="climate")] == [
        "Climate Dashboard"
    ]
    assert [p.title for p in manager.list_projects(admin, skill="lang")] == ["Chat Bot"]
    assert manager.list_projects(admin, search="chat", skill="react") == []


def test_accepted_projects(db, make_user):
    admin = make_user("admin", name="Ada")
    student = make_user("student")
    projects = ProjectManager(db)
    applications = ApplicationManager(db)
    first = projects.create_project(admin, "One", "D", [])
    second = projects.create_project(admin, "Two", "D", [])
    a1 = applications.apply(student.user_id, first.project_id)
    applications.apply(student.user_id, second.project_id)
    applications.decide(a1.application_id, admin.user_id, "accepted")

    accepted = projects.list_accepted_projects(student.user_id)
    assert [a.project.title for a in accepted] == ["One"]
    assert accepted[0].project.creator_name == "Ada"
