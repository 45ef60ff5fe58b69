"""
Derived dashboard data computed from the data store.

Aggregations never fail the request: store errors are logged and the
empty default for the metric is returned instead.
"""

import logging

from industryhunt.core.errors import CollaboratorError
from industryhunt.models.roles import UserRole
from industryhunt.schemas import Activity, DashboardStats, SkillEntry, SkillType
from industryhunt.services.store import DataStore

logger = logging.getLogger(__name__)

DEFAULT_SKILL_CATEGORY = 'General'
DEFAULT_SKILL_LEVEL = 3


def get_dashboard_stats(store: DataStore, user_id: str, role: UserRole) -> DashboardStats:
    stats = DashboardStats()
    try:
        if role is UserRole.STUDENT:
            student = store.get_student_by_user(user_id)
            if student:
                stats.skills_count = len(student.skills)
        elif role is UserRole.MENTOR:
            mentor = store.get_mentor_by_user(user_id)
            if mentor:
                stats.skills_count = len(mentor.expertise)
        elif role is UserRole.EMPLOYER:
            # Employer counts stay zero; looking the row up only confirms the profile.
            store.get_employer_by_user(user_id)
    except CollaboratorError:
        logger.exception('Error getting dashboard stats for user %s', user_id)
        return DashboardStats()
    return stats


def get_student_skills(store: DataStore, student_id: str) -> list[SkillEntry]:
    try:
        student = store.get_student(student_id)
    except CollaboratorError:
        logger.exception('Error fetching skills for student %s', student_id)
        return []

    if student is None:
        return []

    return [
        SkillEntry(
            id=f'skill-{index}',
            skill=SkillType(id=f'skill-type-{index}', name=skill_name, category=DEFAULT_SKILL_CATEGORY),
            level=DEFAULT_SKILL_LEVEL,
            verified=False,
        )
        for index, skill_name in enumerate(student.skills)
    ]


# No backing tables exist for the feeds below yet.

def get_recent_activities(store: DataStore, user_id: str) -> list[Activity]:
    return []


def get_recommended_projects(store: DataStore, student_id: str) -> list[dict]:
    return []


def get_enrolled_courses(store: DataStore, student_id: str) -> list[dict]:
    return []


def get_upcoming_mentorship_sessions(store: DataStore, user_id: str, role: UserRole) -> list[dict]:
    return []
