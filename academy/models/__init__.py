"""
Models Package

SQLAlchemy models used by the relational storage backend.
"""

from academy.models.account import Account, SessionRecord
from academy.models.listing import Category, Course, Testimonial, TeamMember, Job
from academy.models.submission import StudentApplication, CareerApplication, ContactMessage

__all__ = [
    'Account',
    'SessionRecord',
    'Category',
    'Course',
    'Testimonial',
    'TeamMember',
    'Job',
    'StudentApplication',
    'CareerApplication',
    'ContactMessage',
]
