"""
Listing Models

Admin-curated content. The public site only shows rows whose ``active`` or
``visible`` flag is set.
"""

from academy.extensions import db
from academy.models.base import RecordMixin


class Category(RecordMixin, db.Model):
    __tablename__ = 'categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    image_url = db.Column(db.String(500))
    active = db.Column(db.Boolean, default=True, nullable=False)

    courses = db.relationship('Course', backref='category', lazy=True)

    def __repr__(self):
        return f'<Category {self.name}>'


class Course(RecordMixin, db.Model):
    __tablename__ = 'courses'
    __reference_fields__ = ('category_id',)

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    image = db.Column(db.String(500))
    duration = db.Column(db.String(100))
    price = db.Column(db.Float, nullable=False)
    # Promotion flag, independent of `active`
    featured = db.Column(db.Boolean, default=False, nullable=False)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), index=True)
    instructor_name = db.Column(db.String(200))
    instructor_title = db.Column(db.String(200))
    instructor_image = db.Column(db.String(500))
    rating = db.Column(db.Float, default=0, nullable=False)
    review_count = db.Column(db.Integer, default=0, nullable=False)
    active = db.Column(db.Boolean, default=True, nullable=False)

    def __repr__(self):
        return f'<Course {self.title}>'


class Testimonial(RecordMixin, db.Model):
    __tablename__ = 'testimonials'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    role = db.Column(db.String(200))
    content = db.Column(db.Text, nullable=False)
    rating = db.Column(db.Integer, nullable=False)
    image_url = db.Column(db.String(500))
    visible = db.Column(db.Boolean, default=True, nullable=False)

    def __repr__(self):
        return f'<Testimonial {self.name}>'


class TeamMember(RecordMixin, db.Model):
    __tablename__ = 'team_members'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    role = db.Column(db.String(200), nullable=False)
    bio = db.Column(db.Text)
    image_url = db.Column(db.String(500))
    visible = db.Column(db.Boolean, default=True, nullable=False)

    def __repr__(self):
        return f'<TeamMember {self.name}>'


class Job(RecordMixin, db.Model):
    __tablename__ = 'jobs'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    requirements = db.Column(db.Text, nullable=False)
    location = db.Column(db.String(200))
    type = db.Column(db.String(50))  # Full-time, Part-time, etc.
    active = db.Column(db.Boolean, default=True, nullable=False)

    def __repr__(self):
        return f'<Job {self.title}>'
