"""
Submission Models

Visitor-submitted records awaiting admin review.
"""

from academy.extensions import db
from academy.models.base import RecordMixin


class StudentApplication(RecordMixin, db.Model):
    __tablename__ = 'student_applications'
    __reference_fields__ = ('course_id',)

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id', ondelete='SET NULL'), index=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(30))
    message = db.Column(db.Text)
    # pending, reviewed, accepted, rejected
    status = db.Column(db.String(20), default='pending', nullable=False, index=True)

    def __repr__(self):
        return f'<StudentApplication {self.id} {self.status}>'


class CareerApplication(RecordMixin, db.Model):
    __tablename__ = 'career_applications'
    __reference_fields__ = ('job_id',)

    id = db.Column(db.Integer, primary_key=True)
    job_id = db.Column(db.Integer, db.ForeignKey('jobs.id', ondelete='SET NULL'), index=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(30))
    cover_letter = db.Column(db.Text)
    resume_url = db.Column(db.String(500))
    status = db.Column(db.String(20), default='pending', nullable=False, index=True)

    def __repr__(self):
        return f'<CareerApplication {self.id} {self.status}>'


class ContactMessage(RecordMixin, db.Model):
    __tablename__ = 'contact_messages'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    subject = db.Column(db.String(300))
    message = db.Column(db.Text, nullable=False)
    is_read = db.Column(db.Boolean, default=False, nullable=False, index=True)

    def __repr__(self):
        return f'<ContactMessage {self.id}>'
