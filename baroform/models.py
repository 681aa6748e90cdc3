import uuid
from datetime import datetime, timezone

from baroform import db

CONSULTATION_STATUSES = ('상담대기', '상담중', '실습처배정', '취업처연계', '완료')
PRACTICE_STATUSES = ('pending', 'in_progress', 'completed')
FORM_TYPES = ('consultation', 'practice', '취업연계')
STUDENT_STATUSES = ('상담대기', '상담중', '실습처배정', '취업처연계완료')
STUDY_METHODS = ('구법', '신법', '구법+신법')


def utcnow():
    return datetime.now(timezone.utc)


def isoformat(value):
    # sqlite hands datetimes back naive; they are stored in UTC
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class SerializerMixin:
    datetime_columns = ('created_at', 'updated_at')

    def to_dict(self):
        row = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if column.name in self.datetime_columns:
                value = isoformat(value)
            row[column.name] = value
        return row


class Consultation(SerializerMixin, db.Model):
    __tablename__ = 'consultations'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    contact = db.Column(db.String(20), nullable=False)
    type = db.Column(db.String(20), default='consultation')
    progress = db.Column(db.String(100))
    practice_place = db.Column(db.String(200))
    employment_consulting = db.Column(db.Boolean, default=False)
    employment_connection = db.Column(db.Boolean, default=False)
    employment_after_cert = db.Column(db.String(100))
    student_status = db.Column(db.String(20), default='상담대기')
    education = db.Column(db.String(100))
    hope_course = db.Column(db.String(200))
    reason = db.Column(db.Text)
    click_source = db.Column(db.String(200))
    memo = db.Column(db.Text)
    status = db.Column(db.String(20), default='상담대기')
    subject_cost = db.Column(db.Integer)
    manager = db.Column(db.String(50))
    residence = db.Column(db.String(100))
    study_method = db.Column(db.String(20))
    address = db.Column(db.String(255))
    # 취업연계 필드
    service_practice = db.Column(db.Boolean, default=False)
    service_employment = db.Column(db.Boolean, default=False)
    practice_planned_date = db.Column(db.String(50))
    employment_hope_time = db.Column(db.String(50))
    employment_support_fund = db.Column(db.Boolean)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)


class PracticeApplication(SerializerMixin, db.Model):
    __tablename__ = 'practice_applications'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    student_name = db.Column(db.String(100), nullable=False)
    gender = db.Column(db.String(10))
    contact = db.Column(db.String(20), nullable=False)
    birth_date = db.Column(db.String(20))
    residence_area = db.Column(db.String(100))
    address = db.Column(db.String(255))
    practice_start_date = db.Column(db.String(50))
    grade_report_date = db.Column(db.String(50))
    preferred_semester = db.Column(db.String(50))
    practice_type = db.Column(db.String(50))
    preferred_days = db.Column(db.String(100))
    has_car = db.Column(db.Boolean, default=False)
    cash_receipt_number = db.Column(db.String(50))
    privacy_agreed = db.Column(db.Boolean, default=False)
    status = db.Column(db.String(20), default='pending')
    payment_status = db.Column(db.String(20))
    memo = db.Column(db.Text)
    notes = db.Column(db.Text)
    is_completed = db.Column(db.Boolean, default=False)
    manager = db.Column(db.String(50))
    click_source = db.Column(db.String(200))
    practice_place = db.Column(db.String(200))
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)


class EmploymentApplication(SerializerMixin, db.Model):
    __tablename__ = 'employment_applications'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    contact = db.Column(db.String(20), nullable=False)
    service_practice = db.Column(db.Boolean, default=False)
    service_employment = db.Column(db.Boolean, default=False)
    practice_planned_date = db.Column(db.String(50))
    employment_hope_time = db.Column(db.String(50))
    employment_support_fund = db.Column(db.Boolean)
    click_source = db.Column(db.String(200))
    memo = db.Column(db.Text)
    manager = db.Column(db.String(50))
    status = db.Column(db.String(20), default='상담대기')
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
