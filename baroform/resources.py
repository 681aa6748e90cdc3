"""
One CRUD shape shared by every application table.

Each ``Resource`` names a model, the fields a create must carry and the
fields an update may touch. Rows go in and come out as plain dicts.
"""
import logging

from baroform import db
from baroform.errors import NotFoundError, ValidationError
from baroform.models import Consultation, EmploymentApplication, PracticeApplication
from baroform.notify import consultation_message, practice_message

logger = logging.getLogger(__name__)

READ_ONLY_COLUMNS = ('id', 'created_at', 'updated_at')


def _columns(model):
    return [c.name for c in model.__table__.columns if c.name not in READ_ONLY_COLUMNS]


class Resource:
    def __init__(self, name, model, label, required=(), updatable=None,
                 create_defaults=None, blank_to_null=(), message_builder=None):
        self.name = name
        self.model = model
        self.label = label
        self.required = tuple(required)
        self.updatable = tuple(updatable) if updatable is not None else tuple(_columns(model))
        self.create_defaults = dict(create_defaults or {})
        self.blank_to_null = tuple(blank_to_null)
        self.message_builder = message_builder

    def list(self):
        rows = self.model.query.order_by(self.model.created_at.desc()).all()
        return [row.to_dict() for row in rows]

    def create(self, fields, notifier=None):
        fields = fields or {}
        missing = [name for name in self.required if not fields.get(name)]
        if missing:
            raise ValidationError(f'{", ".join(missing)} required')

        values = {}
        for name in _columns(self.model):
            if name not in fields:
                continue
            value = fields[name]
            # 빈 값은 컬럼 기본값 또는 null
            if value is None or value == '':
                continue
            values[name] = value
        values.update(self.create_defaults)

        record = self.model(**values)
        db.session.add(record)
        db.session.commit()
        row = record.to_dict()
        logger.info('%s created: %s', self.label, row['id'])

        if notifier is not None and self.message_builder is not None:
            notifier.send(self.message_builder(row, manual=bool(fields.get('is_manual_entry'))))
        return row

    def update(self, record_id, fields):
        if record_id is None or record_id == '':
            raise ValidationError('ID is required')
        data = {name: fields[name] for name in self.updatable if name in fields}
        if not data:
            raise ValidationError('At least one field is required for update')

        record = db.session.get(self.model, record_id)
        if record is None:
            raise NotFoundError(f'{self.label} not found: {record_id}')

        for name, value in data.items():
            if name in self.blank_to_null and not value:
                value = None
            setattr(record, name, value)
        db.session.commit()
        logger.info('%s updated: %s (%s)', self.label, record_id, ', '.join(sorted(data)))
        return record.to_dict()

    def bulk_delete(self, ids):
        if not ids or not isinstance(ids, list):
            raise ValidationError('IDs array is required')
        records = self.model.query.filter(self.model.id.in_(ids)).all()
        rows = [record.to_dict() for record in records]
        for record in records:
            db.session.delete(record)
        db.session.commit()
        logger.info('%s deleted: %d rows', self.label, len(rows))
        return rows


consultations = Resource(
    'consultations',
    Consultation,
    'Consultation',
    required=('name', 'contact'),
    message_builder=consultation_message,
)

practice_applications = Resource(
    'practice-applications',
    PracticeApplication,
    'Practice application',
    required=('student_name', 'contact'),
    updatable=('memo', 'status', 'payment_status', 'manager'),
    create_defaults={'status': 'completed'},
    blank_to_null=('manager',),
    message_builder=practice_message,
)

employment_applications = Resource(
    'employment-applications',
    EmploymentApplication,
    'Employment application',
    required=('name', 'contact'),
)

RESOURCES = {
    r.name: r for r in (consultations, practice_applications, employment_applications)
}
