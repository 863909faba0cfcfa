from datetime import datetime

from library_app.extensions import db
from library_app.errors import InvalidRequest, NotFound


class BaseRepo:
    """
    Row store shared by every collection.

    get / list_all / insert / update / delete / query. ``created_at`` and
    ``updated_at`` are always assigned here, callers cannot set them.
    ``commit=False`` leaves the write in the current session so several
    writes can share one transaction.
    """

    model = None
    label = "Kayıt"
    _readonly = ("id", "created_at", "updated_at")

    @classmethod
    def _column(cls, field: str):
        if field not in cls.model.__table__.columns:
            raise InvalidRequest(f"Bilinmeyen alan: {field}")
        return getattr(cls.model, field)

    @classmethod
    def _clean(cls, fields: dict) -> dict:
        data = {k: v for k, v in fields.items() if k not in cls._readonly}
        for k in data:
            cls._column(k)
        return data

    @classmethod
    def list_all(cls):
        return cls.model.query.order_by(cls.model.id.desc()).all()

    @classmethod
    def get(cls, row_id: int):
        return db.session.get(cls.model, row_id)

    @classmethod
    def get_or_raise(cls, row_id: int):
        row = cls.get(row_id)
        if row is None:
            raise NotFound(f"{cls.label} bulunamadı: {row_id}")
        return row

    @classmethod
    def insert(cls, fields: dict, commit: bool = True) -> int:
        now = datetime.utcnow()
        row = cls.model(**cls._clean(fields))
        row.created_at = now
        row.updated_at = now
        db.session.add(row)
        db.session.flush()
        if commit:
            db.session.commit()
        return row.id

    @classmethod
    def update(cls, row_id: int, fields: dict, commit: bool = True):
        row = cls.get_or_raise(row_id)
        for k, v in cls._clean(fields).items():
            setattr(row, k, v)
        row.updated_at = datetime.utcnow()
        if commit:
            db.session.commit()
        return row

    @classmethod
    def delete(cls, row_id: int, commit: bool = True):
        row = cls.get_or_raise(row_id)
        db.session.delete(row)
        if commit:
            db.session.commit()

    @classmethod
    def query(cls, field: str | None = None, value=None, order_by: str | None = None, descending: bool = False):
        """Equality filter on one field, sort on one field."""
        q = cls.model.query
        if field is not None:
            q = q.filter(cls._column(field) == value)
        if order_by is not None:
            col = cls._column(order_by)
            q = q.order_by(col.desc() if descending else col.asc())
        return q.all()

    @staticmethod
    def rollback():
        db.session.rollback()
