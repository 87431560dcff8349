"""Persistence of student records.

All queries go through the SQLAlchemy session with bound parameters. Storage
failures are rolled back and surfaced as ``StorageError``; duplicate unique
values are surfaced as ``ValidationError`` whether they are caught by the
pre-insert checks or by the table's unique constraints at commit time.
"""

import re
from typing import List, Optional

from flask import current_app
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app import db
from app.models.student import Student
from app.utils.datetime_utils import utcnow
from app.utils.errors import NotFoundError, StorageError, ValidationError


DUPLICATE_STUDENT_ID = 'Student ID already exists'
DUPLICATE_EMAIL = 'Email already exists'
NOT_FOUND = 'Student not found'

# Límite de un INTEGER/BIGINT con signo
MAX_SURROGATE_KEY = 2 ** 63 - 1

# Nombre de la clave única violada según el motor: SQLite, MySQL, PostgreSQL
UNIQUE_KEY_PATTERNS = (
    re.compile(r"unique constraint failed: ([\w.]+)", re.IGNORECASE),
    re.compile(r"for key '([\w.]+)'", re.IGNORECASE),
    re.compile(r"violates unique constraint \"(\w+)\"", re.IGNORECASE),
)


class StudentRepository:
    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    # --- Lecturas ---

    def list_all(self) -> List[Student]:
        """All records, newest ``created_at`` first."""
        stmt = select(Student).order_by(
            Student.created_at.desc(), Student.id.desc())
        try:
            return list(self.session.scalars(stmt).all())
        except SQLAlchemyError as e:
            self._fail('listing students', e)

    def find_by_identifier(self, identifier) -> Student:
        """Return the record matching the surrogate key or the student_id.

        Raises NotFoundError when nothing matches.
        """
        try:
            student = self._resolve(identifier)
        except SQLAlchemyError as e:
            self._fail('fetching student', e)
        if student is None:
            raise NotFoundError(NOT_FOUND)
        return student

    # --- Escrituras ---

    def insert(self, fields: dict) -> Student:
        """Persist a new record from already validated fields."""
        try:
            if self._exists(Student.student_id == fields['student_id']):
                raise ValidationError(DUPLICATE_STUDENT_ID)
            if self._exists(Student.email == fields['email']):
                raise ValidationError(DUPLICATE_EMAIL)

            student = Student()
            student.student_id = fields['student_id']
            for name in Student.MUTABLE_FIELDS:
                setattr(student, name, fields.get(name))
            self.session.add(student)
            self.session.commit()
        except IntegrityError as e:
            message = self._duplicate_message(e)
            if message is None:
                self._fail('creating student', e)
            self.session.rollback()
            current_app.logger.warning("Unique constraint rejected write: %s", e.orig)
            raise ValidationError(message) from e
        except SQLAlchemyError as e:
            self._fail('creating student', e)
        except ValidationError as e:
            self.session.rollback()
            current_app.logger.warning(
                "Student %s not created: %s", fields['student_id'], e.message)
            raise

        current_app.logger.info(
            "Student %s created with id %s", student.student_id, student.id)
        return student

    def update(self, fields: dict, id=None, student_id=None) -> Student:
        """Overwrite every mutable column of one record.

        The row is matched by ``id`` when given, otherwise by ``student_id``.
        Optional fields missing from ``fields`` are cleared.
        """
        if id is None and student_id is None:
            raise ValidationError('Student ID or ID is required for update')

        try:
            student = self._get_for_update(id, student_id)
            if student is None:
                raise NotFoundError(NOT_FOUND)

            if self._exists(Student.email == fields['email'],
                            exclude_id=student.id):
                raise ValidationError(DUPLICATE_EMAIL)

            for name in Student.MUTABLE_FIELDS:
                setattr(student, name, fields.get(name))
            student.updated_at = utcnow()
            self.session.commit()
        except IntegrityError as e:
            message = self._duplicate_message(e)
            if message is None:
                self._fail('updating student', e)
            self.session.rollback()
            current_app.logger.warning("Unique constraint rejected write: %s", e.orig)
            raise ValidationError(message) from e
        except SQLAlchemyError as e:
            self._fail('updating student', e)
        except (ValidationError, NotFoundError):
            self.session.rollback()
            raise

        current_app.logger.info("Student %s updated", student.student_id)
        return student

    def delete_by_identifier(self, identifier) -> None:
        try:
            student = self._resolve(identifier)
            if student is None:
                raise NotFoundError(NOT_FOUND)
            self.session.delete(student)
            self.session.commit()
        except SQLAlchemyError as e:
            self._fail('deleting student', e)

        current_app.logger.info(
            "Student %s (id %s) deleted", student.student_id, student.id)

    # --- Auxiliares ---

    def _resolve(self, identifier) -> Optional[Student]:
        # Un identificador numérico se prueba primero como clave primaria
        value = str(identifier).strip()
        if not value:
            return None
        key = self._surrogate_key(value)
        if key is not None:
            student = self.session.get(Student, key)
            if student is not None:
                return student
        return self.session.scalars(
            select(Student).where(Student.student_id == value)).first()

    def _get_for_update(self, id, student_id) -> Optional[Student]:
        if id is not None:
            key = self._surrogate_key(str(id).strip())
            if key is None:
                return None
            return self.session.get(Student, key)
        return self.session.scalars(
            select(Student).where(Student.student_id == str(student_id))).first()

    def _exists(self, condition, exclude_id=None) -> bool:
        stmt = select(Student.id).where(condition)
        if exclude_id is not None:
            stmt = stmt.where(Student.id != exclude_id)
        return self.session.scalars(stmt.limit(1)).first() is not None

    @staticmethod
    def _surrogate_key(value) -> Optional[int]:
        """Clave primaria si value son solo dígitos ASCII dentro de rango."""
        if not (value.isascii() and value.isdigit()):
            return None
        key = int(value)
        if key > MAX_SURROGATE_KEY:
            return None
        return key

    @staticmethod
    def _duplicate_message(error) -> Optional[str]:
        """Mensaje para la clave única violada, o None si no es un duplicado."""
        detail = str(getattr(error, 'orig', error))
        for pattern in UNIQUE_KEY_PATTERNS:
            match = pattern.search(detail)
            if not match:
                continue
            # students.email, email o students_email_key
            key = match.group(1).lower().split('.')[-1]
            if key == 'email' or key.endswith('_email_key'):
                return DUPLICATE_EMAIL
            if key == 'student_id' or key.endswith('_student_id_key'):
                return DUPLICATE_STUDENT_ID
        return None

    def _fail(self, action, error):
        self.session.rollback()
        current_app.logger.exception("Database error while %s", action)
        raise StorageError(f'Database error while {action}') from error
