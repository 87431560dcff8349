from app.schemas.student_schema import (
    student_schema, students_schema, student_update_schema)

__all__ = [
    'student_schema', 'students_schema', 'student_update_schema'
]
