from marshmallow import EXCLUDE, fields, validate
from app import ma
from app.models.student import Student
from app.utils.datetime_utils import safe_iso


class StudentSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Student
        load_instance = False
        # id, created_at, updated_at y claves ajenas se ignoran al cargar
        unknown = EXCLUDE

    # Obligatorios
    student_id = fields.Str(
        required=True, validate=validate.Length(min=1, max=50))
    first_name = fields.Str(
        required=True, validate=validate.Length(min=1, max=100))
    last_name = fields.Str(
        required=True, validate=validate.Length(min=1, max=100))
    date_of_birth = fields.Date(required=True)
    gender = fields.Str(
        required=True, validate=validate.Length(min=1, max=20))
    email = fields.Email(
        required=True, validate=validate.Length(min=1, max=150))

    # Opcionales: ausentes se cargan como None
    phone = fields.Str(load_default=None, allow_none=True,
                       validate=validate.Length(max=30))
    address = fields.Str(load_default=None, allow_none=True)
    emergency_contact_name = fields.Str(
        load_default=None, allow_none=True, validate=validate.Length(max=150))
    emergency_contact_phone = fields.Str(
        load_default=None, allow_none=True, validate=validate.Length(max=30))
    medical_conditions = fields.Str(load_default=None, allow_none=True)
    allergies = fields.Str(load_default=None, allow_none=True)
    medications = fields.Str(load_default=None, allow_none=True)
    blood_type = fields.Str(load_default=None, allow_none=True,
                            validate=validate.Length(max=10))

    # Campos de solo lectura
    id = fields.Int(dump_only=True)
    created_at = fields.Function(
        lambda obj: safe_iso(obj.created_at), dump_only=True)
    updated_at = fields.Function(
        lambda obj: safe_iso(obj.updated_at), dump_only=True)


student_schema = StudentSchema()
students_schema = StudentSchema(many=True)
# La actualización nunca modifica student_id
student_update_schema = StudentSchema(exclude=('student_id',))
