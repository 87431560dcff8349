from app import db
from app.utils.datetime_utils import utcnow


class Student(db.Model):
    __tablename__ = 'students'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(
        db.String(50), unique=True, nullable=False)  # Matrícula asignada externamente
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    date_of_birth = db.Column(db.Date, nullable=False)
    gender = db.Column(db.String(20), nullable=False)
    email = db.Column(db.String(150), unique=True, nullable=False)
    phone = db.Column(db.String(30))
    address = db.Column(db.Text)

    # Contacto de emergencia
    emergency_contact_name = db.Column(db.String(150))
    emergency_contact_phone = db.Column(db.String(30))

    # Datos médicos
    medical_conditions = db.Column(db.Text)
    allergies = db.Column(db.Text)
    medications = db.Column(db.Text)
    blood_type = db.Column(db.String(10))

    created_at = db.Column(
        db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    # Campos que la actualización reescribe completos (student_id es inmutable)
    MUTABLE_FIELDS = (
        'first_name', 'last_name', 'date_of_birth', 'gender', 'email',
        'phone', 'address', 'emergency_contact_name', 'emergency_contact_phone',
        'medical_conditions', 'allergies', 'medications', 'blood_type',
    )

    def __repr__(self):
        return f'<Student {self.student_id}>'
