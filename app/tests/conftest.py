from datetime import date
from app.models.student import Student
from app import create_app, db
import pytest
import sys
import os

# Asegurar que el cwd está en sys.path para importar config.py desde la raíz
sys.path.insert(0, os.path.abspath('.'))


@pytest.fixture
def app():
    """Crear aplicación de test sobre SQLite en memoria (una conexión compartida entre request y sesión)."""
    _app = create_app('testing')

    # Crear tablas dentro del contexto y mantenerlo activo durante el test
    with _app.app_context():
        db.create_all()

        yield _app

        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Cliente de test"""
    return app.test_client()


@pytest.fixture
def student_payload():
    """Cuerpo válido para crear un estudiante (solo campos obligatorios)."""
    return {
        'student_id': 'STU001',
        'first_name': 'John',
        'last_name': 'Doe',
        'date_of_birth': '2000-05-15',
        'gender': 'Male',
        'email': 'john@example.com'
    }


@pytest.fixture
def sample_student(app):
    """Estudiante persistido; devuelve sus identificadores para evitar DetachedInstanceError."""
    student = Student()
    student.student_id = 'STU100'
    student.first_name = 'Ana'
    student.last_name = 'García'
    student.date_of_birth = date(2001, 3, 9)
    student.gender = 'Female'
    student.email = 'ana@example.com'
    student.blood_type = 'O+'
    student.allergies = 'Penicilina'
    db.session.add(student)
    db.session.commit()

    return {'id': student.id, 'student_id': student.student_id}
