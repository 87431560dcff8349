from flask import Blueprint, request, current_app
from marshmallow import ValidationError as SchemaValidationError
from app.schemas import student_schema, students_schema, student_update_schema
from app.services.student_repository import StudentRepository
from app.utils.errors import ApiError, MethodNotAllowedError, ValidationError
from app.utils.responses import success_response, error_response


students_bp = Blueprint('students', __name__, url_prefix='/api/students')

# Orden en el que se reporta el primer campo faltante
REQUIRED_FIELDS = (
    'student_id', 'first_name', 'last_name', 'date_of_birth', 'gender', 'email'
)

# PATCH entra a la vista para responder 405 con el envelope
ROUTE_METHODS = ['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS', 'PATCH']


def get_repository():
    return StudentRepository()


@students_bp.errorhandler(ApiError)
def handle_api_error(error):
    return error_response(error.message, error.status_code)


@students_bp.route('', methods=ROUTE_METHODS)
@students_bp.route('/', methods=ROUTE_METHODS)
def students_endpoint():
    method = request.method

    if method == 'OPTIONS':
        # Preflight CORS: respuesta vacía, las cabeceras las agrega after_request
        return '', 200
    if method in ('GET', 'HEAD'):
        return _get()
    if method == 'POST':
        return _create()
    if method == 'PUT':
        return _update()
    if method == 'DELETE':
        return _delete()
    raise MethodNotAllowedError('Method not allowed')


# Listar o consultar


def _get():
    action = request.args.get('action', '')
    identifier = request.args.get('id')

    if action == 'list' or identifier is None:
        students = get_repository().list_all()
        return success_response({
            'students': students_schema.dump(students),
            'count': len(students)
        })

    student = get_repository().find_by_identifier(identifier)
    return success_response({'student': student_schema.dump(student)})

# Crear estudiante


def _create():
    data = _get_json_input()
    _require_fields(data, REQUIRED_FIELDS)
    fields = _load(student_schema, data)

    student = get_repository().insert(fields)
    return success_response({
        'message': 'Student created successfully',
        'student_id': student.student_id,
        'id': student.id
    }, 201)

# Actualizar estudiante (registro completo)


def _update():
    data = _get_json_input()

    record_id = data.get('id')
    student_id = data.get('student_id')
    if _is_blank(record_id) and _is_blank(student_id):
        raise ValidationError('Student ID or ID is required for update')

    _require_fields(data, REQUIRED_FIELDS[1:])
    fields = _load(student_update_schema, data)

    # Con id presente se actualiza por clave primaria; si no, por student_id
    if not _is_blank(record_id):
        get_repository().update(fields, id=record_id)
    else:
        get_repository().update(fields, student_id=student_id)

    return success_response({'message': 'Student updated successfully'})

# Eliminar estudiante


def _delete():
    identifier = request.args.get('id')
    if _is_blank(identifier):
        raise ValidationError('Student ID required for deletion')

    get_repository().delete_by_identifier(identifier)
    return success_response({'message': 'Student deleted successfully'})


def _get_json_input():
    """Cuerpo JSON como dict; cualquier otro contenido es entrada inválida."""
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        current_app.logger.warning(
            "Rejected %s /api/students: invalid JSON body", request.method)
        raise ValidationError('Invalid JSON input')
    return data


def _require_fields(data, required):
    for field in required:
        if _is_blank(data.get(field)):
            current_app.logger.warning(
                "Rejected %s /api/students: missing '%s'", request.method, field)
            raise ValidationError(f"Field '{field}' is required")


def _load(schema, data):
    try:
        return schema.load(data)
    except SchemaValidationError as e:
        # Se reporta el primer campo con error, igual que los obligatorios
        field, messages = next(iter(e.normalized_messages().items()))
        if isinstance(messages, list):
            messages = messages[0]
        raise ValidationError(f"Invalid value for '{field}': {messages}")


def _is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())
