from flask import jsonify


CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET, POST, PUT, DELETE, OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type',
}


def success_response(payload=None, status_code=200):
    """Envelope de éxito: {"success": true, **payload}."""
    body = {'success': True}
    if payload:
        body.update(payload)
    return jsonify(body), status_code


def error_response(message, status_code=400):
    """Envelope de error: {"success": false, "error": message}."""
    return jsonify({'success': False, 'error': message}), status_code


def apply_cors_headers(response):
    for header, value in CORS_HEADERS.items():
        response.headers[header] = value
    return response
