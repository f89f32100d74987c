from datetime import datetime, timedelta, timezone
from functools import wraps

import jwt
from flask import current_app, g, jsonify, request

from config.logging import get_logger

log = get_logger()

JWT_ALGORITHM = "HS256"


def create_access_token(user_id, role=None, expires_minutes=None):
    """
    Issue a signed access token for a user

    Args:
        user_id: Identifier stored in the 'user_id' claim
        role: Optional role name stored in the 'role' claim
        expires_minutes: Lifetime, defaults to JWT_EXPIRATION_MINUTES from app config

    Returns:
        str: Encoded JWT
    """
    if expires_minutes is None:
        expires_minutes = current_app.config.get('JWT_EXPIRATION_MINUTES', 15)
    now = datetime.now(timezone.utc)
    payload = {
        'user_id': str(user_id),
        'role': role or 'user',
        'iat': now,
        'exp': now + timedelta(minutes=expires_minutes),
    }
    token = jwt.encode(payload, current_app.config['JWT_SECRET'], algorithm=JWT_ALGORITHM)
    # jwt.encode returns bytes in PyJWT < 2.0, decode to str if needed
    if isinstance(token, bytes):
        token = token.decode('utf-8')
    return token


def jwt_required(f):
    """Decorator to require valid JWT token for protected routes"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        # Skip JWT validation for CORS preflight requests
        if request.method == 'OPTIONS':
            return '', 200

        token = None

        # Check for token in Authorization header
        auth_header = request.headers.get('Authorization')
        if auth_header:
            parts = auth_header.split(' ')
            if len(parts) != 2 or parts[0].lower() != 'bearer':
                return jsonify({'success': False, 'error': 'Invalid token format'}), 401
            token = parts[1]

        # Check for token in cookies if not in header
        if not token:
            token = request.cookies.get('access_token')

        if not token:
            return jsonify({'success': False, 'error': 'Token is missing'}), 401

        secret = current_app.config.get('JWT_SECRET')
        if not secret:
            log.error("JWT_SECRET is not configured!")
            return jsonify({'success': False, 'error': 'Server configuration error'}), 500

        try:
            data = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            log.warning(f"Token has expired for token ending with: ...{token[-10:]}")
            return jsonify({'success': False, 'error': 'Token expired'}), 401
        except jwt.InvalidTokenError as e:
            log.error(f"Invalid token error: {str(e)}")
            return jsonify({'success': False, 'error': 'Invalid token'}), 401

        if not data.get('user_id'):
            return jsonify({'success': False, 'error': 'Invalid token'}), 401

        # Store user in g object for access in route
        g.user_id = data['user_id']
        g.user = {
            'user_id': data['user_id'],
            'role': data.get('role', 'user'),
        }

        return f(*args, **kwargs)

    return decorated_function
