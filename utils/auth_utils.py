import jwt
from functools import wraps
from flask import request, current_app, g
from models.user_model import User
from extensions import bcrypt, db
from utils.errors import Unauthorized, InvalidToken, ExpiredToken
from datetime import datetime, timedelta


def hash_password(password):
    return bcrypt.generate_password_hash(password).decode('utf-8')

def verify_password(password, hashed_password):
    return bcrypt.check_password_hash(hashed_password, password)

def init_password_checks(app):
    """Hash the stand-in password compared against when an email is unknown."""
    app.extensions['dummy_password_hash'] = hash_password('not-a-real-password')

def check_password(password, hashed_password=None):
    """Exactly one bcrypt comparison, against the stand-in hash when there is no account."""
    if hashed_password is None:
        hashed_password = current_app.extensions['dummy_password_hash']
    return bcrypt.check_password_hash(hashed_password, password or '')


def build_claims(user):
    """Claims embedded in a session token for ``user``.

    Company and custom role claims are left out when the user has none, and
    ``permissions`` is flattened from the custom role (empty without one).
    """
    claims = {
        'sub': user.email,
        'userId': user.id,
        'firstName': user.first_name,
        'lastName': user.last_name,
        'role': user.role.value,
    }
    if user.workspace_id is not None:
        claims['workspaceId'] = user.workspace_id

    company = user.company
    if company is not None:
        claims['companyId'] = company.id
        claims['companyName'] = company.name

    permissions = {}
    custom_role = user.custom_role
    if custom_role is not None:
        claims['customRoleId'] = custom_role.id
        claims['customRoleName'] = custom_role.role_name
        permissions = custom_role.permission_map()
    claims['permissions'] = permissions
    return claims


def generate_jwt(user):
    now = datetime.utcnow()
    payload = build_claims(user)
    payload['iat'] = now
    payload['exp'] = now + timedelta(hours=current_app.config['JWT_EXPIRATION_HOURS'])
    return jwt.encode(
        payload,
        current_app.config['JWT_SECRET_KEY'],
        algorithm=current_app.config['JWT_ALGORITHM']
    )

def decode_jwt(token):
    """Verify a session token and return its claims. No database access."""
    try:
        return jwt.decode(
            token,
            current_app.config['JWT_SECRET_KEY'],
            algorithms=[current_app.config['JWT_ALGORITHM']],
            options={"require": ["exp", "iat", "sub"]}
        )
    except jwt.ExpiredSignatureError:
        raise ExpiredToken()
    except jwt.InvalidTokenError:
        raise InvalidToken()


def _bearer_token():
    header = request.headers.get('Authorization', '')
    parts = header.split()
    if len(parts) == 2 and parts[0] == 'Bearer':
        return parts[1]
    return None

def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        token = _bearer_token()
        if not token:
            raise Unauthorized('Missing bearer token')
        claims = decode_jwt(token)
        if claims.get('userId') is None:
            raise InvalidToken()
        current_user = db.session.get(User, claims['userId'])
        if not current_user:
            raise Unauthorized('User not found')
        g.token_claims = claims
        return f(current_user, *args, **kwargs)
    return decorated
