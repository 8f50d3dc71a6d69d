from flask import request, jsonify, Blueprint
from services.auth_service import AuthService
from utils.auth_utils import token_required

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    data = request.get_json(silent=True)
    result, status = AuthService.register(data)
    return jsonify(result), status

@auth_bp.route('/login', methods=['POST'])
def login():
    """Authenticate with email and password and receive a session token.
    ---
    tags:
      - Auth
    requestBody:
      required: true
      content:
        application/json:
          schema:
            type: object
            properties:
              email:
                type: string
              password:
                type: string
    responses:
      200:
        description: Session token and user profile
      401:
        description: Invalid email or password
    """
    data = request.get_json(silent=True)
    result, status = AuthService.login(data)
    return jsonify(result), status

@auth_bp.route('/forgot-password', methods=['POST'])
def forgot_password():
    data = request.get_json(silent=True)
    result, status = AuthService.request_password_reset(data)
    return jsonify(result), status

@auth_bp.route('/perform-reset', methods=['POST'])
def perform_reset():
    data = request.get_json(silent=True)
    result, status = AuthService.perform_password_reset(data)
    return jsonify(result), status

@auth_bp.route('/change-password', methods=['POST'])
@token_required
def change_password(current_user):
    data = request.get_json(silent=True)
    result, status = AuthService.change_password(current_user, data)
    return jsonify(result), status
