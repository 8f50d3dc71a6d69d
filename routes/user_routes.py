from flask import Blueprint, request, jsonify
from services.user_service import UserService
from services.role_service import RoleService
from services.company_service import CompanyService
from utils.auth_utils import token_required
from utils.errors import require_json_object

user_bp = Blueprint("user", __name__)


@user_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"message": "User service is running"}), 200

@user_bp.route("/me", methods=["GET"])
@token_required
def me(current_user):
    result, status = UserService.get_profile(current_user)
    return jsonify(result), status

@user_bp.route("/create-company", methods=["POST"])
@token_required
def create_company(current_user):
    data = request.get_json(silent=True)
    result, status = CompanyService.create_company_and_assign(current_user, data)
    return jsonify(result), status

@user_bp.route("/invite", methods=["POST"])
@token_required
def invite_user(current_user):
    data = request.get_json(silent=True)
    result, status = UserService.invite_user(current_user, data)
    return jsonify(result), status

@user_bp.route("/workspace-users", methods=["GET"])
@token_required
def workspace_users(current_user):
    result, status = UserService.list_workspace_users(current_user)
    return jsonify(result), status

@user_bp.route("/<int:user_id>", methods=["PUT", "DELETE"])
@token_required
def manage_user(current_user, user_id):
    if request.method == "PUT":
        data = request.get_json(silent=True)
        result, status = UserService.update_user(current_user, user_id, data)
    else:
        result, status = UserService.delete_user(current_user, user_id)
    return jsonify(result), status

@user_bp.route("/<int:user_id>/assign-role", methods=["POST"])
@token_required
def assign_role(current_user, user_id):
    data = require_json_object(request.get_json(silent=True))
    result, status = RoleService.assign_role(current_user, user_id, data.get("customRoleId"))
    return jsonify(result), status
