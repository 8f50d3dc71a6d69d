from flask import Blueprint, request, jsonify
from services.role_service import RoleService
from utils.auth_utils import token_required

role_bp = Blueprint('role', __name__)


@role_bp.route('/roles', methods=['GET', 'POST'])
@token_required
def manage_roles(current_user):
    """List or create the custom roles of the caller's company.
    ---
    tags:
      - Roles
    security:
      - Bearer: []
    responses:
      200:
        description: Roles of the company with their permissions
      201:
        description: Role created
      409:
        description: Caller has no company, or the role name is taken
    """
    if request.method == 'GET':
        result, status = RoleService.list_roles(current_user)
    else:
        data = request.get_json(silent=True)
        result, status = RoleService.create_role(current_user, data)
    return jsonify(result), status

@role_bp.route('/roles/<int:role_id>', methods=['DELETE'])
@token_required
def delete_role(current_user, role_id):
    result, status = RoleService.delete_role(current_user, role_id)
    return jsonify(result), status
