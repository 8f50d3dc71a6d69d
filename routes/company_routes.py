from flask import Blueprint, jsonify
from services.company_service import CompanyService
from utils.auth_utils import token_required

company_bp = Blueprint('company', __name__)

@company_bp.route('', methods=['GET'])
@token_required
def get_company(current_user):
    result, status = CompanyService.get_company(current_user)
    return jsonify(result), status
