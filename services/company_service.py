from flask import current_app
from extensions import db
from models.Company_model import Company, Workspace
from models.user_model import UserRole
from utils.errors import (
    AdminRequired,
    AlreadyHasTenant,
    CrossTenantAccess,
    NoTenant,
    ValidationError,
    require_json_object,
)


class CompanyService:
    @staticmethod
    def require_company(user, action):
        """Return the user's company, or fail with ``NoTenant``."""
        if user.company_id is None:
            raise NoTenant(f"Admin must have a company to {action}")
        return user.company

    @staticmethod
    def require_admin(user, action):
        """Return the company of an ADMIN acting user.

        Plain members get ``AdminRequired`` before the tenant is looked at.
        """
        if user.role != UserRole.ADMIN:
            raise AdminRequired(f"Only company admins can {action}")
        return CompanyService.require_company(user, action)

    @staticmethod
    def ensure_same_company(admin, company_id, what):
        if company_id is None or company_id != admin.company_id:
            raise CrossTenantAccess(f"{what} does not belong to your workspace")

    @staticmethod
    def create_company_and_assign(current_user, data):
        if current_user.company_id is not None:
            raise AlreadyHasTenant()

        data = require_json_object(data)
        name = (data.get('companyName') or '').strip()
        if not name:
            raise ValidationError('Company name is required')

        industry = data.get('industry')
        address = data.get('address')

        try:
            company = Company(name=name, industry=industry, address=address)
            db.session.add(company)
            db.session.flush()

            workspace = Workspace(name=name, company_id=company.id)
            db.session.add(workspace)
            db.session.flush()

            current_user.company_id = company.id
            current_user.workspace_id = workspace.id
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(
            f"Company {company.name} and workspace {workspace.id} assigned to user {current_user.email}"
        )
        return current_user.to_dict(), 201

    @staticmethod
    def get_company(current_user):
        company = CompanyService.require_company(current_user, 'view company details')
        result = company.to_dict()
        result['workspaceId'] = current_user.workspace_id
        return {'company': result}, 200
