from flask import current_app
from sqlalchemy.exc import IntegrityError
from extensions import db
from models.role_model import CustomRole, RolePermission
from models.user_model import User
from services.company_service import CompanyService
from utils.errors import DuplicateRole, NotFound, RoleInUse, ValidationError, require_json_object


def _parse_permissions(raw):
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError('Permissions must be a list')

    parsed = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise ValidationError('Each permission must be an object')
        name = entry.get('permissionName')
        if name is None or not str(name).strip():
            raise ValidationError('Permission name is required')
        has_access = entry.get('hasAccess', False)
        if not isinstance(has_access, bool):
            raise ValidationError('hasAccess must be a boolean')
        parsed.append((str(name), has_access))
    return parsed


def _role_name_taken(company_id, role_name):
    return CustomRole.query.filter_by(role_name=role_name, company_id=company_id).first() is not None


class RoleService:
    @staticmethod
    def create_role(current_user, data):
        company = CompanyService.require_admin(current_user, 'create roles')

        data = require_json_object(data)
        role_name = (data.get('roleName') or '').strip()
        if not role_name:
            raise ValidationError('Role name is required')
        permissions = _parse_permissions(data.get('permissions'))

        if _role_name_taken(company.id, role_name):
            raise DuplicateRole()

        role = CustomRole(
            role_name=role_name,
            description=data.get('description'),
            company_id=company.id
        )
        role.permissions = [
            RolePermission(permission_name=name, has_access=has_access)
            for name, has_access in permissions
        ]
        db.session.add(role)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            # lost a race against a concurrent insert of the same name
            if _role_name_taken(company.id, role_name):
                raise DuplicateRole()
            raise
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"Role {role.role_name} created for company {company.name}")
        return role.to_dict(), 201

    @staticmethod
    def list_roles(current_user):
        company = CompanyService.require_admin(current_user, 'view roles')
        roles = CustomRole.query.filter_by(company_id=company.id).order_by(CustomRole.id).all()
        return {'roles': [role.to_dict() for role in roles]}, 200

    @staticmethod
    def delete_role(current_user, role_id):
        CompanyService.require_admin(current_user, 'delete roles')

        role = db.session.get(CustomRole, role_id)
        if not role:
            raise NotFound('Role not found')
        CompanyService.ensure_same_company(current_user, role.company_id, 'Role')

        if User.query.filter_by(custom_role_id=role.id).first():
            raise RoleInUse()

        role_name = role.role_name
        try:
            db.session.delete(role)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"Role {role_name} deleted by admin {current_user.email}")
        return {'message': 'Role deleted successfully'}, 200

    @staticmethod
    def assign_role(current_user, user_id, custom_role_id):
        CompanyService.require_admin(current_user, 'assign roles')

        target = db.session.get(User, user_id)
        if not target:
            raise NotFound('User not found')
        CompanyService.ensure_same_company(current_user, target.company_id, 'User')

        role = None
        if custom_role_id is not None:
            role = db.session.get(CustomRole, custom_role_id)
            if not role:
                raise NotFound('Custom role not found')
            CompanyService.ensure_same_company(current_user, role.company_id, 'Role')

        target.custom_role = role
        db.session.commit()

        if role:
            current_app.logger.info(
                f"Custom role {role.role_name} assigned to user {target.email} by admin {current_user.email}"
            )
        else:
            current_app.logger.info(f"Custom role removed from user {target.email} by admin {current_user.email}")
        return target.to_dict(), 200
