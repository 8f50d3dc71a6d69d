from flask import current_app
from sqlalchemy.exc import IntegrityError
from extensions import db
from models.user_model import User, UserRole
from models.role_model import CustomRole
from services.company_service import CompanyService
from services.mail_service import send_invitation_email
from utils.auth_utils import hash_password
from utils.errors import EmailTaken, NotFound, SelfDeleteForbidden, ValidationError, require_json_object


def email_taken(email):
    return User.query.filter_by(email=email).first() is not None


def commit_user_changes(message=None):
    """Commit, turning a lost race on the unique email into ``EmailTaken``."""
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise EmailTaken(message)


class UserService:
    @staticmethod
    def get_profile(current_user):
        return {'user': current_user.to_dict()}, 200

    @staticmethod
    def invite_user(current_user, data):
        company = CompanyService.require_admin(current_user, 'invite users')

        data = require_json_object(data)
        email = data.get('email')
        temporary_password = data.get('temporaryPassword')
        if not email or not temporary_password:
            raise ValidationError('Email and temporaryPassword are required')

        if email_taken(email):
            raise EmailTaken()

        new_user = User(
            first_name='Invited',
            last_name='Member',
            email=email,
            password=hash_password(temporary_password),
            role=UserRole.USER,
            company_id=company.id,
            workspace_id=current_user.workspace_id
        )
        db.session.add(new_user)
        commit_user_changes()
        current_app.logger.info(f"Invited user created: {new_user.email} (ID: {new_user.id})")

        # The account stays created even when the invitation cannot be delivered
        if send_invitation_email(current_user, company, email, temporary_password):
            current_app.logger.info(f"Invitation email sent to {email} by admin {current_user.email}")

        return new_user.to_dict(), 201

    @staticmethod
    def list_workspace_users(current_user):
        company = CompanyService.require_admin(current_user, 'view workspace users')
        users = User.query.filter_by(company_id=company.id).order_by(User.id).all()
        current_app.logger.info(f"Found {len(users)} users for workspace: {company.name}")
        return {'users': [user.to_dict() for user in users]}, 200

    @staticmethod
    def update_user(current_user, user_id, data):
        CompanyService.require_admin(current_user, 'update users')

        user = db.session.get(User, user_id)
        if not user:
            raise NotFound('User not found')
        CompanyService.ensure_same_company(current_user, user.company_id, 'User')

        data = require_json_object(data)
        first_name = data.get('firstName')
        last_name = data.get('lastName')
        email = data.get('email')
        if not all([first_name, last_name, email]):
            raise ValidationError('firstName, lastName and email are required')

        if email != user.email and email_taken(email):
            raise EmailTaken('Email already exists')

        custom_role = None
        custom_role_id = data.get('customRoleId')
        if custom_role_id is not None:
            custom_role = db.session.get(CustomRole, custom_role_id)
            if not custom_role:
                raise NotFound('Custom role not found')
            CompanyService.ensure_same_company(current_user, custom_role.company_id, 'Role')

        user.first_name = first_name
        user.last_name = last_name
        user.email = email
        user.custom_role = custom_role
        commit_user_changes('Email already exists')

        current_app.logger.info(f"User {user.email} updated by admin {current_user.email}")
        return user.to_dict(), 200

    @staticmethod
    def delete_user(current_user, user_id):
        CompanyService.require_admin(current_user, 'delete users')

        user = db.session.get(User, user_id)
        if not user:
            raise NotFound('User not found')
        CompanyService.ensure_same_company(current_user, user.company_id, 'User')

        if user.id == current_user.id:
            raise SelfDeleteForbidden()

        email = user.email
        db.session.delete(user)
        db.session.commit()
        current_app.logger.info(f"User {email} deleted by admin {current_user.email}")
        return {'message': 'User deleted successfully'}, 200
