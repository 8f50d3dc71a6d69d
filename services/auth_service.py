from flask import current_app
from sqlalchemy.exc import IntegrityError
from extensions import db
from models.user_model import User, UserRole
from models.password_reset_model import PasswordResetToken
from services.mail_service import send_password_reset_email
from services.user_service import email_taken
from utils.auth_utils import hash_password, verify_password, check_password, generate_jwt
from utils.errors import (
    EmailTaken,
    InvalidCredentials,
    InvalidOrExpiredToken,
    PasswordMismatch,
    ValidationError,
    require_json_object,
)
import datetime
import secrets

MIN_PASSWORD_LENGTH = 6


class AuthService:

    @staticmethod
    def register(data):
        data = require_json_object(data)
        first_name = data.get('firstName')
        last_name = data.get('lastName')
        email = data.get('email')
        password = data.get('password')

        if not all([first_name, last_name, email, password]):
            raise ValidationError('All fields (firstName, lastName, email, password) are required')

        if email_taken(email):
            raise EmailTaken()

        # Self-registered accounts are admins without a company until they create one
        new_user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=hash_password(password),
            role=UserRole.ADMIN
        )
        db.session.add(new_user)
        try:
            db.session.commit()
        except IntegrityError:
            # a concurrent registration took the email after the check above
            db.session.rollback()
            raise EmailTaken()

        current_app.logger.info(f"New user registered: {new_user.email} (will need to create company)")
        return new_user.to_dict(), 201

    @staticmethod
    def authenticate(email, password):
        user = User.query.filter_by(email=email).first() if email else None
        matched = check_password(password, user.password if user else None)
        if user is None or not password or not matched:
            raise InvalidCredentials()
        return user

    @staticmethod
    def login(data):
        data = require_json_object(data)
        email = data.get('email')
        try:
            user = AuthService.authenticate(email, data.get('password'))
        except InvalidCredentials:
            current_app.logger.warning(f"Login failed for email: {email}")
            raise

        token = generate_jwt(user)
        current_app.logger.info(f"User authenticated successfully: {user.email} (ID: {user.id})")
        return {
            'message': 'Login successful',
            'token': token,
            'user': user.to_dict()
        }, 200

    @staticmethod
    def change_password(current_user, data):
        data = require_json_object(data)
        new_password = data.get('newPassword')
        if new_password != data.get('confirmPassword'):
            raise PasswordMismatch()
        if not verify_password(data.get('currentPassword') or '', current_user.password):
            raise InvalidCredentials('Current password is incorrect')
        AuthService._check_password_strength(new_password)

        current_user.password = hash_password(new_password)
        db.session.commit()
        current_app.logger.info(f"Password changed for user: {current_user.email} (ID: {current_user.id})")
        return {'message': 'Password updated successfully'}, 200

    @staticmethod
    def request_password_reset(data):
        email = require_json_object(data).get('email')
        response = {'message': 'If the email exists, a reset link has been sent'}, 200

        user = User.query.filter_by(email=email).first() if email else None
        if not user:
            # Same answer whether or not the account exists
            return response

        now = datetime.datetime.utcnow()
        PasswordResetToken.query.filter_by(user_id=user.id, used=False).update({'used': True})
        reset_token = PasswordResetToken(
            token=secrets.token_urlsafe(32),
            user_id=user.id,
            expires_at=now + datetime.timedelta(minutes=current_app.config['PASSWORD_RESET_TOKEN_MINUTES']),
            used=False
        )
        db.session.add(reset_token)
        db.session.commit()
        current_app.logger.info(f"Password reset requested for user ID {user.id}")

        send_password_reset_email(user, reset_token.token)
        return response

    @staticmethod
    def perform_password_reset(data):
        data = require_json_object(data)
        new_password = data.get('newPassword')
        if new_password != data.get('confirmPassword'):
            raise PasswordMismatch()

        token_value = data.get('token')
        reset_token = PasswordResetToken.query.filter_by(token=token_value).first() if token_value else None
        if not reset_token or not reset_token.is_valid():
            raise InvalidOrExpiredToken()
        AuthService._check_password_strength(new_password)

        user = reset_token.user
        user.password = hash_password(new_password)
        reset_token.used = True
        db.session.commit()

        current_app.logger.info(f"Password reset completed for user ID {user.id}")
        return {'message': 'Password has been reset successfully'}, 200

    @staticmethod
    def _check_password_strength(password):
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
