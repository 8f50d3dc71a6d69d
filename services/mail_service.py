from flask import current_app
from flask_mail import Message
from extensions import mail


def send_email(subject, recipient, body):
    """Send a plain-text mail. Delivery is best-effort: failures are logged and
    reported through the return value, never raised."""
    try:
        msg = Message(
            subject=subject,
            sender=current_app.config['MAIL_DEFAULT_SENDER'],
            recipients=[recipient]
        )
        msg.body = body
        mail.send(msg)
        current_app.logger.info(f"Email '{subject}' sent to {recipient}")
        return True
    except Exception as e:
        current_app.logger.warning(f"Failed to send email '{subject}' to {recipient}: {str(e)}")
        return False


def send_invitation_email(admin, company, email, temporary_password):
    login_url = f"{current_app.config['FRONTEND_URL']}/login"
    body = (
        f"You have been invited by {admin.email} to join {company.name} workspace.\n\n"
        f"Temporary Password: {temporary_password}\n"
        f"Login at: {login_url}\n\n"
        "Please change your password after first login."
    )
    return send_email(f"You're invited to {company.name} workspace", email, body)


def send_password_reset_email(user, token):
    minutes = current_app.config['PASSWORD_RESET_TOKEN_MINUTES']
    reset_url = f"{current_app.config['FRONTEND_URL']}/reset-password?token={token}"
    body = (
        f"Click the link to reset your password: {reset_url}\n"
        f"This link will expire in {minutes} minutes."
    )
    return send_email("Reset your password", user.email, body)
