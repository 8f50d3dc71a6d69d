import enum
from datetime import datetime
from extensions import db


class UserRole(enum.Enum):
    ADMIN = 'ADMIN'
    USER = 'USER'


class User(db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(150), unique=True, nullable=False)
    password = db.Column(db.String(200), nullable=False)
    role = db.Column(db.Enum(UserRole), nullable=False, default=UserRole.USER)
    company_id = db.Column(db.Integer, db.ForeignKey('companies.id'), nullable=True)
    workspace_id = db.Column(db.Integer, db.ForeignKey('workspaces.id'), nullable=True)
    custom_role_id = db.Column(db.Integer, db.ForeignKey('custom_roles.id'), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    custom_role = db.relationship('CustomRole', backref=db.backref('users', lazy=True))

    def to_dict(self):
        company = self.company
        custom_role = self.custom_role
        return {
            'id': self.id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'email': self.email,
            'role': self.role.value,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'companyId': company.id if company else None,
            'companyName': company.name if company else None,
            'workspaceId': self.workspace_id,
            'status': 'Active',
            'customRoleId': custom_role.id if custom_role else None,
            'customRoleName': custom_role.role_name if custom_role else None
        }

    def __repr__(self):
        return f"<User id={self.id} email={self.email} role={self.role.value}>"
