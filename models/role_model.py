from datetime import datetime
from extensions import db


class CustomRole(db.Model):
    __tablename__ = 'custom_roles'
    id = db.Column(db.Integer, primary_key=True)
    role_name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(255), nullable=True)
    company_id = db.Column(db.Integer, db.ForeignKey('companies.id'), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # delete-orphan makes the unit of work remove permission rows ahead of the role row
    permissions = db.relationship(
        'RolePermission',
        backref='role',
        lazy=True,
        cascade='all, delete-orphan',
        order_by='RolePermission.id'
    )

    __table_args__ = (
        db.UniqueConstraint('company_id', 'role_name', name='uq_company_role_name'),
    )

    def permission_map(self):
        return {p.permission_name: p.has_access for p in self.permissions}

    def to_dict(self):
        return {
            'id': self.id,
            'roleName': self.role_name,
            'description': self.description,
            'companyId': self.company_id,
            'permissions': [p.to_dict() for p in self.permissions],
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }


class RolePermission(db.Model):
    __tablename__ = 'role_permissions'
    id = db.Column(db.Integer, primary_key=True)
    role_id = db.Column(db.Integer, db.ForeignKey('custom_roles.id'), nullable=False)
    permission_name = db.Column(db.String(100), nullable=False)
    has_access = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'permissionName': self.permission_name,
            'hasAccess': self.has_access
        }
