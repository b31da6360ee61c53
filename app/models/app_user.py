"""AppUser model - staff accounts that act on quotations."""
import enum
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import func
from app.database import Base, BigIntPK


class UserRole(enum.Enum):
    """Closed set of roles known to the system."""
    ADMIN = 'admin'
    ENGINEER = 'engineer'
    STAFF = 'staff'
    STOREKEEPER = 'storekeeper'
    APPRENTICE = 'apprentice'

    @classmethod
    def parse(cls, value):
        """Return the role for a case-insensitive string, or None if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or '').strip().lower())
        except ValueError:
            return None


class AppUser(Base):
    """AppUser model - identified by email, authorized by role."""

    __tablename__ = 'app_user'

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True)
    full_name = Column(String(200), nullable=True)
    role = Column(String(20), nullable=False, default=UserRole.STAFF.value)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    @property
    def user_role(self):
        return UserRole.parse(self.role)

    def is_admin(self):
        """Check if user has administrative privilege."""
        return self.user_role is UserRole.ADMIN

    def __repr__(self):
        return f"<AppUser(id={self.id}, email='{self.email}', role='{self.role}')>"
