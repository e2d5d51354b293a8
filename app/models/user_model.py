from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func

from app.utils.database import Base


class StaffUser(Base):
    __tablename__ = "staff_users"

    user_id = Column(Integer, primary_key=True, index=True)
    email = Column(String(150), unique=True, nullable=False)
    full_name = Column(String(150), nullable=True)
    password_hash = Column(String(100), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, server_default="true")

    created_on = Column(DateTime, server_default=func.now())
    last_login_on = Column(DateTime, nullable=True)
