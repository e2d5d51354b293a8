from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime
from sqlalchemy.sql import func
from app.utils.database import Base


class Configuration(Base):
    __tablename__ = "configurations"

    config_id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), unique=True, nullable=False)
    value = Column(Text, nullable=False)
    # text / number / boolean / json
    value_type = Column(String(10), nullable=False, server_default="text")
    description = Column(Text)
    # general / financial / sport / sanctions / notifications
    category = Column(String(20), nullable=False, server_default="general")
    editable = Column(Boolean, nullable=False, default=True, server_default="true")

    updated_by = Column(String(150), nullable=True)
    created_on = Column(DateTime, server_default=func.now())
    updated_on = Column(DateTime, server_default=func.now(), onupdate=func.now())
