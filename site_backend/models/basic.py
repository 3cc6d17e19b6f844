# site_backend/models/basic.py

from sqlalchemy import JSON, Column, String, Text
from . import Base, new_id


class Basic(Base):
    """
    Site configuration shown on the landing page: logo, navbar, hero image,
    four display counters and the headline block.
    """
    __tablename__ = "basics"

    id = Column(String(32), primary_key=True, default=new_id)
    logo_path = Column(String, nullable=True)
    hero_image_path = Column(String, nullable=True)
    navbar_items = Column(JSON, nullable=False, default=list)

    counter_title1 = Column(String, nullable=True)
    counter_value1 = Column(String, nullable=True)
    counter_title2 = Column(String, nullable=True)
    counter_value2 = Column(String, nullable=True)
    counter_title3 = Column(String, nullable=True)
    counter_value3 = Column(String, nullable=True)
    counter_title4 = Column(String, nullable=True)
    counter_value4 = Column(String, nullable=True)

    headline = Column(String, nullable=True)
    description = Column(Text, nullable=True)
