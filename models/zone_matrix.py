from sqlalchemy import Column, String, JSON
from database import DBBaseClass, DBBase


class Zone_Matrix(DBBase, DBBaseClass):
    __tablename__ = "zone_matrix"

    # 3 digit origin zip prefix
    prefix = Column(String(3), nullable=False, unique=True, index=True)

    # zone codes; entry i belongs to destination prefix i + 1
    matrix = Column(JSON, nullable=False, default=list)
