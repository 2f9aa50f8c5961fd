from sqlalchemy import Column, Integer, String

from explorewithme.db.base import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    # Case-insensitive uniqueness is checked by the category service
    name = Column(String(50), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name})>"
