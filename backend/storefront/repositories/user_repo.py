from typing import List, Optional

from sqlalchemy.orm import Session

from storefront.models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def list(self) -> List[User]:
        return self.db.query(User).order_by(User.email).all()

    def add(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user

    def remove(self, user: User):
        self.db.delete(user)
        self.db.flush()

    def delete_all(self) -> int:
        return self.db.query(User).delete(synchronize_session=False)
