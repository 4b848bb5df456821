from typing import List
from sqlalchemy import select, func
from sqlalchemy.orm import Session
from storefront.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(func.lower(UserModel.email) == email.lower())
        ).scalar_one_or_none()

    def list_by_roles(self, roles: List[str]) -> List[UserModel]:
        return list(
            self.db.execute(
                select(UserModel).where(UserModel.role.in_(roles)).order_by(UserModel.id)
            ).scalars()
        )

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user
