# shop/services/user_service.py
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from shop.data.models.user import UserModel
from shop.domain.errors import InvalidArgumentError, NotFoundError
from shop.domain.schemas import UserCreate, UserRead, UserUpdate, UserWithOrders
from shop.repos.user_repo import UserRepo
from shop.utils.security import hash_password
from shop.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, repo: UserRepo):
        self.repo = repo

    def list_users(self, page: int, limit: int) -> list[UserWithOrders]:
        # razem z zamowieniami: cena detalu, nazwa i zdjecie produktow
        users = self.repo.list_users(offset=(page - 1) * limit, limit=limit)
        return [UserWithOrders.model_validate(u) for u in users]

    def get_user(self, user_id: UUID) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserRead.model_validate(user)

    def create_user(self, payload: UserCreate) -> UserRead:
        if self.repo.get_user_by_email(payload.email):
            raise InvalidArgumentError(f'User with email "{payload.email}" already exists')

        user = UserModel(
            **payload.model_dump(exclude={"password", "confirm_password"}),
            password=hash_password(payload.password),
            is_admin=False,
        )

        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            # wyscig na unikalnym emailu
            self.repo.rollback()
            raise InvalidArgumentError(f'User with email "{payload.email}" already exists')

        logger.info(f"Created user {created.id}")
        return UserRead.model_validate(created)

    def update_user(self, user_id: UUID, payload: UserUpdate) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        changes = payload.model_dump(exclude_unset=True, exclude={"confirm_password"})

        new_email = changes.get("email")
        if new_email and new_email != user.email and self.repo.get_user_by_email(new_email):
            raise InvalidArgumentError(f'User with email "{new_email}" already exists')

        if changes.get("password") is not None:
            changes["password"] = hash_password(changes["password"])

        for field, value in changes.items():
            # None w partial update = pole pominiete
            if value is not None:
                setattr(user, field, value)

        try:
            updated = self.repo.save(user)
        except IntegrityError:
            self.repo.rollback()
            raise InvalidArgumentError("User could not be updated, check the submitted data")

        logger.info(f"Updated user {user_id}: {sorted(changes)}")
        return UserRead.model_validate(updated)

    def delete_user(self, user_id: UUID) -> dict:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        # zamowienia nie sa kasowane kaskadowo
        if self.repo.count_orders(user_id):
            raise InvalidArgumentError(f"User with id {user_id} has orders and cannot be deleted")

        self.repo.delete_user(user)
        logger.info(f"Deleted user {user_id}")
        return {"message": f"User with id {user_id} deleted successfully"}
