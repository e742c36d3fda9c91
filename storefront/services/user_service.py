from storefront.data.models.user import UserModel
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import UserCreate, UserRead, UserUpdate
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db):
        self.repo = UserRepo(db)

    def create_user(self, payload: UserCreate) -> UserRead:
        existing = self.repo.get_user(payload.id)
        if existing:
            return UserRead.model_validate(existing)

        user = UserModel(
            id=payload.id,
            name=payload.name,
            address=payload.address,
            phone=payload.phone,
        )
        created = self.repo.create_user(user)
        logger.info(f"User {created.id} created")
        return UserRead.model_validate(created)

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return UserRead.model_validate(user)

    def update_profile(self, user_id: int, payload: UserUpdate) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")

        #tylko pola faktycznie przyslane
        for field, value in payload.model_dump(exclude_unset=True).items():
            if field == "name" and value is None:
                continue
            setattr(user, field, value)

        saved = self.repo.save_user(user)
        logger.info(f"Profile of user {user_id} updated")
        return UserRead.model_validate(saved)
