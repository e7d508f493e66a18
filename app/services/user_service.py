from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.data.models.user import UserModel
from app.repos.user_repo import UserRepo
from app.domain.exceptions import EmailAlreadyRegistered, InvalidCredentials, UserNotFound
from app.domain.schemas import LoginRequest, RegisterUserRequest, UserRead
from app.services.passwords import hash_password, verify_password
from app.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: RegisterUserRequest) -> UserRead:
        if self.repo.exists_by_email(payload.email):
            raise EmailAlreadyRegistered(payload.email)

        user = UserModel(
            name=payload.name,
            email=payload.email,
            password=hash_password(payload.password),
        )
        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            #lost the race against another registration with the same email
            self.repo.rollback()
            raise EmailAlreadyRegistered(payload.email)

        logger.info(f"Registered user {created.id}")
        return UserRead.model_validate(created)

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise UserNotFound(user_id)
        return UserRead.model_validate(user)

    def login(self, payload: LoginRequest) -> UserRead:
        user = self.repo.get_user_by_email(payload.email)

        #same error for unknown email and wrong password
        if user is None or not verify_password(payload.password, user.password):
            logger.info("Failed login attempt")
            raise InvalidCredentials()

        logger.info(f"User {user.id} logged in")
        return UserRead.model_validate(user)
