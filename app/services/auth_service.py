import logging
from datetime import datetime, timedelta
from typing import Optional
import bcrypt
from jose import jwt, JWTError

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.auth import UserLogin, UserRegister

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self):
        self.SECRET_KEY = settings.SECRET_KEY
        self.ALGORITHM = settings.ALGORITHM
        self.ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')  # Декодируем bytes в string для хранения в БД

    def verify_password(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        if not hashed_password:
            return False
        try:
            return bcrypt.checkpw(
                plain_password.encode('utf-8'),
                hashed_password.encode('utf-8')
            )
        except ValueError:
            # хэш в БД не в формате bcrypt
            return False

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None) -> str:
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES)
        to_encode.update({"exp": expire})
        encoded_jwt = jwt.encode(to_encode, self.SECRET_KEY, algorithm=self.ALGORITHM)
        return encoded_jwt

    def decode_access_token(self, token: str) -> Optional[int]:
        """id пользователя из токена или None, если токен невалиден/просрочен."""
        try:
            payload = jwt.decode(token, self.SECRET_KEY, algorithms=[self.ALGORITHM])
        except JWTError:
            return None
        user_id = payload.get("sub")
        if user_id is None:
            return None
        try:
            return int(user_id)
        except (TypeError, ValueError):
            return None

    def issue_token(self, user: User) -> str:
        return self.create_access_token(data={"sub": str(user.id), "email": user.email})

    async def authenticate_user(self, repo: UserRepository, login_data: UserLogin) -> Optional[User]:
        user = await repo.get_by_email(login_data.email)

        if not user or not self.verify_password(login_data.password, user.password):
            logger.info(f"Неудачная попытка входа: {login_data.email}")
            return None

        return user

    async def register_user(self, repo: UserRepository, user_data: UserRegister) -> User:
        if await repo.get_by_email(user_data.email):
            raise ValidationError("Email already registered", field="email")

        new_user = User(
            email=user_data.email,
            name=user_data.name,
            password=self.hash_password(user_data.password),
            created_at=datetime.utcnow()
        )

        new_user = await repo.create_user(new_user)
        logger.info(f"Зарегистрирован пользователь {new_user.email} (ID: {new_user.id})")
        return new_user


# Создаем экземпляр сервиса для импорта
auth_service = AuthService()
