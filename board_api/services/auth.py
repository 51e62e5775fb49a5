"""Login, registration and password reset.

Every operation returns a ``ServiceResult``; unexpected failures from the
store are rolled back, logged and reported as ``INTERNAL_FAILURE``.

Password reset proves identity with name + email only. There is no reset
link or one-time code, so this flow is not suitable for a deployment where
account takeover matters.
"""

import logging
from typing import Optional

from fastapi import BackgroundTasks
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from board_api.errors import ErrorCode, ServiceResult
from board_api.models import User, utcnow
from board_api.notifications import Notifier, deliver_password_reset
from board_api.repositories import UserRepository
from board_api.schemas import LoginResponse
from board_api.security import PasswordHasher, TokenIssuer

logger = logging.getLogger(__name__)

MSG_LOGIN_OK = "Login successful."
MSG_INVALID_CREDENTIALS = "Email or password is incorrect."
MSG_REGISTER_OK = "Registration completed."
MSG_DUPLICATE_EMAIL = "This email is already registered."
MSG_RESET_OK = "Your password has been reset."
MSG_USER_NOT_FOUND = "No user matches the given name and email."


class AuthService:
    def __init__(
        self,
        session: Session,
        hasher: PasswordHasher,
        tokens: TokenIssuer,
        notifier: Notifier,
        tasks: BackgroundTasks,
    ):
        self.session = session
        self.users = UserRepository(session)
        self.hasher = hasher
        self.tokens = tokens
        self.notifier = notifier
        self.tasks = tasks

    def login(self, email: str, password: str) -> ServiceResult[LoginResponse]:
        try:
            user = self.users.get_by_email(email)
            # same message whether the email or the password is wrong
            if user is None or not self.hasher.verify(password, user.password_hash):
                return ServiceResult.fail(ErrorCode.INVALID_CREDENTIALS, MSG_INVALID_CREDENTIALS)

            token = self.tokens.issue(user.id, user.name, user.email)
            logger.info("User logged in", extra={"user_id": user.id})
            return ServiceResult.ok(
                MSG_LOGIN_OK,
                LoginResponse(token=token, name=user.name, email=user.email),
            )
        except Exception as e:
            return self._internal_failure("login", e)

    def register(self, name: str, email: str, password: str) -> ServiceResult[None]:
        try:
            if self.users.email_exists(email):
                return ServiceResult.fail(ErrorCode.DUPLICATE_EMAIL, MSG_DUPLICATE_EMAIL)

            user = User(
                name=name,
                email=email,
                password_hash=self.hasher.hash(password),
                created_at=utcnow(),
            )
            self.users.add(user)
            self.session.commit()
            logger.info("User registered", extra={"user_id": user.id})
            return ServiceResult.ok(MSG_REGISTER_OK)
        except IntegrityError:
            # unique index caught a concurrent registration of the same email
            self.session.rollback()
            return ServiceResult.fail(ErrorCode.DUPLICATE_EMAIL, MSG_DUPLICATE_EMAIL)
        except Exception as e:
            return self._internal_failure("registration", e)

    def reset_password(self, name: str, email: str, new_password: str) -> ServiceResult[None]:
        try:
            user = self.users.get_by_name_and_email(name, email)
            if user is None:
                logger.info("Password reset for unknown user rejected")
                return ServiceResult.fail(ErrorCode.USER_NOT_FOUND, MSG_USER_NOT_FOUND)

            user.password_hash = self.hasher.hash(new_password)
            self.session.add(user)
            self.session.commit()
            logger.info("Password reset", extra={"user_id": user.id})
        except Exception as e:
            return self._internal_failure("password reset", e)

        # runs after the response is sent
        self.tasks.add_task(deliver_password_reset, self.notifier, user.email, user.name)
        return ServiceResult.ok(MSG_RESET_OK)

    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def _internal_failure(self, operation: str, exc: Exception) -> ServiceResult:
        self.session.rollback()
        logger.exception(
            f"Unexpected error during {operation}",
            extra={"error_code": ErrorCode.INTERNAL_FAILURE.value},
        )
        return ServiceResult.fail(
            ErrorCode.INTERNAL_FAILURE,
            f"An error occurred during {operation}: {exc}",
        )
