"""
User registration, login and profile management.
"""
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..auth import ADMIN_PRIVILEGE, create_access_token, hash_password, verify_password
from ..config import Settings
from ..exceptions import ConflictError, NotFoundError, StorageFailure, UnauthorizedError
from ..models import User
from ..schemas import AuthCredentials, InfoEdit, PassChange, Token, UserRegister
from ..utils.avatar_storage import AvatarStorage
from ..utils.instance_logger import InstanceLogger
from .store import LIKE_ESCAPE, escape_like, store_operation


class AuthService:
    def __init__(self, db: Session, settings: Settings, avatar_storage: AvatarStorage):
        self.db = db
        self.settings = settings
        self.avatar_storage = avatar_storage
        self.log = InstanceLogger("AuthService")

    def _find_user(self, username: str) -> Optional[User]:
        with store_operation(self.db):
            return self.db.query(User).filter(User.username == username).first()

    def _username_taken(self, username: str) -> bool:
        # the superuser name is reserved even though it has no stored row
        if username == self.settings.SUPERUSER:
            return True
        with store_operation(self.db):
            return self.db.query(User.id).filter(User.username == username).first() is not None

    def _sign(self, username: str, privilege: Optional[str] = None) -> str:
        return create_access_token(username, self.settings, privilege=privilege)

    def register(self, candidate: UserRegister) -> None:
        username = candidate.username
        in_use = f"Username {username} is already in use."

        if self._username_taken(username):
            raise ConflictError(in_use)

        user = User(
            username=username,
            password=hash_password(candidate.password),
            name=candidate.name,
            surname=candidate.surname,
            email=candidate.email,
        )

        # the unique constraint still guards a concurrent registration
        with store_operation(self.db, conflict_detail=in_use):
            self.db.add(user)
            self.db.commit()

        self.log.created(user)

    def login(self, credentials: AuthCredentials) -> Token:
        """
        Check a stored user first, then the configured superuser.

        Both failures raise the same error so callers cannot tell which path
        was tried.
        """
        username, password = credentials.username, credentials.password

        user = self._find_user(username)
        if user and verify_password(password, user.password):
            return Token(jwt=self._sign(username))

        if username == self.settings.SUPERUSER and verify_password(password, self.settings.SUPERUSER_PASS):
            return Token(jwt=self._sign(username, ADMIN_PRIVILEGE), privilege=ADMIN_PRIVILEGE)

        raise UnauthorizedError("Check your credentials.")

    def request_password_reset_token(self, username: str) -> Tuple[str, str]:
        """Return ``(email, jwt)`` for out-of-band delivery."""
        user = self._find_user(username)
        if not user:
            raise ConflictError("Provide a valid username.")

        return user.email, self._sign(user.username)

    def search_users(self, search: str) -> List[User]:
        pattern = f"%{escape_like(search)}%"
        with store_operation(self.db):
            users = (
                self.db.query(User)
                .filter(User.username.ilike(pattern, escape=LIKE_ESCAPE))
                .order_by(User.username)
                .all()
            )
        self.log.selected("User", len(users))
        return users

    def edit_info(self, user: User, info: InfoEdit) -> Token:
        """
        Apply a profile edit as a whole.

        A username taken by someone else rejects the edit before any field
        changes; nothing is persisted in that case.
        """
        in_use = f"Username {info.username} is already in use."

        if info.username != user.username:
            if self._username_taken(info.username):
                raise ConflictError(in_use)

        with store_operation(self.db, conflict_detail=in_use):
            user.username = info.username
            user.name = info.name
            user.surname = info.surname
            user.email = info.email
            self.db.commit()

        self.log.updated(user)
        return Token(jwt=self._sign(user.username))

    def change_password(self, user: User, pass_change: PassChange) -> None:
        # no current password means a reset-token holder is setting a new one
        if pass_change.current_password is not None:
            if not verify_password(pass_change.current_password, user.password):
                raise ConflictError("Invalid current password.")

        with store_operation(self.db):
            user.password = hash_password(pass_change.new_password)
            self.db.commit()

        self.log.updated(user)

    def upload_avatar(self, user: User, filename: str) -> str:
        """
        Attach an already stored file as the user's avatar.

        At most one avatar per user: the new file is deleted and the upload
        rejected while another one is set.
        """
        if user.avatar:
            self.avatar_storage.delete(filename)
            raise ConflictError("Avatar has already been uploaded.")

        try:
            with store_operation(self.db):
                user.avatar = filename
                self.db.commit()
        except StorageFailure:
            self.avatar_storage.delete(filename)
            raise

        self.log.updated(user)
        return filename

    def remove_avatar(self, user: User) -> None:
        if not user.avatar:
            raise NotFoundError("No avatar has been uploaded.")

        # file first: a failed delete keeps the reference so it can be retried
        self.avatar_storage.delete(user.avatar)

        with store_operation(self.db):
            user.avatar = None
            self.db.commit()

        self.log.updated(user)
