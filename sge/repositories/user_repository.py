"""Credential store backed by the users/roles tables"""
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from sge.exceptions import UserRegistrationError
from sge.models.user import Role, User
from sge.utils.passwords import hash_password, password_policy_errors, verify_password


class UserRepository:
    def __init__(self, db: Session, password_min_length: int = 6):
        self.db = db
        self.password_min_length = password_min_length

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def find_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.username) == username.lower()).first()

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def create(self, user: User, password: str) -> User:
        """Hash the password and stage the user.

        Raises:
            UserRegistrationError: if the password breaks the policy. Nothing
            is added to the session in that case.
        """
        errors = password_policy_errors(password, self.password_min_length)
        if errors:
            raise UserRegistrationError(errors)

        user.password_hash = hash_password(password)
        self.db.add(user)
        self.db.flush()
        return user

    def check_password(self, user: User, password: str) -> bool:
        return verify_password(password, user.password_hash)

    def update(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user

    def delete(self, user: User) -> bool:
        self.db.delete(user)
        self.db.flush()
        return True

    def add_role(self, user: User, role_name: str) -> None:
        role = self.db.query(Role).filter(Role.name == role_name).first()
        if role is None:
            role = Role(name=role_name)
            self.db.add(role)
        if role not in user.roles:
            user.roles.append(role)
        self.db.flush()

    def get_roles(self, user: User) -> List[str]:
        return user.role_names
