"""Create a register operator, or reset an existing one's password.

Usage:
    python -m duka.create_admin
"""

from __future__ import annotations

import getpass

from sqlalchemy import func

from duka.app.core.database import SessionLocal
from duka.app.core.i18n import SUPPORTED_LANGUAGES, translate
from duka.app.core.security import get_password_hash, validate_password_strength

# Import all models so SQLAlchemy resolves relationships
import duka.app.models  # noqa: F401

from duka.app.models.user import User


def main() -> None:
    email = input("Email [admin@duka.local]: ").strip().lower() or "admin@duka.local"
    language = input("Language (en/sw/ar) [en]: ").strip() or "en"
    if language not in SUPPORTED_LANGUAGES:
        print(f"Error: unsupported language {language!r}.")
        return
    password = getpass.getpass("Password: ")
    if not password:
        print("Error: password cannot be empty.")
        return
    pw_error = validate_password_strength(password)
    if pw_error:
        print(f"Error: {translate(language, pw_error)}")
        return

    db = SessionLocal()
    try:
        existing = db.query(User).filter(func.lower(User.email) == email).first()
        if existing:
            # Reset password, unlock and activate
            existing.hashed_password = get_password_hash(password)
            existing.is_active = True
            existing.failed_login_attempts = 0
            existing.locked_until = None
            existing.language = language
            db.commit()
            print("User already exists, password reset!")
            print(f"  ID:       {existing.id}")
            print(f"  Email:    {email}")
            return

        user = User(
            email=email,
            hashed_password=get_password_hash(password),
            language=language,
        )
        db.add(user)
        db.commit()
        db.refresh(user)

        print("User created successfully!")
        print(f"  ID:       {user.id}")
        print(f"  Email:    {email}")
        print(f"  Language: {language}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
