"""Create the first back-office admin.

Adding admins from the dashboard needs an admin already, so the very first
one is created here:

    python scripts/seed_admin.py admin@example.com 'a-strong-password'
"""
import sys
from pathlib import Path

from sqlalchemy import select

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.common.db import init_db, session_scope  # noqa: E402
from app.common.security import get_password_hash  # noqa: E402
from app.auth.models import AuthIdentity  # noqa: E402
from app.admin.models import AdminRole, AdminUser  # noqa: E402


def seed_admin(email: str, password: str) -> None:
    init_db()
    with session_scope() as db:
        identity = db.execute(
            select(AuthIdentity).where(AuthIdentity.email == email.lower())
        ).scalar_one_or_none()

        if identity is None:
            identity = AuthIdentity(email=email.lower(), hashed_password=get_password_hash(password))
            db.add(identity)
            db.flush()
            print(f"Created identity {identity.email}")

        existing = db.execute(
            select(AdminUser).where(AdminUser.user_id == identity.id)
        ).scalar_one_or_none()
        if existing:
            print("Admin entry already exists")
            return

        db.add(AdminUser(user_id=identity.id, role=AdminRole.ADMIN))
        print(f"Granted admin to {identity.email}")


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(1)
    seed_admin(sys.argv[1], sys.argv[2])
