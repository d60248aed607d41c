import logging
import time
import uuid

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobtracker.config import settings
from jobtracker.models.user import User
from jobtracker.utils.security import generate_token, hash_password, verify_password
from jobtracker.utils.timestamps import now_iso

logger = logging.getLogger(__name__)


class SessionService:
    def __init__(self):
        self._active_tokens: dict[str, tuple[str, float]] = {}  # token -> (user_id, expires_at)

    def _cleanup_expired(self):
        now = time.time()
        self._active_tokens = {
            t: entry for t, entry in self._active_tokens.items() if entry[1] > now
        }

    def create_user(self, db: Session, username: str, password: str) -> User | None:
        if db.query(User).filter(User.username == username).first():
            return None
        user = User(
            id=str(uuid.uuid4()),
            username=username,
            password_hash=hash_password(password),
            created_at=now_iso(),
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info("Username %s was taken concurrently", username)
            return None
        db.refresh(user)
        logger.info("Created user %s", user.id)
        return user

    def sign_in(self, db: Session, username: str, password: str, throttle_key: str = "signin") -> dict | None:
        delay = self._get_throttle_delay(db, throttle_key)
        if delay > 0:
            return {"error": "too_many_attempts", "retry_after_seconds": delay}

        user = db.query(User).filter(User.username == username).first()
        if user is None or not verify_password(user.password_hash, password):
            self._record_failed_attempt(db, throttle_key)
            return None

        self._reset_failed_attempts(db, throttle_key)
        token = generate_token()
        self._active_tokens[token] = (user.id, time.time() + settings.session_ttl_seconds)
        return {
            "token": token,
            "expires_in_seconds": settings.session_ttl_seconds,
            "user_id": user.id,
            "username": user.username,
        }

    def sign_out(self, token: str):
        self._active_tokens.pop(token, None)

    def resolve(self, token: str) -> str | None:
        """Return the user id behind a live token and slide its expiry forward."""
        self._cleanup_expired()
        entry = self._active_tokens.get(token)
        if entry is None:
            return None
        user_id = entry[0]
        self._active_tokens[token] = (user_id, time.time() + settings.session_ttl_seconds)
        return user_id

    def _get_throttle_delay(self, db: Session, key: str) -> float:
        row = db.execute(
            text("SELECT failed_attempts, last_failed_at FROM auth_throttle WHERE key = :key"),
            {"key": key},
        ).fetchone()
        if not row:
            return 0
        failed_attempts = int(row[0])
        last_failed_at = float(row[1])

        if failed_attempts < 3:
            return 0
        if failed_attempts < 5:
            delay = 5.0
        elif failed_attempts < 10:
            delay = 30.0
        else:
            delay = 300.0
        elapsed = time.time() - last_failed_at
        remaining = delay - elapsed
        return max(0, remaining)

    def _record_failed_attempt(self, db: Session, key: str):
        logger.warning("Failed sign-in attempt (%s)", key)
        db.execute(
            text(
                """
                INSERT INTO auth_throttle (key, failed_attempts, last_failed_at)
                VALUES (:key, 1, :now)
                ON CONFLICT(key) DO UPDATE SET
                    failed_attempts = failed_attempts + 1,
                    last_failed_at = :now
                """
            ),
            {"key": key, "now": time.time()},
        )
        db.commit()

    def _reset_failed_attempts(self, db: Session, key: str):
        db.execute(
            text(
                """
                INSERT INTO auth_throttle (key, failed_attempts, last_failed_at)
                VALUES (:key, 0, :now)
                ON CONFLICT(key) DO UPDATE SET
                    failed_attempts = 0,
                    last_failed_at = :now
                """
            ),
            {"key": key, "now": time.time()},
        )
        db.commit()


session_service = SessionService()
