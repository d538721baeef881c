# apps/api/app/seed.py
# Boş dokümana ilk admin kullanıcısını ve varsayılan pozisyonları ekler.
#   python -m app.seed --email admin@example.com --password secret
from __future__ import annotations

import argparse

from app.core.config import settings
from app.core.logging import configure_logging, get_logger
from app.core.security import get_password_hash
from app.db.backends import build_backend
from app.db.document_store import DocumentStore

logger = get_logger("app.seed")

DEFAULT_POSITIONS = [
    "Backend Developer",
    "Frontend Developer",
    "Tester",
    "Business Analyst",
    "Designer",
]


def seed(store: DocumentStore, email: str, password: str, name: str = "Administrator") -> dict:
    out = {"user_created": False, "positions_created": 0}
    with store.with_write_lock() as db:
        if not db.find("users", email=email):
            db.insert("users", {
                "email": email,
                "name": name,
                "password": get_password_hash(password),
                "role": "admin",
                "verified": True,
            })
            out["user_created"] = True

        existing = {p.get("name") for p in db.collection("positions")}
        for pos in DEFAULT_POSITIONS:
            if pos not in existing:
                db.insert("positions", {"name": pos})
                out["positions_created"] += 1
    logger.info("seed.done user_created=%s positions_created=%s", out["user_created"], out["positions_created"])
    return out


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed the HR document store")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--name", default="Administrator")
    args = parser.parse_args(argv)

    configure_logging()
    seed(DocumentStore(build_backend(settings)), args.email, args.password, args.name)


if __name__ == "__main__":
    main()
