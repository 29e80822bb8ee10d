import importlib
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from inventory_api.config import settings

log = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, future=True, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# modules whose tables must be registered on Base.metadata before create_all
MODEL_MODULES = [
    "inventory_api.models.user",
    "inventory_api.models.product",
]


def _import_models():
    for mod in MODEL_MODULES:
        importlib.import_module(mod)


def init_db(reset: bool = False):
    """
    Initialize the DB schema.

    With ``reset`` (or RESET_DB set in the environment) every table is dropped
    and recreated. When CREATE_DEFAULT_ADMIN is enabled and no admin account
    exists yet, one is created from DEFAULT_ADMIN_USERNAME/PASSWORD.
    """
    _import_models()

    if reset or settings.RESET_DB:
        log.warning("Resetting database: dropping all tables")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    log.info("Database initialized (%s)", engine.url.get_backend_name())

    if settings.CREATE_DEFAULT_ADMIN:
        ensure_default_admin()


def ensure_default_admin():
    from inventory_api.errors import DuplicateKey
    from inventory_api.repositories.user_repo import UserRepository
    from inventory_api.services.auth_service import AuthService

    s = SessionLocal()
    try:
        if UserRepository(s).count(role="admin", active_only=False) > 0:
            return
        try:
            AuthService(s).register(
                settings.DEFAULT_ADMIN_USERNAME,
                settings.DEFAULT_ADMIN_PASSWORD,
                role="admin",
            )
            log.info("Created default admin user %r", settings.DEFAULT_ADMIN_USERNAME)
        except DuplicateKey:
            log.warning(
                "No admin exists and username %r is taken by a regular account",
                settings.DEFAULT_ADMIN_USERNAME,
            )
    finally:
        s.close()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
