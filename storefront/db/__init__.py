from storefront.db.base_class import Base

# Import models so their tables register with Base.metadata
import storefront.models  # noqa: F401,E402


def init_db(bind) -> None:
    """Create catalog and storage tables if they do not exist yet."""
    Base.metadata.create_all(bind=bind)
