from sqlmodel import SQLModel, create_engine

from stocksage.core.config import settings

engine = create_engine(
    f"sqlite:///{settings.db_path}",
    echo=settings.debug,
    connect_args={"check_same_thread": False},
)


def init_db() -> None:
    import stocksage.models  # noqa: F401 - ensure models are registered
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)
