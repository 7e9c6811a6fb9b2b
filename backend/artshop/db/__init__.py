import importlib

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from starlette.requests import Request

from artshop.config import settings
from artshop.utils.logs import get_logger

log = get_logger("db")

Base = declarative_base()

# model modules that register tables on Base.metadata
MODEL_MODULES = [
    "artshop.models.product",
    "artshop.models.counter",
    "artshop.models.discount",
    "artshop.models.testimonial",
]


class Database:
    """
    Process-wide store handle: one engine plus its session factory.

    Opened once at startup and handed to whoever needs sessions (the FastAPI
    app keeps it on ``app.state.database``); ``close()`` disposes the pool.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        connect_args = {}
        if url.startswith("sqlite"):
            # request handlers run in a threadpool
            connect_args["check_same_thread"] = False
        self.engine = create_engine(url, future=True, echo=echo, connect_args=connect_args)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def init(self, reset: bool = False):
        """
        Create the schema. With ``reset`` the tables are dropped first.
        The product id counter row is created here so the first insert
        never races on it.
        """
        for mod in MODEL_MODULES:
            importlib.import_module(mod)

        if reset:
            log.info(f"Resetting database {self.url}")
            Base.metadata.drop_all(bind=self.engine)
        Base.metadata.create_all(bind=self.engine)

        from artshop.repositories.counter_repo import PRODUCT_ID_COUNTER, CounterRepository

        with self.session() as s:
            CounterRepository(s).ensure(PRODUCT_ID_COUNTER)
            s.commit()
        log.info("Database initialized")

    def close(self):
        self.engine.dispose()


database = Database(settings.DATABASE_URL)


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
