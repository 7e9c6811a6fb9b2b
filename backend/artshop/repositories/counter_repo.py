from sqlalchemy import update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from artshop.models.counter import Counter
from artshop.utils.logs import get_logger

log = get_logger("counter")

PRODUCT_ID_COUNTER = "productId"

UPSERT_INSERTS = {"sqlite": sqlite_insert, "postgresql": pg_insert}


class CounterRepository:
    def __init__(self, db: Session):
        # db is the caller's session; everything here joins its transaction
        self.db = db

    def ensure(self, name: str):
        """
        Create the counter row at 0 unless it already exists. A concurrent
        creator winning the race is not an error.
        """
        insert = UPSERT_INSERTS.get(self.db.get_bind().dialect.name)
        if insert is not None:
            stmt = insert(Counter).values(name=name, value=0).on_conflict_do_nothing(
                index_elements=[Counter.name]
            )
            self.db.execute(stmt)
            return
        try:
            with self.db.begin_nested():
                self.db.add(Counter(name=name, value=0))
        except IntegrityError:
            log.debug(f"ensure(): counter {name!r} created concurrently")

    def next_value(self, name: str) -> int:
        """
        Atomically increment the counter and return the new value.

        A single UPDATE ... RETURNING statement: the store performs the
        fetch-and-increment, so two callers can never see the same value.
        """
        stmt = (
            update(Counter)
            .where(Counter.name == name)
            .values(value=Counter.value + 1)
            .returning(Counter.value)
            .execution_options(synchronize_session=False)
        )
        value = self.db.execute(stmt).scalar_one_or_none()
        if value is None:
            log.info(f"next_value(): creating counter {name!r}")
            self.ensure(name)
            value = self.db.execute(stmt).scalar_one()
        return value

    def raise_to(self, name: str, floor: int):
        """Move the counter up to `floor` if it is below; never moves it down."""
        self.ensure(name)
        stmt = (
            update(Counter)
            .where(Counter.name == name, Counter.value < floor)
            .values(value=floor)
            .execution_options(synchronize_session=False)
        )
        self.db.execute(stmt)

    def current(self, name: str) -> int:
        return self.db.query(Counter.value).filter(Counter.name == name).scalar() or 0
