"""Schema and referential integrity tests against SQLite."""

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.exc import IntegrityError

from memorial.database import Database
from memorial.models.comment import Comment
from memorial.models.memory import Memory


@pytest.fixture
def db(database):
    database.init_schema()
    with database.session() as session:
        yield session


def add_memory_with_comments(session, count=2):
    memory = Memory(title="Trip", story="A story", author="Dana")
    session.add(memory)
    session.commit()
    for i in range(count):
        session.add(Comment(memory_id=memory.id, author="Avi", text=f"comment {i}"))
    session.commit()
    return memory.id


def test_init_schema_is_idempotent(database):
    database.init_schema()
    database.init_schema()
    tables = inspect(database.engine).get_table_names()
    assert {"memories", "comments"} <= set(tables)


def test_init_schema_keeps_existing_rows(database, db):
    add_memory_with_comments(db)
    database.init_schema()
    assert db.query(Memory).count() == 1
    assert db.query(Comment).count() == 2


def test_deleting_memory_through_orm_removes_comments(db):
    memory_id = add_memory_with_comments(db, count=3)

    db.delete(db.get(Memory, memory_id))
    db.commit()

    assert db.query(Comment).filter(Comment.memory_id == memory_id).count() == 0


def test_deleting_memory_row_cascades_in_the_database(db):
    keep_id = add_memory_with_comments(db, count=1)
    drop_id = add_memory_with_comments(db, count=2)

    db.execute(text("DELETE FROM memories WHERE id = :id"), {"id": drop_id})
    db.commit()

    remaining = db.query(Comment).all()
    assert [c.memory_id for c in remaining] == [keep_id]


def test_comment_requires_existing_memory(db):
    db.add(Comment(memory_id=12345, author="Avi", text="orphan"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()
    assert db.query(Comment).count() == 0


def test_created_at_is_set_on_insert(db):
    memory_id = add_memory_with_comments(db, count=1)
    memory = db.get(Memory, memory_id)
    assert memory.created_at is not None
    assert all(c.created_at is not None for c in memory.comments)


def test_production_flag_is_ignored_for_sqlite(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'x.db'}", production=True)
    assert database.is_sqlite
    database.init_schema()
    database.dispose()


def test_production_postgres_requires_tls():
    # create_engine does not connect, so no server is needed
    database = Database("postgresql://memorial@db.example/memorial", production=True)
    assert database.engine.dialect.name == "postgresql"
    assert database.connect_args == {"sslmode": "require"}
    database.dispose()


def test_development_postgres_leaves_tls_to_the_driver():
    database = Database("postgresql://memorial@localhost/memorial")
    assert "sslmode" not in database.connect_args
    database.dispose()
