"""SQLAlchemy models for users, posts, replies and their side tables.

Translated text lives next to the source text in one column per locale
(``title_zhcn``, ``content_dede``...). The translate worker writes those
columns; the API only reads them.
"""

from __future__ import annotations

import uuid as uuid_lib
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from xeoos.db.session import Base
from xeoos.i18n.locales import LOCALES, column_suffix

TASK_PENDING = "PENDING"
TASK_DONE = "DONE"
TASK_FAIL = "FAIL"

GENDERS = ("MALE", "FEMALE", "UNSET")
ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _uuid() -> str:
    return str(uuid_lib.uuid4())


def localized_columns(*fields: str) -> type:
    """Build a mixin with one nullable Text column per field and locale."""

    namespace = {
        f"{field}_{column_suffix(locale)}": mapped_column(Text, nullable=True)
        for field in fields
        for locale in LOCALES
    }
    return type(f"Localized{''.join(f.title() for f in fields)}", (), namespace)


post_topics = Table(
    "post_topics",
    Base.metadata,
    Column("post_id", ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("topic_name", ForeignKey("topics.name", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"

    uid: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uuid: Mapped[str] = mapped_column(String(36), unique=True, default=_uuid)
    username: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    nickname: Mapped[str] = mapped_column(String(50))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255))
    email_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    email_verify_code: Mapped[str | None] = mapped_column(String(64), nullable=True)

    bio: Mapped[str | None] = mapped_column(String(255), nullable=True)
    birth: Mapped[str | None] = mapped_column(String(32), nullable=True)
    country: Mapped[str | None] = mapped_column(String(20), nullable=True)
    timearea: Mapped[str | None] = mapped_column(String(64), nullable=True)
    gender: Mapped[str] = mapped_column(String(10), default="UNSET")
    role: Mapped[str] = mapped_column(String(10), default=ROLE_USER)
    email_notice_lang: Mapped[str] = mapped_column(String(10), default="en-US")
    exp: Mapped[int] = mapped_column(Integer, default=0)
    profile_emoji: Mapped[str | None] = mapped_column(String(30), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
    last_use_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    avatars: Mapped[list["Avatar"]] = relationship(
        back_populates="user", cascade="all, delete-orphan", lazy="selectin"
    )
    posts: Mapped[list["Post"]] = relationship(back_populates="user", cascade="all, delete-orphan")


class Avatar(Base):
    __tablename__ = "avatars"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    emoji: Mapped[str] = mapped_column(String(32))
    background: Mapped[str] = mapped_column(String(255))
    user_uid: Mapped[int] = mapped_column(ForeignKey("users.uid", ondelete="CASCADE"), index=True)

    user: Mapped[User] = relationship(back_populates="avatars")

    def as_dict(self) -> dict:
        return {"id": self.id, "emoji": self.emoji, "background": self.background}


class Classification(localized_columns("name"), Base):
    __tablename__ = "classifications"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    emoji: Mapped[str | None] = mapped_column(String(32), nullable=True)
    index: Mapped[int] = mapped_column(Integer, default=0)

    topics: Mapped[list["Topic"]] = relationship(
        back_populates="classification", order_by="Topic.index"
    )


class Topic(localized_columns("name"), Base):
    __tablename__ = "topics"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    emoji: Mapped[str | None] = mapped_column(String(32), nullable=True)
    index: Mapped[int] = mapped_column(Integer, default=0)
    classification_name: Mapped[str | None] = mapped_column(
        ForeignKey("classifications.name"), nullable=True
    )

    classification: Mapped[Classification | None] = relationship(back_populates="topics")


class Post(localized_columns("title", "content"), Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255))
    origin: Mapped[str] = mapped_column(Text)
    origin_lang: Mapped[str | None] = mapped_column(String(10), nullable=True)
    published: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    pin: Mapped[bool] = mapped_column(Boolean, default=False)
    user_uid: Mapped[int] = mapped_column(ForeignKey("users.uid", ondelete="CASCADE"), index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    last_reply_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, index=True)

    user: Mapped[User] = relationship(back_populates="posts")
    topics: Mapped[list[Topic]] = relationship(secondary=post_topics, lazy="selectin")
    replies: Mapped[list["Reply"]] = relationship(
        back_populates="belong_post",
        foreign_keys="Reply.belong_post_id",
        cascade="all, delete-orphan",
    )
    likes: Mapped[list["Like"]] = relationship(back_populates="post", cascade="all, delete-orphan")
    tasks: Mapped[list["Task"]] = relationship(back_populates="post", cascade="all, delete-orphan")


class Reply(localized_columns("content"), Base):
    __tablename__ = "replies"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    content: Mapped[str] = mapped_column(Text)
    origin_lang: Mapped[str | None] = mapped_column(String(10), nullable=True)
    user_uid: Mapped[int] = mapped_column(ForeignKey("users.uid", ondelete="CASCADE"), index=True)
    # Set only for top-level replies
    post_uid: Mapped[int | None] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), nullable=True, index=True
    )
    belong_post_id: Mapped[int | None] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), nullable=True, index=True
    )
    # Ordinal of the top-level reply this thread hangs off
    belong_reply: Mapped[int | None] = mapped_column(Integer, nullable=True)
    comment_uid: Mapped[str | None] = mapped_column(
        ForeignKey("replies.id", ondelete="CASCADE"), nullable=True, index=True
    )
    is_child: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    user: Mapped[User] = relationship()
    belong_post: Mapped[Post | None] = relationship(
        back_populates="replies", foreign_keys=[belong_post_id]
    )
    parent: Mapped["Reply | None"] = relationship(
        back_populates="children", remote_side="Reply.id", foreign_keys=[comment_uid]
    )
    children: Mapped[list["Reply"]] = relationship(
        back_populates="parent", foreign_keys=[comment_uid], cascade="all, delete-orphan"
    )
    likes: Mapped[list["Like"]] = relationship(back_populates="reply", cascade="all, delete-orphan")
    tasks: Mapped[list["Task"]] = relationship(back_populates="reply", cascade="all, delete-orphan")


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    status: Mapped[str] = mapped_column(String(10), default=TASK_PENDING, index=True)
    post_id: Mapped[int | None] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), nullable=True
    )
    reply_id: Mapped[str | None] = mapped_column(
        ForeignKey("replies.id", ondelete="CASCADE"), nullable=True
    )
    user_uid: Mapped[int | None] = mapped_column(
        ForeignKey("users.uid", ondelete="CASCADE"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    post: Mapped[Post | None] = relationship(back_populates="tasks")
    reply: Mapped[Reply | None] = relationship(back_populates="tasks")


class Like(Base):
    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("user_uid", "post_id", name="uq_like_user_post"),
        UniqueConstraint("user_uid", "reply_id", name="uq_like_user_reply"),
    )

    uuid: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_uid: Mapped[int] = mapped_column(ForeignKey("users.uid", ondelete="CASCADE"), index=True)
    post_id: Mapped[int | None] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), nullable=True, index=True
    )
    reply_id: Mapped[str | None] = mapped_column(
        ForeignKey("replies.id", ondelete="CASCADE"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    post: Mapped[Post | None] = relationship(back_populates="likes")
    reply: Mapped[Reply | None] = relationship(back_populates="likes")


class Notice(Base):
    __tablename__ = "notices"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.uid", ondelete="CASCADE"), index=True)
    content: Mapped[str] = mapped_column(Text)
    link: Mapped[str | None] = mapped_column(String(512), nullable=True)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "content": self.content,
            "link": self.link,
            "isRead": self.is_read,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
