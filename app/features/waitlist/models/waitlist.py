import sqlalchemy
from sqlalchemy import BigInteger, Boolean, Column, Identity, String, Text

from app.platform.db.base import Base


class WaitlistSignup(Base):
    """
    Layout of the signups table in the external store. The unique index on
    email is the only duplicate check the API performs.
    """

    __tablename__ = "waitlist_signups"

    id = Column(BigInteger, Identity(always=False), primary_key=True)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    spend_focus = Column(String, nullable=False)
    notes = Column(Text, nullable=False, server_default="")
    opt_in = Column(Boolean, nullable=False, server_default=sqlalchemy.false())
    joined_at = Column(
        sqlalchemy.DateTime(timezone=True), server_default=sqlalchemy.func.now(), nullable=False
    )
