"""Table definitions for incident runs, posts and status-post links."""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    ForeignKey,
    MetaData,
    String,
    Table,
    Text,
)

metadata = MetaData()

incidents = Table(
    "IR_Incident",
    metadata,
    Column("ID", String(26), primary_key=True),
    Column("Name", String(1024), nullable=False),
    Column("Description", Text, nullable=False, default=""),
    Column("IsActive", Boolean, nullable=False, default=True),
    Column("CommanderUserID", String(26), nullable=False),
    Column("TeamID", String(26), nullable=False, index=True),
    Column("ChannelID", String(26), nullable=False, default=""),
    # Millisecond timestamps; 0 means unset.
    Column("CreateAt", BigInteger, nullable=False),
    Column("EndAt", BigInteger, nullable=False, default=0),
    Column("DeleteAt", BigInteger, nullable=False, default=0),
    Column("ActiveStage", BigInteger, nullable=False, default=0),
    Column("PlaybookID", String(26), nullable=False, default=""),
    Column("PostID", String(26), nullable=False, default=""),
)

posts = Table(
    "Posts",
    metadata,
    Column("Id", String(26), primary_key=True),
    Column("CreateAt", BigInteger, nullable=False),
)

status_posts = Table(
    "IR_StatusPosts",
    metadata,
    Column("IncidentID", String(26), ForeignKey("IR_Incident.ID"), primary_key=True),
    Column("PostID", String(26), ForeignKey("Posts.Id"), primary_key=True),
)
