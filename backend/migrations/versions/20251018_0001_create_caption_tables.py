from __future__ import annotations
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = "20251018_0001"
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        "humor_flavors",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("slug", sa.String(64), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_table(
        "images",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("image_description", sa.Text(), nullable=True),
        sa.Column("celebrity_recognition", sa.Text(), nullable=True),
        sa.Column("additional_context", sa.Text(), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("profile_id", sa.Uuid(), nullable=True),
        sa.Column("created_datetime_utc", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_images_profile_id", "images", ["profile_id"])
    op.create_index("ix_images_created_datetime_utc", "images", ["created_datetime_utc"])

    op.create_table(
        "captions",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("humor_flavor_id", sa.Integer(), sa.ForeignKey("humor_flavors.id", ondelete="SET NULL"), nullable=True),
        sa.Column("image_id", sa.Uuid(), sa.ForeignKey("images.id", ondelete="SET NULL"), nullable=True),
        sa.Column("profile_id", sa.Uuid(), nullable=True),
        sa.Column("created_datetime_utc", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_captions_humor_flavor_id", "captions", ["humor_flavor_id"])
    op.create_index("ix_captions_image_id", "captions", ["image_id"])
    op.create_index("ix_captions_profile_id", "captions", ["profile_id"])
    op.create_index("ix_captions_created_datetime_utc", "captions", ["created_datetime_utc"])

    op.create_table(
        "caption_votes",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("caption_id", sa.Uuid(), sa.ForeignKey("captions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("profile_id", sa.Uuid(), nullable=False),
        sa.Column("vote_value", sa.SmallInteger(), nullable=False),
        sa.Column("created_datetime_utc", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("modified_datetime_utc", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.CheckConstraint("vote_value IN (-1, 0, 1)", name="ck_caption_votes_value"),
        sa.UniqueConstraint("caption_id", "profile_id", name="uq_caption_votes_caption_profile"),
    )
    op.create_index("ix_caption_votes_caption_id", "caption_votes", ["caption_id"])
    op.create_index("ix_caption_votes_profile_id", "caption_votes", ["profile_id"])

    op.create_table(
        "caption_likes",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("caption_id", sa.Uuid(), sa.ForeignKey("captions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("profile_id", sa.Uuid(), nullable=False),
        sa.Column("created_datetime_utc", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("caption_id", "profile_id", name="uq_caption_likes_caption_profile"),
    )
    op.create_index("ix_caption_likes_caption_id", "caption_likes", ["caption_id"])
    op.create_index("ix_caption_likes_profile_id", "caption_likes", ["profile_id"])

def downgrade() -> None:
    op.drop_table("caption_likes")
    op.drop_table("caption_votes")
    op.drop_table("captions")
    op.drop_table("images")
    op.drop_table("humor_flavors")
