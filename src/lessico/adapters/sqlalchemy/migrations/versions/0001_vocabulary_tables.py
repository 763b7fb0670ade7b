"""Create vocabulary dictionary tables.

Revision ID: 0001_vocabulary_tables
Revises:
Create Date: 2026-10-19 00:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_vocabulary_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "verb",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("italian", sa.String(length=100), nullable=False),
        sa.Column("regular", sa.Boolean(), nullable=False),
        sa.Column("reflexive", sa.Boolean(), nullable=False),
        sa.Column("tr_ptBR", sa.String(), nullable=False),
        sa.Column("tr_en", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_verb")),
        sa.UniqueConstraint("italian", name=op.f("uq_verb_verb_italian")),
    )
    op.create_table(
        "noun",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("italian", sa.String(length=100), nullable=False),
        sa.Column("singolare", sa.JSON(), nullable=False),
        sa.Column("plurale", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_noun")),
        sa.UniqueConstraint("italian", name=op.f("uq_noun_noun_italian")),
    )
    op.create_table(
        "adjective",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("italian", sa.String(length=100), nullable=False),
        sa.Column("maschile", sa.JSON(), nullable=False),
        sa.Column("femminile", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_adjective")),
        sa.UniqueConstraint("italian", name=op.f("uq_adjective_adjective_italian")),
    )
    op.create_table(
        "verb_conjugation",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("verb_id", sa.Uuid(), nullable=False),
        sa.Column("conjugation", sa.JSON(), nullable=False),
        sa.ForeignKeyConstraint(
            ["verb_id"],
            ["verb.id"],
            name=op.f("fk_verb_conjugation_verb_conjugation_verb_id_verb"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_verb_conjugation")),
        sa.UniqueConstraint("verb_id", name=op.f("uq_verb_conjugation_verb_conjugation_verb_id")),
    )


def downgrade() -> None:
    op.drop_table("verb_conjugation")
    op.drop_table("adjective")
    op.drop_table("noun")
    op.drop_table("verb")
