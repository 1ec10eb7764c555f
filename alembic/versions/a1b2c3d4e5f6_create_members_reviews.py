"""create_members_reviews

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 10:00:00.000000

회원, 추천 결과 메뉴, 리뷰 테이블 생성.
Create members, result_menus and reviews tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # members — 회원 계정 (email, phone_number 각각 고유)
    op.create_table(
        'members',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('phone_number', sa.String(20), nullable=False, unique=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('gender', sa.String(10), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # result_menus — 추천 결과 (리뷰 대상, version = 낙관적 잠금)
    # Recommendation outcomes; version is the optimistic lock counter
    op.create_table(
        'result_menus',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('member_id', sa.Integer(), sa.ForeignKey('members.id'), nullable=False),
        sa.Column('menu', sa.String(100), nullable=False),
        sa.Column('restaurant_name', sa.String(255), nullable=False),
        sa.Column('is_reviewed', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('version', sa.Integer(), server_default=sa.text('1'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_result_menus_member_id', 'result_menus', ['member_id'])

    # reviews — 결과 메뉴당 리뷰 1건 (Reviews, one per result menu)
    op.create_table(
        'reviews',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('image_url', sa.String(255), nullable=True),
        sa.Column('result_menu_id', sa.Integer(), sa.ForeignKey('result_menus.id'), nullable=False, unique=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table('reviews')
    op.drop_index('ix_result_menus_member_id', table_name='result_menus')
    op.drop_table('result_menus')
    op.drop_table('members')
