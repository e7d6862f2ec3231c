"""initial_schema

Revision ID: 001
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str = 'created_at') -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True)


def _hotel_fk() -> sa.Column:
    return sa.Column('hotel_id', sa.Integer(), sa.ForeignKey('hotels.hotel_id', ondelete='CASCADE'), nullable=True)


def _room_fk() -> sa.Column:
    return sa.Column('room_id', sa.Integer(), sa.ForeignKey('hotel_rooms.id', ondelete='CASCADE'), nullable=True)


def _photo_columns() -> list:
    return [
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('hd_url', sa.Text(), nullable=True),
        sa.Column('image_description', sa.Text(), nullable=True),
        sa.Column('image_class1', sa.String(length=100), nullable=True),
        sa.Column('image_class2', sa.String(length=100), nullable=True),
        sa.Column('main_photo', sa.Boolean(), nullable=True),
        sa.Column('score', sa.Numeric(5, 2), nullable=True),
        sa.Column('class_id', sa.Integer(), nullable=True),
        sa.Column('class_order', sa.Integer(), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    if not inspector.has_table('hotels'):
        op.create_table('hotels',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('hotel_id', sa.Integer(), nullable=False),
        sa.Column('cupid_id', sa.Integer(), nullable=False),
        sa.Column('main_image_th', sa.Text(), nullable=True),
        sa.Column('hotel_type', sa.String(length=100), nullable=True),
        sa.Column('hotel_type_id', sa.Integer(), nullable=True),
        sa.Column('chain', sa.String(length=255), nullable=True),
        sa.Column('chain_id', sa.Integer(), nullable=True),
        sa.Column('latitude', sa.Numeric(10, 8), nullable=True),
        sa.Column('longitude', sa.Numeric(11, 8), nullable=True),
        sa.Column('hotel_name', sa.String(length=500), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('fax', sa.String(length=50), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('stars', sa.Integer(), nullable=True),
        sa.Column('airport_code', sa.String(length=10), nullable=True),
        sa.Column('rating', sa.Numeric(3, 2), nullable=True),
        sa.Column('review_count', sa.Integer(), nullable=True),
        sa.Column('parking', sa.String(length=50), nullable=True),
        sa.Column('group_room_min', sa.Integer(), nullable=True),
        sa.Column('child_allowed', sa.Boolean(), nullable=True),
        sa.Column('pets_allowed', sa.Boolean(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('markdown_description', sa.Text(), nullable=True),
        sa.Column('important_info', sa.Text(), nullable=True),
        _timestamp('created_at'),
        _timestamp('updated_at'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('hotel_id'),
        )
        op.create_index('ix_hotels_hotel_id', 'hotels', ['hotel_id'], unique=False)
        op.create_index('ix_hotels_chain_id', 'hotels', ['chain_id'], unique=False)
        op.create_index('idx_hotels_location', 'hotels', ['latitude', 'longitude'], unique=False)

    if not inspector.has_table('hotel_addresses'):
        op.create_table('hotel_addresses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _hotel_fk(),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('city', sa.String(length=255), nullable=True),
        sa.Column('state', sa.String(length=255), nullable=True),
        sa.Column('country', sa.String(length=10), nullable=True),
        sa.Column('postal_code', sa.String(length=20), nullable=True),
        _timestamp(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('hotel_id'),
        )

    if not inspector.has_table('hotel_checkins'):
        op.create_table('hotel_checkins',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _hotel_fk(),
        sa.Column('checkin_start', sa.String(length=10), nullable=True),
        sa.Column('checkin_end', sa.String(length=10), nullable=True),
        sa.Column('checkout', sa.String(length=10), nullable=True),
        sa.Column('special_instructions', sa.Text(), nullable=True),
        _timestamp(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('hotel_id'),
        )

    if not inspector.has_table('hotel_checkin_instructions'):
        op.create_table('hotel_checkin_instructions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('hotel_checkin_id', sa.Integer(), sa.ForeignKey('hotel_checkins.id', ondelete='CASCADE'), nullable=True),
        sa.Column('instruction', sa.Text(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_hotel_checkin_instructions_hotel_checkin_id', 'hotel_checkin_instructions', ['hotel_checkin_id'], unique=False)

    if not inspector.has_table('hotel_photos'):
        op.create_table('hotel_photos',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _hotel_fk(),
        *_photo_columns(),
        _timestamp(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('hotel_id', 'url'),
        )
        op.create_index('ix_hotel_photos_hotel_id', 'hotel_photos', ['hotel_id'], unique=False)

    if not inspector.has_table('hotel_facilities'):
        op.create_table('hotel_facilities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _hotel_fk(),
        sa.Column('facility_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        _timestamp(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('hotel_id', 'facility_id'),
        )
        op.create_index('ix_hotel_facilities_hotel_id', 'hotel_facilities', ['hotel_id'], unique=False)

    if not inspector.has_table('hotel_policies'):
        op.create_table('hotel_policies',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _hotel_fk(),
        sa.Column('policy_type', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('child_allowed', sa.String(length=50), nullable=True),
        sa.Column('pets_allowed', sa.String(length=50), nullable=True),
        sa.Column('parking', sa.String(length=50), nullable=True),
        sa.Column('cupid_policy_id', sa.Integer(), nullable=True),
        _timestamp(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('hotel_id', 'cupid_policy_id'),
        )
        op.create_index('ix_hotel_policies_hotel_id', 'hotel_policies', ['hotel_id'], unique=False)

    if not inspector.has_table('hotel_rooms'):
        op.create_table('hotel_rooms',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _hotel_fk(),
        sa.Column('cupid_room_id', sa.Integer(), nullable=False),
        sa.Column('room_name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('room_size_square', sa.Integer(), nullable=True),
        sa.Column('room_size_unit', sa.String(length=10), nullable=True),
        sa.Column('max_adults', sa.Integer(), nullable=True),
        sa.Column('max_children', sa.Integer(), nullable=True),
        sa.Column('max_occupancy', sa.Integer(), nullable=True),
        sa.Column('bed_relation', sa.String(length=50), nullable=True),
        _timestamp(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('hotel_id', 'cupid_room_id'),
        )
        op.create_index('ix_hotel_rooms_hotel_id', 'hotel_rooms', ['hotel_id'], unique=False)

    if not inspector.has_table('room_bed_types'):
        op.create_table('room_bed_types',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _room_fk(),
        sa.Column('quantity', sa.Integer(), nullable=True),
        sa.Column('bed_type', sa.String(length=100), nullable=False),
        sa.Column('bed_size', sa.String(length=100), nullable=True),
        sa.Column('cupid_bed_id', sa.Integer(), nullable=True),
        _timestamp(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('room_id', 'cupid_bed_id'),
        )
        op.create_index('ix_room_bed_types_room_id', 'room_bed_types', ['room_id'], unique=False)

    if not inspector.has_table('room_amenities'):
        op.create_table('room_amenities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _room_fk(),
        sa.Column('amenities_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=True),
        _timestamp(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('room_id', 'amenities_id'),
        )
        op.create_index('ix_room_amenities_room_id', 'room_amenities', ['room_id'], unique=False)

    if not inspector.has_table('room_photos'):
        op.create_table('room_photos',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _room_fk(),
        *_photo_columns(),
        _timestamp(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('room_id', 'url'),
        )
        op.create_index('ix_room_photos_room_id', 'room_photos', ['room_id'], unique=False)

    if not inspector.has_table('reviews'):
        op.create_table('reviews',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('hotel_id', sa.Integer(), sa.ForeignKey('hotels.hotel_id', ondelete='CASCADE'), nullable=False),
        sa.Column('reviewer_name', sa.String(length=255), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=True),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('language_code', sa.String(length=10), nullable=True),
        sa.Column('review_date', sa.Date(), nullable=True),
        sa.Column('helpful_votes', sa.Integer(), nullable=True),
        sa.Column('embedding_status', sa.String(length=20), server_default='pending', nullable=False),
        sa.Column('embedding_updated_at', sa.DateTime(timezone=True), nullable=True),
        _timestamp(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_reviews_rating_range'),
        )
        op.create_index('ix_reviews_hotel_id', 'reviews', ['hotel_id'], unique=False)
        op.create_index('ix_reviews_rating', 'reviews', ['rating'], unique=False)

    if not inspector.has_table('translations'):
        op.create_table('translations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('hotel_id', sa.Integer(), sa.ForeignKey('hotels.hotel_id', ondelete='CASCADE'), nullable=False),
        sa.Column('entity_type', sa.String(length=50), nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=False),
        sa.Column('language_code', sa.String(length=10), nullable=False),
        sa.Column('field_name', sa.String(length=100), nullable=False),
        sa.Column('translated_text', sa.Text(), nullable=False),
        _timestamp('created_at'),
        _timestamp('updated_at'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('hotel_id', 'entity_type', 'entity_id', 'language_code', 'field_name'),
        )
        op.create_index('ix_translations_hotel_id', 'translations', ['hotel_id'], unique=False)
        op.create_index('idx_translations_entity', 'translations', ['entity_type', 'entity_id', 'language_code'], unique=False)
        op.create_index('idx_translations_hotel_language', 'translations', ['hotel_id', 'language_code'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    # Orden inverso de dependencias (hijos antes que padres)
    for table in (
        'translations',
        'reviews',
        'room_photos',
        'room_amenities',
        'room_bed_types',
        'hotel_rooms',
        'hotel_policies',
        'hotel_facilities',
        'hotel_photos',
        'hotel_checkin_instructions',
        'hotel_checkins',
        'hotel_addresses',
        'hotels',
    ):
        if inspector.has_table(table):
            op.drop_table(table)
