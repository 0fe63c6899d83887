"""initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 12:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    source_type = sa.Enum('MANUAL', 'TMDB', 'IMDB', 'OMDB', 'HYBRID', name='source_type')
    external_source = sa.Enum('TMDB', 'OMDB', 'IMDB', name='external_source')
    person_role = sa.Enum('DIRECTOR', 'ACTOR', 'WRITER', 'PRODUCER', 'CREW', name='person_role')

    # Create movies table
    op.create_table(
        'movies',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('original_title', sa.String(length=500), nullable=True),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('runtime', sa.Integer(), nullable=True),
        sa.Column('plot', sa.Text(), nullable=True),
        sa.Column('tagline', sa.Text(), nullable=True),
        sa.Column('language', sa.String(length=200), nullable=True),
        sa.Column('country', sa.String(length=500), nullable=True),
        sa.Column('poster_url', sa.String(length=1000), nullable=True),
        sa.Column('backdrop_url', sa.String(length=1000), nullable=True),
        sa.Column('rating', sa.Float(), nullable=True),
        sa.Column('source_type', source_type, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_movies_title'), 'movies', ['title'], unique=False)

    # Create external_matches table
    op.create_table(
        'external_matches',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('source', external_source, nullable=False),
        sa.Column('external_id', sa.String(length=100), nullable=False),
        sa.Column('url', sa.String(length=500), nullable=True),
        sa.Column('title', sa.String(length=500), nullable=True),
        sa.Column('original_title', sa.String(length=500), nullable=True),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('runtime', sa.Integer(), nullable=True),
        sa.Column('plot', sa.Text(), nullable=True),
        sa.Column('tagline', sa.Text(), nullable=True),
        sa.Column('language', sa.String(length=200), nullable=True),
        sa.Column('country', sa.String(length=500), nullable=True),
        sa.Column('poster_url', sa.String(length=1000), nullable=True),
        sa.Column('backdrop_url', sa.String(length=1000), nullable=True),
        sa.Column('rating', sa.Float(), nullable=True),
        sa.Column('vote_count', sa.Integer(), nullable=True),
        sa.Column('release_date', sa.Date(), nullable=True),
        sa.Column('cached_data', JSONB(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['movie_id'], ['movies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('movie_id', 'source', name='uq_movie_source')
    )
    op.create_index(op.f('ix_external_matches_movie_id'), 'external_matches', ['movie_id'], unique=False)
    op.create_index(op.f('ix_external_matches_external_id'), 'external_matches', ['external_id'], unique=False)

    # Create alternative_titles table
    op.create_table(
        'alternative_titles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('region', sa.String(length=10), nullable=True),
        sa.Column('type', sa.String(length=100), nullable=True),
        sa.Column('source', sa.String(length=20), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['movie_id'], ['movies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('movie_id', 'title', 'region', name='uq_movie_title_region')
    )
    op.create_index(op.f('ix_alternative_titles_movie_id'), 'alternative_titles', ['movie_id'], unique=False)

    # Create people table
    op.create_table(
        'people',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=300), nullable=False),
        sa.Column('tmdb_id', sa.Integer(), nullable=True),
        sa.Column('imdb_id', sa.String(length=20), nullable=True),
        sa.Column('photo_url', sa.String(length=1000), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('imdb_id')
    )
    op.create_index(op.f('ix_people_name'), 'people', ['name'], unique=False)
    op.create_index(op.f('ix_people_tmdb_id'), 'people', ['tmdb_id'], unique=True)

    # Create movie_people table
    op.create_table(
        'movie_people',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('person_id', sa.Integer(), nullable=False),
        sa.Column('role', person_role, nullable=False),
        sa.Column('character', sa.String(length=500), nullable=True),
        sa.Column('order', sa.Integer(), nullable=True),
        sa.Column('job', sa.String(length=200), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['movie_id'], ['movies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['person_id'], ['people.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('movie_id', 'person_id', 'role', name='uq_movie_person_role')
    )
    op.create_index(op.f('ix_movie_people_movie_id'), 'movie_people', ['movie_id'], unique=False)
    op.create_index(op.f('ix_movie_people_person_id'), 'movie_people', ['person_id'], unique=False)

    # Create genres table
    op.create_table(
        'genres',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('tmdb_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
        sa.UniqueConstraint('tmdb_id')
    )

    # Create movie_genres table
    op.create_table(
        'movie_genres',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('genre_id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['movie_id'], ['movies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['genre_id'], ['genres.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('movie_id', 'genre_id', name='uq_movie_genre')
    )
    op.create_index(op.f('ix_movie_genres_movie_id'), 'movie_genres', ['movie_id'], unique=False)
    op.create_index(op.f('ix_movie_genres_genre_id'), 'movie_genres', ['genre_id'], unique=False)


def downgrade() -> None:
    op.drop_table('movie_genres')
    op.drop_table('genres')
    op.drop_table('movie_people')
    op.drop_table('people')
    op.drop_table('alternative_titles')
    op.drop_table('external_matches')
    op.drop_table('movies')
    sa.Enum(name='person_role').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='external_source').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='source_type').drop(op.get_bind(), checkfirst=True)
