"""Create teacher, student, assessment, content and lesson plan tables

Revision ID: 3a9c1e7d5b20
Revises:
Create Date: 2025-07-14 10:05:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a9c1e7d5b20'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create every table owned by a teacher, plus the teachers table itself."""
    op.create_table(
        'teachers',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('school', sa.String(), nullable=True),
        sa.Column('subjects', sa.JSON(), nullable=False),
        sa.Column('experience', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('preferences', sa.JSON(), nullable=False),
        sa.Column('createdAt', sa.DateTime(timezone=True), nullable=False),
        sa.Column('lastLogin', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updatedAt', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_teachers_id', 'teachers', ['id'])
    op.create_index('ix_teachers_email', 'teachers', ['email'], unique=True)

    op.create_table(
        'students',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('grade', sa.String(), nullable=False),
        sa.Column('rollNumber', sa.String(), nullable=False),
        sa.Column('subjects', sa.JSON(), nullable=False),
        sa.Column('performance', sa.JSON(), nullable=False),
        sa.Column('teacherId', sa.String(), nullable=False),
        sa.Column('clientRef', sa.String(), nullable=True),
        sa.Column('createdAt', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updatedAt', sa.DateTime(timezone=True), nullable=True),
        sa.Column('lastAssessment', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['teacherId'], ['teachers.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_students_id', 'students', ['id'])
    op.create_index('ix_students_name', 'students', ['name'])
    op.create_index('ix_students_teacherId', 'students', ['teacherId'])
    op.create_index('ix_students_clientRef', 'students', ['clientRef'], unique=True)

    op.create_table(
        'assessments',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('studentId', sa.String(), nullable=False),
        sa.Column('teacherId', sa.String(), nullable=False),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('subject', sa.String(), nullable=False),
        sa.Column('score', sa.Float(), nullable=False),
        sa.Column('feedback', sa.String(), nullable=False),
        sa.Column('audioUrl', sa.String(), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=False),
        sa.Column('clientRef', sa.String(), nullable=True),
        sa.Column('createdAt', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['studentId'], ['students.id']),
        sa.ForeignKeyConstraint(['teacherId'], ['teachers.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_assessments_id', 'assessments', ['id'])
    op.create_index('ix_assessments_studentId', 'assessments', ['studentId'])
    op.create_index('ix_assessments_teacherId', 'assessments', ['teacherId'])
    op.create_index('ix_assessments_clientRef', 'assessments', ['clientRef'], unique=True)

    op.create_table(
        'generated_content',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('subject', sa.String(), nullable=False),
        sa.Column('grade', sa.String(), nullable=False),
        sa.Column('language', sa.String(), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=False),
        sa.Column('teacherId', sa.String(), nullable=False),
        sa.Column('clientRef', sa.String(), nullable=True),
        sa.Column('createdAt', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['teacherId'], ['teachers.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_generated_content_id', 'generated_content', ['id'])
    op.create_index('ix_generated_content_type', 'generated_content', ['type'])
    op.create_index('ix_generated_content_teacherId', 'generated_content', ['teacherId'])
    op.create_index('ix_generated_content_clientRef', 'generated_content', ['clientRef'], unique=True)

    op.create_table(
        'lesson_plans',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('subject', sa.String(), nullable=False),
        sa.Column('grade', sa.String(), nullable=False),
        sa.Column('week', sa.String(), nullable=False),
        sa.Column('objectives', sa.JSON(), nullable=False),
        sa.Column('activities', sa.JSON(), nullable=False),
        sa.Column('resources', sa.JSON(), nullable=False),
        sa.Column('assessment', sa.Text(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('teacherId', sa.String(), nullable=False),
        sa.Column('clientRef', sa.String(), nullable=True),
        sa.Column('createdAt', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updatedAt', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['teacherId'], ['teachers.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_lesson_plans_id', 'lesson_plans', ['id'])
    op.create_index('ix_lesson_plans_teacherId', 'lesson_plans', ['teacherId'])
    op.create_index('ix_lesson_plans_clientRef', 'lesson_plans', ['clientRef'], unique=True)


def downgrade() -> None:
    """Drop the tables in reverse dependency order."""
    op.drop_table('lesson_plans')
    op.drop_table('generated_content')
    op.drop_table('assessments')
    op.drop_table('students')
    op.drop_table('teachers')
