"""baseline schema - users, cohorts, efforts, weekly summaries

Revision ID: 001_baseline
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = '001_baseline'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Users table
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(50), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])

    # Cohorts table
    op.create_table('cohorts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('primary_trainer_id', sa.Integer(), nullable=True),
        sa.Column('primary_mentor_id', sa.Integer(), nullable=True),
        sa.Column('buddy_mentor_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['primary_trainer_id'], ['users.id']),
        sa.ForeignKeyConstraint(['primary_mentor_id'], ['users.id']),
        sa.ForeignKeyConstraint(['buddy_mentor_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_cohorts_code', 'cohorts', ['code'], unique=True)

    # Stakeholder efforts table
    op.create_table('stakeholder_efforts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('cohort_id', sa.Integer(), nullable=False),
        sa.Column('trainer_mentor_id', sa.Integer(), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('mode', sa.String(20), nullable=False, server_default='IN_PERSON'),
        sa.Column('area_of_work', sa.Text(), nullable=True),
        sa.Column('effort_hours', sa.Numeric(5, 2), nullable=False),
        sa.Column('effort_date', sa.Date(), nullable=False),
        sa.Column('month', sa.String(10), nullable=False),
        sa.Column('updated_by_id', sa.Integer(), nullable=True),
        sa.Column('updated_date', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['cohort_id'], ['cohorts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['trainer_mentor_id'], ['users.id']),
        sa.ForeignKeyConstraint(['updated_by_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_stakeholder_efforts_cohort_id', 'stakeholder_efforts', ['cohort_id'])
    op.create_index('ix_stakeholder_efforts_trainer_mentor_id', 'stakeholder_efforts', ['trainer_mentor_id'])
    op.create_index('ix_stakeholder_efforts_effort_date', 'stakeholder_efforts', ['effort_date'])
    op.create_index('ix_stakeholder_efforts_cohort_date', 'stakeholder_efforts', ['cohort_id', 'effort_date'])

    # Weekly effort summary table
    op.create_table('weekly_effort_summary',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('cohort_id', sa.Integer(), nullable=False),
        sa.Column('week_start_date', sa.Date(), nullable=False),
        sa.Column('week_end_date', sa.Date(), nullable=False),
        sa.Column('total_hours', sa.Numeric(10, 2), nullable=False),
        sa.Column('summary_date', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['cohort_id'], ['cohorts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('cohort_id', 'week_start_date', name='uq_weekly_effort_summary_cohort_week')
    )
    op.create_index('ix_weekly_effort_summary_cohort_id', 'weekly_effort_summary', ['cohort_id'])


def downgrade():
    op.drop_index('ix_weekly_effort_summary_cohort_id', 'weekly_effort_summary')
    op.drop_table('weekly_effort_summary')
    op.drop_index('ix_stakeholder_efforts_cohort_date', 'stakeholder_efforts')
    op.drop_index('ix_stakeholder_efforts_effort_date', 'stakeholder_efforts')
    op.drop_index('ix_stakeholder_efforts_trainer_mentor_id', 'stakeholder_efforts')
    op.drop_index('ix_stakeholder_efforts_cohort_id', 'stakeholder_efforts')
    op.drop_table('stakeholder_efforts')
    op.drop_index('ix_cohorts_code', 'cohorts')
    op.drop_table('cohorts')
    op.drop_index('ix_users_role', 'users')
    op.drop_index('ix_users_email', 'users')
    op.drop_table('users')
