"""Initial seating schema: companies, clients, guests, floor plans, tables,
assignments, relationships, versions and change log

Revision ID: 001_initial_seating_schema
Revises:
Create Date: 2026-10-16

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = '001_initial_seating_schema'
down_revision = None

UUID = postgresql.UUID(as_uuid=True)

TABLE_SHAPE = sa.Enum('ROUND', 'RECTANGLE', 'SQUARE', name='tableshape')
CONFLICT_TYPE = sa.Enum(
    'GENERAL', 'FAMILY_DRAMA', 'EX_PARTNER', 'BUSINESS_DISPUTE', 'PERSONAL', name='conflicttype'
)
CONFLICT_SEVERITY = sa.Enum('LOW', 'MODERATE', 'HIGH', 'CRITICAL', name='conflictseverity')
PREFERENCE_TYPE = sa.Enum('TOGETHER', 'NEARBY', 'SAME_AREA', name='preferencetype')
PREFERENCE_STRENGTH = sa.Enum('REQUIRED', 'PREFERRED', 'NICE_TO_HAVE', name='preferencestrength')
CHANGE_ACTION = sa.Enum(
    'ASSIGN', 'UNASSIGN', 'BATCH_ASSIGN', 'ADD_TABLE', 'MOVE_TABLE',
    'UPDATE_TABLE', 'DELETE_TABLE', 'RESTORE_VERSION', name='changeaction'
)


def upgrade():
    op.create_table(
        'companies',
        sa.Column('id', UUID, primary_key=True),
        sa.Column('name', sa.String(), nullable=False, index=True),
        sa.Column('slug', sa.String(), nullable=False, unique=True, index=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true', index=True),
    )

    op.create_table(
        'clients',
        sa.Column('id', UUID, primary_key=True),
        sa.Column('company_id', UUID, sa.ForeignKey('companies.id'), nullable=False, index=True),
        sa.Column('partner1_name', sa.String(255), nullable=False),
        sa.Column('partner2_name', sa.String(255), nullable=True),
        sa.Column('event_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'guests',
        sa.Column('id', UUID, primary_key=True),
        sa.Column('client_id', UUID, sa.ForeignKey('clients.id'), nullable=False, index=True),
        sa.Column('first_name', sa.String(255), nullable=False),
        sa.Column('last_name', sa.String(255), nullable=True),
        sa.Column('dietary_restrictions', sa.String(500), nullable=True),
        sa.Column('has_plus_one', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'floor_plans',
        sa.Column('id', UUID, primary_key=True),
        sa.Column('client_id', UUID, sa.ForeignKey('clients.id'), nullable=False, index=True),
        sa.Column('company_id', UUID, sa.ForeignKey('companies.id'), nullable=False, index=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('venue_name', sa.String(255), nullable=True),
        sa.Column('event_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.String(2000), nullable=True),
        sa.Column('canvas_width', sa.Integer(), nullable=False, server_default='1200'),
        sa.Column('canvas_height', sa.Integer(), nullable=False, server_default='800'),
        sa.Column('background_image_url', sa.String(1000), nullable=True),
        sa.Column('show_grid', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('grid_size', sa.Integer(), nullable=False, server_default='50'),
        sa.Column('zoom_level', sa.Float(), nullable=False, server_default='1.0'),
        sa.Column('pan_x', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('pan_y', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'floor_plan_tables',
        sa.Column('id', UUID, primary_key=True),
        sa.Column('floor_plan_id', UUID, sa.ForeignKey('floor_plans.id'), nullable=False, index=True),
        sa.Column('table_number', sa.Integer(), nullable=False),
        sa.Column('table_name', sa.String(100), nullable=True),
        sa.Column('shape', TABLE_SHAPE, nullable=False),
        sa.Column('x', sa.Integer(), nullable=False),
        sa.Column('y', sa.Integer(), nullable=False),
        sa.Column('width', sa.Integer(), nullable=False),
        sa.Column('height', sa.Integer(), nullable=False),
        sa.Column('rotation', sa.Float(), nullable=False, server_default='0'),
        sa.Column('capacity', sa.Integer(), nullable=False, server_default='8'),
        sa.Column('min_capacity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('fill_color', sa.String(7), nullable=False),
        sa.Column('stroke_color', sa.String(7), nullable=False),
        sa.Column('is_vip', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('notes', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('capacity >= 1', name='ck_floor_plan_tables_capacity_positive'),
    )

    op.create_table(
        'floor_plan_guests',
        sa.Column('id', UUID, primary_key=True),
        sa.Column('floor_plan_id', UUID, sa.ForeignKey('floor_plans.id'), nullable=False, index=True),
        sa.Column('table_id', UUID, sa.ForeignKey('floor_plan_tables.id'), nullable=False, index=True),
        sa.Column('guest_id', UUID, sa.ForeignKey('guests.id'), nullable=False, index=True),
        sa.Column('seat_number', sa.Integer(), nullable=True),
        sa.Column('assigned_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('floor_plan_id', 'guest_id', name='unique_guest_per_floor_plan'),
    )

    for name, kind_column, kind_enum, weight_column, weight_enum, constraint in (
        ('guest_conflicts', 'conflict_type', CONFLICT_TYPE, 'severity', CONFLICT_SEVERITY,
         'unique_guest_conflict_pair'),
        ('guest_preferences', 'preference_type', PREFERENCE_TYPE, 'strength', PREFERENCE_STRENGTH,
         'unique_guest_preference_pair'),
    ):
        op.create_table(
            name,
            sa.Column('id', UUID, primary_key=True),
            sa.Column('company_id', UUID, sa.ForeignKey('companies.id'), nullable=False, index=True),
            sa.Column('client_id', UUID, sa.ForeignKey('clients.id'), nullable=False, index=True),
            sa.Column('guest_one_id', UUID, sa.ForeignKey('guests.id'), nullable=False, index=True),
            sa.Column('guest_two_id', UUID, sa.ForeignKey('guests.id'), nullable=False, index=True),
            sa.Column(kind_column, kind_enum, nullable=False),
            sa.Column(weight_column, weight_enum, nullable=False),
            sa.Column('reason', sa.String(1000), nullable=True),
            sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true', index=True),
            sa.Column('created_by', UUID, nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
            sa.UniqueConstraint('client_id', 'guest_one_id', 'guest_two_id', name=constraint),
            sa.CheckConstraint('guest_one_id < guest_two_id', name=f'ck_{name}_ordered_pair'),
        )

    op.create_table(
        'seating_versions',
        sa.Column('id', UUID, primary_key=True),
        sa.Column('floor_plan_id', UUID, sa.ForeignKey('floor_plans.id'), nullable=False, index=True),
        sa.Column('client_id', UUID, sa.ForeignKey('clients.id'), nullable=False, index=True),
        sa.Column('company_id', UUID, sa.ForeignKey('companies.id'), nullable=False, index=True),
        sa.Column('version_number', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.String(1000), nullable=True),
        sa.Column('table_positions', sa.JSON(), nullable=False),
        sa.Column('guest_assignments', sa.JSON(), nullable=False),
        sa.Column('total_guests', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('assigned_guests', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_tables', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_current', sa.Boolean(), nullable=False, server_default='false', index=True),
        sa.Column('is_auto_save', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_by', UUID, nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('floor_plan_id', 'version_number', name='unique_version_number_per_floor_plan'),
    )

    op.create_table(
        'seating_change_log',
        sa.Column('id', UUID, primary_key=True),
        sa.Column('floor_plan_id', UUID, sa.ForeignKey('floor_plans.id'), nullable=False, index=True),
        sa.Column('company_id', UUID, sa.ForeignKey('companies.id'), nullable=True, index=True),
        sa.Column('action', CHANGE_ACTION, nullable=False, index=True),
        sa.Column('guest_id', UUID, nullable=True),
        sa.Column('table_id', UUID, nullable=True),
        sa.Column('previous_state', sa.JSON(), nullable=True),
        sa.Column('new_state', sa.JSON(), nullable=True),
        sa.Column('changed_by', UUID, nullable=True),
        sa.Column('changed_at', sa.DateTime(), nullable=False, index=True),
    )

    # History queries read newest entries per floor plan
    op.create_index(
        'idx_seating_change_log_floor_plan_changed_at', 'seating_change_log', ['floor_plan_id', 'changed_at']
    )


def downgrade():
    op.drop_index('idx_seating_change_log_floor_plan_changed_at', 'seating_change_log')

    for name in (
        'seating_change_log', 'seating_versions', 'guest_preferences', 'guest_conflicts',
        'floor_plan_guests', 'floor_plan_tables', 'floor_plans', 'guests', 'clients', 'companies',
    ):
        op.drop_table(name)

    bind = op.get_bind()
    for enum in (CHANGE_ACTION, PREFERENCE_STRENGTH, PREFERENCE_TYPE, CONFLICT_SEVERITY, CONFLICT_TYPE, TABLE_SHAPE):
        enum.drop(bind, checkfirst=True)
