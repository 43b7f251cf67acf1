"""create farm record tables

Revision ID: 001_create_farm_record_tables
Revises:
Create Date: 2026-10-16
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = '001_create_farm_record_tables'
down_revision: Union[str, Sequence[str], None] = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # --- Devices ---
    op.create_table(
        'devices',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('device_type', sa.String(), nullable=False),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('mac_address', sa.String(), nullable=False, unique=True),
        sa.Column('ip_address', sa.String(), nullable=True),
        sa.Column('firmware', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('last_seen', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_devices_status', 'devices', ['status'])

    # --- Sensor readings ---
    op.create_table(
        'sensor_readings',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('device_id', sa.String(36), nullable=False),
        sa.Column('sensor_type', sa.String(), nullable=False),
        sa.Column('value', sa.Float(), nullable=False),
        sa.Column('unit', sa.String(), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('timestamp', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['device_id'], ['devices.id']),
    )
    op.create_index('ix_sensor_readings_device_id', 'sensor_readings', ['device_id'])
    op.create_index('ix_sensor_readings_sensor_type', 'sensor_readings', ['sensor_type'])
    op.create_index('ix_sensor_readings_timestamp', 'sensor_readings', ['timestamp'])

    # --- Alerts ---
    op.create_table(
        'alerts',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('alert_type', sa.String(), nullable=False),
        sa.Column('severity', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('device_id', sa.String(36), nullable=True),
        sa.Column('assigned_to', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('acknowledged_at', sa.DateTime(), nullable=True),
        sa.Column('resolved_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['device_id'], ['devices.id']),
    )
    op.create_index('ix_alerts_severity', 'alerts', ['severity'])
    op.create_index('ix_alerts_status', 'alerts', ['status'])
    op.create_index('ix_alerts_created_at', 'alerts', ['created_at'])

    # --- Vermiculture systems ---
    op.create_table(
        'vermiculture_systems',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('location', sa.String(), nullable=False),
        sa.Column('capacity', sa.Float(), nullable=False),
        sa.Column('current_load', sa.Float(), nullable=True),
        sa.Column('temperature', sa.Float(), nullable=True),
        sa.Column('moisture', sa.Float(), nullable=True),
        sa.Column('ph', sa.Float(), nullable=True),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('last_feed_time', sa.DateTime(), nullable=True),
        sa.Column('last_harvest_time', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )

    # --- Production batches ---
    op.create_table(
        'vermiculture_productions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('system_id', sa.String(36), nullable=False),
        sa.Column('batch_number', sa.String(), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=True),
        sa.Column('expected_harvest', sa.DateTime(), nullable=True),
        sa.Column('actual_harvest', sa.DateTime(), nullable=True),
        sa.Column('expected_yield', sa.Float(), nullable=False),
        sa.Column('actual_yield', sa.Float(), nullable=True),
        sa.Column('quality', sa.String(), nullable=True),
        sa.ForeignKeyConstraint(['system_id'], ['vermiculture_systems.id']),
    )
    op.create_index('ix_vermiculture_productions_system_id', 'vermiculture_productions', ['system_id'])
    op.create_index('ix_vermiculture_productions_start_date', 'vermiculture_productions', ['start_date'])

    # --- Maintenance logs ---
    op.create_table(
        'maintenance_logs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('system_id', sa.String(36), nullable=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('maintenance_type', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('scheduled_date', sa.DateTime(), nullable=False),
        sa.Column('completed_date', sa.DateTime(), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('cost', sa.Float(), nullable=True),
        sa.Column('performed_by', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['system_id'], ['vermiculture_systems.id']),
    )
    op.create_index('ix_maintenance_logs_system_id', 'maintenance_logs', ['system_id'])
    op.create_index('ix_maintenance_logs_scheduled_date', 'maintenance_logs', ['scheduled_date'])

    # --- Plant systems / yields ---
    op.create_table(
        'plant_systems',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('crop_type', sa.String(), nullable=False),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'plant_yields',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('plant_system_id', sa.String(36), nullable=False),
        sa.Column('harvest_date', sa.DateTime(), nullable=True),
        sa.Column('quantity', sa.Float(), nullable=False),
        sa.Column('quality', sa.String(), nullable=True),
        sa.ForeignKeyConstraint(['plant_system_id'], ['plant_systems.id']),
    )
    op.create_index('ix_plant_yields_plant_system_id', 'plant_yields', ['plant_system_id'])
    op.create_index('ix_plant_yields_harvest_date', 'plant_yields', ['harvest_date'])


def downgrade() -> None:
    op.drop_table('plant_yields')
    op.drop_table('plant_systems')
    op.drop_table('maintenance_logs')
    op.drop_table('vermiculture_productions')
    op.drop_table('vermiculture_systems')
    op.drop_table('alerts')
    op.drop_table('sensor_readings')
    op.drop_table('devices')
