"""Initial schema

Revision ID: 4a1f0c2e9b7d
Revises:
Create Date: 2025-01-10 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4a1f0c2e9b7d"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns():
    return [
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # Users
    op.create_table(
        'users',
        *_base_columns(),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('unit', sa.String(length=20), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('permissions', sa.JSON(), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])

    # Complaints
    op.create_table(
        'complaints',
        *_base_columns(),
        sa.Column('resident_id', sa.Uuid(), nullable=False),
        sa.Column('assigned_staff_id', sa.Uuid(), nullable=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('priority', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('resolution_notes', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['resident_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['assigned_staff_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_complaints_resident_id', 'complaints', ['resident_id'])
    op.create_index('ix_complaints_assigned_staff_id', 'complaints', ['assigned_staff_id'])
    op.create_index('ix_complaints_status', 'complaints', ['status'])

    op.create_table(
        'complaint_comments',
        *_base_columns(),
        sa.Column('complaint_id', sa.Uuid(), nullable=False),
        sa.Column('commented_by_id', sa.Uuid(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['complaint_id'], ['complaints.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['commented_by_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_complaint_comments_complaint_id', 'complaint_comments', ['complaint_id'])

    # Amenities & bookings
    op.create_table(
        'amenities',
        *_base_columns(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('location', sa.String(length=200), nullable=False),
        sa.Column('features', sa.JSON(), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('open_time', sa.String(length=5), nullable=False),
        sa.Column('close_time', sa.String(length=5), nullable=False),
        sa.Column('max_duration', sa.Integer(), nullable=False),
        sa.Column('advance_booking_days', sa.Integer(), nullable=False),
        sa.Column('min_booking_duration', sa.Integer(), nullable=False),
        sa.Column('slot_interval', sa.Integer(), nullable=False),
        sa.Column('price_per_hour', sa.Numeric(12, 2), nullable=False),
        sa.Column('price_per_day', sa.Numeric(12, 2), nullable=False),
        sa.Column('security_deposit', sa.Numeric(12, 2), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('maintenance_schedule', sa.JSON(), nullable=False),
        sa.Column('created_by_id', sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_amenities_category', 'amenities', ['category'])
    op.create_index('ix_amenities_status', 'amenities', ['status'])

    op.create_table(
        'bookings',
        *_base_columns(),
        sa.Column('amenity_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('resident_name', sa.String(length=100), nullable=False),
        sa.Column('unit', sa.String(length=20), nullable=False),
        sa.Column('booking_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.String(length=5), nullable=False),
        sa.Column('end_time', sa.String(length=5), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('purpose', sa.Text(), nullable=False),
        sa.Column('number_of_guests', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('payment_method', sa.String(length=20), nullable=True),
        sa.Column('transaction_id', sa.String(length=100), nullable=True),
        sa.Column('approved_by_id', sa.Uuid(), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('special_requests', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['amenity_id'], ['amenities.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['approved_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_bookings_amenity_date_start', 'bookings', ['amenity_id', 'booking_date', 'start_time'])
    op.create_index('ix_bookings_user_id', 'bookings', ['user_id'])
    op.create_index('ix_bookings_status', 'bookings', ['status'])

    # Billing
    op.create_table(
        'invoices',
        *_base_columns(),
        sa.Column('invoice_number', sa.String(length=20), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('resident_name', sa.String(length=100), nullable=False),
        sa.Column('resident_email', sa.String(length=255), nullable=False),
        sa.Column('unit', sa.String(length=20), nullable=False),
        sa.Column('maintenance_charge', sa.Numeric(12, 2), nullable=False),
        sa.Column('parking_charge', sa.Numeric(12, 2), nullable=False),
        sa.Column('water_charge', sa.Numeric(12, 2), nullable=False),
        sa.Column('common_area_charge', sa.Numeric(12, 2), nullable=False),
        sa.Column('gst', sa.Numeric(5, 2), nullable=False),
        sa.Column('subtotal', sa.Numeric(12, 2), nullable=False),
        sa.Column('gst_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('paid_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('payment_method', sa.String(length=20), nullable=True),
        sa.Column('notes', sa.Text(), nullable=False),
        sa.Column('created_by_id', sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_invoices_invoice_number', 'invoices', ['invoice_number'], unique=True)
    op.create_index('ix_invoices_user_id', 'invoices', ['user_id'])
    op.create_index('ix_invoices_status', 'invoices', ['status'])

    op.create_table(
        'expenses',
        *_base_columns(),
        sa.Column('expense_number', sa.String(length=20), nullable=False),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('vendor', sa.String(length=200), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('payment_method', sa.String(length=20), nullable=False),
        sa.Column('transaction_id', sa.String(length=100), nullable=False),
        sa.Column('receipt', sa.String(length=500), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('approved_by_id', sa.Uuid(), nullable=True),
        sa.Column('created_by_id', sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(['approved_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_expenses_expense_number', 'expenses', ['expense_number'], unique=True)
    op.create_index('ix_expenses_category', 'expenses', ['category'])

    # Documents
    op.create_table(
        'documents',
        *_base_columns(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=30), nullable=False),
        sa.Column('file_url', sa.String(length=500), nullable=False),
        sa.Column('file_name', sa.String(length=255), nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=False),
        sa.Column('file_type', sa.String(length=100), nullable=False),
        sa.Column('uploaded_by_id', sa.Uuid(), nullable=True),
        sa.Column('uploader_name', sa.String(length=100), nullable=False),
        sa.Column('access_level', sa.String(length=20), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('expiry_date', sa.Date(), nullable=True),
        sa.Column('download_count', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['uploaded_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_documents_category', 'documents', ['category'])
    op.create_index('ix_documents_uploaded_by_id', 'documents', ['uploaded_by_id'])
    op.create_index('ix_documents_is_active', 'documents', ['is_active'])

    # Analytics
    op.create_table(
        'analytics_visitors',
        *_base_columns(),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('visitor_name', sa.String(length=100), nullable=True),
        sa.Column('visitor_type', sa.String(length=50), nullable=True),
        sa.Column('entry_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('exit_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('host_name', sa.String(length=100), nullable=True),
        sa.Column('purpose', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_analytics_visitors_date', 'analytics_visitors', ['date'])

    op.create_table(
        'analytics_cabs',
        *_base_columns(),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('cab_number', sa.String(length=30), nullable=True),
        sa.Column('driver_name', sa.String(length=100), nullable=True),
        sa.Column('passenger_name', sa.String(length=100), nullable=True),
        sa.Column('trip_type', sa.String(length=20), nullable=True),
        sa.Column('time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('destination', sa.String(length=255), nullable=True),
        sa.Column('fare', sa.Numeric(12, 2), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_analytics_cabs_date', 'analytics_cabs', ['date'])

    op.create_table(
        'analytics_deliveries',
        *_base_columns(),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('delivery_company', sa.String(length=100), nullable=True),
        sa.Column('tracking_number', sa.String(length=100), nullable=True),
        sa.Column('recipient_name', sa.String(length=100), nullable=True),
        sa.Column('delivery_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('package_type', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_analytics_deliveries_date', 'analytics_deliveries', ['date'])

    op.create_table(
        'analytics_daily_summaries',
        *_base_columns(),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('total_visitors', sa.Integer(), nullable=False),
        sa.Column('total_cabs', sa.Integer(), nullable=False),
        sa.Column('total_deliveries', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('date')
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('analytics_daily_summaries')
    op.drop_index('ix_analytics_deliveries_date', table_name='analytics_deliveries')
    op.drop_table('analytics_deliveries')
    op.drop_index('ix_analytics_cabs_date', table_name='analytics_cabs')
    op.drop_table('analytics_cabs')
    op.drop_index('ix_analytics_visitors_date', table_name='analytics_visitors')
    op.drop_table('analytics_visitors')
    op.drop_table('documents')
    op.drop_table('expenses')
    op.drop_table('invoices')
    op.drop_table('bookings')
    op.drop_table('amenities')
    op.drop_table('complaint_comments')
    op.drop_table('complaints')
    op.drop_table('users')
