"""identity, merchant and rider profiles, otps, admins, app settings

Revision ID: 1a2f6c0d9e41
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '1a2f6c0d9e41'
down_revision = None
branch_labels = None
depends_on = None

BIGINT = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', BIGINT, primary_key=True),
        sa.Column('phone', sa.String(15), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('name', sa.String(120), nullable=True),
        sa.Column('address', sa.String(255), nullable=True),
        sa.Column('role', sa.String(20), nullable=False, server_default='customer'),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('kyc_status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('aadhaar', sa.String(20), nullable=True),
        sa.Column('profile_image', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('phone', name='uq_users_phone'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_table(
        'merchants',
        sa.Column('id', BIGINT, primary_key=True),
        sa.Column('user_id', BIGINT, sa.ForeignKey('users.id'), nullable=True),
        sa.Column('merchant_code', sa.String(20), nullable=True),
        sa.Column('store_name', sa.String(150), nullable=False),
        sa.Column('owner_name', sa.String(120), nullable=False),
        sa.Column('phone', sa.String(15), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('address', sa.String(255), nullable=True),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('gst', sa.String(15), nullable=True),
        sa.Column('fssai', sa.String(14), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('approved_at', sa.DateTime(), nullable=True),
        sa.Column('is_open', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('profile_image', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('phone', name='uq_merchants_phone'),
        sa.UniqueConstraint('email', name='uq_merchants_email'),
        sa.UniqueConstraint('gst', name='uq_merchants_gst'),
        sa.UniqueConstraint('fssai', name='uq_merchants_fssai'),
        sa.UniqueConstraint('merchant_code', name='uq_merchants_code'),
    )
    op.create_index('ix_merchants_user_id', 'merchants', ['user_id'])
    op.create_table(
        'delivery_boys',
        sa.Column('id', BIGINT, primary_key=True),
        sa.Column('user_id', BIGINT, sa.ForeignKey('users.id'), nullable=False),
        sa.Column('vehicle', sa.String(50), nullable=True),
        sa.Column('vehicle_number', sa.String(20), nullable=True),
        sa.Column('license_no', sa.String(30), nullable=True),
        sa.Column('aadhaar', sa.String(20), nullable=True),
        sa.Column('bank_name', sa.String(100), nullable=True),
        sa.Column('account_no', sa.String(34), nullable=True),
        sa.Column('ifsc', sa.String(11), nullable=True),
        sa.Column('upi', sa.String(100), nullable=True),
        sa.Column('area', sa.String(100), nullable=True),
        sa.Column('online_status', sa.String(10), nullable=False, server_default='offline'),
        sa.Column('kyc_status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('approval_status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('rejected_reason', sa.String(255), nullable=True),
        sa.Column('approved_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('user_id', name='uq_delivery_boys_user'),
    )
    op.create_table(
        'otps',
        sa.Column('id', BIGINT, primary_key=True),
        sa.Column('phone', sa.String(15), nullable=False),
        sa.Column('code', sa.String(6), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('used', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_otps_phone', 'otps', ['phone'])
    op.create_table(
        'admins',
        sa.Column('id', BIGINT, primary_key=True),
        sa.Column('phone', sa.String(15), nullable=False, unique=True),
        sa.Column('name', sa.String(120), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_table(
        'app_settings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('zones', sa.JSON(), nullable=True),
        sa.Column('operating_hours', sa.String(32), nullable=True),
        sa.Column('base_delivery_fee', sa.Float(), nullable=True),
        sa.Column('per_km_fee', sa.Float(), nullable=True),
        sa.Column('cancellation_mins', sa.Integer(), nullable=True),
        sa.Column('force_update_min_version', sa.String(20), nullable=True),
        sa.Column('maintenance', sa.Boolean(), nullable=True),
        sa.Column('announcement', sa.String(255), nullable=True),
        sa.Column('merchant_commission_pct', sa.Float(), nullable=True),
        sa.Column('rider_commission_pct', sa.Float(), nullable=True),
        sa.Column('payout_cycle', sa.String(10), nullable=True),
        sa.Column('gst_number', sa.String(32), nullable=True),
        sa.Column('fssai_number', sa.String(32), nullable=True),
        sa.Column('two_factor', sa.Boolean(), nullable=True),
        sa.Column('support_phone', sa.String(32), nullable=True),
        sa.Column('support_email', sa.String(128), nullable=True),
        sa.Column('sms_provider', sa.String(64), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )


def downgrade():
    op.drop_table('app_settings')
    op.drop_table('admins')
    op.drop_index('ix_otps_phone', table_name='otps')
    op.drop_table('otps')
    op.drop_table('delivery_boys')
    op.drop_index('ix_merchants_user_id', table_name='merchants')
    op.drop_table('merchants')
    op.drop_table('users')
