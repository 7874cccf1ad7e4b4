"""doctor profiles, appointments and identity phone

Revision ID: c3f5a8e1d2b4
Revises: 7b1e4c2d9a10
Create Date: 2026-10-19 12:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = 'c3f5a8e1d2b4'
down_revision = '7b1e4c2d9a10'
branch_labels = None
depends_on = None


def upgrade():
    with op.batch_alter_table('identities', schema=None) as batch_op:
        batch_op.add_column(sa.Column('phone', sa.String(length=20), nullable=True))

    op.create_table(
        'doctor_profiles',
        sa.Column('identity_id', sa.Integer(), nullable=False),
        sa.Column('speciality', sa.String(length=100), nullable=False),
        sa.Column('fee', sa.Integer(), nullable=False),
        sa.Column('available', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.CheckConstraint('fee >= 0', name='ck_doctor_profiles_fee_non_negative'),
        sa.ForeignKeyConstraint(['identity_id'], ['identities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('identity_id', name=op.f('pk_doctor_profiles')),
    )

    op.create_table(
        'appointments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('doctor_id', sa.Integer(), nullable=False),
        sa.Column('starts_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('cancelled', sa.Boolean(), nullable=False),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.ForeignKeyConstraint(['patient_id'], ['identities.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['doctor_id'], ['identities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_appointments')),
    )
    with op.batch_alter_table('appointments', schema=None) as batch_op:
        batch_op.create_index('ix_appointments_patient', ['patient_id'], unique=False)
        batch_op.create_index(
            'uq_appointments_doctor_slot',
            ['doctor_id', 'starts_at'],
            unique=True,
            sqlite_where=sa.text('NOT cancelled'),
            postgresql_where=sa.text('NOT cancelled'),
        )


def downgrade():
    with op.batch_alter_table('appointments', schema=None) as batch_op:
        batch_op.drop_index('uq_appointments_doctor_slot')
        batch_op.drop_index('ix_appointments_patient')

    op.drop_table('appointments')
    op.drop_table('doctor_profiles')

    with op.batch_alter_table('identities', schema=None) as batch_op:
        batch_op.drop_column('phone')
