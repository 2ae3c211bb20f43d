"""Create EventSphere tables"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '3a7c1e90b2d4'
down_revision = None
branch_labels = None
depends_on = None

GUID = sa.String(36).with_variant(postgresql.UUID(as_uuid=False), "postgresql")
JSON = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade():
    # Users
    op.create_table(
        'users',
        sa.Column('id', GUID, nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='participant'),
        sa.Column('department', sa.String(100), nullable=True),
        sa.Column('enrollment_number', sa.String(50), nullable=True),
        sa.Column('institutional_id', sa.String(50), nullable=True),
        sa.Column('is_approved', sa.Boolean(), server_default=sa.true()),
        sa.Column('two_factor_enabled', sa.Boolean(), server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('enrollment_number'),
        sa.UniqueConstraint('institutional_id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'])

    # Events
    op.create_table(
        'events',
        sa.Column('id', GUID, nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('department', sa.String(100), nullable=True),
        sa.Column('venue', sa.String(200), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('time', sa.String(20), nullable=False),
        sa.Column('end_time', sa.String(20), nullable=True),
        sa.Column('registration_deadline', sa.DateTime(), nullable=True),
        sa.Column('max_participants', sa.Integer(), nullable=True),
        sa.Column('current_participants', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('organizer_id', GUID, nullable=True),
        sa.Column('organizer_name', sa.String(100), nullable=True),
        sa.Column('organizer_email', sa.String(255), nullable=True),
        sa.Column('tags', JSON, nullable=True),
        sa.Column('requirements', sa.Text(), nullable=True),
        sa.Column('prizes', sa.Text(), nullable=True),
        sa.Column('contact_email', sa.String(255), nullable=True),
        sa.Column('contact_phone', sa.String(50), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['organizer_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_events_category'), 'events', ['category'])
    op.create_index(op.f('ix_events_department'), 'events', ['department'])
    op.create_index(op.f('ix_events_date'), 'events', ['date'])
    op.create_index(op.f('ix_events_organizer_id'), 'events', ['organizer_id'])
    op.create_index(op.f('ix_events_status'), 'events', ['status'])

    # Registrations
    op.create_table(
        'registrations',
        sa.Column('id', GUID, nullable=False),
        sa.Column('event_id', GUID, nullable=False),
        sa.Column('user_id', GUID, nullable=False),
        sa.Column('user_name', sa.String(100), nullable=False),
        sa.Column('user_email', sa.String(255), nullable=False),
        sa.Column('user_department', sa.String(100), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='registered'),
        sa.Column('registration_date', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('attendance_time', sa.DateTime(), nullable=True),
        sa.Column('qr_code_scanned', sa.Boolean(), server_default=sa.false()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'user_id', name='uq_registrations_event_user')
    )
    op.create_index(op.f('ix_registrations_event_id'), 'registrations', ['event_id'])
    op.create_index(op.f('ix_registrations_user_id'), 'registrations', ['user_id'])

    # Feedback
    op.create_table(
        'feedback',
        sa.Column('id', GUID, nullable=False),
        sa.Column('event_id', GUID, nullable=False),
        sa.Column('user_id', GUID, nullable=False),
        sa.Column('user_name', sa.String(100), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('categories', JSON, nullable=False),
        sa.Column('is_anonymous', sa.Boolean(), server_default=sa.false()),
        sa.Column('is_moderated', sa.Boolean(), server_default=sa.false()),
        sa.Column('moderator_notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'user_id', name='uq_feedback_event_user')
    )
    op.create_index(op.f('ix_feedback_event_id'), 'feedback', ['event_id'])

    # Certificate templates
    op.create_table(
        'certificate_templates',
        sa.Column('id', GUID, nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('template_url', sa.Text(), nullable=False),
        sa.Column('event_id', GUID, nullable=True),
        sa.Column('organizer_id', GUID, nullable=False),
        sa.Column('organizer_name', sa.String(100), nullable=True),
        sa.Column('file_size_bytes', sa.BigInteger(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['organizer_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_certificate_templates_organizer_id'), 'certificate_templates', ['organizer_id'])

    # Certificates
    op.create_table(
        'certificates',
        sa.Column('id', GUID, nullable=False),
        sa.Column('certificate_id', sa.String(150), nullable=False),
        sa.Column('verification_code', sa.String(8), nullable=False),
        sa.Column('event_id', GUID, nullable=False),
        sa.Column('event_title', sa.String(200), nullable=False),
        sa.Column('event_date', sa.DateTime(), nullable=True),
        sa.Column('event_venue', sa.String(200), nullable=True),
        sa.Column('event_category', sa.String(50), nullable=True),
        sa.Column('participant_id', GUID, nullable=False),
        sa.Column('participant_name', sa.String(100), nullable=False),
        sa.Column('participant_email', sa.String(255), nullable=False),
        sa.Column('participant_department', sa.String(100), nullable=True),
        sa.Column('participant_role', sa.String(50), nullable=False, server_default='participant'),
        sa.Column('template_id', GUID, nullable=False),
        sa.Column('template_url', sa.Text(), nullable=False),
        sa.Column('custom_fields', JSON, nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='issued'),
        sa.Column('issued_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('issued_by', GUID, nullable=False),
        sa.Column('issued_by_name', sa.String(100), nullable=True),
        sa.Column('download_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_downloaded_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['participant_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['template_id'], ['certificate_templates.id']),
        sa.ForeignKeyConstraint(['issued_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'participant_id', name='uq_certificates_event_participant')
    )
    op.create_index(op.f('ix_certificates_certificate_id'), 'certificates', ['certificate_id'], unique=True)
    op.create_index(op.f('ix_certificates_verification_code'), 'certificates', ['verification_code'], unique=True)
    op.create_index(op.f('ix_certificates_participant_id'), 'certificates', ['participant_id'])

    # Certificate verifications
    op.create_table(
        'certificate_verifications',
        sa.Column('id', GUID, nullable=False),
        sa.Column('certificate_id', sa.String(150), nullable=False),
        sa.Column('participant_id', GUID, nullable=False),
        sa.Column('event_id', GUID, nullable=False),
        sa.Column('verified_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('ip_address', sa.String(45), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_certificate_verifications_certificate_id'), 'certificate_verifications', ['certificate_id'])

    # Gallery media
    op.create_table(
        'gallery_media',
        sa.Column('id', GUID, nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(20), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=False),
        sa.Column('thumbnail_url', sa.Text(), nullable=True),
        sa.Column('tags', JSON, nullable=True),
        sa.Column('event_id', GUID, nullable=True),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('file_name', sa.String(255), nullable=True),
        sa.Column('file_size', sa.BigInteger(), nullable=True),
        sa.Column('mime_type', sa.String(100), nullable=True),
        sa.Column('uploaded_by', GUID, nullable=False),
        sa.Column('uploaded_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['uploaded_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_gallery_media_category'), 'gallery_media', ['category'])

    # Event media
    op.create_table(
        'event_media',
        sa.Column('id', GUID, nullable=False),
        sa.Column('event_id', GUID, nullable=False),
        sa.Column('media_type', sa.String(20), nullable=False, server_default='image'),
        sa.Column('caption', sa.Text(), nullable=True),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('file_name', sa.String(255), nullable=True),
        sa.Column('file_size', sa.BigInteger(), nullable=True),
        sa.Column('uploaded_by', GUID, nullable=False),
        sa.Column('uploaded_at', sa.DateTime(), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['uploaded_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_event_media_event_id'), 'event_media', ['event_id'])

    # Notifications
    op.create_table(
        'notifications',
        sa.Column('id', GUID, nullable=False),
        sa.Column('user_id', GUID, nullable=True),
        sa.Column('target_role', sa.String(20), nullable=True),
        sa.Column('type', sa.String(30), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('event_id', GUID, nullable=True),
        sa.Column('priority', sa.String(10), nullable=False, server_default='medium'),
        sa.Column('is_read', sa.Boolean(), server_default=sa.false()),
        sa.Column('expires_at', sa.DateTime(), nullable=True),
        sa.Column('created_by', GUID, nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_notifications_user_id'), 'notifications', ['user_id'])

    # Activity logs
    op.create_table(
        'activity_logs',
        sa.Column('id', GUID, nullable=False),
        sa.Column('actor_id', GUID, nullable=True),
        sa.Column('action', sa.String(50), nullable=False),
        sa.Column('resource_type', sa.String(50), nullable=True),
        sa.Column('resource_id', GUID, nullable=True),
        sa.Column('details', JSON, nullable=True),
        sa.Column('ip_address', sa.String(45), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['actor_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_activity_logs_actor_id'), 'activity_logs', ['actor_id'])
    op.create_index(op.f('ix_activity_logs_action'), 'activity_logs', ['action'])
    op.create_index(op.f('ix_activity_logs_created_at'), 'activity_logs', ['created_at'])


def downgrade():
    op.drop_table('activity_logs')
    op.drop_table('notifications')
    op.drop_table('event_media')
    op.drop_table('gallery_media')
    op.drop_table('certificate_verifications')
    op.drop_table('certificates')
    op.drop_table('certificate_templates')
    op.drop_table('feedback')
    op.drop_table('registrations')
    op.drop_table('events')
    op.drop_table('users')
