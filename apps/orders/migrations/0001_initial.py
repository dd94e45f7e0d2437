# Generated manually for the swipe exchange orders app

import uuid
from decimal import Decimal
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


STATUS_CHOICES = [
    ('requested', 'Requested'),
    ('accepted', 'Accepted'),
    ('ordered', 'Ordered'),
    ('picked_up', 'Picked Up'),
    ('completed', 'Completed'),
    ('cancelled', 'Cancelled'),
    ('disputed', 'Disputed'),
]

ACTION_CHOICES = [
    ('accept', 'Accept'),
    ('decline', 'Decline'),
    ('mark_ordered', 'Mark ordered'),
    ('mark_picked_up', 'Mark picked up'),
    ('mark_completed', 'Mark completed'),
    ('cancel', 'Cancel'),
    ('open_dispute', 'Open dispute'),
    ('resolve_dispute', 'Resolve dispute'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('posts', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='SwipeRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('status', models.CharField(choices=STATUS_CHOICES, default='requested', max_length=20)),
                ('items_text', models.TextField()),
                ('instructions', models.TextField(blank=True)),
                ('est_total', models.DecimalField(blank=True, decimal_places=2, max_digits=8, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('ordered_proof_path', models.CharField(blank=True, max_length=500)),
                ('order_id_text', models.CharField(blank=True, max_length=100)),
                ('buyer_completed', models.BooleanField(default=False)),
                ('seller_completed', models.BooleanField(default=False)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('cancel_reason', models.TextField(blank=True)),
                ('version', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('buyer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='requests_made', to=settings.AUTH_USER_MODEL)),
                ('cancelled_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='requests_cancelled', to=settings.AUTH_USER_MODEL)),
                ('post', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='requests', to='posts.post')),
                ('seller', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='requests_received', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'requests',
                'ordering': ['-updated_at'],
                'indexes': [
                    models.Index(fields=['buyer', 'updated_at'], name='requests_buyer_updated_idx'),
                    models.Index(fields=['seller', 'updated_at'], name='requests_seller_updated_idx'),
                    models.Index(fields=['post', 'created_at'], name='requests_post_created_idx'),
                    models.Index(fields=['seller', 'status'], name='requests_seller_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='AuditLogEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('action', models.CharField(choices=ACTION_CHOICES, max_length=30)),
                ('outcome', models.CharField(choices=[('applied', 'Applied'), ('rejected', 'Rejected')], max_length=10)),
                ('from_status', models.CharField(blank=True, choices=STATUS_CHOICES, max_length=20)),
                ('to_status', models.CharField(blank=True, choices=STATUS_CHOICES, max_length=20)),
                ('metadata', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('actor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='audit_entries', to=settings.AUTH_USER_MODEL)),
                ('request', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='audit_entries', to='orders.swiperequest')),
            ],
            options={
                'db_table': 'audit_log',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['request', 'created_at'], name='audit_request_created_idx'),
                    models.Index(fields=['actor', 'created_at'], name='audit_actor_created_idx'),
                    models.Index(fields=['outcome', 'created_at'], name='audit_outcome_created_idx'),
                ],
            },
        ),
    ]
