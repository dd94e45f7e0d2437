# Generated manually for the swipe exchange posts app

import uuid
from decimal import Decimal
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Post',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('open', 'Open'), ('closed', 'Closed')], default='open', max_length=10)),
                ('capacity_total', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('capacity_remaining', models.PositiveIntegerField()),
                ('location', models.CharField(blank=True, max_length=200)),
                ('notes', models.TextField(blank=True)),
                ('max_value_hint', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('closed_by_seller', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('seller', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='posts', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'posts',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'created_at'], name='posts_status_created_idx'),
                    models.Index(fields=['seller', 'created_at'], name='posts_seller_created_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('capacity_total__gt', 0)), name='post_capacity_total_positive'),
                    models.CheckConstraint(condition=models.Q(('capacity_remaining__gte', 0)), name='post_capacity_remaining_non_negative'),
                    models.CheckConstraint(condition=models.Q(('capacity_remaining__lte', models.F('capacity_total'))), name='post_capacity_remaining_within_total'),
                ],
            },
        ),
    ]
