"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data

This creates:
- 4 users (admin, alice and bob as sellers, charlie as buyer)
- 2 open posts
- Requests in several lifecycle states, created through the services so
  capacity, counters and the audit trail stay consistent
- Ratings on the completed exchange

Existing sample accounts are reused, so the command can be run repeatedly.
"""

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User, RolePreference
from apps.posts.services import create_post
from apps.orders.services import (
    create_request,
    accept_request,
    mark_ordered,
    mark_picked_up,
    mark_completed,
    cancel_request,
)
from apps.ratings.services import submit_rating


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write('Creating sample data...')

        users = self.create_users()
        posts = self.create_posts(users)
        self.create_exchanges(users, posts)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')
        self.stdout.write('  alice@example.com / password123 (seller)')
        self.stdout.write('  bob@example.com / password123 (seller)')
        self.stdout.write('  charlie@example.com / password123 (buyer)')

    def create_users(self):
        """Create or reuse the sample accounts."""
        users = {}

        admin = User.objects.filter(email='admin@example.com').first()
        if admin is None:
            admin = User.objects.create_superuser(
                email='admin@example.com',
                password='admin123',
                display_name='Admin',
            )
        users['admin'] = admin

        for key, name, role in [
            ('alice', 'Alice', RolePreference.SELLER),
            ('bob', 'Bob', RolePreference.SELLER),
            ('charlie', 'Charlie', RolePreference.BUYER),
        ]:
            user = User.objects.filter(email=f'{key}@example.com').first()
            if user is None:
                user = User.objects.create_user(
                    email=f'{key}@example.com',
                    password='password123',
                    display_name=name,
                    role_preference=role,
                )
            users[key] = user

        self.stdout.write(f'  Users: {len(users)}')
        return users

    def create_posts(self, users):
        posts = {
            'alice': create_post(
                seller=users['alice'],
                capacity_total=3,
                location='North Dining Hall',
                notes='Around until 1pm',
                max_value_hint=Decimal('12.00'),
            ),
            'bob': create_post(
                seller=users['bob'],
                capacity_total=2,
                location='Campus Co-op',
            ),
        }
        self.stdout.write(f'  Posts: {len(posts)}')
        return posts

    def create_exchanges(self, users, posts):
        """One completed, one in progress, one cancelled."""
        alice, bob, charlie = users['alice'], users['bob'], users['charlie']

        done = create_request(
            buyer=charlie,
            post_id=posts['alice'].id,
            items_text='Chicken wrap, iced tea',
            est_total=Decimal('9.50'),
        )
        accept_request(request_id=done.id, caller=alice)
        mark_ordered(request_id=done.id, caller=alice, order_id_text='A-102')
        mark_picked_up(request_id=done.id, caller=charlie)
        mark_completed(request_id=done.id, caller=charlie)
        mark_completed(request_id=done.id, caller=alice)
        submit_rating(request_id=done.id, caller=charlie, stars=5, comment='Super quick!')
        submit_rating(request_id=done.id, caller=alice, stars=4)

        in_progress = create_request(
            buyer=charlie,
            post_id=posts['bob'].id,
            items_text='Veggie burger',
            instructions='No onions please',
        )
        accept_request(request_id=in_progress.id, caller=bob)

        cancelled = create_request(
            buyer=charlie,
            post_id=posts['alice'].id,
            items_text='Fruit cup',
        )
        cancel_request(request_id=cancelled.id, caller=charlie, reason='Changed my mind')

        self.stdout.write('  Requests: 3 (completed, accepted, cancelled)')
