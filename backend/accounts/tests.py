"""
Tests for registration, the profile endpoint and the user directory.
"""

from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APITestCase

from .directory import existing_user_ids, user_summaries
from .models import User


class UserDirectoryTests(TestCase):
    """Tests for the batch profile lookups."""

    def setUp(self):
        self.alice = User.objects.create_user(
            username='alice', email='alice@example.com', password='s3cret-pass',
            name='Alice', profile_image_url='https://cdn.example.com/alice.png'
        )
        self.nameless = User.objects.create_user(username='ghost', password='s3cret-pass')

    def test_summaries_keyed_by_id(self):
        summaries = user_summaries([self.alice.pk, 999999])

        self.assertEqual(summaries, {
            self.alice.pk: {
                'id': self.alice.pk,
                'name': 'Alice',
                'email': 'alice@example.com',
                'profileImageUrl': 'https://cdn.example.com/alice.png',
            }
        })

    def test_name_falls_back_to_username(self):
        self.assertEqual(user_summaries([self.nameless.pk])[self.nameless.pk]['name'], 'ghost')

    def test_inactive_users_are_not_assignable(self):
        self.nameless.is_active = False
        self.nameless.save()

        self.assertEqual(
            existing_user_ids([self.alice.pk, self.nameless.pk]), {self.alice.pk}
        )

    def test_empty_lookup(self):
        self.assertEqual(user_summaries([]), {})


class RegisterAPITests(APITestCase):
    """Tests for POST /api/auth/register/."""

    def payload(self, **extra):
        data = {'name': 'Alice', 'email': 'Alice@Example.com', 'password': 'correct-horse'}
        data.update(extra)
        return data

    def test_register_member(self):
        response = self.client.post('/api/auth/register/', self.payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['role'], 'member')
        self.assertEqual(response.data['email'], 'alice@example.com')
        self.assertNotIn('password', response.data)

        user = User.objects.get(email='alice@example.com')
        self.assertTrue(user.check_password('correct-horse'))

    @override_settings(ADMIN_INVITE_TOKEN='let-me-in')
    def test_invite_token_grants_admin(self):
        response = self.client.post(
            '/api/auth/register/', self.payload(adminInviteToken='let-me-in'), format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['role'], 'admin')

    @override_settings(ADMIN_INVITE_TOKEN='let-me-in')
    def test_wrong_invite_token_registers_member(self):
        response = self.client.post(
            '/api/auth/register/', self.payload(adminInviteToken='guess'), format='json'
        )
        self.assertEqual(response.data['role'], 'member')

    def test_duplicate_email_rejected(self):
        self.client.post('/api/auth/register/', self.payload(), format='json')
        response = self.client.post(
            '/api/auth/register/', self.payload(email='alice@example.com'), format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', response.data['errors'])

    def test_short_password_rejected(self):
        response = self.client.post(
            '/api/auth/register/', self.payload(password='short'), format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password', response.data['errors'])


class ProfileAPITests(APITestCase):
    """Tests for GET/PUT /api/auth/profile/."""

    def setUp(self):
        self.user = User.objects.create_user(
            username='bob@example.com', email='bob@example.com',
            password='s3cret-pass', name='Bob'
        )

    def test_profile_requires_authentication(self):
        response = self.client.get('/api/auth/profile/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_read_profile(self):
        self.client.force_authenticate(self.user)
        response = self.client.get('/api/auth/profile/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Bob')
        self.assertEqual(response.data['role'], 'member')

    def test_update_profile(self):
        self.client.force_authenticate(self.user)
        response = self.client.put('/api/auth/profile/', {
            'name': 'Robert',
            'profileImageUrl': 'https://cdn.example.com/bob.png',
            'password': 'brand-new-secret',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertEqual(self.user.name, 'Robert')
        self.assertEqual(self.user.profile_image_url, 'https://cdn.example.com/bob.png')
        self.assertTrue(self.user.check_password('brand-new-secret'))

    def test_role_cannot_be_self_assigned(self):
        self.client.force_authenticate(self.user)
        self.client.put('/api/auth/profile/', {'role': 'admin'}, format='json')

        self.user.refresh_from_db()
        self.assertEqual(self.user.role, 'member')
