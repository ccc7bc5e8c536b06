"""
Unit Tests for Task Sync tasks.

Covers the checklist/progress rules, the mutation policy, every task
service operation, the dashboard aggregation and the HTTP endpoints.
"""

import json
from datetime import timedelta

from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import User

from . import services
from .checklist import (
    COMPLETED,
    IN_PROGRESS,
    PENDING,
    ChecklistItem,
    complete_all,
    compute_progress,
    derive_status,
    parse_checklist,
)
from .dashboard import build_dashboard, tally_tasks
from .exceptions import Forbidden, InvalidInput, TaskNotFound
from .handlers import api_exception_handler
from .models import Task
from .permissions import TaskAction, can_mutate


def make_user(username, role=User.Role.MEMBER):
    return User.objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password='s3cret-pass',
        name=username.title(),
        role=role,
    )


def make_task(created_by, assignees, title='Task', checklist=None, **extra):
    return services.create_task(
        title=title,
        created_by=created_by,
        assigned_to=[user.pk for user in assignees],
        todo_checklist=checklist,
        **extra
    )


def items(*flags):
    return [{'text': f"step {i}", 'completed': flag} for i, flag in enumerate(flags)]


class ChecklistRuleTests(SimpleTestCase):
    """Tests for progress computation and status derivation."""

    def test_empty_checklist_has_zero_progress(self):
        self.assertEqual(compute_progress([]), 0)
        self.assertEqual(derive_status(0), PENDING)

    def test_half_completed_checklist(self):
        """One of two items done gives 50% and In Progress."""
        progress = compute_progress(parse_checklist(items(True, False)))
        self.assertEqual(progress, 50)
        self.assertEqual(derive_status(progress), IN_PROGRESS)

    def test_progress_rounds_half_up(self):
        self.assertEqual(compute_progress(parse_checklist(items(True, *[False] * 7))), 13)
        self.assertEqual(compute_progress(parse_checklist(items(True, False, False))), 33)
        self.assertEqual(compute_progress(parse_checklist(items(True, True, False))), 67)

    def test_fully_completed_checklist(self):
        progress = compute_progress(parse_checklist(items(True, True, True)))
        self.assertEqual(progress, 100)
        self.assertEqual(derive_status(progress), COMPLETED)

    def test_almost_done_is_still_in_progress(self):
        self.assertEqual(derive_status(99), IN_PROGRESS)
        self.assertEqual(derive_status(1), IN_PROGRESS)

    def test_complete_all_marks_every_item(self):
        result = complete_all([ChecklistItem('a'), ChecklistItem('b', True)])
        self.assertTrue(all(item.completed for item in result))
        self.assertEqual([item.text for item in result], ['a', 'b'])

    def test_completed_defaults_to_false(self):
        self.assertEqual(parse_checklist([{'text': 'a'}]), [ChecklistItem('a', False)])

    def test_rejects_non_list(self):
        with self.assertRaises(InvalidInput):
            parse_checklist('buy milk')

    def test_rejects_item_without_text(self):
        with self.assertRaises(InvalidInput):
            parse_checklist([{'completed': True}])

    def test_rejects_non_boolean_completed(self):
        with self.assertRaises(InvalidInput):
            parse_checklist([{'text': 'a', 'completed': 'yes'}])


class MutationPolicyTests(TestCase):
    """Tests for can_mutate."""

    def setUp(self):
        self.admin = make_user('admin', User.Role.ADMIN)
        self.assignee = make_user('alice')
        self.outsider = make_user('bob')
        self.task = make_task(self.admin, [self.assignee])

    def test_admin_may_do_everything(self):
        for action in TaskAction:
            self.assertTrue(can_mutate(self.task, self.admin, action))

    def test_assignee_may_only_progress_the_task(self):
        self.assertTrue(can_mutate(self.task, self.assignee, TaskAction.UPDATE_STATUS))
        self.assertTrue(can_mutate(self.task, self.assignee, TaskAction.UPDATE_CHECKLIST))
        self.assertFalse(can_mutate(self.task, self.assignee, TaskAction.UPDATE))
        self.assertFalse(can_mutate(self.task, self.assignee, TaskAction.DELETE))

    def test_superuser_counts_as_admin(self):
        superuser = User.objects.create_superuser(
            username='root', email='root@example.com', password='s3cret-pass'
        )

        self.assertEqual(superuser.role, User.Role.MEMBER)
        for action in TaskAction:
            self.assertTrue(can_mutate(self.task, superuser, action))
        self.assertEqual(len(services.list_tasks(superuser).tasks), 1)

    def test_outsider_may_do_nothing(self):
        for action in TaskAction:
            self.assertFalse(can_mutate(self.task, self.outsider, action))


class CreateTaskTests(TestCase):
    """Tests for services.create_task."""

    def setUp(self):
        self.admin = make_user('admin', User.Role.ADMIN)
        self.alice = make_user('alice')

    def test_progress_and_status_follow_checklist(self):
        task = make_task(self.admin, [self.alice], checklist=items(True, False))

        self.assertEqual(task.progress, 50)
        self.assertEqual(task.status, IN_PROGRESS)
        self.assertEqual(task.created_by, self.admin)
        self.assertEqual(list(task.assigned_to.all()), [self.alice])

    def test_task_without_checklist_is_pending(self):
        task = make_task(self.admin, [self.alice], priority='High')

        self.assertEqual(task.progress, 0)
        self.assertEqual(task.status, PENDING)
        self.assertEqual(task.priority, 'High')
        self.assertEqual(task.todo_checklist, [])

    def test_scalar_assigned_to_rejected(self):
        with self.assertRaises(InvalidInput):
            services.create_task(title='x', created_by=self.admin, assigned_to=self.alice.pk)
        self.assertEqual(Task.objects.count(), 0)

    def test_missing_assigned_to_rejected(self):
        with self.assertRaises(InvalidInput):
            services.create_task(title='x', created_by=self.admin, assigned_to=None)

    def test_empty_assigned_to_rejected(self):
        with self.assertRaises(InvalidInput):
            services.create_task(title='x', created_by=self.admin, assigned_to=[])

    def test_unknown_user_rejected(self):
        with self.assertRaises(InvalidInput):
            services.create_task(title='x', created_by=self.admin, assigned_to=[999999])

    def test_numeric_string_ids_accepted(self):
        task = services.create_task(
            title='x', created_by=self.admin, assigned_to=[str(self.alice.pk), self.alice.pk]
        )
        self.assertEqual(list(task.assigned_to.values_list('pk', flat=True)), [self.alice.pk])

    def test_invalid_priority_rejected(self):
        with self.assertRaises(InvalidInput):
            make_task(self.admin, [self.alice], priority='Urgent')


class UpdateTaskTests(TestCase):
    """Tests for services.update_task and services.delete_task."""

    def setUp(self):
        self.admin = make_user('admin', User.Role.ADMIN)
        self.alice = make_user('alice')
        self.bob = make_user('bob')
        self.task = make_task(self.admin, [self.alice], title='Draft', checklist=items(False, False))

    def test_admin_merges_supplied_fields(self):
        updated = services.update_task(
            self.task.pk, {'title': 'Final', 'priority': 'Low'}, self.admin
        )
        self.assertEqual(updated.title, 'Final')
        self.assertEqual(updated.priority, 'Low')
        self.assertEqual(updated.description, '')

    def test_assignee_cannot_update(self):
        with self.assertRaises(Forbidden):
            services.update_task(self.task.pk, {'title': 'Mine'}, self.alice)
        self.task.refresh_from_db()
        self.assertEqual(self.task.title, 'Draft')

    def test_non_array_assigned_to_rejected(self):
        with self.assertRaises(InvalidInput):
            services.update_task(self.task.pk, {'assigned_to': self.bob.pk}, self.admin)

    def test_assignees_replaced(self):
        services.update_task(self.task.pk, {'assigned_to': [self.bob.pk]}, self.admin)
        self.assertEqual(list(self.task.assigned_to.all()), [self.bob])

    def test_checklist_recomputes_progress(self):
        updated = services.update_task(
            self.task.pk, {'todo_checklist': items(True, True, False, False)}, self.admin
        )
        self.assertEqual(updated.progress, 50)
        self.assertEqual(updated.status, IN_PROGRESS)

    def test_status_completed_completes_checklist(self):
        updated = services.update_task(self.task.pk, {'status': COMPLETED}, self.admin)
        self.assertEqual(updated.progress, 100)
        self.assertEqual(updated.completed_count, 2)

    def test_readonly_field_rejected(self):
        with self.assertRaises(InvalidInput):
            services.update_task(self.task.pk, {'progress': 80}, self.admin)

    def test_missing_task(self):
        with self.assertRaises(TaskNotFound):
            services.update_task(424242, {'title': 'x'}, self.admin)

    def test_delete_removes_task(self):
        services.delete_task(self.task.pk, self.admin)
        self.assertFalse(Task.objects.filter(pk=self.task.pk).exists())

    def test_delete_missing_task_leaves_store_unchanged(self):
        with self.assertRaises(TaskNotFound):
            services.delete_task(424242, self.admin)
        self.assertEqual(Task.objects.count(), 1)

    def test_assignee_cannot_delete(self):
        with self.assertRaises(Forbidden):
            services.delete_task(self.task.pk, self.alice)
        self.assertEqual(Task.objects.count(), 1)

    def test_get_missing_task(self):
        with self.assertRaises(TaskNotFound):
            services.get_task(424242)


class StatusAndChecklistTests(TestCase):
    """Tests for update_task_status and update_task_checklist."""

    def setUp(self):
        self.admin = make_user('admin', User.Role.ADMIN)
        self.alice = make_user('alice')
        self.bob = make_user('bob')
        self.task = make_task(self.admin, [self.alice], checklist=items(False, True, False))

    def test_completed_status_marks_every_item(self):
        task = services.update_task_status(self.task.pk, COMPLETED, self.alice)

        self.assertEqual(task.status, COMPLETED)
        self.assertEqual(task.progress, 100)
        self.assertTrue(all(item['completed'] for item in task.todo_checklist))

    def test_outsider_cannot_change_status(self):
        with self.assertRaises(Forbidden):
            services.update_task_status(self.task.pk, COMPLETED, self.bob)

    def test_missing_status_leaves_task_unchanged(self):
        task = services.update_task_status(self.task.pk, None, self.alice)
        self.assertEqual(task.status, IN_PROGRESS)
        self.assertEqual(task.progress, 33)

    def test_unknown_status_rejected(self):
        with self.assertRaises(InvalidInput):
            services.update_task_status(self.task.pk, 'Blocked', self.alice)

    def test_pending_status_keeps_checklist_progress(self):
        task = services.update_task_status(self.task.pk, PENDING, self.alice)
        self.assertEqual(task.status, PENDING)
        self.assertEqual(task.progress, 33)

    def test_reopening_fully_checked_task_rejected(self):
        services.update_task_status(self.task.pk, COMPLETED, self.alice)
        with self.assertRaises(InvalidInput):
            services.update_task_status(self.task.pk, IN_PROGRESS, self.alice)

        self.task.refresh_from_db()
        self.assertEqual(self.task.status, COMPLETED)
        self.assertEqual(self.task.progress, 100)

    def test_reopening_task_without_checklist(self):
        task = make_task(self.admin, [self.alice])
        services.update_task_status(task.pk, COMPLETED, self.admin)

        reopened = services.update_task_status(task.pk, IN_PROGRESS, self.admin)
        self.assertEqual(reopened.status, IN_PROGRESS)
        self.assertEqual(reopened.progress, 0)

    def test_checklist_drives_status(self):
        """50% -> In Progress, all done -> Completed, none done -> Pending."""
        task = make_task(self.admin, [self.alice], checklist=items(True, False))
        self.assertEqual((task.progress, task.status), (50, IN_PROGRESS))

        task = services.update_task_checklist(task.pk, items(True, True), self.alice)
        self.assertEqual((task.progress, task.status), (100, COMPLETED))

        task = services.update_task_checklist(task.pk, items(False, False), self.alice)
        self.assertEqual((task.progress, task.status), (0, PENDING))

    def test_empty_checklist_resets_progress(self):
        task = services.update_task_checklist(self.task.pk, [], self.admin)
        self.assertEqual((task.progress, task.status), (0, PENDING))

    def test_outsider_cannot_change_checklist(self):
        with self.assertRaises(Forbidden):
            services.update_task_checklist(self.task.pk, items(True), self.bob)

    def test_missing_checklist_rejected(self):
        with self.assertRaises(InvalidInput):
            services.update_task_checklist(self.task.pk, None, self.alice)

    def test_missing_task(self):
        with self.assertRaises(TaskNotFound):
            services.update_task_checklist(424242, items(True), self.admin)


class ListTasksTests(TestCase):
    """Tests for visibility scoping and the status summary."""

    def setUp(self):
        self.admin = make_user('admin', User.Role.ADMIN)
        self.alice = make_user('alice')
        self.bob = make_user('bob')
        self.pending = make_task(self.admin, [self.alice], title='pending')
        self.shared = make_task(
            self.admin, [self.alice, self.bob], title='shared', checklist=items(True, False)
        )
        self.done = make_task(self.admin, [self.bob], title='done', checklist=items(True))

    def test_admin_sees_everything(self):
        listing = services.list_tasks(self.admin)

        self.assertEqual(len(listing.tasks), 3)
        self.assertEqual(listing.status_summary.to_dict(), {
            'all': 3, 'pendingTasks': 1, 'inProgressTasks': 1, 'completedTasks': 1,
        })

    def test_member_sees_only_assigned_tasks(self):
        listing = services.list_tasks(self.alice)

        self.assertEqual({t.title for t in listing.tasks}, {'pending', 'shared'})
        self.assertEqual(listing.status_summary.all, 2)

    def test_status_filter_applies_to_named_counts_only(self):
        listing = services.list_tasks(self.alice, status=PENDING)

        self.assertEqual([t.title for t in listing.tasks], ['pending'])
        self.assertEqual(listing.status_summary.to_dict(), {
            'all': 2, 'pendingTasks': 1, 'inProgressTasks': 0, 'completedTasks': 0,
        })

    def test_completed_count(self):
        listing = services.list_tasks(self.bob)
        counts = {t.title: t.completed_count for t in listing.tasks}
        self.assertEqual(counts, {'shared': 1, 'done': 1})


class DashboardTallyTests(SimpleTestCase):
    """Tests for the single-pass dashboard fold."""

    def test_tally_counts_every_bucket(self):
        now = timezone.now()
        past = now - timedelta(days=1)
        rows = [
            (PENDING, 'High', past),
            (IN_PROGRESS, 'High', None),
            (COMPLETED, 'Low', past),
            (PENDING, 'Medium', now + timedelta(days=1)),
        ]

        tallies = tally_tasks(rows, now)

        self.assertEqual(tallies.total, 4)
        self.assertEqual(tallies.overdue, 1)
        self.assertEqual(tallies.by_status, {PENDING: 2, IN_PROGRESS: 1, COMPLETED: 1})
        self.assertEqual(tallies.by_priority, {'Low': 1, 'Medium': 1, 'High': 2})

    def test_empty_rows_report_zero(self):
        tallies = tally_tasks([], timezone.now())
        self.assertEqual(tallies.total, 0)
        self.assertEqual(set(tallies.by_status.values()), {0})
        self.assertEqual(set(tallies.by_priority.values()), {0})


class DashboardTests(TestCase):
    """Tests for build_dashboard against the database."""

    def setUp(self):
        self.admin = make_user('admin', User.Role.ADMIN)
        self.alice = make_user('alice')
        self.bob = make_user('bob')
        yesterday = timezone.now() - timedelta(days=1)

        make_task(self.admin, [self.alice], title='late', priority='High', due_date=yesterday)
        make_task(self.admin, [self.alice], title='busy', checklist=items(True, False))
        make_task(
            self.admin, [self.bob], title='done', priority='Low',
            checklist=items(True), due_date=yesterday
        )

    def test_empty_store_reports_zero_buckets(self):
        Task.objects.all().delete()
        data = build_dashboard()

        self.assertEqual(data['statistics'], {
            'totalTasks': 0, 'pendingTasks': 0, 'completedTasks': 0, 'overdueTasks': 0,
        })
        self.assertEqual(data['charts']['taskDistribution'], {
            'Pending': 0, 'InProgress': 0, 'Completed': 0, 'All': 0,
        })
        self.assertEqual(data['charts']['taskPriorityLevels'], {'Low': 0, 'Medium': 0, 'High': 0})
        self.assertEqual(data['recentTasks'], [])

    def test_global_dashboard(self):
        data = build_dashboard()

        self.assertEqual(data['statistics'], {
            'totalTasks': 3, 'pendingTasks': 1, 'completedTasks': 1, 'overdueTasks': 1,
        })
        self.assertEqual(data['charts']['taskDistribution'], {
            'Pending': 1, 'InProgress': 1, 'Completed': 1, 'All': 3,
        })
        priorities = data['charts']['taskPriorityLevels']
        self.assertEqual(priorities, {'Low': 1, 'Medium': 1, 'High': 1})
        self.assertEqual(sum(priorities.values()), data['statistics']['totalTasks'])

    def test_user_dashboard_is_scoped(self):
        data = build_dashboard(user=self.alice)

        self.assertEqual(data['statistics']['totalTasks'], 2)
        self.assertEqual(data['statistics']['overdueTasks'], 1)
        self.assertEqual(data['charts']['taskDistribution']['Completed'], 0)
        self.assertEqual(data['charts']['taskPriorityLevels']['Low'], 0)
        self.assertEqual({t['title'] for t in data['recentTasks']}, {'late', 'busy'})

    def test_recent_tasks_newest_first_and_limited(self):
        for i in range(12):
            make_task(self.admin, [self.bob], title=f"Task {i}")

        recent = build_dashboard()['recentTasks']

        self.assertEqual(len(recent), 10)
        self.assertEqual(recent[0]['title'], 'Task 11')
        self.assertEqual(
            set(recent[0]), {'id', 'title', 'status', 'priority', 'dueDate', 'createdAt'}
        )


class ExceptionHandlerTests(SimpleTestCase):
    """Tests for the API exception handler."""

    def test_domain_error_response(self):
        response = api_exception_handler(TaskNotFound(), {})

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {'message': 'Task not found', 'error_code': 'ERR_NOT_FOUND'})

    @override_settings(EXPOSE_INTERNAL_ERRORS=True)
    def test_unexpected_error_exposes_message_in_debug(self):
        with self.assertLogs('tasks.handlers', level='ERROR'):
            response = api_exception_handler(RuntimeError('store offline'), {})

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['message'], 'Server error')
        self.assertEqual(response.data['error'], 'store offline')

    @override_settings(EXPOSE_INTERNAL_ERRORS=False)
    def test_unexpected_error_redacted(self):
        with self.assertLogs('tasks.handlers', level='ERROR'):
            response = api_exception_handler(RuntimeError('store offline'), {})

        self.assertEqual(response.data['error'], 'Internal error')


class TaskAdminTests(TestCase):
    """Tests for editing tasks through the admin site."""

    def setUp(self):
        self.superuser = User.objects.create_superuser(
            username='root', email='root@example.com', password='s3cret-pass'
        )
        self.alice = make_user('alice')
        self.task = make_task(self.superuser, [self.alice], title='Ship it', checklist=items(False, False))
        self.client.force_login(self.superuser)

    def post_change(self, checklist, **extra):
        data = {
            'title': self.task.title,
            'description': '',
            'priority': Task.Priority.MEDIUM,
            'due_date_0': '',
            'due_date_1': '',
            'assigned_to': [self.alice.pk],
            'created_by': self.superuser.pk,
            'todo_checklist': json.dumps(checklist),
            'attachments': '[]',
            '_save': 'Save',
        }
        data.update(extra)
        return self.client.post(reverse('admin:tasks_task_change', args=[self.task.pk]), data)

    def test_checking_every_item_completes_task(self):
        response = self.post_change(items(True, True))

        self.assertEqual(response.status_code, 302)
        self.task.refresh_from_db()
        self.assertEqual(self.task.progress, 100)
        self.assertEqual(self.task.status, COMPLETED)

    def test_partial_checklist_moves_task_in_progress(self):
        self.post_change(items(True, False))

        self.task.refresh_from_db()
        self.assertEqual(self.task.progress, 50)
        self.assertEqual(self.task.status, IN_PROGRESS)

    def test_status_is_not_editable(self):
        self.post_change(items(False, False), status=COMPLETED)

        self.task.refresh_from_db()
        self.assertEqual(self.task.progress, 0)
        self.assertEqual(self.task.status, PENDING)

    def test_malformed_checklist_rejected(self):
        response = self.post_change([{'text': '', 'completed': True}])

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.context['adminform'].form.errors)
        self.task.refresh_from_db()
        self.assertEqual(self.task.todo_checklist, items(False, False))


class TaskAPITests(APITestCase):
    """Tests for the task endpoints."""

    def setUp(self):
        self.admin = make_user('admin', User.Role.ADMIN)
        self.alice = make_user('alice')
        self.bob = make_user('bob')
        self.task = make_task(self.admin, [self.alice], title='Write report', checklist=items(True, False))
        self.client.force_authenticate(self.admin)

    def test_authentication_required(self):
        self.client.force_authenticate(None)
        response = self.client.get('/api/tasks/')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['error_code'], 'ERR_NOT_AUTHENTICATED')

    def test_create_task(self):
        response = self.client.post('/api/tasks/', {
            'title': 'Ship release',
            'description': 'Tag and publish',
            'priority': 'High',
            'dueDate': '2030-01-01T12:00:00Z',
            'assignedTo': [self.alice.pk, self.bob.pk],
            'attachments': ['https://example.com/plan.pdf'],
            'todoChecklist': [{'text': 'tag', 'completed': True}, {'text': 'publish', 'completed': False}],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        task = response.data['task']
        self.assertEqual(task['progress'], 50)
        self.assertEqual(task['status'], IN_PROGRESS)
        self.assertCountEqual(task['assignedTo'], [self.alice.pk, self.bob.pk])
        self.assertEqual(task['createdBy'], self.admin.pk)
        self.assertEqual(task['completedCount'], 1)

    def test_create_task_with_scalar_assignee(self):
        response = self.client.post('/api/tasks/', {
            'title': 'Ship release',
            'assignedTo': self.alice.pk,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'assignedTo must be an array of user IDs')
        self.assertEqual(response.data['error_code'], 'ERR_INVALID_INPUT')

    def test_create_task_without_title(self):
        response = self.client.post('/api/tasks/', {'assignedTo': [self.alice.pk]}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('title', response.data['errors'])

    def test_list_expands_assignees(self):
        self.client.force_authenticate(self.alice)
        response = self.client.get('/api/tasks/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['tasks']), 1)
        listed = response.data['tasks'][0]
        self.assertEqual(listed['completedCount'], 1)
        self.assertEqual(listed['assignedTo'], [{
            'id': self.alice.pk,
            'name': 'Alice',
            'email': 'alice@example.com',
            'profileImageUrl': '',
        }])
        self.assertEqual(response.data['statusSummary']['all'], 1)

    def test_list_filtered_by_status(self):
        response = self.client.get('/api/tasks/', {'status': COMPLETED})

        self.assertEqual(response.data['tasks'], [])
        self.assertEqual(response.data['statusSummary'], {
            'all': 1, 'pendingTasks': 0, 'inProgressTasks': 0, 'completedTasks': 0,
        })

    def test_get_task(self):
        response = self.client.get(f'/api/tasks/{self.task.pk}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['title'], 'Write report')
        self.assertEqual(response.data['assignedTo'][0]['name'], 'Alice')

    def test_get_missing_task(self):
        response = self.client.get('/api/tasks/424242/')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['message'], 'Task not found')

    def test_update_task(self):
        response = self.client.put(
            f'/api/tasks/{self.task.pk}/',
            {'title': 'Write final report', 'assignedTo': [self.bob.pk]},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['task']['title'], 'Write final report')
        self.assertEqual(response.data['task']['assignedTo'], [self.bob.pk])

    def test_update_task_rejects_scalar_assignee(self):
        response = self.client.put(
            f'/api/tasks/{self.task.pk}/', {'assignedTo': 'alice'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_assignee_cannot_update_task(self):
        self.client.force_authenticate(self.alice)
        response = self.client.put(f'/api/tasks/{self.task.pk}/', {'title': 'x'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['message'], 'Not authorized')

    def test_delete_task(self):
        response = self.client.delete(f'/api/tasks/{self.task.pk}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.delete(f'/api/tasks/{self.task.pk}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_assignee_completes_task(self):
        self.client.force_authenticate(self.alice)
        response = self.client.put(
            f'/api/tasks/{self.task.pk}/status/', {'status': COMPLETED}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['task']['progress'], 100)
        self.assertEqual(response.data['task']['completedCount'], 2)

    def test_outsider_cannot_change_status(self):
        self.client.force_authenticate(self.bob)
        response = self.client.put(
            f'/api/tasks/{self.task.pk}/status/', {'status': COMPLETED}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_unknown_status_rejected(self):
        response = self.client.put(
            f'/api/tasks/{self.task.pk}/status/', {'status': 'Blocked'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_checklist(self):
        self.client.force_authenticate(self.alice)
        response = self.client.put(
            f'/api/tasks/{self.task.pk}/checklist/',
            {'todoChecklist': [{'text': 'a', 'completed': True}, {'text': 'b', 'completed': True}]},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        task = response.data['task']
        self.assertEqual(task['progress'], 100)
        self.assertEqual(task['status'], COMPLETED)
        self.assertEqual(task['assignedTo'][0]['email'], 'alice@example.com')

    def test_outsider_cannot_update_checklist(self):
        self.client.force_authenticate(self.bob)
        response = self.client.put(
            f'/api/tasks/{self.task.pk}/checklist/',
            {'todoChecklist': []},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_dashboards(self):
        make_task(self.admin, [self.bob], title='Other')

        response = self.client.get('/api/dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['statistics']['totalTasks'], 2)

        self.client.force_authenticate(self.alice)
        response = self.client.get('/api/dashboard/user/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['statistics']['totalTasks'], 1)
        self.assertEqual(response.data['charts']['taskDistribution']['InProgress'], 1)
